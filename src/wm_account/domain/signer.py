"""Order signing and signature verification.

The exchange recovers maker signatures over the order hash wrapped in the
``eth_sign`` prefix ("\\x19Ethereum Signed Message:\\n32" + hash), so both
signing and recovery go through ``encode_defunct``.

Key material stays inside the signer; the engine only sees ``SignerProtocol``.
"""

from typing import Protocol

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount
from eth_keys.exceptions import BadSignature, ValidationError
from eth_utils import to_bytes

from src.wm_common.errors import InvalidFieldError, SignatureInvalidError
from src.wm_order.domain.models import ECSignature, Order


class SignerProtocol(Protocol):
    def sign_hash(self, order_hash: str, address: str) -> ECSignature: ...


def _to_word_hex(value: int) -> str:
    return "0x" + value.to_bytes(32, "big").hex()


class LocalAccountSigner:
    """Signs with private keys held in-process (tests, bots, scripts)."""

    def __init__(self, *private_keys: str) -> None:
        self._accounts: dict[str, LocalAccount] = {}
        for key in private_keys:
            account: LocalAccount = Account.from_key(key)
            self._accounts[account.address.lower()] = account

    @property
    def addresses(self) -> list[str]:
        return list(self._accounts)

    def sign_hash(self, order_hash: str, address: str) -> ECSignature:
        account = self._accounts.get(address.lower())
        if account is None:
            raise InvalidFieldError("maker", f"no key held for {address}")
        signed = account.sign_message(encode_defunct(hexstr=order_hash))
        return ECSignature(v=signed.v, r=_to_word_hex(signed.r), s=_to_word_hex(signed.s))


def recover_signer(order_hash: str, signature: ECSignature) -> str:
    """Lowercase address that produced ``signature`` over ``order_hash``."""
    try:
        vrs = (
            signature.v,
            to_bytes(hexstr=signature.r),
            to_bytes(hexstr=signature.s),
        )
        recovered = Account.recover_message(encode_defunct(hexstr=order_hash), vrs=vrs)
    except (BadSignature, ValidationError, ValueError, TypeError) as exc:
        raise SignatureInvalidError("<unrecoverable>", str(exc)) from exc
    return recovered.lower()


def verify_order_signature(order: Order, order_hash: str | None = None) -> None:
    """Raise SignatureInvalidError unless the order's signature recovers to its maker.

    ``order_hash`` lets the caller supply a freshly recomputed hash so a
    tampered ``order.hash`` cannot be used to pass verification.
    """
    digest = order_hash or order.hash
    try:
        signer = recover_signer(digest, order.signature)
    except SignatureInvalidError as exc:
        raise SignatureInvalidError(order.maker, exc.message) from exc
    if signer != order.maker.lower():
        raise SignatureInvalidError(order.maker, f"recovered {signer}")
