"""Hash and signature checks.

An order made by the calling account is authenticated on-chain by
``msg.sender`` and needs no signature. Every other order must carry a
signature that recovers to its maker over its own recomputed hash.
"""
from src.wm_account.domain.signer import verify_order_signature
from src.wm_common.enums import MatchFailureReason
from src.wm_common.errors import MatchError, SignatureInvalidError
from src.wm_order.domain.hasher import get_order_hash
from src.wm_order.domain.models import Order, UnhashedOrder, UnsignedOrder


def check_hash(order: UnhashedOrder, label: str) -> str:
    """Recompute the hash; a stored hash that differs is a tampering signal."""
    computed = get_order_hash(order)
    if isinstance(order, UnsignedOrder) and order.hash.lower() != computed:
        raise MatchError(
            MatchFailureReason.HASH_MISMATCH,
            f"{label} carries hash {order.hash}, fields hash to {computed}",
        )
    return computed


def check_signature(
    order: UnhashedOrder, order_hash: str, account_address: str, label: str
) -> None:
    if order.maker == account_address.lower():
        return
    if not isinstance(order, Order):
        raise MatchError(
            MatchFailureReason.SIGNATURE_INVALID, f"{label} from {order.maker} is not signed"
        )
    try:
        verify_order_signature(order, order_hash)
    except SignatureInvalidError as exc:
        raise MatchError(MatchFailureReason.SIGNATURE_INVALID, f"{label}: {exc.message}") from exc
