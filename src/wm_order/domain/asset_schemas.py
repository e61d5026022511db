"""Asset schemas: the contract call an order makes on its target.

Only ERC721 ``transferFrom(address,address,uint256)`` is supported. A sell
order leaves the recipient open; a buy order leaves the sender open. The
replacement pattern marks whole 32-byte argument words as replaceable
(0xff) and pins the selector and every other argument (0x00).
"""
from dataclasses import dataclass

from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector

from src.wm_common.constants import FIXED_BYTE, NULL_ADDRESS, REPLACEABLE_BYTE
from src.wm_common.encoding import normalize_address, parse_uint
from src.wm_common.enums import WyvernSchemaName
from src.wm_common.errors import InvalidFieldError
from src.wm_order.domain.models import OrderMetadata, WyvernAsset

ERC721_TRANSFER_SIGNATURE = "transferFrom(address,address,uint256)"
ERC721_TRANSFER_SELECTOR: bytes = function_signature_to_4byte_selector(ERC721_TRANSFER_SIGNATURE)
_TRANSFER_ARG_TYPES = ["address", "address", "uint256"]

_SELECTOR_SIZE = 4
_WORD_SIZE = 32

# transferFrom argument positions
_FROM = 0
_TO = 1


@dataclass(frozen=True)
class CallSpec:
    target: str
    calldata: bytes
    replacement_pattern: bytes


def _transfer_calldata(sender: str, recipient: str, token_id: int) -> bytes:
    return ERC721_TRANSFER_SELECTOR + encode(_TRANSFER_ARG_TYPES, [sender, recipient, token_id])


def _replacement_pattern(replaceable_arg: int) -> bytes:
    words = [
        bytes([REPLACEABLE_BYTE if i == replaceable_arg else FIXED_BYTE]) * _WORD_SIZE
        for i in range(len(_TRANSFER_ARG_TYPES))
    ]
    return bytes([FIXED_BYTE]) * _SELECTOR_SIZE + b"".join(words)


def _asset_parts(asset: WyvernAsset) -> tuple[str, int]:
    return (
        normalize_address("metadata.asset.address", asset.address),
        parse_uint("metadata.asset.id", asset.id),
    )


def encode_sell(asset: WyvernAsset, maker: str) -> CallSpec:
    """Call for a sell order: maker sends, recipient filled in by the buyer."""
    target, token_id = _asset_parts(asset)
    return CallSpec(
        target=target,
        calldata=_transfer_calldata(normalize_address("maker", maker), NULL_ADDRESS, token_id),
        replacement_pattern=_replacement_pattern(_TO),
    )


def encode_buy(asset: WyvernAsset, taker: str) -> CallSpec:
    """Call for a buy order: taker receives, sender filled in by the seller."""
    target, token_id = _asset_parts(asset)
    return CallSpec(
        target=target,
        calldata=_transfer_calldata(NULL_ADDRESS, normalize_address("taker", taker), token_id),
        replacement_pattern=_replacement_pattern(_FROM),
    )


def require_single_asset(metadata: OrderMetadata) -> WyvernAsset:
    if metadata.schema is not WyvernSchemaName.ERC721:
        raise InvalidFieldError("metadata.schema", f"unsupported schema {metadata.schema!r}")
    if metadata.asset is None:
        detail = "bundles are not supported" if metadata.bundle else "no asset"
        raise InvalidFieldError("metadata.asset", detail)
    return metadata.asset
