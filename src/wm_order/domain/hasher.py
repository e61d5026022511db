"""Order hashing: must match the exchange contract's ``hashOrder`` byte for byte.

The exchange hashes the tightly-packed (``abi.encodePacked``) concatenation of
the order struct in declaration order, so the layout below is fixed:

    exchange, maker, taker                          address x3   (20 bytes each)
    makerRelayerFee, takerRelayerFee,
    makerProtocolFee, takerProtocolFee              uint256 x4   (32 bytes each)
    feeRecipient                                    address
    feeMethod, side, saleKind                       uint8 x3     (1 byte each)
    target                                          address
    howToCall                                       uint8
    calldata, replacementPattern                    bytes x2     (raw, no length)
    staticTarget                                    address
    staticExtradata                                 bytes
    paymentToken                                    address
    basePrice, extra, listingTime,
    expirationTime, salt                            uint256 x5

Hash, signature and metadata never take part. A new protocol version means a
new layout here and nowhere else.
"""
from eth_abi.packed import encode_packed
from eth_utils import is_address, keccak

from src.wm_common.constants import MAX_UINT256
from src.wm_common.encoding import bytes_to_hex
from src.wm_common.enums import FeeMethod, HowToCall, OrderSide, SaleKind
from src.wm_common.errors import InvalidFieldError
from src.wm_order.domain.models import UnhashedOrder

ORDER_HASH_TYPES: tuple[str, ...] = (
    "address", "address", "address",
    "uint256", "uint256", "uint256", "uint256",
    "address",
    "uint8", "uint8", "uint8",
    "address",
    "uint8",
    "bytes", "bytes",
    "address",
    "bytes",
    "address",
    "uint256", "uint256", "uint256", "uint256", "uint256",
)

_ADDRESS_FIELDS = (
    "exchange", "maker", "taker", "fee_recipient", "target", "static_target", "payment_token",
)
_UINT_FIELDS = (
    "maker_relayer_fee", "taker_relayer_fee", "maker_protocol_fee", "taker_protocol_fee",
    "base_price", "extra", "listing_time", "expiration_time", "salt",
)
_ENUM_FIELDS = (
    ("fee_method", FeeMethod),
    ("side", OrderSide),
    ("sale_kind", SaleKind),
    ("how_to_call", HowToCall),
)


def validate_hashed_fields(order: UnhashedOrder) -> None:
    """Raise InvalidFieldError if any hashed field is out of its valid range."""
    for name in _ADDRESS_FIELDS:
        value = getattr(order, name)
        if not isinstance(value, str) or not is_address(value):
            raise InvalidFieldError(name, f"not an address: {value!r}")
    for name in _UINT_FIELDS:
        value = getattr(order, name)
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidFieldError(name, f"expected int, got {type(value).__name__}")
        if not (0 <= value <= MAX_UINT256):
            raise InvalidFieldError(name, f"{value} out of uint256 range")
    for name, enum_cls in _ENUM_FIELDS:
        value = getattr(order, name)
        if not isinstance(value, enum_cls):
            raise InvalidFieldError(name, f"{value!r} is not a {enum_cls.__name__}")
    for name in ("calldata", "replacement_pattern", "static_extradata"):
        if not isinstance(getattr(order, name), bytes):
            raise InvalidFieldError(name, "expected bytes")
    if len(order.replacement_pattern) != len(order.calldata):
        raise InvalidFieldError(
            "replacement_pattern",
            f"length {len(order.replacement_pattern)} != calldata length {len(order.calldata)}",
        )
    if not order.never_expires and order.listing_time > order.expiration_time:
        raise InvalidFieldError(
            "listing_time",
            f"{order.listing_time} is after expiration_time {order.expiration_time}",
        )
    if order.sale_kind is SaleKind.DUTCH_AUCTION and order.never_expires:
        raise InvalidFieldError("expiration_time", "a Dutch auction must expire")


def encode_order(order: UnhashedOrder) -> bytes:
    """Packed byte layout of the hashed fields (see module docstring)."""
    validate_hashed_fields(order)
    values = (
        order.exchange,
        order.maker,
        order.taker,
        order.maker_relayer_fee,
        order.taker_relayer_fee,
        order.maker_protocol_fee,
        order.taker_protocol_fee,
        order.fee_recipient,
        int(order.fee_method),
        int(order.side),
        int(order.sale_kind),
        order.target,
        int(order.how_to_call),
        order.calldata,
        order.replacement_pattern,
        order.static_target,
        order.static_extradata,
        order.payment_token,
        order.base_price,
        order.extra,
        order.listing_time,
        order.expiration_time,
        order.salt,
    )
    return encode_packed(ORDER_HASH_TYPES, values)


def get_order_hash(order: UnhashedOrder) -> str:
    """0x-prefixed keccak256 of the packed order."""
    return bytes_to_hex(keccak(encode_order(order)))

