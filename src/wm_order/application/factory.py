# src/wm_order/application/factory.py
"""OrderJSON <-> domain order conversion.

Incoming orders are parsed strictly: addresses must be well formed, integers
must be exact and in range, enums must be known. An order that arrives with
a ``hash`` must hash to it; a mismatch means the fields were altered after
hashing and is rejected.
"""
import logging
from dataclasses import replace
from typing import Any

from pydantic import ValidationError

from src.wm_common.constants import MAX_UINT8
from src.wm_common.encoding import bytes_to_hex, hex_to_bytes, normalize_address, parse_uint
from src.wm_common.enums import FeeMethod, HowToCall, OrderSide, SaleKind, WyvernSchemaName
from src.wm_common.errors import InvalidFieldError, UnsupportedSaleKindError
from src.wm_order.application.schemas import OrderJSON, OrderMetadataJSON
from src.wm_order.domain.hasher import get_order_hash
from src.wm_order.domain.models import (
    AnyOrder,
    ECSignature,
    Order,
    OrderMetadata,
    UnhashedOrder,
    UnsignedOrder,
    WyvernAsset,
    metadata_to_dict,
    with_hash,
    with_signature,
)

logger = logging.getLogger(__name__)


def _enum(field: str, enum_cls: type, value: int) -> Any:
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidFieldError(field, f"{value!r} is not a valid {enum_cls.__name__}") from None


def _sale_kind(value: int) -> SaleKind:
    try:
        return SaleKind(value)
    except ValueError:
        raise UnsupportedSaleKindError(value) from None


def _metadata(raw: OrderMetadataJSON) -> OrderMetadata:
    try:
        schema = WyvernSchemaName(raw.schema_name)
    except ValueError:
        raise InvalidFieldError(
            "metadata.schema", f"unsupported schema {raw.schema_name!r}"
        ) from None
    asset = None
    if raw.asset is not None:
        asset = WyvernAsset(
            id=str(parse_uint("metadata.asset.id", raw.asset.id)),
            address=normalize_address("metadata.asset.address", raw.asset.address),
        )
    return OrderMetadata(schema=schema, asset=asset, bundle=raw.bundle)


def _signature(raw: OrderJSON) -> ECSignature | None:
    parts = (raw.v, raw.r, raw.s)
    if all(p is None for p in parts):
        return None
    if any(p is None for p in parts):
        raise InvalidFieldError("v", "signature needs all of v, r and s")
    v = parse_uint("v", raw.v, MAX_UINT8)
    r = hex_to_bytes("r", raw.r)
    s = hex_to_bytes("s", raw.s)
    for name, word in (("r", r), ("s", s)):
        if len(word) != 32:
            raise InvalidFieldError(name, f"expected 32 bytes, got {len(word)}")
    return ECSignature(v=v, r=bytes_to_hex(r), s=bytes_to_hex(s))


def _validate_wire(data: OrderJSON | dict[str, Any]) -> OrderJSON:
    if isinstance(data, OrderJSON):
        return data
    try:
        return OrderJSON.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(p) for p in first["loc"]) or "order"
        raise InvalidFieldError(field, first["msg"]) from exc


def order_from_json(data: OrderJSON | dict[str, Any]) -> AnyOrder:
    """Parse an OrderJSON payload into the matching lifecycle type.

    No hash and no signature  -> UnhashedOrder
    hash only                 -> UnsignedOrder
    signature                 -> Order (hash computed if absent)
    """
    raw = _validate_wire(data)
    order = UnhashedOrder(
        exchange=normalize_address("exchange", raw.exchange),
        maker=normalize_address("maker", raw.maker),
        taker=normalize_address("taker", raw.taker),
        fee_recipient=normalize_address("feeRecipient", raw.fee_recipient),
        maker_relayer_fee=parse_uint("makerRelayerFee", raw.maker_relayer_fee),
        taker_relayer_fee=parse_uint("takerRelayerFee", raw.taker_relayer_fee),
        maker_protocol_fee=parse_uint("makerProtocolFee", raw.maker_protocol_fee),
        taker_protocol_fee=parse_uint("takerProtocolFee", raw.taker_protocol_fee),
        fee_method=_enum("feeMethod", FeeMethod, raw.fee_method),
        payment_token=normalize_address("paymentToken", raw.payment_token),
        base_price=parse_uint("basePrice", raw.base_price),
        extra=parse_uint("extra", raw.extra),
        side=_enum("side", OrderSide, raw.side),
        sale_kind=_sale_kind(raw.sale_kind),
        target=normalize_address("target", raw.target),
        how_to_call=_enum("howToCall", HowToCall, raw.how_to_call),
        calldata=hex_to_bytes("calldata", raw.calldata),
        replacement_pattern=hex_to_bytes("replacementPattern", raw.replacement_pattern),
        static_target=normalize_address("staticTarget", raw.static_target),
        static_extradata=hex_to_bytes("staticExtradata", raw.static_extradata),
        listing_time=parse_uint("listingTime", raw.listing_time),
        expiration_time=parse_uint("expirationTime", raw.expiration_time),
        salt=parse_uint("salt", raw.salt),
        metadata=_metadata(raw.metadata),
    )

    signature = _signature(raw)
    if raw.hash is None and signature is None:
        return order

    computed = get_order_hash(order)
    if raw.hash is not None and raw.hash.lower() != computed:
        logger.warning("Rejected order from %s: hash %s != %s", order.maker, raw.hash, computed)
        raise InvalidFieldError("hash", f"order fields hash to {computed}, not {raw.hash}")
    hashed = with_hash(order, computed)
    if signature is None:
        return hashed
    return with_signature(hashed, signature)


def hash_order(order: UnhashedOrder) -> UnsignedOrder:
    """Attach the canonical hash. An order whose stored hash is stale comes back
    re-hashed and without its signature."""
    computed = get_order_hash(order)
    if isinstance(order, UnsignedOrder) and order.hash.lower() == computed:
        return order if order.hash == computed else replace(order, hash=computed)
    return with_hash(order, computed)


def order_to_json(order: AnyOrder) -> dict[str, Any]:
    """Serialize to the camelCase wire shape. The hash is always present."""
    hashed = hash_order(order)
    out: dict[str, Any] = {
        "exchange": hashed.exchange,
        "maker": hashed.maker,
        "taker": hashed.taker,
        "makerRelayerFee": str(hashed.maker_relayer_fee),
        "takerRelayerFee": str(hashed.taker_relayer_fee),
        "makerProtocolFee": str(hashed.maker_protocol_fee),
        "takerProtocolFee": str(hashed.taker_protocol_fee),
        "feeRecipient": hashed.fee_recipient,
        "feeMethod": int(hashed.fee_method),
        "side": int(hashed.side),
        "saleKind": int(hashed.sale_kind),
        "target": hashed.target,
        "howToCall": int(hashed.how_to_call),
        "calldata": bytes_to_hex(hashed.calldata),
        "replacementPattern": bytes_to_hex(hashed.replacement_pattern),
        "staticTarget": hashed.static_target,
        "staticExtradata": bytes_to_hex(hashed.static_extradata),
        "paymentToken": hashed.payment_token,
        "basePrice": str(hashed.base_price),
        "extra": str(hashed.extra),
        "listingTime": str(hashed.listing_time),
        "expirationTime": str(hashed.expiration_time),
        "salt": str(hashed.salt),
        "metadata": metadata_to_dict(hashed.metadata),
        "hash": hashed.hash,
    }
    if isinstance(hashed, Order):
        out.update(v=hashed.v, r=hashed.r, s=hashed.s)
    elif isinstance(order, Order):
        logger.warning(
            "Dropped signature of order from %s: hash %s != %s",
            order.maker,
            order.hash,
            hashed.hash,
        )
    return out
