"""Order domain model: frozen dataclasses, one type per lifecycle state.

    UnhashedOrder  -> freshly built, no hash
    UnsignedOrder  -> hash attached (a counter-order stays here)
    Order          -> hash + maker signature

A signed-but-unhashed order cannot be constructed. Moving between states
always produces a new value; nothing is mutated in place.
"""
from dataclasses import asdict, dataclass, fields, replace
from typing import Any

from src.wm_common.enums import FeeMethod, HowToCall, OrderSide, SaleKind, WyvernSchemaName


@dataclass(frozen=True)
class WyvernAsset:
    id: str  # token id, decimal string
    address: str  # token contract


@dataclass(frozen=True)
class OrderMetadata:
    """Informational only; never part of the order hash."""

    schema: WyvernSchemaName = WyvernSchemaName.ERC721
    asset: WyvernAsset | None = None
    bundle: dict[str, Any] | None = None


@dataclass(frozen=True)
class ECSignature:
    v: int
    r: str  # 0x-prefixed 32-byte hex
    s: str


@dataclass(frozen=True, kw_only=True)
class UnhashedOrder:
    # Identity / routing
    exchange: str
    maker: str
    taker: str
    fee_recipient: str
    # Economics (basis points / base units)
    maker_relayer_fee: int
    taker_relayer_fee: int
    maker_protocol_fee: int
    taker_protocol_fee: int
    fee_method: FeeMethod
    payment_token: str
    base_price: int
    extra: int  # auction price delta
    # Intent
    side: OrderSide
    sale_kind: SaleKind
    target: str
    how_to_call: HowToCall
    calldata: bytes
    replacement_pattern: bytes
    static_target: str
    static_extradata: bytes
    # Temporal
    listing_time: int
    expiration_time: int  # 0 = never expires
    salt: int
    metadata: OrderMetadata = OrderMetadata()

    @property
    def never_expires(self) -> bool:
        return self.expiration_time == 0

    def is_expired(self, at_time: int) -> bool:
        """The exchange only settles while ``now < expirationTime``."""
        return not self.never_expires and at_time >= self.expiration_time


@dataclass(frozen=True, kw_only=True)
class UnsignedOrder(UnhashedOrder):
    hash: str


@dataclass(frozen=True, kw_only=True)
class Order(UnsignedOrder):
    v: int
    r: str
    s: str

    @property
    def signature(self) -> ECSignature:
        return ECSignature(v=self.v, r=self.r, s=self.s)


AnyOrder = UnhashedOrder | UnsignedOrder | Order


def _base_values(order: UnhashedOrder) -> dict[str, Any]:
    """Field values of the UnhashedOrder part only (shallow)."""
    return {f.name: getattr(order, f.name) for f in fields(UnhashedOrder)}


def with_hash(order: UnhashedOrder, order_hash: str) -> UnsignedOrder:
    return UnsignedOrder(**_base_values(order), hash=order_hash)


def with_signature(order: UnsignedOrder, signature: ECSignature) -> Order:
    return Order(
        **_base_values(order),
        hash=order.hash,
        v=signature.v,
        r=signature.r,
        s=signature.s,
    )


def strip_hash(order: UnhashedOrder) -> UnhashedOrder:
    """Drop hash and signature, returning the bare unhashed order."""
    return UnhashedOrder(**_base_values(order))


def update_fields(order: UnhashedOrder, **changes: Any) -> UnhashedOrder:
    """Copy with changed fields. The result is always unhashed, since any
    change to a hashed field invalidates an attached hash and signature."""
    return replace(strip_hash(order), **changes)


def metadata_to_dict(metadata: OrderMetadata) -> dict[str, Any]:
    out: dict[str, Any] = {"schema": metadata.schema.value}
    if metadata.asset is not None:
        out["asset"] = asdict(metadata.asset)
    if metadata.bundle is not None:
        out["bundle"] = metadata.bundle
    return out
