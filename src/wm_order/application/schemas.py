# src/wm_order/application/schemas.py
"""Wire models. ``OrderJSON`` mirrors the orderbook's camelCase order shape:
integers as decimal strings, addresses and byte strings as 0x-hex, enums as
small ints, ``hash`` and ``v/r/s`` optional until the order is hashed/signed.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, extra="ignore")


class WyvernAssetJSON(BaseModel):
    id: str
    address: str

    @field_validator("id", mode="before")
    @classmethod
    def id_as_string(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v


class OrderMetadataJSON(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    asset: WyvernAssetJSON | None = None
    bundle: dict[str, Any] | None = None
    schema_name: str = Field(default="ERC721", alias="schema")


class OrderJSON(BaseModel):
    model_config = _WIRE_CONFIG

    exchange: str
    maker: str
    taker: str
    maker_relayer_fee: str | int
    taker_relayer_fee: str | int
    maker_protocol_fee: str | int
    taker_protocol_fee: str | int
    fee_recipient: str
    fee_method: int
    side: int
    sale_kind: int
    target: str
    how_to_call: int
    calldata: str
    replacement_pattern: str
    static_target: str
    static_extradata: str
    payment_token: str
    base_price: str | int
    extra: str | int
    listing_time: str | int
    expiration_time: str | int
    salt: str | int
    metadata: OrderMetadataJSON = Field(default_factory=OrderMetadataJSON)
    hash: str | None = None
    v: int | None = None
    r: str | None = None
    s: str | None = None


# --- API request / response bodies ---

class PriceRequest(BaseModel):
    order: OrderJSON
    at_time: int | None = None


class PriceResponse(BaseModel):
    hash: str
    current_price: str
    final_price: str
    maker_fee: str
    taker_fee: str
    buyer_pays: str
    seller_receives: str
    maker_fee_amount: str
    taker_fee_amount: str
    at_time: int


class MatchRequest(BaseModel):
    order: OrderJSON
    account_address: str
    at_time: int | None = None


class ValidateRequest(BaseModel):
    buy: OrderJSON
    sell: OrderJSON
    account_address: str
    at_time: int | None = None


class HashResponse(BaseModel):
    hash: str


class AtomicMatchJSON(BaseModel):
    addrs: list[str]
    uints: list[str]
    fee_methods_sides_kinds_how_to_calls: list[int]
    calldata_buy: str
    calldata_sell: str
    replacement_pattern_buy: str
    replacement_pattern_sell: str
    static_extradata_buy: str
    static_extradata_sell: str
    vs: list[int]
    rss_metadata: list[str]


class ValidateResponse(BaseModel):
    valid: bool
    buy_hash: str
    sell_hash: str
    at_time: int
    atomic_match: AtomicMatchJSON
