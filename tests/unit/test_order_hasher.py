from dataclasses import replace

import pytest

from src.wm_common.constants import (
    MAX_UINT256,
    NULL_ADDRESS,
    WYVERN_EXCHANGE_ADDRESS_RINKEBY,
)
from src.wm_common.enums import FeeMethod, HowToCall, OrderSide, SaleKind
from src.wm_common.errors import InvalidFieldError
from src.wm_order.application.factory import order_from_json
from src.wm_order.domain.hasher import ORDER_HASH_TYPES, encode_order, get_order_hash
from src.wm_order.domain.models import (
    OrderMetadata,
    UnhashedOrder,
    UnsignedOrder,
    strip_hash,
    with_signature,
)


OTHER = "0x00000000000000000000000000000000000000cc"
WETH = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"

# One change per hashed field, applied to an order that expires
HASHED_FIELD_CHANGES = [
    ("exchange", WYVERN_EXCHANGE_ADDRESS_RINKEBY),
    ("maker", OTHER),
    ("taker", "0x0000000000000000000000000000000000000001"),
    ("maker_relayer_fee", 251),
    ("taker_relayer_fee", 1),
    ("maker_protocol_fee", 1),
    ("taker_protocol_fee", 1),
    ("fee_recipient", NULL_ADDRESS),
    ("fee_method", FeeMethod.PROTOCOL_FEE),
    ("side", OrderSide.BUY),
    ("sale_kind", SaleKind.DUTCH_AUCTION),
    ("target", OTHER),
    ("how_to_call", HowToCall.DELEGATE_CALL),
    # token id 1 -> 2, same length as the pattern
    ("calldata", lambda order: order.calldata[:-1] + b"\x02"),
    ("replacement_pattern", bytes(100)),
    ("static_target", OTHER),
    ("static_extradata", b"\x01"),
    ("payment_token", WETH),
    ("base_price", 10**18 + 1),
    ("extra", 1),
    ("listing_time", 1_600_000_001),
    ("expiration_time", 1_700_000_001),
    ("salt", 12346),
]


class TestFixtureHashes:
    @pytest.mark.parametrize("index", [0, 1, 2])
    def test_recomputed_hash_matches_fixture(self, wire_orders, index: int) -> None:
        wire = wire_orders[index]
        order = order_from_json({k: v for k, v in wire.items() if k != "hash"})
        assert get_order_hash(order) == wire["hash"]

    def test_parsed_fixture_keeps_its_hash(self, wire_orders) -> None:
        order = order_from_json(wire_orders[0])
        assert isinstance(order, UnsignedOrder)
        assert order.hash == wire_orders[0]["hash"]


class TestGetOrderHash:
    def test_hash_format(self, make_sell_order) -> None:
        h = get_order_hash(make_sell_order())
        assert h.startswith("0x")
        assert len(h) == 66
        assert h == h.lower()

    def test_deterministic(self, make_sell_order) -> None:
        assert get_order_hash(make_sell_order()) == get_order_hash(make_sell_order())

    def test_packed_length(self, make_sell_order) -> None:
        # 7 addresses, 9 uint256, 4 uint8, 100-byte calldata + pattern, empty extradata
        assert len(encode_order(make_sell_order())) == 7 * 20 + 9 * 32 + 4 + 2 * 100

    @pytest.mark.parametrize(
        "field,value",
        HASHED_FIELD_CHANGES,
        ids=[field for field, _ in HASHED_FIELD_CHANGES],
    )
    def test_every_hashed_field_changes_hash(self, make_sell_order, field: str, value) -> None:
        order = make_sell_order(expiration_time=1_700_000_000)
        if callable(value):
            value = value(order)
        assert get_order_hash(replace(order, **{field: value})) != get_order_hash(order)

    def test_changes_cover_every_hashed_field(self) -> None:
        fields = {field for field, _ in HASHED_FIELD_CHANGES}
        assert len(fields) == len(ORDER_HASH_TYPES)

    def test_keyword_order_irrelevant(self, make_sell_order) -> None:
        order = make_sell_order()
        reordered = UnhashedOrder(**dict(reversed(list(vars(order).items()))))
        assert get_order_hash(reordered) == get_order_hash(order)

    def test_signature_not_hashed(self, make_sell_order, sign, signer, buyer) -> None:
        signed = sign(make_sell_order())
        resigned = with_signature(signed, signer.sign_hash(signed.hash, buyer.address))
        assert (resigned.v, resigned.r, resigned.s) != (signed.v, signed.r, signed.s)
        assert get_order_hash(resigned) == get_order_hash(signed) == signed.hash

    def test_metadata_not_hashed(self, make_sell_order) -> None:
        order = make_sell_order()
        other = replace(order, metadata=OrderMetadata())
        assert get_order_hash(other) == get_order_hash(order)

    def test_attached_hash_ignored(self, make_sell_order) -> None:
        order = make_sell_order()
        stale = UnsignedOrder(**vars(order), hash="0x" + "11" * 32)
        assert get_order_hash(stale) == get_order_hash(strip_hash(stale))


class TestHashedFieldValidation:
    @pytest.mark.parametrize(
        "field,value",
        [
            ("maker", "0x1234"),
            ("exchange", "not-an-address"),
            ("base_price", MAX_UINT256 + 1),
            ("salt", -1),
            ("extra", "5"),
            ("side", 1),
            ("calldata", "0x23b872dd"),
        ],
    )
    def test_invalid_field_rejected(self, make_sell_order, field: str, value) -> None:
        order = replace(make_sell_order(), **{field: value})
        with pytest.raises(InvalidFieldError) as exc_info:
            get_order_hash(order)
        assert exc_info.value.code == 4101
        assert exc_info.value.field == field

    def test_pattern_length_must_match_calldata(self, make_sell_order) -> None:
        order = make_sell_order()
        with pytest.raises(InvalidFieldError) as exc_info:
            get_order_hash(replace(order, replacement_pattern=order.replacement_pattern[:-1]))
        assert exc_info.value.field == "replacement_pattern"

    def test_empty_pattern_with_calldata_rejected(self, make_sell_order) -> None:
        with pytest.raises(InvalidFieldError):
            get_order_hash(replace(make_sell_order(), replacement_pattern=b""))

    def test_listing_after_expiration_rejected(self, make_sell_order) -> None:
        order = make_sell_order(expiration_time=1_500_000_000)
        with pytest.raises(InvalidFieldError) as exc_info:
            get_order_hash(order)
        assert exc_info.value.field == "listing_time"

    def test_dutch_auction_must_expire(self, make_sell_order) -> None:
        order = make_sell_order(sale_kind=SaleKind.DUTCH_AUCTION, extra=10**17)
        with pytest.raises(InvalidFieldError) as exc_info:
            get_order_hash(order)
        assert exc_info.value.field == "expiration_time"
