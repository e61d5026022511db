import logging
from dataclasses import replace

import pytest

from src.wm_common.constants import NULL_ADDRESS
from src.wm_common.enums import FeeMethod, OrderSide, SaleKind, WyvernSchemaName
from src.wm_common.errors import InvalidFieldError, UnsupportedSaleKindError
from src.wm_order.application.factory import hash_order, order_from_json, order_to_json
from src.wm_order.domain.models import Order, UnhashedOrder, UnsignedOrder, update_fields


def _without(wire: dict, *keys: str) -> dict:
    return {k: v for k, v in wire.items() if k not in keys}


class TestOrderFromJSON:
    def test_parses_sell_fixture(self, wire_orders) -> None:
        order = order_from_json(wire_orders[0])
        assert type(order) is UnsignedOrder
        assert order.side is OrderSide.SELL
        assert order.sale_kind is SaleKind.FIXED_PRICE
        assert order.fee_method is FeeMethod.SPLIT_FEE
        assert order.base_price == 10**18
        assert order.maker_relayer_fee == 250
        assert order.payment_token == NULL_ADDRESS
        assert order.static_extradata == b""
        assert order.metadata.schema is WyvernSchemaName.ERC721
        assert order.metadata.asset.id == "1"

    def test_numeric_times_accepted(self, wire_orders) -> None:
        order = order_from_json(wire_orders[2])
        assert order.listing_time == 1528831000
        assert order.expiration_time == 1531423000

    def test_without_hash_is_unhashed(self, wire_orders) -> None:
        order = order_from_json(_without(wire_orders[0], "hash"))
        assert type(order) is UnhashedOrder

    def test_signed_order_gets_hash(self, make_sell_order, sign) -> None:
        signed = sign(make_sell_order())
        wire = _without(order_to_json(signed), "hash")
        parsed = order_from_json(wire)
        assert isinstance(parsed, Order)
        assert parsed.hash == signed.hash
        assert parsed.signature == signed.signature

    def test_mixed_case_addresses_lowercased(self, wire_orders) -> None:
        wire = dict(wire_orders[0], target="0x06012c8cf97BEaD5deAe237070F9587f8E7A266d")
        assert order_from_json(wire).target == "0x06012c8cf97bead5deae237070f9587f8e7a266d"

    def test_hash_drift_rejected(self, wire_orders) -> None:
        wire = dict(wire_orders[0], basePrice="1000000000000000001")
        with pytest.raises(InvalidFieldError) as exc_info:
            order_from_json(wire)
        assert exc_info.value.code == 4101
        assert exc_info.value.field == "hash"

    def test_unknown_sale_kind(self, wire_orders) -> None:
        with pytest.raises(UnsupportedSaleKindError) as exc_info:
            order_from_json(dict(wire_orders[0], saleKind=2))
        assert exc_info.value.code == 4103

    @pytest.mark.parametrize(
        "field,value",
        [
            ("side", 2),
            ("feeMethod", 7),
            ("howToCall", 3),
            ("basePrice", "1.5"),
            ("basePrice", "-1"),
            ("salt", "abc"),
            ("maker", "0xabc"),
            ("calldata", "23b872dd"),
            ("calldata", "0x123"),
        ],
    )
    def test_invalid_field(self, wire_orders, field: str, value) -> None:
        with pytest.raises(InvalidFieldError) as exc_info:
            order_from_json(dict(wire_orders[0], **{field: value}))
        assert exc_info.value.field == field

    def test_missing_field(self, wire_orders) -> None:
        with pytest.raises(InvalidFieldError) as exc_info:
            order_from_json(_without(wire_orders[0], "maker"))
        assert exc_info.value.field == "maker"

    def test_partial_signature_rejected(self, wire_orders) -> None:
        with pytest.raises(InvalidFieldError):
            order_from_json(dict(wire_orders[0], v=27))

    def test_short_signature_word_rejected(self, wire_orders) -> None:
        wire = dict(wire_orders[0], v=27, r="0x01", s="0x" + "22" * 32)
        with pytest.raises(InvalidFieldError) as exc_info:
            order_from_json(wire)
        assert exc_info.value.field == "r"


class TestOrderToJSON:
    @pytest.mark.parametrize("index", [0, 1])
    def test_fixture_reproduced(self, wire_orders, index: int) -> None:
        assert order_to_json(order_from_json(wire_orders[index])) == wire_orders[index]

    def test_unhashed_order_serialized_with_hash(self, make_sell_order) -> None:
        order = make_sell_order()
        out = order_to_json(order)
        assert out["hash"] == hash_order(order).hash
        assert out["basePrice"] == "1000000000000000000"
        assert out["staticExtradata"] == "0x"
        assert "v" not in out

    def test_signature_serialized(self, make_sell_order, sign) -> None:
        signed = sign(make_sell_order())
        out = order_to_json(signed)
        assert (out["v"], out["r"], out["s"]) == (signed.v, signed.r, signed.s)

    def test_upper_case_hash_keeps_signature(self, make_sell_order, sign) -> None:
        signed = sign(make_sell_order())
        shouted = replace(signed, hash="0x" + signed.hash[2:].upper())
        out = order_to_json(shouted)
        assert out["hash"] == signed.hash
        assert out["v"] == signed.v

    def test_stale_signature_dropped_and_logged(self, make_sell_order, sign, caplog) -> None:
        signed = sign(make_sell_order())
        stale = replace(signed, salt=signed.salt + 1)
        with caplog.at_level(logging.WARNING):
            out = order_to_json(stale)
        assert "v" not in out
        assert out["hash"] != signed.hash
        assert "Dropped signature" in caplog.text


class TestHashOrder:
    def test_hashed_order_returned_unchanged(self, wire_orders) -> None:
        order = order_from_json(wire_orders[0])
        assert hash_order(order) is order

    def test_hash_case_normalized(self, make_sell_order, sign) -> None:
        signed = sign(make_sell_order())
        shouted = replace(signed, hash="0x" + signed.hash[2:].upper())
        rehashed = hash_order(shouted)
        assert isinstance(rehashed, Order)
        assert rehashed.hash == signed.hash

    def test_update_drops_hash(self, wire_orders) -> None:
        order = order_from_json(wire_orders[0])
        changed = update_fields(order, base_price=2 * 10**18)
        assert type(changed) is UnhashedOrder
        assert hash_order(changed).hash != order.hash
