"""Arguments for the exchange's ``atomicMatch_`` call.

The contract takes both orders flattened into parallel arrays:

    addrs[14]   exchange, maker, taker, feeRecipient, target, staticTarget,
                paymentToken                                   (buy, then sell)
    uints[18]   makerRelayerFee, takerRelayerFee, makerProtocolFee,
                takerProtocolFee, basePrice, extra, listingTime,
                expirationTime, salt                           (buy, then sell)
    feeMethodsSidesKindsHowToCalls[8]
    calldataBuy, calldataSell, replacementPatternBuy, replacementPatternSell,
    staticExtradataBuy, staticExtradataSell
    vs[2], rssMetadata[5]

An order without a signature (the caller's own) is passed with v=0 and zero
r/s; the contract skips signature checks for ``msg.sender``'s order.
"""
from typing import NamedTuple

from src.wm_common.constants import NULL_BLOCK_HASH
from src.wm_common.encoding import hex_to_bytes
from src.wm_order.domain.models import Order, UnhashedOrder


class AtomicMatchArgs(NamedTuple):
    addrs: list[str]
    uints: list[int]
    fee_methods_sides_kinds_how_to_calls: list[int]
    calldata_buy: bytes
    calldata_sell: bytes
    replacement_pattern_buy: bytes
    replacement_pattern_sell: bytes
    static_extradata_buy: bytes
    static_extradata_sell: bytes
    vs: list[int]
    rss_metadata: list[bytes]


def _addrs(order: UnhashedOrder) -> list[str]:
    return [
        order.exchange,
        order.maker,
        order.taker,
        order.fee_recipient,
        order.target,
        order.static_target,
        order.payment_token,
    ]


def _uints(order: UnhashedOrder) -> list[int]:
    return [
        order.maker_relayer_fee,
        order.taker_relayer_fee,
        order.maker_protocol_fee,
        order.taker_protocol_fee,
        order.base_price,
        order.extra,
        order.listing_time,
        order.expiration_time,
        order.salt,
    ]


def _kinds(order: UnhashedOrder) -> list[int]:
    return [int(order.fee_method), int(order.side), int(order.sale_kind), int(order.how_to_call)]


def _vrs(order: UnhashedOrder) -> tuple[int, bytes, bytes]:
    if isinstance(order, Order):
        return order.v, hex_to_bytes("r", order.r), hex_to_bytes("s", order.s)
    zero = hex_to_bytes("r", NULL_BLOCK_HASH)
    return 0, zero, zero


def build_atomic_match_args(
    buy: UnhashedOrder, sell: UnhashedOrder, metadata: str = NULL_BLOCK_HASH
) -> AtomicMatchArgs:
    """Flatten a validated (buy, sell) pair into ``atomicMatch_`` arguments."""
    buy_v, buy_r, buy_s = _vrs(buy)
    sell_v, sell_r, sell_s = _vrs(sell)
    return AtomicMatchArgs(
        addrs=_addrs(buy) + _addrs(sell),
        uints=_uints(buy) + _uints(sell),
        fee_methods_sides_kinds_how_to_calls=_kinds(buy) + _kinds(sell),
        calldata_buy=buy.calldata,
        calldata_sell=sell.calldata,
        replacement_pattern_buy=buy.replacement_pattern,
        replacement_pattern_sell=sell.replacement_pattern,
        static_extradata_buy=buy.static_extradata,
        static_extradata_sell=sell.static_extradata,
        vs=[buy_v, sell_v],
        rss_metadata=[buy_r, buy_s, sell_r, sell_s, hex_to_bytes("metadata", metadata)],
    )
