# src/wm_order/application/service.py
"""Order application service: wire requests in, engine calls, wire responses out.

This is the only layer that reads settings or the clock; everything below it
takes the exchange address, fee recipient and ``at_time`` as arguments.
"""
import logging
from typing import Any

from config.settings import Settings
from src.wm_common.datetime_utils import unix_now
from src.wm_common.encoding import bytes_to_hex, normalize_address
from src.wm_matching.engine.atomic_match import AtomicMatchArgs, build_atomic_match_args
from src.wm_matching.engine.synthesizer import make_matching_order
from src.wm_matching.engine.validator import validate_match
from src.wm_order.application.factory import hash_order, order_from_json, order_to_json
from src.wm_order.application.schemas import (
    AtomicMatchJSON,
    HashResponse,
    MatchRequest,
    OrderJSON,
    PriceRequest,
    PriceResponse,
    ValidateRequest,
    ValidateResponse,
)
from src.wm_order.domain.models import AnyOrder
from src.wm_order.domain.repository import OrderbookProtocol
from src.wm_pricing.domain.fee import calc_fee, compute_fees
from src.wm_pricing.domain.price import final_price

logger = logging.getLogger(__name__)


def _resolve_time(at_time: int | None) -> int:
    return unix_now() if at_time is None else at_time


def _atomic_match_to_json(args: AtomicMatchArgs) -> AtomicMatchJSON:
    return AtomicMatchJSON(
        addrs=args.addrs,
        uints=[str(u) for u in args.uints],
        fee_methods_sides_kinds_how_to_calls=args.fee_methods_sides_kinds_how_to_calls,
        calldata_buy=bytes_to_hex(args.calldata_buy),
        calldata_sell=bytes_to_hex(args.calldata_sell),
        replacement_pattern_buy=bytes_to_hex(args.replacement_pattern_buy),
        replacement_pattern_sell=bytes_to_hex(args.replacement_pattern_sell),
        static_extradata_buy=bytes_to_hex(args.static_extradata_buy),
        static_extradata_sell=bytes_to_hex(args.static_extradata_sell),
        vs=args.vs,
        rss_metadata=[bytes_to_hex(b) for b in args.rss_metadata],
    )


async def fetch_order(orderbook: OrderbookProtocol, query: dict[str, Any]) -> AnyOrder | None:
    """Fetch one order from the orderbook and parse it; None if nothing matches."""
    data = await orderbook.get_order(query)
    if data is None:
        logger.debug("Orderbook returned no order for %s", query)
        return None
    return order_from_json(data)


async def fetch_orders(orderbook: OrderbookProtocol, query: dict[str, Any]) -> list[AnyOrder]:
    return [order_from_json(data) for data in await orderbook.get_orders(query)]


def hash_order_json(body: OrderJSON) -> HashResponse:
    order = hash_order(order_from_json(body))
    return HashResponse(hash=order.hash)


def price_order(req: PriceRequest) -> PriceResponse:
    order = hash_order(order_from_json(req.order))
    at_time = _resolve_time(req.at_time)
    fees = compute_fees(order, at_time)
    settled = final_price(order, at_time)
    return PriceResponse(
        hash=order.hash,
        current_price=str(fees.price),
        final_price=str(settled),
        maker_fee=str(fees.maker_fee),
        taker_fee=str(fees.taker_fee),
        buyer_pays=str(fees.buyer_pays),
        seller_receives=str(fees.seller_receives),
        maker_fee_amount=str(
            calc_fee(settled, order.maker_relayer_fee + order.maker_protocol_fee)
        ),
        taker_fee_amount=str(
            calc_fee(settled, order.taker_relayer_fee + order.taker_protocol_fee)
        ),
        at_time=at_time,
    )


def match_order(req: MatchRequest, cfg: Settings) -> dict[str, Any]:
    """Counter-order for ``req.account_address``, in OrderJSON wire shape."""
    order = order_from_json(req.order)
    matching = make_matching_order(
        order,
        req.account_address,
        at_time=_resolve_time(req.at_time),
        fee_recipient=cfg.FEE_RECIPIENT,
        match_window=cfg.MATCH_WINDOW_SECONDS,
    )
    return order_to_json(matching)


def validate_pair(req: ValidateRequest, cfg: Settings) -> ValidateResponse:
    """Validate a (buy, sell) pair; a failing check raises MatchError."""
    buy = order_from_json(req.buy)
    sell = order_from_json(req.sell)
    at_time = _resolve_time(req.at_time)
    validate_match(
        buy,
        sell,
        normalize_address("account_address", req.account_address),
        exchange_address=cfg.exchange_address,
        at_time=at_time,
    )
    buy_hashed = hash_order(buy)
    sell_hashed = hash_order(sell)
    logger.info("Validated match buy=%s sell=%s", buy_hashed.hash, sell_hashed.hash)
    return ValidateResponse(
        valid=True,
        buy_hash=buy_hashed.hash,
        sell_hash=sell_hashed.hash,
        at_time=at_time,
        atomic_match=_atomic_match_to_json(build_atomic_match_args(buy, sell)),
    )
