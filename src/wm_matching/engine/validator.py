"""Match validation: is a (buy, sell) pair something the exchange will settle?

Checks run in a fixed order and the first failure raises ``MatchError``
with its reason:

    1. sides
    2. exchange (both equal, and the configured contract)
    3. payment token, then fee method, target/call type, taker restriction,
       fee recipient exclusivity
    4. calldata compatibility under both replacement patterns
    5. listing window of both orders
    6. buy price >= sell price
    7. hashes, and the signature of the order not made by the caller
"""
import logging

from src.wm_common.errors import AppError
from src.wm_order.domain.models import UnhashedOrder
from src.wm_risk.rules.calldata_compat import check_calldata_compatible
from src.wm_risk.rules.exchange import check_exchange, check_payment_token
from src.wm_risk.rules.listing_window import check_listing_window
from src.wm_risk.rules.order_sides import check_sides
from src.wm_risk.rules.price_cross import check_price_cross
from src.wm_risk.rules.signature import check_hash, check_signature
from src.wm_risk.rules.trade_terms import (
    check_fee_method,
    check_fee_recipient,
    check_target,
    check_taker,
)

logger = logging.getLogger(__name__)


def validate_match(
    buy: UnhashedOrder,
    sell: UnhashedOrder,
    account_address: str,
    *,
    exchange_address: str,
    at_time: int,
) -> bool:
    """Return True if the pair can be matched by ``account_address``; raise MatchError otherwise."""
    check_sides(buy, sell)
    check_exchange(buy, sell, exchange_address)
    check_payment_token(buy, sell)
    check_fee_method(buy, sell)
    check_target(buy, sell)
    check_taker(buy, sell)
    check_fee_recipient(buy, sell)
    check_calldata_compatible(buy, sell)
    check_listing_window(buy, at_time, "buy")
    check_listing_window(sell, at_time, "sell")
    clearing_price = check_price_cross(buy, sell, at_time)
    buy_hash = check_hash(buy, "buy")
    sell_hash = check_hash(sell, "sell")
    check_signature(buy, buy_hash, account_address, "buy")
    check_signature(sell, sell_hash, account_address, "sell")
    logger.debug(
        "Match OK: buy=%s sell=%s price=%d account=%s",
        buy_hash,
        sell_hash,
        clearing_price,
        account_address,
    )
    return True


def is_valid_match(
    buy: UnhashedOrder,
    sell: UnhashedOrder,
    account_address: str,
    *,
    exchange_address: str,
    at_time: int,
) -> bool:
    """Boolean form of validate_match for hot paths; the reason is logged at DEBUG.

    A malformed order (bad field, unsupported sale kind) also counts as no match.
    """
    try:
        return validate_match(
            buy, sell, account_address, exchange_address=exchange_address, at_time=at_time
        )
    except AppError as exc:
        logger.debug("Match rejected: %s", exc.message)
        return False
