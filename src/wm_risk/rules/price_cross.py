from src.wm_common.enums import MatchFailureReason
from src.wm_common.errors import MatchError
from src.wm_order.domain.models import UnhashedOrder
from src.wm_pricing.domain.price import final_price


def check_price_cross(buy: UnhashedOrder, sell: UnhashedOrder, at_time: int) -> int:
    """Return the sell price the match clears at; raise if the buy bids less.

    Compared on settled (integer) prices, the way the exchange compares them.
    """
    buy_price = final_price(buy, at_time)
    sell_price = final_price(sell, at_time)
    if buy_price < sell_price:
        raise MatchError(
            MatchFailureReason.PRICE_NOT_CROSSED,
            f"buy price {buy_price} < sell price {sell_price}",
        )
    return sell_price
