from src.wm_common.enums import MatchFailureReason, OrderSide
from src.wm_common.errors import MatchError
from src.wm_order.domain.models import UnhashedOrder


def check_sides(buy: UnhashedOrder, sell: UnhashedOrder) -> None:
    """Raise MatchError unless buy is a Buy and sell is a Sell."""
    if buy.side is not OrderSide.BUY:
        raise MatchError(MatchFailureReason.SIDE_MISMATCH, f"buy order has side {buy.side!r}")
    if sell.side is not OrderSide.SELL:
        raise MatchError(MatchFailureReason.SIDE_MISMATCH, f"sell order has side {sell.side!r}")
