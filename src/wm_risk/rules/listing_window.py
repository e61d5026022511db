from src.wm_common.enums import MatchFailureReason
from src.wm_common.errors import MatchError
from src.wm_order.domain.models import UnhashedOrder


def check_listing_window(order: UnhashedOrder, at_time: int, label: str) -> None:
    """Raise MatchError if ``order`` is not yet listed or already expired at ``at_time``."""
    if order.listing_time > at_time:
        raise MatchError(
            MatchFailureReason.NOT_YET_LISTED,
            f"{label} lists at {order.listing_time}, now {at_time}",
        )
    if order.is_expired(at_time):
        raise MatchError(
            MatchFailureReason.ORDER_EXPIRED,
            f"{label} expired at {order.expiration_time}, now {at_time}",
        )
