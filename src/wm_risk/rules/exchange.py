from src.wm_common.enums import MatchFailureReason
from src.wm_common.errors import MatchError
from src.wm_order.domain.models import UnhashedOrder


def check_exchange(buy: UnhashedOrder, sell: UnhashedOrder, exchange_address: str) -> None:
    """Both orders must name the same exchange, and it must be the configured one."""
    expected = exchange_address.lower()
    if buy.exchange != sell.exchange:
        raise MatchError(
            MatchFailureReason.EXCHANGE_MISMATCH,
            f"buy uses {buy.exchange}, sell uses {sell.exchange}",
        )
    if buy.exchange != expected:
        raise MatchError(
            MatchFailureReason.EXCHANGE_MISMATCH,
            f"orders use {buy.exchange}, expected {expected}",
        )


def check_payment_token(buy: UnhashedOrder, sell: UnhashedOrder) -> None:
    if buy.payment_token != sell.payment_token:
        raise MatchError(
            MatchFailureReason.PAYMENT_TOKEN_MISMATCH,
            f"buy pays in {buy.payment_token}, sell asks {sell.payment_token}",
        )
