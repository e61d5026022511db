"""Remaining structural terms the exchange's ``ordersCanMatch`` compares.

Fee method, target and call type must agree; a taker restriction must name
the counterparty; exactly one side names a fee recipient.
"""
from src.wm_common.constants import NULL_ADDRESS
from src.wm_common.enums import MatchFailureReason
from src.wm_common.errors import MatchError
from src.wm_order.domain.models import UnhashedOrder


def check_fee_method(buy: UnhashedOrder, sell: UnhashedOrder) -> None:
    if buy.fee_method is not sell.fee_method:
        raise MatchError(
            MatchFailureReason.FEE_METHOD_MISMATCH,
            f"buy {buy.fee_method.name}, sell {sell.fee_method.name}",
        )


def check_target(buy: UnhashedOrder, sell: UnhashedOrder) -> None:
    if buy.target != sell.target:
        raise MatchError(
            MatchFailureReason.TARGET_MISMATCH, f"buy calls {buy.target}, sell {sell.target}"
        )
    if buy.how_to_call is not sell.how_to_call:
        raise MatchError(
            MatchFailureReason.HOW_TO_CALL_MISMATCH,
            f"buy {buy.how_to_call.name}, sell {sell.how_to_call.name}",
        )


def check_taker(buy: UnhashedOrder, sell: UnhashedOrder) -> None:
    if sell.taker not in (NULL_ADDRESS, buy.maker):
        raise MatchError(
            MatchFailureReason.TAKER_RESTRICTED, f"sell is reserved for {sell.taker}"
        )
    if buy.taker not in (NULL_ADDRESS, sell.maker):
        raise MatchError(
            MatchFailureReason.TAKER_RESTRICTED, f"buy is reserved for {buy.taker}"
        )


def check_fee_recipient(buy: UnhashedOrder, sell: UnhashedOrder) -> None:
    buy_has = buy.fee_recipient != NULL_ADDRESS
    sell_has = sell.fee_recipient != NULL_ADDRESS
    if buy_has == sell_has:
        which = "both orders" if buy_has else "neither order"
        raise MatchError(
            MatchFailureReason.FEE_RECIPIENT_CONFLICT, f"{which} names a fee recipient"
        )
