"""Calldata compatibility between a buy and a sell.

The exchange replaces each side's calldata with the other's under that side's
own pattern, then requires the two results to be identical. Here each side's
pinned bytes are additionally checked against what the counterparty
presents, so a mismatch is reported at its byte offset.
"""
from src.wm_common.enums import MatchFailureReason
from src.wm_common.errors import CalldataMismatchError, MatchError
from src.wm_matching.engine.calldata import (
    apply_replacement_pattern,
    first_difference,
    guarded_replace,
)
from src.wm_order.domain.models import UnhashedOrder


def check_calldata_compatible(buy: UnhashedOrder, sell: UnhashedOrder) -> bytes:
    """Return the calldata the exchange will execute, or raise MatchError."""
    if len(buy.calldata) != len(sell.calldata):
        raise MatchError(
            MatchFailureReason.CALLDATA_MISMATCH,
            f"calldata lengths differ: buy={len(buy.calldata)} sell={len(sell.calldata)}",
        )
    buy_view = apply_replacement_pattern(buy.calldata, sell.calldata, buy.replacement_pattern)
    sell_view = apply_replacement_pattern(sell.calldata, buy.calldata, sell.replacement_pattern)
    try:
        guarded_replace(sell.calldata, buy_view, sell.replacement_pattern)
        guarded_replace(buy.calldata, sell_view, buy.replacement_pattern)
    except CalldataMismatchError as exc:
        raise MatchError(
            MatchFailureReason.CALLDATA_MISMATCH, f"pinned byte differs at offset {exc.offset}"
        ) from exc
    offset = first_difference(buy_view, sell_view)
    if offset is not None:
        raise MatchError(
            MatchFailureReason.CALLDATA_MISMATCH,
            f"both sides replace byte {offset} with different values",
        ) from CalldataMismatchError(offset, sell_view[offset], buy_view[offset])
    return buy_view
