"""Current price of an order at a given time.

FixedPrice:    base_price, always.
DutchAuction:  linear from base_price at listing_time to base_price -/+ extra
               at expiration_time (minus for Sell, plus for Buy), clamped
               to the endpoints outside that window.

``current_price`` is exact. ``final_price`` reproduces the exchange's
``calculateFinalPrice`` integer result and is the only place that rounds.
"""
from decimal import Decimal
from fractions import Fraction

from src.wm_common.enums import OrderSide, SaleKind
from src.wm_common.errors import InvalidFieldError, UnsupportedSaleKindError
from src.wm_common.units import fraction_to_decimal
from src.wm_order.domain.models import UnhashedOrder


def _clamped_elapsed(order: UnhashedOrder, at_time: int) -> int:
    return min(max(at_time, order.listing_time), order.expiration_time) - order.listing_time


def _auction_window(order: UnhashedOrder) -> int:
    duration = order.expiration_time - order.listing_time
    if order.never_expires or duration <= 0:
        raise InvalidFieldError("expiration_time", "a Dutch auction needs a non-empty window")
    return duration


def _apply_delta(order: UnhashedOrder, delta: Fraction | int) -> Fraction | int:
    if order.side is OrderSide.SELL:
        return order.base_price - delta
    if order.side is OrderSide.BUY:
        return order.base_price + delta
    raise InvalidFieldError("side", f"{order.side!r} is not an OrderSide")


def exact_price(order: UnhashedOrder, at_time: int) -> Fraction:
    if order.sale_kind is SaleKind.FIXED_PRICE:
        return Fraction(order.base_price)
    if order.sale_kind is SaleKind.DUTCH_AUCTION:
        duration = _auction_window(order)
        delta = Fraction(order.extra * _clamped_elapsed(order, at_time), duration)
        return Fraction(_apply_delta(order, delta))
    raise UnsupportedSaleKindError(order.sale_kind)


def current_price(order: UnhashedOrder, at_time: int) -> Decimal:
    """Exact current price in payment-token base units."""
    return fraction_to_decimal(exact_price(order, at_time))


def final_price(order: UnhashedOrder, at_time: int) -> int:
    """Price the exchange settles at: the auction delta is floored before
    being applied, exactly as ``calculateFinalPrice`` does."""
    if order.sale_kind is SaleKind.FIXED_PRICE:
        return order.base_price
    if order.sale_kind is SaleKind.DUTCH_AUCTION:
        duration = _auction_window(order)
        delta = (order.extra * _clamped_elapsed(order, at_time)) // duration
        price = int(_apply_delta(order, delta))
        if price < 0:
            raise InvalidFieldError("extra", f"auction price falls below zero at {at_time}")
        return price
    raise UnsupportedSaleKindError(order.sale_kind)
