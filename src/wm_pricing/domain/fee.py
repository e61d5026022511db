"""Fee calculation: relayer + protocol basis points on the current price."""
from dataclasses import dataclass
from decimal import Decimal, localcontext

from src.wm_common.constants import INVERSE_BASIS_POINT
from src.wm_common.enums import FeeMethod, OrderSide
from src.wm_common.errors import InvalidFieldError
from src.wm_common.units import PRICE_PRECISION
from src.wm_order.domain.models import UnhashedOrder
from src.wm_pricing.domain.price import current_price


@dataclass(frozen=True)
class FeeBreakdown:
    price: Decimal
    maker_fee: Decimal
    taker_fee: Decimal
    fee_method: FeeMethod
    side: OrderSide  # side of the maker's order

    @property
    def maker_fee_deducted(self) -> bool:
        """SplitFee takes a selling maker's fee out of the sale proceeds."""
        return self.fee_method is FeeMethod.SPLIT_FEE and self.side is OrderSide.SELL

    @property
    def buyer_fee(self) -> Decimal:
        return self.taker_fee if self.side is OrderSide.SELL else self.maker_fee

    @property
    def seller_fee(self) -> Decimal:
        return self.maker_fee if self.side is OrderSide.SELL else self.taker_fee

    @property
    def buyer_pays(self) -> Decimal:
        """Payment-token amount leaving the buyer: the price plus the buyer's own fee."""
        with localcontext() as ctx:
            ctx.prec = PRICE_PRECISION
            return self.price + self.buyer_fee

    @property
    def seller_receives(self) -> Decimal:
        """Payment-token amount reaching the seller.

        Under PROTOCOL_FEE the seller pays their fee on top, so proceeds are the
        full price. Under SPLIT_FEE the seller's fee comes out of the proceeds.
        """
        if self.fee_method is FeeMethod.PROTOCOL_FEE:
            return self.price
        with localcontext() as ctx:
            ctx.prec = PRICE_PRECISION
            return self.price - self.seller_fee


def calc_fee(trade_value: int, fee_bps: int) -> int:
    """Floor division fee: (trade_value x fee_bps) // 10000, as the exchange computes it."""
    if trade_value < 0 or fee_bps < 0:
        raise InvalidFieldError("fee", f"negative fee input: value={trade_value}, bps={fee_bps}")
    return (trade_value * fee_bps) // INVERSE_BASIS_POINT


def _bps_of(price: Decimal, fee_bps: int) -> Decimal:
    if fee_bps < 0:
        raise InvalidFieldError("fee", f"negative basis points: {fee_bps}")
    with localcontext() as ctx:
        ctx.prec = PRICE_PRECISION
        return (price * fee_bps).scaleb(-4)


def compute_fees(order: UnhashedOrder, at_time: int) -> FeeBreakdown:
    """Maker and taker fees for ``order`` at ``at_time``.

    PROTOCOL_FEE: both parties pay their relayer + protocol fee on top.
    SPLIT_FEE:    a selling maker's fee is deducted from proceeds; the taker
                  fee is always paid on top.
    """
    if order.fee_method not in (FeeMethod.PROTOCOL_FEE, FeeMethod.SPLIT_FEE):
        raise InvalidFieldError("fee_method", f"{order.fee_method!r} is not a FeeMethod")
    price = current_price(order, at_time)
    return FeeBreakdown(
        price=price,
        maker_fee=_bps_of(price, order.maker_relayer_fee + order.maker_protocol_fee),
        taker_fee=_bps_of(price, order.taker_relayer_fee + order.taker_protocol_fee),
        fee_method=order.fee_method,
        side=order.side,
    )
