"""Exact amounts in payment-token base units (wei for ETH/WETH).

Prices and fees are exact ints, Fractions or Decimals. No float anywhere.
"""

from decimal import Decimal, localcontext
from fractions import Fraction

# Wide enough that dividing any uint256 by a uint256 keeps every integer digit
PRICE_PRECISION = 160


def fraction_to_decimal(value: Fraction) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = PRICE_PRECISION
        return Decimal(value.numerator) / Decimal(value.denominator)
