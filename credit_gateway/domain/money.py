"""Decimal money arithmetic with a fixed rounding policy"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(amount: Number) -> Decimal:
    """Convert to Decimal via str so floats keep their printed value"""
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))


def round_money(amount: Number) -> Decimal:
    """Round to 2 fractional digits, half-up. 333.665 -> 333.67"""
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def sum_money(amounts) -> Decimal:
    return round_money(sum((to_decimal(a) for a in amounts), ZERO))
