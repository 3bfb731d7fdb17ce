"""Derived percentage helpers

Read-model values (commission ratios, utilization, active-user share) are
computed on the fly and never persisted.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, Union

Number = Union[Decimal, int, float]


def percentage(numerator: Number, denominator: Number, decimals: int = 0) -> Decimal:
    """
    numerator / denominator * 100, rounded half-up to ``decimals`` places

    A zero (or missing) denominator yields 0. Never raises, never returns
    NaN or infinity.
    """
    try:
        num = Decimal(str(numerator or 0))
        den = Decimal(str(denominator or 0))
        if den == 0 or not num.is_finite() or not den.is_finite():
            return Decimal(0)
        quantum = Decimal(1).scaleb(-decimals)
        return (num / den * 100).quantize(quantum, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal(0)


def sum_amounts(values: Iterable[Number]) -> Decimal:
    return sum((Decimal(str(v or 0)) for v in values), Decimal("0"))
