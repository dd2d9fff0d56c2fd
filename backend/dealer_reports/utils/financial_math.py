"""Pure money calculation utilities.

Every monetary figure that reaches a report row passes through
:func:`to_money`, so sums of persisted values stay exact in ``Decimal``.
Used by all three aggregators.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Union

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value: Optional[Number]) -> Decimal:
    """Coerce a DB/number value to Decimal without rounding.

    Floats go through ``str`` so 0.1 stays 0.1 rather than its binary
    expansion.

    >>> to_decimal(None)
    Decimal('0')
    >>> to_decimal(0.1)
    Decimal('0.1')
    """
    if value is None:
        return Decimal(0)
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def to_money(value: Optional[Number]) -> Decimal:
    """Round to cents, half-up.

    >>> to_money(Decimal("2166.665"))
    Decimal('2166.67')
    >>> to_money(-0.005)
    Decimal('-0.01')
    >>> to_money(None)
    Decimal('0.00')
    """
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def money_sum(values: Iterable[Optional[Number]]) -> Decimal:
    """Exact Decimal sum; ``None`` entries count as zero.

    >>> money_sum([Decimal("10000.00"), Decimal("15000.00"), None])
    Decimal('25000.00')
    """
    total = Decimal(0)
    for v in values:
        total += to_decimal(v)
    return total


def safe_average(total: Number, count: int) -> Decimal:
    """Average of *total* over *count*, zero when count is zero.

    >>> safe_average(Decimal("6500"), 3)
    Decimal('2166.67')
    >>> safe_average(Decimal("100"), 0)
    Decimal('0.00')
    """
    if count <= 0:
        return ZERO
    return to_money(to_decimal(total) / count)


def margin(numerator: Number, denominator: Number) -> Decimal:
    """Margin expressed as a percentage, zero when the denominator is zero.

    >>> margin(Decimal("6500"), Decimal("33000"))
    Decimal('19.70')
    >>> margin(10, 0)
    Decimal('0.00')
    """
    denominator = to_decimal(denominator)
    if denominator == 0:
        return ZERO
    return to_money(to_decimal(numerator) / denominator * 100)


def growth_rate(current: Number, previous: Number) -> Optional[Decimal]:
    """Percentage growth relative to ``abs(previous)``.

    Returns None when previous is zero (undefined growth).

    >>> growth_rate(115, 100)
    Decimal('15.00')
    >>> growth_rate(-50, -100)
    Decimal('50.00')
    >>> growth_rate(100, 0) is None
    True
    """
    previous = to_decimal(previous)
    if previous == 0:
        return None
    return to_money((to_decimal(current) - previous) / abs(previous) * 100)


def year_over_year_growth(current_profit: Number, prior_profit: Optional[Number]) -> Optional[Decimal]:
    """YoY profit growth for the yearly report.

    ``prior_profit`` is None when no report exists for the prior year.
    A zero base reads as 100% growth when the year turned a profit and as
    no growth otherwise.

    >>> year_over_year_growth(500, None) is None
    True
    >>> year_over_year_growth(500, 0)
    Decimal('100.00')
    >>> year_over_year_growth(-20, 0)
    Decimal('0.00')
    >>> year_over_year_growth(150, 100)
    Decimal('50.00')
    """
    if prior_profit is None:
        return None
    if to_decimal(prior_profit) == 0:
        return Decimal("100.00") if to_decimal(current_profit) > 0 else ZERO
    return growth_rate(current_profit, prior_profit)
