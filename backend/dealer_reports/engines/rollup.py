"""Sub-period rollup strategies shared by the monthly and yearly aggregators.

A month is rolled up either from its daily reports or, when none exist,
straight from the sales, regrouped by day.  A year works the same way one
level up (monthly reports, or sales regrouped by month).  Each strategy is a
plain function over already-fetched rows so both paths can be exercised on
their own.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

from dealer_reports.utils.financial_math import money_sum, to_decimal


@dataclass
class PeriodRollup:
    """Totals for one month or year plus its best sub-period."""

    total_sales: int
    total_revenue: Decimal
    total_profit: Decimal
    sub_periods: int  # days (or months) that contributed
    best_period: Optional[Any] = None  # date for months, month number for years
    best_period_profit: Optional[Decimal] = None
    from_sub_reports: bool = True


def pick_best(profits: Iterable[Tuple[Hashable, Decimal]]) -> Tuple[Optional[Any], Optional[Decimal]]:
    """Return the (key, profit) with the highest profit; ties go to the lowest key.

    >>> pick_best([(3, Decimal("5")), (1, Decimal("5")), (2, Decimal("4"))])
    (1, Decimal('5'))
    >>> pick_best([])
    (None, None)
    """
    best_key, best_profit = None, None
    for key, profit in sorted(profits, key=lambda kp: kp[0]):
        if best_profit is None or profit > best_profit:
            best_key, best_profit = key, profit
    return best_key, best_profit


def rollup_reports(
    reports: Sequence[Any],
    key: Callable[[Any], Hashable],
) -> PeriodRollup:
    """Sum persisted sub-period reports (daily for a month, monthly for a year)."""
    best_key, best_profit = pick_best((key(r), to_decimal(r.total_profit)) for r in reports)
    return PeriodRollup(
        total_sales=sum(int(r.total_sales or 0) for r in reports),
        total_revenue=money_sum(r.total_revenue for r in reports),
        total_profit=money_sum(r.total_profit for r in reports),
        sub_periods=len(reports),
        best_period=best_key,
        best_period_profit=best_profit,
        from_sub_reports=True,
    )


def rollup_sales(
    sales: Sequence[Any],
    group_key: Callable[[Any], Hashable],
) -> PeriodRollup:
    """Sum raw sales, regrouping them by *group_key* to rank sub-periods.

    Only sub-periods that actually had sales are counted, matching the
    daily-report path where a day without sales has no report.
    """
    groups: Dict[Hashable, List[Any]] = {}
    for s in sales:
        groups.setdefault(group_key(s), []).append(s)

    best_key, best_profit = pick_best(
        (k, money_sum(s.profit_loss for s in group)) for k, group in groups.items()
    )
    return PeriodRollup(
        total_sales=len(sales),
        total_revenue=money_sum(s.sale_price for s in sales),
        total_profit=money_sum(s.profit_loss for s in sales),
        sub_periods=len(groups),
        best_period=best_key,
        best_period_profit=best_profit,
        from_sub_reports=False,
    )
