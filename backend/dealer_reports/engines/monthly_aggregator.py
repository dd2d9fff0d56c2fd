"""Monthly sales rollup with the finance-cost merge into net profit."""

import logging

from dealer_reports.engines.rollup import PeriodRollup, rollup_reports, rollup_sales
from dealer_reports.models.monthly_report import MonthlyReportModel
from dealer_reports.repositories.daily_report_repo import DailyReportRepository
from dealer_reports.repositories.finance_record_repo import FinanceRecordRepository
from dealer_reports.repositories.monthly_report_repo import MonthlyReportRepository
from dealer_reports.repositories.sale_repo import SaleRepository
from dealer_reports.schemas.reports import MonthlyReport
from dealer_reports.utils.financial_math import margin, money_sum, safe_average, to_money
from dealer_reports.utils.periods import month_bounds

logger = logging.getLogger(__name__)


class MonthlyAggregator:
    """Compute and upsert the monthly report for ``(year, month)``.

    Totals come from the month's daily reports when any exist, otherwise
    directly from the month's sales.  ``total_finance_cost`` is always the
    sum of the month's finance records and is the only finance figure
    ``net_profit`` depends on; the informational ``finance_cost`` column is
    left as stored.
    """

    def __init__(
        self,
        sale_repo: SaleRepository,
        daily_repo: DailyReportRepository,
        finance_repo: FinanceRecordRepository,
        monthly_repo: MonthlyReportRepository,
    ):
        self.sales = sale_repo
        self.daily_reports = daily_repo
        self.finance = finance_repo
        self.reports = monthly_repo

    def aggregate(self, year: int, month: int) -> MonthlyReport:
        start, end = month_bounds(year, month)

        daily_reports = self.daily_reports.get_between(start, end)
        has_sub_period_reports = bool(daily_reports)

        if has_sub_period_reports:
            rollup = rollup_reports(daily_reports, key=lambda r: r.report_date)
        else:
            rollup = rollup_sales(self.sales.get_between(start, end), group_key=lambda s: s.sale_date)
            if rollup.total_sales:
                logger.warning(
                    "No daily reports for %d-%02d; monthly totals computed from %d sales directly",
                    year, month, rollup.total_sales,
                )

        total_finance_cost = to_money(money_sum(r.cost for r in self.finance.get_between(start, end)))
        return self._build(year, month, rollup, total_finance_cost)

    def generate(self, year: int, month: int) -> MonthlyReportModel:
        report = self.aggregate(year, month)
        row = self.reports.upsert(
            {"year": year, "month": month},
            report.model_dump(exclude={"year", "month", "finance_cost"}),
        )
        logger.info(
            "Generated monthly report for %d-%02d: %d sales, %s revenue, %s profit, "
            "%s finance cost, %s net profit",
            year, month, report.total_sales, report.total_revenue, report.total_profit,
            report.total_finance_cost, report.net_profit,
        )
        return row

    @staticmethod
    def _build(year: int, month: int, rollup: PeriodRollup, total_finance_cost) -> MonthlyReport:
        start, end = month_bounds(year, month)
        total_profit = to_money(rollup.total_profit)
        total_revenue = to_money(rollup.total_revenue)
        return MonthlyReport(
            year=year,
            month=month,
            start_date=start,
            end_date=end,
            total_sales=rollup.total_sales,
            total_revenue=total_revenue,
            total_profit=total_profit,
            avg_daily_profit=safe_average(rollup.total_profit, rollup.sub_periods),
            best_day=rollup.best_period,
            best_day_profit=(
                to_money(rollup.best_period_profit) if rollup.best_period_profit is not None else None
            ),
            profit_margin=margin(rollup.total_profit, rollup.total_revenue),
            total_finance_cost=total_finance_cost,
            net_profit=to_money(total_profit - total_finance_cost),
        )
