"""Yearly sales rollup with year-over-year growth."""

import logging
from decimal import Decimal

from dealer_reports.engines.rollup import rollup_reports, rollup_sales
from dealer_reports.models.yearly_report import YearlyReportModel
from dealer_reports.repositories.finance_record_repo import FinanceRecordRepository
from dealer_reports.repositories.monthly_report_repo import MonthlyReportRepository
from dealer_reports.repositories.sale_repo import SaleRepository
from dealer_reports.repositories.yearly_report_repo import YearlyReportRepository
from dealer_reports.schemas.reports import YearlyReport
from dealer_reports.utils.financial_math import (
    margin,
    money_sum,
    safe_average,
    to_money,
    year_over_year_growth,
)
from dealer_reports.utils.periods import year_bounds

logger = logging.getLogger(__name__)


class YearlyAggregator:
    """Compute and upsert the yearly report for a year.

    Monthly reports are the preferred source; finance totals then come from
    the monthly rows so the year always agrees with its months.  Without any
    monthly report the year is computed from its sales and finance records.
    """

    def __init__(
        self,
        sale_repo: SaleRepository,
        monthly_repo: MonthlyReportRepository,
        finance_repo: FinanceRecordRepository,
        yearly_repo: YearlyReportRepository,
    ):
        self.sales = sale_repo
        self.monthly_reports = monthly_repo
        self.finance = finance_repo
        self.reports = yearly_repo

    def aggregate(self, year: int) -> YearlyReport:
        monthly_reports = self.monthly_reports.get_for_year(year)
        has_sub_period_reports = bool(monthly_reports)

        if has_sub_period_reports:
            rollup = rollup_reports(monthly_reports, key=lambda r: r.month)
            total_finance_cost = to_money(money_sum(r.total_finance_cost for r in monthly_reports))
            total_net_profit = to_money(money_sum(r.net_profit for r in monthly_reports))
        else:
            start, end = year_bounds(year)
            rollup = rollup_sales(self.sales.get_between(start, end), group_key=lambda s: s.sale_date.month)
            if rollup.total_sales:
                logger.warning(
                    "No monthly reports for %d; yearly totals computed from %d sales directly",
                    year, rollup.total_sales,
                )
            total_finance_cost = to_money(money_sum(r.cost for r in self.finance.get_between(start, end)))
            total_net_profit = to_money(to_money(rollup.total_profit) - total_finance_cost)

        total_profit = to_money(rollup.total_profit)
        return YearlyReport(
            year=year,
            total_sales=rollup.total_sales,
            total_revenue=to_money(rollup.total_revenue),
            total_profit=total_profit,
            avg_monthly_profit=safe_average(rollup.total_profit, rollup.sub_periods),
            best_month=rollup.best_period,
            best_month_profit=(
                to_money(rollup.best_period_profit) if rollup.best_period_profit is not None else None
            ),
            profit_margin=margin(rollup.total_profit, rollup.total_revenue),
            yoy_growth=year_over_year_growth(total_profit, self._prior_year_profit(year)),
            total_finance_cost=total_finance_cost,
            total_net_profit=total_net_profit,
        )

    def generate(self, year: int) -> YearlyReportModel:
        report = self.aggregate(year)
        row = self.reports.upsert({"year": year}, report.model_dump(exclude={"year"}))
        logger.info(
            "Generated yearly report for %d: %d sales, %s profit, yoy %s",
            year, report.total_sales, report.total_profit,
            report.yoy_growth if report.yoy_growth is not None else "n/a",
        )
        return row

    def _prior_year_profit(self, year: int):
        prior = self.reports.get_for_year(year - 1)
        if prior is None:
            return None
        return prior.total_profit if prior.total_profit is not None else Decimal(0)
