"""Daily sales rollup: one calendar date's sales → one daily report row."""

import logging
from datetime import date

from dealer_reports.models.daily_report import DailyReportModel
from dealer_reports.repositories.daily_report_repo import DailyReportRepository
from dealer_reports.repositories.sale_repo import SaleRepository
from dealer_reports.schemas.reports import DailyReport
from dealer_reports.utils.financial_math import money_sum, safe_average, to_decimal, to_money

logger = logging.getLogger(__name__)


class DailyAggregator:
    """Compute and upsert the daily report for a date.

    Re-running for the same date recomputes from the full set of sales, so
    the result only depends on the sales, never on a previous report.
    """

    def __init__(self, sale_repo: SaleRepository, daily_repo: DailyReportRepository):
        self.sales = sale_repo
        self.reports = daily_repo

    def aggregate(self, report_date: date) -> DailyReport:
        sales = self.sales.get_for_date(report_date)

        total_profit = money_sum(s.profit_loss for s in sales)
        report = DailyReport(
            report_date=report_date,
            total_sales=len(sales),
            total_revenue=to_money(money_sum(s.sale_price for s in sales)),
            total_profit=to_money(total_profit),
            avg_profit_per_sale=safe_average(total_profit, len(sales)),
        )

        # Strict ">" keeps the first sale (lowest id) on ties.
        best = None
        for s in sales:
            if best is None or to_decimal(s.profit_loss) > to_decimal(best.profit_loss):
                best = s
        if best is not None:
            report.most_profitable_car_id = best.car_id
            report.highest_single_profit = to_money(best.profit_loss)

        return report

    def generate(self, report_date: date) -> DailyReportModel:
        report = self.aggregate(report_date)
        row = self.reports.upsert(
            {"report_date": report_date},
            report.model_dump(exclude={"report_date"}),
        )
        logger.info(
            "Generated daily report for %s: %d sales, %s revenue, %s profit",
            report_date, report.total_sales, report.total_revenue, report.total_profit,
        )
        return row
