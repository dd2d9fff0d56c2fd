"""Dependency injection / factory functions for FastAPI.

Every service is constructed here with its full dependency tree, bound to
the request's database session.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from dealer_reports.database import get_db
from dealer_reports.engines.daily_aggregator import DailyAggregator
from dealer_reports.engines.generation_tracker import GenerationTracker
from dealer_reports.engines.monthly_aggregator import MonthlyAggregator
from dealer_reports.engines.yearly_aggregator import YearlyAggregator
from dealer_reports.repositories.daily_report_repo import DailyReportRepository
from dealer_reports.repositories.finance_record_repo import FinanceRecordRepository
from dealer_reports.repositories.monthly_report_repo import MonthlyReportRepository
from dealer_reports.repositories.sale_repo import SaleRepository
from dealer_reports.repositories.tracker_repo import ReportTrackerRepository
from dealer_reports.repositories.yearly_report_repo import YearlyReportRepository
from dealer_reports.services.report_generation_service import ReportGenerationService


# ── Per-request (need a DB session) ─────────────────────────────────────

def build_report_service(db: Session) -> ReportGenerationService:
    sales = SaleRepository(db)
    finance = FinanceRecordRepository(db)
    daily = DailyReportRepository(db)
    monthly = MonthlyReportRepository(db)
    yearly = YearlyReportRepository(db)
    return ReportGenerationService(
        db=db,
        daily_aggregator=DailyAggregator(sales, daily),
        monthly_aggregator=MonthlyAggregator(sales, daily, finance, monthly),
        yearly_aggregator=YearlyAggregator(sales, monthly, finance, yearly),
        tracker=GenerationTracker(ReportTrackerRepository(db), daily, monthly, yearly),
        sale_repo=sales,
        finance_repo=finance,
        daily_repo=daily,
        monthly_repo=monthly,
        yearly_repo=yearly,
    )


def get_report_service(db: Session = Depends(get_db)) -> ReportGenerationService:
    return build_report_service(db)
