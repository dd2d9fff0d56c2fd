"""SQLAlchemy ORM models — imported here so Base.metadata sees them."""

from dealer_reports.models.daily_report import DailyReportModel
from dealer_reports.models.finance_record import FinanceRecordModel
from dealer_reports.models.monthly_report import MonthlyReportModel
from dealer_reports.models.report_tracker import ReportTrackerModel
from dealer_reports.models.sale import SaleModel
from dealer_reports.models.yearly_report import YearlyReportModel

__all__ = [
    "SaleModel",
    "FinanceRecordModel",
    "DailyReportModel",
    "MonthlyReportModel",
    "YearlyReportModel",
    "ReportTrackerModel",
]
