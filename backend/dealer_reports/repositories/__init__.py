"""Data access repositories."""

from dealer_reports.repositories.base import BaseRepository
from dealer_reports.repositories.daily_report_repo import DailyReportRepository
from dealer_reports.repositories.finance_record_repo import FinanceRecordRepository
from dealer_reports.repositories.monthly_report_repo import MonthlyReportRepository
from dealer_reports.repositories.sale_repo import SaleRepository
from dealer_reports.repositories.tracker_repo import ReportTrackerRepository
from dealer_reports.repositories.yearly_report_repo import YearlyReportRepository

__all__ = [
    "BaseRepository",
    "SaleRepository",
    "FinanceRecordRepository",
    "DailyReportRepository",
    "MonthlyReportRepository",
    "YearlyReportRepository",
    "ReportTrackerRepository",
]
