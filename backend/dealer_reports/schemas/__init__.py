"""Pydantic schemas for sales, finance records and reports."""

from dealer_reports.schemas.finance_record import (
    FinanceRecord,
    FinanceRecordCreate,
    FinanceRecordResult,
    FinanceRecordUpdate,
)
from dealer_reports.schemas.reports import (
    BatchSummary,
    DailyReport,
    MissingReport,
    MonthlyReport,
    NewMonthResult,
    ReportCoverage,
    TrackerState,
    YearlyReport,
)
from dealer_reports.schemas.sale import Sale, SaleCreate, SaleResult, SaleUpdate

__all__ = [
    "Sale",
    "SaleCreate",
    "SaleUpdate",
    "SaleResult",
    "FinanceRecord",
    "FinanceRecordCreate",
    "FinanceRecordUpdate",
    "FinanceRecordResult",
    "DailyReport",
    "MonthlyReport",
    "YearlyReport",
    "ReportCoverage",
    "MissingReport",
    "TrackerState",
    "BatchSummary",
    "NewMonthResult",
]
