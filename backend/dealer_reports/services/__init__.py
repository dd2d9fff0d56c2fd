"""Service-layer orchestration modules."""

from dealer_reports.services.finance_service import FinanceService
from dealer_reports.services.report_generation_service import ReportGenerationService
from dealer_reports.services.sales_service import SalesService

__all__ = [
    "ReportGenerationService",
    "SalesService",
    "FinanceService",
]
