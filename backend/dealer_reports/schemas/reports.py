"""Report schemas — aggregation results, report reads, and job summaries."""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class DailyReport(BaseModel):
    report_date: date
    total_sales: int = 0
    total_revenue: Decimal = Decimal("0.00")
    total_profit: Decimal = Decimal("0.00")
    avg_profit_per_sale: Decimal = Decimal("0.00")
    most_profitable_car_id: Optional[int] = None
    highest_single_profit: Optional[Decimal] = None

    model_config = {"from_attributes": True}


class MonthlyReport(BaseModel):
    year: int
    month: int
    start_date: date
    end_date: date
    total_sales: int = 0
    total_revenue: Decimal = Decimal("0.00")
    total_profit: Decimal = Decimal("0.00")
    avg_daily_profit: Decimal = Decimal("0.00")
    best_day: Optional[date] = None
    best_day_profit: Optional[Decimal] = None
    profit_margin: Decimal = Decimal("0.00")
    finance_cost: Decimal = Decimal("0.00")  # informational, never computed here
    total_finance_cost: Decimal = Decimal("0.00")
    net_profit: Decimal = Decimal("0.00")

    model_config = {"from_attributes": True}


class YearlyReport(BaseModel):
    year: int
    total_sales: int = 0
    total_revenue: Decimal = Decimal("0.00")
    total_profit: Decimal = Decimal("0.00")
    avg_monthly_profit: Decimal = Decimal("0.00")
    best_month: Optional[int] = None
    best_month_profit: Optional[Decimal] = None
    profit_margin: Decimal = Decimal("0.00")
    yoy_growth: Optional[Decimal] = None
    total_finance_cost: Decimal = Decimal("0.00")
    total_net_profit: Decimal = Decimal("0.00")

    model_config = {"from_attributes": True}


class ReportCoverage(BaseModel):
    """Which of the three reports exist for the periods containing a date."""

    daily: bool
    monthly: bool
    yearly: bool
    all_exist: bool


class MissingReport(BaseModel):
    date: date
    status: ReportCoverage


class TrackerState(BaseModel):
    last_daily_report_date: Optional[date] = None
    last_monthly_report_year: Optional[int] = None
    last_monthly_report_month: Optional[int] = None
    last_yearly_report_year: Optional[int] = None

    model_config = {"from_attributes": True}


class BatchSummary(BaseModel):
    """Per-item outcome counts for batch jobs that continue past failures."""

    processed: int = 0
    generated: int = 0
    updated: int = 0
    skipped: int = 0
    errors: int = 0
    failed_items: List[str] = Field(default_factory=list)
    dry_run: bool = False


class NewMonthResult(BaseModel):
    """What the scheduled new-month job regenerated."""

    generated_months: List[str] = Field(default_factory=list)  # "YYYY-MM"
    generated_years: List[int] = Field(default_factory=list)

    @property
    def generated(self) -> bool:
        return bool(self.generated_months)
