"""Reporting facade — single entry point for the CLI and scheduled jobs.

Wraps an :class:`AppContainer` so callers never touch repositories or
sessions.  Returns only Pydantic schemas, never ORM models.

Usage::

    with ReportingFacade() as facade:      # uses Settings() from .env
        facade.generate_for_sale("2025-06-01")
        summary = facade.check_missing("2025-01-01", "2025-06-30", dry_run=True)
"""

import logging
from datetime import date, timedelta
from pathlib import Path
from typing import List, Optional

from dealer_reports.config import Settings
from dealer_reports.container import AppContainer
from dealer_reports.schemas.reports import (
    BatchSummary,
    DailyReport,
    MissingReport,
    MonthlyReport,
    NewMonthResult,
    TrackerState,
    YearlyReport,
)
from dealer_reports.utils.periods import DateLike, parse_date, previous_month

logger = logging.getLogger(__name__)


class ReportingFacade:
    """High-level API over report generation.

    Period arguments left as ``None`` fall back to the most recently closed
    period: yesterday, the previous month, the previous year.
    """

    def __init__(self, settings: Optional[Settings] = None, container: Optional[AppContainer] = None):
        self._settings = settings or Settings()
        if container is None:
            _ensure_sqlite_dir(self._settings.database_url)
            container = AppContainer()
            container.settings.override(self._settings)
        self._container = container
        self._container.init_resources()
        self._reports = self._container.report_generation_service()

    @property
    def settings(self) -> Settings:
        return self._settings

    # ══════════════════════════════════════════════════════════════════
    # GENERATION
    # ══════════════════════════════════════════════════════════════════

    def generate_daily(self, report_date: Optional[DateLike] = None) -> DailyReport:
        d = parse_date(report_date) if report_date is not None else date.today() - timedelta(days=1)
        self._reports.generate_daily_report(d)
        return DailyReport.model_validate(self._container.daily_report_repo().get(d))

    def generate_monthly(self, year: Optional[int] = None, month: Optional[int] = None) -> MonthlyReport:
        if year is None or month is None:
            today = date.today()
            year, month = previous_month(today.year, today.month)
        self._reports.generate_monthly_report(year, month)
        return MonthlyReport.model_validate(self._container.monthly_report_repo().get_for_month(year, month))

    def generate_yearly(self, year: Optional[int] = None) -> YearlyReport:
        if year is None:
            year = date.today().year - 1
        self._reports.generate_yearly_report(year)
        return YearlyReport.model_validate(self._container.yearly_report_repo().get_for_year(year))

    def generate_for_sale(self, sale_date: DateLike, force: bool = False) -> None:
        if force:
            self._reports.force_generate_reports_for_sale(sale_date)
        else:
            self._reports.generate_reports_for_sale(sale_date)

    def regenerate_month(self, year: int, month: int) -> None:
        self._reports.regenerate_reports_for_month(year, month)

    def auto_generate_monthly(self, today: Optional[date] = None) -> NewMonthResult:
        return self._reports.auto_generate_reports_for_new_month(today)

    # ══════════════════════════════════════════════════════════════════
    # MAINTENANCE
    # ══════════════════════════════════════════════════════════════════

    def check_missing(
        self,
        from_date: Optional[DateLike] = None,
        to_date: Optional[DateLike] = None,
        dry_run: bool = False,
    ) -> BatchSummary:
        start, end = self._window(from_date, to_date)
        return self._reports.backfill_missing_reports(start, end, dry_run=dry_run)

    def list_missing(
        self,
        from_date: Optional[DateLike] = None,
        to_date: Optional[DateLike] = None,
    ) -> List[MissingReport]:
        """Sale dates lacking a report, over the same window as :meth:`check_missing`."""
        start, end = self._window(from_date, to_date)
        return self._reports.get_missing_reports(start, end)

    def initialize_tracker(self) -> TrackerState:
        return self._reports.initialize_tracker()

    def update_finance_costs(self) -> BatchSummary:
        return self._reports.update_monthly_finance_costs()

    def _window(self, from_date: Optional[DateLike], to_date: Optional[DateLike]):
        end = parse_date(to_date) if to_date is not None else date.today()
        start = (
            parse_date(from_date)
            if from_date is not None
            else end - timedelta(days=self._settings.missing_reports_lookback_days)
        )
        return start, end

    # ── lifecycle ─────────────────────────────────────────────────────

    def close(self) -> None:
        """Close the database session."""
        self._container.shutdown_resources()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def _ensure_sqlite_dir(database_url: str) -> None:
    if database_url.startswith("sqlite:///") and ":memory:" not in database_url:
        Path(database_url.replace("sqlite:///", "")).parent.mkdir(parents=True, exist_ok=True)
