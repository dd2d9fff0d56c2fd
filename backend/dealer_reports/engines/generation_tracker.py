"""Last-generated cursors for each report granularity.

The cursors are a hint for skipping redundant tracker writes, not a source
of truth: report rows are always upserted regardless of what the tracker
says.
"""

import logging
from datetime import date
from typing import Optional

from dealer_reports.models.report_tracker import ReportTrackerModel
from dealer_reports.repositories.daily_report_repo import DailyReportRepository
from dealer_reports.repositories.monthly_report_repo import MonthlyReportRepository
from dealer_reports.repositories.tracker_repo import ReportTrackerRepository
from dealer_reports.repositories.yearly_report_repo import YearlyReportRepository
from dealer_reports.schemas.reports import TrackerState

logger = logging.getLogger(__name__)


class GenerationTracker:
    def __init__(
        self,
        tracker_repo: ReportTrackerRepository,
        daily_repo: DailyReportRepository,
        monthly_repo: MonthlyReportRepository,
        yearly_repo: YearlyReportRepository,
    ):
        self.tracker = tracker_repo
        self.daily_reports = daily_repo
        self.monthly_reports = monthly_repo
        self.yearly_reports = yearly_repo

    def _row(self) -> ReportTrackerModel:
        return self.tracker.get_instance()

    def state(self) -> TrackerState:
        return TrackerState.model_validate(self._row())

    # ── needs_* ──────────────────────────────────────────────────────

    def needs_daily_report(self, report_date: date) -> bool:
        return self._row().last_daily_report_date != report_date

    def needs_monthly_report(self, year: int, month: int) -> bool:
        row = self._row()
        return (row.last_monthly_report_year, row.last_monthly_report_month) != (year, month)

    def needs_yearly_report(self, year: int) -> bool:
        return self._row().last_yearly_report_year != year

    # ── update_* ─────────────────────────────────────────────────────

    def update_last_daily_report_date(self, report_date: date) -> None:
        row = self._row()
        row.last_daily_report_date = report_date
        self.tracker.update(row)

    def update_last_monthly_report_date(self, year: int, month: int) -> None:
        row = self._row()
        row.last_monthly_report_year = year
        row.last_monthly_report_month = month
        self.tracker.update(row)

    def update_last_yearly_report_date(self, year: int) -> None:
        row = self._row()
        row.last_yearly_report_year = year
        self.tracker.update(row)

    def last_monthly(self) -> Optional[tuple]:
        row = self._row()
        if row.last_monthly_report_year is None or row.last_monthly_report_month is None:
            return None
        return row.last_monthly_report_year, row.last_monthly_report_month

    def initialize(self) -> TrackerState:
        """Seed each cursor from the latest existing report of that kind.

        A cursor with no report of its granularity is left as it was.
        """
        latest_daily = self.daily_reports.get_latest()
        latest_monthly = self.monthly_reports.get_latest()
        latest_yearly = self.yearly_reports.get_latest()

        if latest_daily is not None:
            self.update_last_daily_report_date(latest_daily.report_date)
        if latest_monthly is not None:
            self.update_last_monthly_report_date(latest_monthly.year, latest_monthly.month)
        if latest_yearly is not None:
            self.update_last_yearly_report_date(latest_yearly.year)

        state = self.state()
        logger.info(
            "Tracker initialized: daily=%s monthly=%s-%s yearly=%s",
            state.last_daily_report_date, state.last_monthly_report_year,
            state.last_monthly_report_month, state.last_yearly_report_year,
        )
        return state
