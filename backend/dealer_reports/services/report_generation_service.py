"""Orchestrates daily → monthly → yearly report generation.

Every public entry point runs in its own transaction: the aggregators and
repositories only flush, and this service commits on success or rolls back,
logs the period it was working on and re-raises.  Batch jobs commit per item
and keep going past failures.
"""

import logging
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from dealer_reports.engines.daily_aggregator import DailyAggregator
from dealer_reports.engines.generation_tracker import GenerationTracker
from dealer_reports.engines.monthly_aggregator import MonthlyAggregator
from dealer_reports.engines.yearly_aggregator import YearlyAggregator
from dealer_reports.logging_config import report_context
from dealer_reports.repositories.daily_report_repo import DailyReportRepository
from dealer_reports.repositories.finance_record_repo import FinanceRecordRepository
from dealer_reports.repositories.monthly_report_repo import MonthlyReportRepository
from dealer_reports.repositories.sale_repo import SaleRepository
from dealer_reports.repositories.yearly_report_repo import YearlyReportRepository
from dealer_reports.schemas.reports import (
    BatchSummary,
    MissingReport,
    NewMonthResult,
    ReportCoverage,
    TrackerState,
)
from dealer_reports.utils.financial_math import money_sum, to_decimal, to_money
from dealer_reports.utils.periods import DateLike, month_bounds, parse_date, validate_month

logger = logging.getLogger(__name__)


class ReportGenerationService:
    def __init__(
        self,
        db: Session,
        daily_aggregator: DailyAggregator,
        monthly_aggregator: MonthlyAggregator,
        yearly_aggregator: YearlyAggregator,
        tracker: GenerationTracker,
        sale_repo: SaleRepository,
        finance_repo: FinanceRecordRepository,
        daily_repo: DailyReportRepository,
        monthly_repo: MonthlyReportRepository,
        yearly_repo: YearlyReportRepository,
    ):
        self.db = db
        self.daily = daily_aggregator
        self.monthly = monthly_aggregator
        self.yearly = yearly_aggregator
        self.tracker = tracker
        self.sales = sale_repo
        self.finance = finance_repo
        self.daily_reports = daily_repo
        self.monthly_reports = monthly_repo
        self.yearly_reports = yearly_repo

    # ── single-period entry points ───────────────────────────────────

    def generate_reports_for_sale(self, sale_date: DateLike) -> None:
        """Regenerate the day, month and year containing *sale_date*.

        Tracker cursors only move for the granularities that were behind.
        """
        d = parse_date(sale_date)
        with report_context(date=d.isoformat()):
            try:
                needs_daily = self.tracker.needs_daily_report(d)
                needs_monthly = self.tracker.needs_monthly_report(d.year, d.month)
                needs_yearly = self.tracker.needs_yearly_report(d.year)

                self._generate_chain(d)

                if needs_daily:
                    self.tracker.update_last_daily_report_date(d)
                if needs_monthly:
                    self.tracker.update_last_monthly_report_date(d.year, d.month)
                if needs_yearly:
                    self.tracker.update_last_yearly_report_date(d.year)

                self.db.commit()
            except Exception as exc:
                self.db.rollback()
                logger.error("Report generation failed for sale date %s (rolled back): %s", d, exc)
                raise

        logger.info("Reports generated for sale date %s", d)

    def force_generate_reports_for_sale(self, sale_date: DateLike) -> None:
        """Same three upserts as :meth:`generate_reports_for_sale`, tracker untouched."""
        d = parse_date(sale_date)
        with report_context(date=d.isoformat()):
            try:
                self._generate_chain(d)
                self.db.commit()
            except Exception as exc:
                self.db.rollback()
                logger.error("Forced report generation failed for %s (rolled back): %s", d, exc)
                raise

        logger.info("Reports force-generated for %s", d)

    def regenerate_reports_for_month(self, year: int, month: int) -> None:
        """Rebuild the monthly report and its year, e.g. after finance records change."""
        validate_month(year, month)
        with report_context(year=year, month=month):
            try:
                self._generate_month_chain(year, month)
                self.db.commit()
            except Exception as exc:
                self.db.rollback()
                logger.error("Regeneration failed for %d-%02d (rolled back): %s", year, month, exc)
                raise

        logger.info("Reports regenerated for %d-%02d", year, month)

    def generate_daily_report(self, report_date: DateLike) -> None:
        """Write the daily report for one date and refresh its month and year.

        The day is written even when it had no sales (an empty report).  The
        tracker is not touched.
        """
        d = parse_date(report_date)
        with report_context(date=d.isoformat()):
            self._commit_one(lambda: self._generate_chain(d), f"daily report {d}")

    def generate_monthly_report(self, year: int, month: int) -> None:
        """Write the monthly report and refresh the year it belongs to."""
        validate_month(year, month)
        with report_context(year=year, month=month):
            self._commit_one(
                lambda: self._generate_month_chain(year, month), f"monthly report {year}-{month:02d}"
            )

    def generate_yearly_report(self, year: int) -> None:
        """Write the yearly report only; the months below it are read, not rebuilt."""
        self._commit_one(lambda: self.yearly.generate(year), f"yearly report {year}")

    # ── scheduled jobs ───────────────────────────────────────────────

    def auto_generate_reports_for_new_month(self, today: Optional[date] = None) -> NewMonthResult:
        """Catch the monthly and yearly reports up to the current month.

        Every month from the tracker's monthly cursor through the current
        month is regenerated, so the month that just closed gets its final
        totals and the new month gets a (possibly empty) report.  Does nothing
        when the cursor is already on the current month and its report exists.
        """
        today = today or date.today()
        current = (today.year, today.month)
        last = self.tracker.last_monthly()
        current_exists = self.monthly_reports.get_for_month(*current) is not None

        if last == current and current_exists:
            logger.info("Monthly reports already current for %d-%02d", *current)
            return NewMonthResult()

        months = _months_between(last, current) if last is not None and last < current else [current]
        years = sorted({y for y, _ in months})

        with report_context(year=today.year, month=today.month):
            try:
                for year, month in months:
                    self.monthly.generate(year, month)
                for year in years:
                    self.yearly.generate(year)
                self.tracker.update_last_monthly_report_date(*current)
                self.tracker.update_last_yearly_report_date(current[0])
                self.db.commit()
            except Exception as exc:
                self.db.rollback()
                logger.error("Auto-generation for %d-%02d failed (rolled back): %s", *current, exc)
                raise

        result = NewMonthResult(
            generated_months=[f"{y}-{m:02d}" for y, m in months],
            generated_years=years,
        )
        logger.info("Auto-generated monthly reports %s and yearly reports %s",
                    result.generated_months, result.generated_years)
        return result

    def backfill_missing_reports(
        self,
        from_date: DateLike,
        to_date: DateLike,
        dry_run: bool = False,
    ) -> BatchSummary:
        """Force-regenerate reports for every distinct sale date in the range.

        Each date commits on its own; a failing date is counted and the loop
        moves on.  With ``dry_run`` nothing is written and every date is
        counted as one that would be generated.
        """
        start, end = _ordered_range(from_date, to_date)
        summary = BatchSummary(dry_run=dry_run)

        for d in self.sales.distinct_dates_between(start, end):
            summary.processed += 1
            if dry_run:
                summary.generated += 1
                continue
            try:
                self.force_generate_reports_for_sale(d)
                summary.generated += 1
            except Exception:
                summary.errors += 1
                summary.failed_items.append(d.isoformat())

        logger.info(
            "Backfill %s..%s: %d dates, %d generated, %d errors%s",
            start, end, summary.processed, summary.generated, summary.errors,
            " (dry run)" if dry_run else "",
        )
        return summary

    def update_monthly_finance_costs(self) -> BatchSummary:
        """Recompute ``total_finance_cost`` and ``net_profit`` on every monthly report.

        Rows whose stored finance total already matches are skipped.  Every
        year with an updated month then has its yearly report regenerated so
        the yearly finance totals agree with the months again.  Each month and
        each year commits on its own; failed items are counted and listed as
        ``YYYY-MM`` or ``YYYY``.
        """
        summary = BatchSummary()
        changed_years = set()
        for report in self.monthly_reports.get_all_ordered():
            summary.processed += 1
            year, label = report.year, f"{report.year}-{report.month:02d}"
            try:
                start, end = month_bounds(report.year, report.month)
                total_finance_cost = to_money(money_sum(r.cost for r in self.finance.get_between(start, end)))
                if to_money(report.total_finance_cost) == total_finance_cost:
                    summary.skipped += 1
                    continue

                report.total_finance_cost = total_finance_cost
                report.net_profit = to_money(to_decimal(report.total_profit) - total_finance_cost)
                self.monthly_reports.update(report)
                self.db.commit()
                summary.updated += 1
                changed_years.add(year)
                logger.info("Updated finance cost for %s: %s", label, total_finance_cost)
            except Exception as exc:
                self.db.rollback()
                logger.error("Finance cost update failed for %s (rolled back): %s", label, exc)
                summary.errors += 1
                summary.failed_items.append(label)

        for year in sorted(changed_years):
            try:
                self.yearly.generate(year)
                self.db.commit()
            except Exception as exc:
                self.db.rollback()
                logger.error("Yearly report refresh failed for %d (rolled back): %s", year, exc)
                summary.errors += 1
                summary.failed_items.append(str(year))

        logger.info(
            "Finance cost update: %d processed, %d updated, %d skipped, %d errors, years refreshed %s",
            summary.processed, summary.updated, summary.skipped, summary.errors, sorted(changed_years),
        )
        return summary

    # ── inspection ───────────────────────────────────────────────────

    def check_reports_exist(self, report_date: DateLike) -> ReportCoverage:
        """Which of the day, month and year reports containing *report_date* exist."""
        d = parse_date(report_date)
        daily = self.daily_reports.exists(d)
        monthly = self.monthly_reports.exists((d.year, d.month))
        yearly = self.yearly_reports.exists(d.year)
        return ReportCoverage(
            daily=daily,
            monthly=monthly,
            yearly=yearly,
            all_exist=daily and monthly and yearly,
        )

    def get_missing_reports(self, from_date: DateLike, to_date: DateLike) -> List[MissingReport]:
        """Sale dates in the range whose day, month or year report is absent."""
        start, end = _ordered_range(from_date, to_date)
        missing = []
        for d in self.sales.distinct_dates_between(start, end):
            status = self.check_reports_exist(d)
            if not status.all_exist:
                missing.append(MissingReport(date=d, status=status))
        return missing

    def initialize_tracker(self) -> TrackerState:
        try:
            state = self.tracker.initialize()
            self.db.commit()
            return state
        except Exception as exc:
            self.db.rollback()
            logger.error("Tracker initialization failed (rolled back): %s", exc)
            raise

    def tracker_state(self) -> TrackerState:
        return self.tracker.state()

    # ── helpers ──────────────────────────────────────────────────────

    def _generate_chain(self, d: date) -> None:
        self.daily.generate(d)
        self._generate_month_chain(d.year, d.month)

    def _generate_month_chain(self, year: int, month: int) -> None:
        self.monthly.generate(year, month)
        self.yearly.generate(year)

    def _commit_one(self, work, label: str) -> None:
        try:
            work()
            self.db.commit()
        except Exception as exc:
            self.db.rollback()
            logger.error("Generation of %s failed (rolled back): %s", label, exc)
            raise


def _ordered_range(from_date: DateLike, to_date: DateLike) -> Tuple[date, date]:
    start, end = parse_date(from_date), parse_date(to_date)
    if start > end:
        raise ValueError(f"from date {start} is after to date {end}")
    return start, end


def _months_between(first: Tuple[int, int], last: Tuple[int, int]) -> List[Tuple[int, int]]:
    """Inclusive list of (year, month) from *first* to *last*."""
    months = []
    year, month = first
    while (year, month) <= last:
        months.append((year, month))
        year, month = (year + 1, 1) if month == 12 else (year, month + 1)
    return months
