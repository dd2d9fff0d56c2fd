"""Report endpoints — read reports, check coverage, trigger generation.

Dates in paths and queries are ISO ``YYYY-MM-DD``; anything unparseable
(or a month outside 1-12) is a 400.  Generation failures are a 500 and the
transaction has already been rolled back by the service.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from dealer_reports.database import get_db
from dealer_reports.dependencies import get_report_service
from dealer_reports.logging_config import get_logger
from dealer_reports.repositories.daily_report_repo import DailyReportRepository
from dealer_reports.repositories.monthly_report_repo import MonthlyReportRepository
from dealer_reports.repositories.yearly_report_repo import YearlyReportRepository
from dealer_reports.schemas.reports import (
    DailyReport,
    MissingReport,
    MonthlyReport,
    NewMonthResult,
    ReportCoverage,
    TrackerState,
    YearlyReport,
)
from dealer_reports.services.report_generation_service import ReportGenerationService
from dealer_reports.utils.periods import parse_date, validate_month

logger = get_logger(__name__)
router = APIRouter()


# ── reads ────────────────────────────────────────────────────────────

@router.get("/daily/{report_date}", response_model=DailyReport)
def get_daily_report(report_date: str, db: Session = Depends(get_db)) -> DailyReport:
    try:
        d = parse_date(report_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    row = DailyReportRepository(db).get(d)
    if row is None:
        logger.warning("daily_report_not_found", date=d.isoformat())
        raise HTTPException(status_code=404, detail=f"No daily report for {d}")
    return DailyReport.model_validate(row)


@router.get("/monthly/{year}/{month}", response_model=MonthlyReport)
def get_monthly_report(year: int, month: int, db: Session = Depends(get_db)) -> MonthlyReport:
    try:
        validate_month(year, month)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    row = MonthlyReportRepository(db).get_for_month(year, month)
    if row is None:
        logger.warning("monthly_report_not_found", year=year, month=month)
        raise HTTPException(status_code=404, detail=f"No monthly report for {year}-{month:02d}")
    return MonthlyReport.model_validate(row)


@router.get("/yearly/{year}", response_model=YearlyReport)
def get_yearly_report(year: int, db: Session = Depends(get_db)) -> YearlyReport:
    row = YearlyReportRepository(db).get_for_year(year)
    if row is None:
        logger.warning("yearly_report_not_found", year=year)
        raise HTTPException(status_code=404, detail=f"No yearly report for {year}")
    return YearlyReport.model_validate(row)


@router.get("/coverage/{report_date}", response_model=ReportCoverage)
def get_coverage(
    report_date: str,
    service: ReportGenerationService = Depends(get_report_service),
) -> ReportCoverage:
    """Which of the day / month / year reports containing the date exist."""
    try:
        return service.check_reports_exist(report_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/missing", response_model=List[MissingReport])
def get_missing(
    from_date: str = Query(..., description="Start of range (YYYY-MM-DD)"),
    to_date: str = Query(..., description="End of range (YYYY-MM-DD)"),
    service: ReportGenerationService = Depends(get_report_service),
) -> List[MissingReport]:
    """Sale dates in the range with at least one missing report."""
    logger.info("missing_reports_requested", from_date=from_date, to_date=to_date)
    try:
        missing = service.get_missing_reports(from_date, to_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info("missing_reports_completed", count=len(missing))
    return missing


@router.get("/tracker", response_model=TrackerState)
def get_tracker(service: ReportGenerationService = Depends(get_report_service)) -> TrackerState:
    return service.tracker_state()


# ── generation ───────────────────────────────────────────────────────

@router.post("/generate/{sale_date}", response_model=ReportCoverage)
def generate_for_date(
    sale_date: str,
    force: bool = Query(False, description="Regenerate without touching the tracker"),
    service: ReportGenerationService = Depends(get_report_service),
) -> ReportCoverage:
    """Regenerate the day, month and year containing a sale date."""
    logger.info("report_generation_requested", date=sale_date, force=force)
    try:
        if force:
            service.force_generate_reports_for_sale(sale_date)
        else:
            service.generate_reports_for_sale(sale_date)
        coverage = service.check_reports_exist(sale_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("report_generation_failed", date=sale_date, error=str(e))
        raise HTTPException(status_code=500, detail=f"Report generation failed: {str(e)}")

    logger.info("report_generation_completed", date=sale_date)
    return coverage


@router.post("/regenerate/{year}/{month}", response_model=MonthlyReport)
def regenerate_month(
    year: int,
    month: int,
    service: ReportGenerationService = Depends(get_report_service),
    db: Session = Depends(get_db),
) -> MonthlyReport:
    """Rebuild a month and its year, e.g. after finance records changed."""
    logger.info("month_regeneration_requested", year=year, month=month)
    try:
        service.regenerate_reports_for_month(year, month)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("month_regeneration_failed", year=year, month=month, error=str(e))
        raise HTTPException(status_code=500, detail=f"Regeneration failed: {str(e)}")

    return MonthlyReport.model_validate(MonthlyReportRepository(db).get_for_month(year, month))


@router.post("/auto-generate", response_model=NewMonthResult)
def auto_generate(service: ReportGenerationService = Depends(get_report_service)) -> NewMonthResult:
    try:
        result = service.auto_generate_reports_for_new_month()
    except Exception as e:
        logger.error("auto_generation_failed", error=str(e))
        raise HTTPException(status_code=500, detail=f"Auto-generation failed: {str(e)}")

    logger.info("auto_generation_completed", months=result.generated_months, years=result.generated_years)
    return result


@router.post("/tracker/initialize", response_model=TrackerState)
def initialize_tracker(service: ReportGenerationService = Depends(get_report_service)) -> TrackerState:
    try:
        return service.initialize_tracker()
    except Exception as e:
        logger.error("tracker_initialization_failed", error=str(e))
        raise HTTPException(status_code=500, detail=f"Tracker initialization failed: {str(e)}")
