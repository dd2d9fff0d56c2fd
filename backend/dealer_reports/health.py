"""Health check endpoints.

The report engine has one dependency worth probing: the database holding
sales, finance records and the report tables.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.orm import Session

from dealer_reports.database import get_db
from dealer_reports.logging_config import get_logger
from dealer_reports.models.report_tracker import TRACKER_ID
from dealer_reports.repositories.tracker_repo import ReportTrackerRepository

router = APIRouter()
logger = get_logger(__name__)

SERVICE = "dealer-reports"
VERSION = "1.0.0"


def check_database(db: Session) -> Dict[str, Any]:
    """Check database connectivity.

    Args:
        db: Database session.

    Returns:
        Dict with ``healthy`` and a ``message`` carrying the error on failure.
    """
    try:
        db.execute(text("SELECT 1"))
        return {"healthy": True, "message": "Database connected"}
    except Exception as e:
        logger.error("database_health_check_failed", error=str(e))
        return {"healthy": False, "message": f"Database error: {str(e)}"}


def check_tracker(db: Session) -> Dict[str, Any]:
    """Report the tracker's monthly cursor.

    A missing tracker row or empty cursor is still healthy.

    Args:
        db: Database session.

    Returns:
        Dict with ``healthy`` and a ``message`` naming the last monthly report.
    """
    try:
        tracker = ReportTrackerRepository(db).get(TRACKER_ID)
        if tracker is None or tracker.last_monthly_report_year is None:
            return {"healthy": True, "message": "Tracker not initialized"}
        return {
            "healthy": True,
            "message": (
                f"Last monthly report {tracker.last_monthly_report_year}-"
                f"{tracker.last_monthly_report_month:02d}"
            ),
        }
    except Exception as e:
        logger.warning("tracker_health_check_failed", error=str(e))
        return {"healthy": False, "message": f"Tracker error: {str(e)}"}


@router.get("/health")
def health_check() -> Dict[str, Any]:
    """Basic health check - just app status."""
    return {"status": "healthy", "service": SERVICE, "version": VERSION}


@router.get("/health/detailed")
def detailed_health_check(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """Detailed health check with database and tracker status."""
    checks = {
        "database": check_database(db),
        "tracker": check_tracker(db),
    }

    all_healthy = all(check["healthy"] for check in checks.values())
    overall_status = "healthy" if all_healthy else "degraded"

    logger.info(
        "health_check_performed",
        status=overall_status,
        database=checks["database"]["healthy"],
        tracker=checks["tracker"]["healthy"],
    )

    return {
        "status": overall_status,
        "service": SERVICE,
        "version": VERSION,
        "checks": checks,
    }


@router.get("/health/ready")
def readiness_check(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """Kubernetes-style readiness check; 503 when the database is unreachable."""
    try:
        db.execute(text("SELECT 1"))
        return {"ready": True}
    except Exception:
        raise HTTPException(status_code=503, detail={"ready": False, "reason": "Database unavailable"})


@router.get("/health/live")
def liveness_check() -> Dict[str, Any]:
    """Kubernetes-style liveness check."""
    return {"alive": True}
