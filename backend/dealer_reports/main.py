"""FastAPI application entry point with structured logging and health checks."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from dealer_reports.api import reports
from dealer_reports.config import Settings
from dealer_reports.database import init_db
from dealer_reports.health import router as health_router
from dealer_reports.logging_config import get_logger, setup_logging

_settings = Settings()
setup_logging(json_logs=_settings.json_logs, log_level=_settings.log_level)
logger = get_logger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle for the FastAPI application."""
    logger.info("application_startup", version=VERSION)
    init_db()
    logger.info("database_initialized")
    yield
    logger.info("application_shutdown")


app = FastAPI(
    title="Dealer Reports",
    description=(
        "Rolls dealership sales up into daily, monthly and yearly reports, "
        "netting finance costs out of monthly profit."
    ),
    version=VERSION,
    lifespan=lifespan,
)

# Health checks (no versioning)
app.include_router(health_router, tags=["health"])

API_V1_PREFIX = "/api/v1"

app.include_router(reports.router, prefix=f"{API_V1_PREFIX}/reports", tags=["reports"])


@app.get("/")
def root():
    """Root endpoint - API information and available endpoints."""
    return {
        "service": "Dealer Reports API",
        "version": VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "api_version": "v1",
        "endpoints": {
            "reports": f"{API_V1_PREFIX}/reports/",
            "tracker": f"{API_V1_PREFIX}/reports/tracker",
        },
    }
