"""Dependency Injection Container.

Wires settings, database, repositories, aggregation engines and services
with dependency-injector.  The CLI and the facade build one container per
run; FastAPI routes use the per-request factories in ``dependencies.py``.

Usage::

    from dealer_reports.container import AppContainer

    container = AppContainer()
    container.init_resources()  # create tables, open the session

    reports = container.report_generation_service()
    reports.generate_reports_for_sale("2025-06-01")

    container.shutdown_resources()  # close the session
"""

from typing import Iterator

from dependency_injector import containers, providers
from sqlalchemy.orm import Session, sessionmaker

from dealer_reports.config import Settings
from dealer_reports.database import Base, build_engine, build_session_factory
from dealer_reports.engines.daily_aggregator import DailyAggregator
from dealer_reports.engines.generation_tracker import GenerationTracker
from dealer_reports.engines.monthly_aggregator import MonthlyAggregator
from dealer_reports.engines.yearly_aggregator import YearlyAggregator
from dealer_reports.repositories.daily_report_repo import DailyReportRepository
from dealer_reports.repositories.finance_record_repo import FinanceRecordRepository
from dealer_reports.repositories.monthly_report_repo import MonthlyReportRepository
from dealer_reports.repositories.sale_repo import SaleRepository
from dealer_reports.repositories.tracker_repo import ReportTrackerRepository
from dealer_reports.repositories.yearly_report_repo import YearlyReportRepository
from dealer_reports.services.finance_service import FinanceService
from dealer_reports.services.report_generation_service import ReportGenerationService
from dealer_reports.services.sales_service import SalesService


def _init_database(engine):
    """Create the sale, finance, report and tracker tables."""
    import dealer_reports.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
    return engine


def _open_session(factory: sessionmaker, _schema_ready) -> Iterator[Session]:
    """One session per container, closed on ``shutdown_resources``."""
    session = factory()
    try:
        yield session
    finally:
        session.close()


class AppContainer(containers.DeclarativeContainer):
    """Application Dependency Injection Container.

    Layers, bottom-up:
    - Configuration (Settings)
    - Database (engine, schema, session)
    - Repositories (data access, flush only)
    - Engines (aggregators and the generation tracker)
    - Services (transaction boundaries)
    """

    # ══════════════════════════════════════════════════════════════════
    # CONFIGURATION
    # ══════════════════════════════════════════════════════════════════

    settings = providers.Singleton(Settings)

    # ══════════════════════════════════════════════════════════════════
    # DATABASE
    # ══════════════════════════════════════════════════════════════════

    db_engine = providers.Singleton(
        build_engine,
        database_url=settings.provided.database_url,
        echo=False,
    )

    db_initialized = providers.Resource(
        _init_database,
        engine=db_engine,
    )

    session_factory = providers.Singleton(
        build_session_factory,
        engine=db_engine,
    )

    db_session = providers.Resource(
        _open_session,
        factory=session_factory,
        _schema_ready=db_initialized,
    )

    # ══════════════════════════════════════════════════════════════════
    # REPOSITORIES (Data Access Layer)
    # ══════════════════════════════════════════════════════════════════

    sale_repo = providers.Factory(SaleRepository, db=db_session)

    finance_record_repo = providers.Factory(FinanceRecordRepository, db=db_session)

    daily_report_repo = providers.Factory(DailyReportRepository, db=db_session)

    monthly_report_repo = providers.Factory(MonthlyReportRepository, db=db_session)

    yearly_report_repo = providers.Factory(YearlyReportRepository, db=db_session)

    tracker_repo = providers.Factory(ReportTrackerRepository, db=db_session)

    # ══════════════════════════════════════════════════════════════════
    # ENGINES (Aggregation Layer)
    # ══════════════════════════════════════════════════════════════════

    daily_aggregator = providers.Factory(
        DailyAggregator,
        sale_repo=sale_repo,
        daily_repo=daily_report_repo,
    )

    monthly_aggregator = providers.Factory(
        MonthlyAggregator,
        sale_repo=sale_repo,
        daily_repo=daily_report_repo,
        finance_repo=finance_record_repo,
        monthly_repo=monthly_report_repo,
    )

    yearly_aggregator = providers.Factory(
        YearlyAggregator,
        sale_repo=sale_repo,
        monthly_repo=monthly_report_repo,
        finance_repo=finance_record_repo,
        yearly_repo=yearly_report_repo,
    )

    generation_tracker = providers.Factory(
        GenerationTracker,
        tracker_repo=tracker_repo,
        daily_repo=daily_report_repo,
        monthly_repo=monthly_report_repo,
        yearly_repo=yearly_report_repo,
    )

    # ══════════════════════════════════════════════════════════════════
    # SERVICES (Orchestration Layer)
    # ══════════════════════════════════════════════════════════════════

    report_generation_service = providers.Factory(
        ReportGenerationService,
        db=db_session,
        daily_aggregator=daily_aggregator,
        monthly_aggregator=monthly_aggregator,
        yearly_aggregator=yearly_aggregator,
        tracker=generation_tracker,
        sale_repo=sale_repo,
        finance_repo=finance_record_repo,
        daily_repo=daily_report_repo,
        monthly_repo=monthly_report_repo,
        yearly_repo=yearly_report_repo,
    )

    sales_service = providers.Factory(
        SalesService,
        db=db_session,
        sale_repo=sale_repo,
        report_service=report_generation_service,
    )

    finance_service = providers.Factory(
        FinanceService,
        db=db_session,
        finance_repo=finance_record_repo,
        report_service=report_generation_service,
    )
