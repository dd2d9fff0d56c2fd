"""Shared test fixtures.

Every test gets a fresh in-memory SQLite database so tests are fully isolated.
"""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import dealer_reports.models  # noqa: F401 - register all models with Base.metadata
from dealer_reports.database import Base
from dealer_reports.dependencies import build_report_service
from dealer_reports.models.finance_record import FinanceRecordModel
from dealer_reports.models.sale import SaleModel
from dealer_reports.services.report_generation_service import ReportGenerationService


@pytest.fixture()
def db_engine():
    # StaticPool shares one connection, so TestClient worker threads see the same data
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(db_engine):
    return sessionmaker(bind=db_engine)


@pytest.fixture()
def db(session_factory) -> Session:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def report_service(db: Session) -> ReportGenerationService:
    return build_report_service(db)


# ── Convenience fixtures ─────────────────────────────────────────────────

def make_sale(db: Session, sale_date: date, sale_price, purchase_cost, car_id: int = 1) -> SaleModel:
    """Insert and commit a sale with ``profit_loss = sale_price - purchase_cost``."""
    sale_price, purchase_cost = Decimal(str(sale_price)), Decimal(str(purchase_cost))
    sale = SaleModel(
        car_id=car_id,
        buyer_id=100 + car_id,
        sale_price=sale_price,
        purchase_cost=purchase_cost,
        profit_loss=sale_price - purchase_cost,
        sale_date=sale_date,
    )
    db.add(sale)
    db.commit()
    db.refresh(sale)
    return sale


def make_finance_record(db: Session, record_date: date, cost, category: str = "rent") -> FinanceRecordModel:
    record = FinanceRecordModel(
        type="expense",
        category=category,
        cost=Decimal(str(cost)),
        record_date=record_date,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


@pytest.fixture()
def three_sales(db: Session):
    """Three sales on 2025-06-01 with (sale_price, profit_loss) of
    (10000, 3000), (15000, 4000) and (8000, -500).
    """
    d = date(2025, 6, 1)
    return [
        make_sale(db, d, 10000, 7000, car_id=11),
        make_sale(db, d, 15000, 11000, car_id=12),
        make_sale(db, d, 8000, 8500, car_id=13),
    ]


@pytest.fixture()
def add_sale(db: Session):
    """Factory fixture: ``add_sale(date, sale_price, purchase_cost, car_id=1)``."""
    return lambda *args, **kwargs: make_sale(db, *args, **kwargs)


@pytest.fixture()
def add_finance_record(db: Session):
    """Factory fixture: ``add_finance_record(date, cost, category="rent")``."""
    return lambda *args, **kwargs: make_finance_record(db, *args, **kwargs)
