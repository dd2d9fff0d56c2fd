"""Repository tests: date-range queries, upsert and the tracker row."""

from datetime import date
from decimal import Decimal

import pytest

from dealer_reports.models.daily_report import DailyReportModel
from dealer_reports.models.monthly_report import MonthlyReportModel
from dealer_reports.models.report_tracker import TRACKER_ID, ReportTrackerModel
from dealer_reports.repositories.daily_report_repo import DailyReportRepository
from dealer_reports.repositories.finance_record_repo import FinanceRecordRepository
from dealer_reports.repositories.monthly_report_repo import MonthlyReportRepository
from dealer_reports.repositories.sale_repo import SaleRepository
from dealer_reports.repositories.tracker_repo import ReportTrackerRepository


def _monthly_values(**overrides):
    values = dict(
        start_date=date(2025, 6, 1),
        end_date=date(2025, 6, 30),
        total_sales=1,
        total_revenue=Decimal("10000.00"),
        total_profit=Decimal("3000.00"),
        avg_daily_profit=Decimal("3000.00"),
        profit_margin=Decimal("30.00"),
        total_finance_cost=Decimal("0.00"),
        net_profit=Decimal("3000.00"),
    )
    values.update(overrides)
    return values


class TestSaleRepository:
    def test_get_for_date_orders_by_id(self, db, add_sale):
        """Sales on a date come back in insertion order."""
        d = date(2025, 6, 1)
        first = add_sale(d, 100, 50, car_id=5)
        add_sale(date(2025, 6, 2), 100, 50)
        second = add_sale(d, 100, 50, car_id=6)

        sales = SaleRepository(db).get_for_date(d)
        assert [s.id for s in sales] == [first.id, second.id]

    def test_get_between_is_inclusive(self, db, add_sale):
        """Both range ends are included."""
        add_sale(date(2025, 5, 31), 100, 50)
        add_sale(date(2025, 6, 1), 100, 50)
        add_sale(date(2025, 6, 30), 100, 50)
        add_sale(date(2025, 7, 1), 100, 50)

        sales = SaleRepository(db).get_between(date(2025, 6, 1), date(2025, 6, 30))
        assert [s.sale_date for s in sales] == [date(2025, 6, 1), date(2025, 6, 30)]

    def test_distinct_dates_between(self, db, add_sale):
        """Each sale date appears once, ascending."""
        for d in (date(2025, 6, 3), date(2025, 6, 1), date(2025, 6, 3)):
            add_sale(d, 100, 50)

        dates = SaleRepository(db).distinct_dates_between(date(2025, 1, 1), date(2025, 12, 31))
        assert dates == [date(2025, 6, 1), date(2025, 6, 3)]


class TestFinanceRecordRepository:
    def test_get_between(self, db, add_finance_record):
        """Finance records outside the range are excluded."""
        add_finance_record(date(2025, 6, 15), 1000)
        add_finance_record(date(2025, 7, 1), 500)

        records = FinanceRecordRepository(db).get_between(date(2025, 6, 1), date(2025, 6, 30))
        assert len(records) == 1
        assert records[0].cost == Decimal("1000.00")


class TestUpsert:
    def test_inserts_when_absent(self, db):
        """Upsert inserts a new row."""
        repo = DailyReportRepository(db)
        row = repo.upsert(
            {"report_date": date(2025, 6, 1)},
            {"total_sales": 2, "total_revenue": Decimal("100.00"), "total_profit": Decimal("10.00")},
        )
        db.commit()

        assert isinstance(row, DailyReportModel)
        assert repo.count() == 1
        assert row.total_sales == 2

    def test_overwrites_when_present(self, db):
        """Upsert overwrites the named columns of an existing row."""
        repo = DailyReportRepository(db)
        key = {"report_date": date(2025, 6, 1)}
        repo.upsert(key, {"total_sales": 2, "total_profit": Decimal("10.00")})
        db.commit()

        row = repo.upsert(key, {"total_sales": 5, "total_profit": Decimal("99.99")})
        db.commit()

        assert repo.count() == 1
        assert row.total_sales == 5
        assert row.total_profit == Decimal("99.99")

    def test_clears_nullable_fields(self, db):
        """Passing None clears a nullable column."""
        repo = DailyReportRepository(db)
        key = {"report_date": date(2025, 6, 1)}
        repo.upsert(key, {"most_profitable_car_id": 7, "highest_single_profit": Decimal("5.00")})
        row = repo.upsert(key, {"most_profitable_car_id": None, "highest_single_profit": None})
        db.commit()

        assert row.most_profitable_car_id is None
        assert row.highest_single_profit is None

    def test_composite_key(self, db):
        """Monthly rows are keyed by year and month together."""
        repo = MonthlyReportRepository(db)
        repo.upsert({"year": 2025, "month": 6}, _monthly_values())
        repo.upsert({"year": 2025, "month": 7}, _monthly_values(start_date=date(2025, 7, 1),
                                                                 end_date=date(2025, 7, 31)))
        db.commit()

        assert repo.count() == 2
        assert repo.get_for_month(2025, 6).total_profit == Decimal("3000.00")

    def test_leaves_unnamed_columns_alone(self, db):
        """Columns not passed to upsert keep their values."""
        repo = MonthlyReportRepository(db)
        repo.upsert({"year": 2025, "month": 6}, _monthly_values(finance_cost=Decimal("750.00")))
        db.commit()

        row = repo.upsert({"year": 2025, "month": 6}, _monthly_values(total_profit=Decimal("4000.00")))
        db.commit()

        assert row.finance_cost == Decimal("750.00")
        assert row.total_profit == Decimal("4000.00")

    def test_rejects_wrong_key(self, db):
        """A key that is not the full primary key is rejected."""
        with pytest.raises(ValueError, match="primary key"):
            MonthlyReportRepository(db).upsert({"year": 2025}, _monthly_values())


class TestMonthlyReportRepository:
    def test_get_for_year_ordered(self, db):
        """A year's months come back in month order."""
        repo = MonthlyReportRepository(db)
        for m in (9, 2, 5):
            repo.upsert({"year": 2025, "month": m}, _monthly_values())
        repo.upsert({"year": 2024, "month": 12}, _monthly_values())
        db.commit()

        assert [r.month for r in repo.get_for_year(2025)] == [2, 5, 9]
        assert (repo.get_latest().year, repo.get_latest().month) == (2025, 9)


class TestReportTrackerRepository:
    def test_creates_singleton_lazily(self, db):
        """The tracker row is created on first access."""
        repo = ReportTrackerRepository(db)
        assert repo.count() == 0

        tracker = repo.get_instance()
        db.commit()

        assert tracker.id == TRACKER_ID
        assert tracker.last_daily_report_date is None
        assert tracker.last_monthly_report_year is None
        assert repo.count() == 1

    def test_repeated_access_keeps_one_row(self, db):
        """Later accesses reuse the same row."""
        repo = ReportTrackerRepository(db)
        first = repo.get_instance()
        first.last_yearly_report_year = 2024
        db.commit()

        second = repo.get_instance()
        assert second.last_yearly_report_year == 2024
        assert db.query(ReportTrackerModel).count() == 1
