"""Unit tests for MonthlyAggregator — both rollup paths and the finance merge."""

import logging
from datetime import date
from decimal import Decimal

from dealer_reports.engines.daily_aggregator import DailyAggregator
from dealer_reports.engines.monthly_aggregator import MonthlyAggregator
from dealer_reports.repositories.daily_report_repo import DailyReportRepository
from dealer_reports.repositories.finance_record_repo import FinanceRecordRepository
from dealer_reports.repositories.monthly_report_repo import MonthlyReportRepository
from dealer_reports.repositories.sale_repo import SaleRepository


def _make_aggregator(db) -> MonthlyAggregator:
    return MonthlyAggregator(
        SaleRepository(db),
        DailyReportRepository(db),
        FinanceRecordRepository(db),
        MonthlyReportRepository(db),
    )


def _daily_report(db, d, total_sales, revenue, profit):
    DailyReportRepository(db).upsert(
        {"report_date": d},
        {"total_sales": total_sales, "total_revenue": Decimal(revenue), "total_profit": Decimal(profit)},
    )
    db.commit()


class TestMonthlyFromDailyReports:
    def test_june_scenario(self, db, add_finance_record):
        """A month rolls up its daily reports and nets out finance records."""
        _daily_report(db, date(2025, 6, 1), 3, "33000", "6500")
        _daily_report(db, date(2025, 6, 2), 1, "12000", "2000")
        add_finance_record(date(2025, 6, 10), 1000)
        add_finance_record(date(2025, 6, 20), 2000, category="payroll")

        report = _make_aggregator(db).aggregate(2025, 6)

        assert report.total_profit == Decimal("8500.00")
        assert report.total_finance_cost == Decimal("3000.00")
        assert report.net_profit == Decimal("5500.00")
        assert report.avg_daily_profit == Decimal("4250.00")
        assert report.best_day == date(2025, 6, 1)
        assert report.best_day_profit == Decimal("6500.00")
        assert report.start_date == date(2025, 6, 1)
        assert report.end_date == date(2025, 6, 30)

    def test_total_sales_matches_dailies(self, db):
        """Monthly sales equal the sum of the daily counts."""
        _daily_report(db, date(2025, 6, 1), 3, "33000", "6500")
        _daily_report(db, date(2025, 6, 15), 4, "40000", "100")

        report = _make_aggregator(db).aggregate(2025, 6)
        assert report.total_sales == 7
        assert report.total_revenue == Decimal("73000.00")

    def test_prefers_daily_reports_over_sales(self, db, add_sale):
        """When daily reports exist, raw sales are not read."""
        # A sale without a refreshed daily report is not counted when dailies exist.
        _daily_report(db, date(2025, 6, 1), 1, "1000", "100")
        add_sale(date(2025, 6, 2), 99999, 1)

        report = _make_aggregator(db).aggregate(2025, 6)
        assert report.total_sales == 1

    def test_best_day_tie_goes_to_earliest(self, db):
        """On equal profit the earliest day is best."""
        _daily_report(db, date(2025, 6, 20), 1, "1000", "500")
        _daily_report(db, date(2025, 6, 5), 1, "1000", "500")

        assert _make_aggregator(db).aggregate(2025, 6).best_day == date(2025, 6, 5)

    def test_profit_margin(self, db):
        """Margin is rounded to two places."""
        _daily_report(db, date(2025, 6, 1), 3, "33000", "6500")
        assert _make_aggregator(db).aggregate(2025, 6).profit_margin == Decimal("19.70")


class TestMonthlyFallbackToSales:
    def test_computes_from_sales_and_warns(self, db, add_sale, caplog):
        """Without daily reports the month is built from sales and a warning is logged."""
        add_sale(date(2025, 6, 3), 10000, 9000)   # +1000
        add_sale(date(2025, 6, 3), 12000, 10500)  # +1500
        add_sale(date(2025, 6, 7), 20000, 18000)  # +2000

        with caplog.at_level(logging.WARNING, logger="dealer_reports.engines.monthly_aggregator"):
            report = _make_aggregator(db).aggregate(2025, 6)

        assert report.total_sales == 3
        assert report.total_revenue == Decimal("42000.00")
        assert report.total_profit == Decimal("4500.00")
        assert report.avg_daily_profit == Decimal("2250.00")  # over 2 days with sales
        assert report.best_day == date(2025, 6, 3)
        assert report.best_day_profit == Decimal("2500.00")
        assert "No daily reports for 2025-06" in caplog.text

    def test_empty_month_is_zero_report(self, db):
        """A month with nothing recorded is all zeros."""
        report = _make_aggregator(db).aggregate(2025, 2)

        assert report.total_sales == 0
        assert report.total_profit == Decimal("0.00")
        assert report.avg_daily_profit == Decimal("0.00")
        assert report.profit_margin == Decimal("0.00")
        assert report.best_day is None
        assert report.best_day_profit is None
        assert report.end_date == date(2025, 2, 28)

    def test_finance_only_month_has_negative_net(self, db, add_finance_record):
        """Finance costs alone give a negative net profit."""
        add_finance_record(date(2025, 2, 1), "1234.56")

        report = _make_aggregator(db).aggregate(2025, 2)
        assert report.total_finance_cost == Decimal("1234.56")
        assert report.net_profit == Decimal("-1234.56")


class TestMonthlyGeneration:
    def test_net_profit_law_after_write(self, db, add_sale, add_finance_record):
        """Stored net profit equals profit minus finance cost."""
        add_sale(date(2025, 6, 3), "10000.10", "9000.05")
        add_finance_record(date(2025, 6, 30), "333.33")

        row = _make_aggregator(db).generate(2025, 6)
        db.commit()

        assert row.net_profit == (row.total_profit - row.total_finance_cost).quantize(Decimal("0.01"))
        assert row.net_profit == Decimal("666.72")

    def test_preserves_informational_finance_cost(self, db, add_sale):
        """The informational finance_cost column survives regeneration."""
        add_sale(date(2025, 6, 3), 10000, 9000)
        agg = _make_aggregator(db)
        row = agg.generate(2025, 6)
        db.commit()
        assert row.finance_cost == Decimal("0.00")

        row.finance_cost = Decimal("800.00")
        db.commit()

        row = agg.generate(2025, 6)
        db.commit()
        assert row.finance_cost == Decimal("800.00")
        assert row.total_finance_cost == Decimal("0.00")

    def test_finance_records_outside_month_ignored(self, db, add_finance_record):
        """Records on the neighbouring days are excluded."""
        add_finance_record(date(2025, 5, 31), 100)
        add_finance_record(date(2025, 7, 1), 100)

        row = _make_aggregator(db).generate(2025, 6)
        db.commit()
        assert row.total_finance_cost == Decimal("0.00")

    def test_regenerate_picks_up_new_daily_report(self, db, three_sales, add_sale):
        """Regenerating after a daily refresh picks up the new totals."""
        daily = DailyAggregator(SaleRepository(db), DailyReportRepository(db))
        monthly = _make_aggregator(db)
        daily.generate(date(2025, 6, 1))
        monthly.generate(2025, 6)
        db.commit()

        add_sale(date(2025, 6, 2), 5000, 1000)
        daily.generate(date(2025, 6, 2))
        row = monthly.generate(2025, 6)
        db.commit()

        assert row.total_sales == 4
        assert row.total_profit == Decimal("10500.00")
        assert MonthlyReportRepository(db).count() == 1
