"""Monthly sales report ORM model, keyed by (year, month)."""

from sqlalchemy import Column, Date, DateTime, Integer, Numeric, func

from dealer_reports.database import Base


class MonthlyReportModel(Base):
    __tablename__ = "monthly_sales_reports"

    year = Column(Integer, primary_key=True, autoincrement=False)
    month = Column(Integer, primary_key=True, autoincrement=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)

    total_sales = Column(Integer, nullable=False, default=0)
    total_revenue = Column(Numeric(15, 2), nullable=False, default=0)
    total_profit = Column(Numeric(15, 2), nullable=False, default=0)  # before finance costs
    avg_daily_profit = Column(Numeric(15, 2), nullable=False, default=0)
    best_day = Column(Date, nullable=True)
    best_day_profit = Column(Numeric(15, 2), nullable=True)
    profit_margin = Column(Numeric(8, 2), nullable=False, default=0)

    # ── Finance ──────────────────────────────────────────────────────
    finance_cost = Column(Numeric(15, 2), nullable=False, default=0)  # externally supplied estimate
    total_finance_cost = Column(Numeric(15, 2), nullable=False, default=0)  # Σ finance_records.cost
    net_profit = Column(Numeric(15, 2), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<MonthlyReport {self.year}-{self.month:02d} profit={self.total_profit} net={self.net_profit}>"
