"""Yearly sales report ORM model, keyed by year."""

from sqlalchemy import Column, DateTime, Integer, Numeric, func

from dealer_reports.database import Base


class YearlyReportModel(Base):
    __tablename__ = "yearly_sales_reports"

    year = Column(Integer, primary_key=True, autoincrement=False)

    total_sales = Column(Integer, nullable=False, default=0)
    total_revenue = Column(Numeric(15, 2), nullable=False, default=0)
    total_profit = Column(Numeric(15, 2), nullable=False, default=0)
    avg_monthly_profit = Column(Numeric(15, 2), nullable=False, default=0)
    best_month = Column(Integer, nullable=True)
    best_month_profit = Column(Numeric(15, 2), nullable=True)
    profit_margin = Column(Numeric(8, 2), nullable=False, default=0)
    yoy_growth = Column(Numeric(12, 2), nullable=True)  # null: no prior-year report

    total_finance_cost = Column(Numeric(15, 2), nullable=False, default=0)
    total_net_profit = Column(Numeric(15, 2), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<YearlyReport {self.year} profit={self.total_profit} yoy={self.yoy_growth}>"
