"""Daily sales report ORM model, keyed by the report date."""

from sqlalchemy import Column, Date, DateTime, Integer, Numeric, func

from dealer_reports.database import Base


class DailyReportModel(Base):
    __tablename__ = "daily_sales_reports"

    report_date = Column(Date, primary_key=True)

    total_sales = Column(Integer, nullable=False, default=0)
    total_revenue = Column(Numeric(15, 2), nullable=False, default=0)
    total_profit = Column(Numeric(15, 2), nullable=False, default=0)
    avg_profit_per_sale = Column(Numeric(15, 2), nullable=False, default=0)
    most_profitable_car_id = Column(Integer, nullable=True)
    highest_single_profit = Column(Numeric(15, 2), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<DailyReport {self.report_date} sales={self.total_sales} profit={self.total_profit}>"
