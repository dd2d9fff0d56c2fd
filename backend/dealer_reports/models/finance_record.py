"""Finance record ORM model: operating costs netted out of monthly profit."""

from sqlalchemy import Column, Date, DateTime, Integer, Numeric, String, Text, func

from dealer_reports.database import Base


class FinanceRecordModel(Base):
    __tablename__ = "finance_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String, nullable=False, default="expense")
    category = Column(String, nullable=False)
    cost = Column(Numeric(15, 2), nullable=False)
    record_date = Column(Date, nullable=False, index=True)
    description = Column(Text)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<FinanceRecord id={self.id} {self.category} {self.cost} on {self.record_date}>"
