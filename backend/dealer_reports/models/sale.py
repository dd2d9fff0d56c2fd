"""Sale ORM model — the fact table every report rolls up from."""

from sqlalchemy import Column, Date, DateTime, Integer, Numeric, Text, func

from dealer_reports.database import Base


class SaleModel(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, autoincrement=True)
    car_id = Column(Integer, nullable=False, index=True)
    buyer_id = Column(Integer, nullable=True, index=True)

    sale_price = Column(Numeric(15, 2), nullable=False)
    purchase_cost = Column(Numeric(15, 2), nullable=False)
    profit_loss = Column(Numeric(15, 2), nullable=False)  # sale_price - purchase_cost
    sale_date = Column(Date, nullable=False, index=True)
    notes = Column(Text)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<Sale id={self.id} car_id={self.car_id} {self.sale_date} profit={self.profit_loss}>"
