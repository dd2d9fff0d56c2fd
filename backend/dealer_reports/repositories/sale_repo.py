"""Sale repository (read side of the sale fact table)."""

from datetime import date
from typing import List

from sqlalchemy.orm import Session

from dealer_reports.models.sale import SaleModel
from dealer_reports.repositories.base import BaseRepository


class SaleRepository(BaseRepository[SaleModel]):
    def __init__(self, db: Session):
        super().__init__(db, SaleModel)

    def get_for_date(self, sale_date: date) -> List[SaleModel]:
        """Sales on one day, in insertion order (ties resolve to the earliest)."""
        return (
            self.db.query(self.model)
            .filter(self.model.sale_date == sale_date)
            .order_by(self.model.id)
            .all()
        )

    def get_between(self, start: date, end: date) -> List[SaleModel]:
        """Sales with ``start <= sale_date <= end`` ordered by date then id."""
        return (
            self.db.query(self.model)
            .filter(self.model.sale_date >= start, self.model.sale_date <= end)
            .order_by(self.model.sale_date, self.model.id)
            .all()
        )

    def distinct_dates_between(self, start: date, end: date) -> List[date]:
        """Unique sale dates in the range, ascending."""
        rows = (
            self.db.query(self.model.sale_date)
            .filter(self.model.sale_date >= start, self.model.sale_date <= end)
            .distinct()
            .order_by(self.model.sale_date)
            .all()
        )
        return [r[0] for r in rows]
