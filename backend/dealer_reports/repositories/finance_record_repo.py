"""Finance record repository."""

from datetime import date
from typing import List

from sqlalchemy.orm import Session

from dealer_reports.models.finance_record import FinanceRecordModel
from dealer_reports.repositories.base import BaseRepository


class FinanceRecordRepository(BaseRepository[FinanceRecordModel]):
    def __init__(self, db: Session):
        super().__init__(db, FinanceRecordModel)

    def get_between(self, start: date, end: date) -> List[FinanceRecordModel]:
        return (
            self.db.query(self.model)
            .filter(self.model.record_date >= start, self.model.record_date <= end)
            .order_by(self.model.record_date, self.model.id)
            .all()
        )
