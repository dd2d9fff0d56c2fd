"""Monthly sales report repository."""

from typing import List, Optional

from sqlalchemy.orm import Session

from dealer_reports.models.monthly_report import MonthlyReportModel
from dealer_reports.repositories.base import BaseRepository


class MonthlyReportRepository(BaseRepository[MonthlyReportModel]):
    def __init__(self, db: Session):
        super().__init__(db, MonthlyReportModel)

    def get_for_month(self, year: int, month: int) -> Optional[MonthlyReportModel]:
        return self.get((year, month))

    def get_for_year(self, year: int) -> List[MonthlyReportModel]:
        return (
            self.db.query(self.model)
            .filter(self.model.year == year)
            .order_by(self.model.month)
            .all()
        )

    def get_all_ordered(self) -> List[MonthlyReportModel]:
        return self.db.query(self.model).order_by(self.model.year, self.model.month).all()

    def get_latest(self) -> Optional[MonthlyReportModel]:
        return (
            self.db.query(self.model)
            .order_by(self.model.year.desc(), self.model.month.desc())
            .first()
        )
