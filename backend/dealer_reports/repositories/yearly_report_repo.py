"""Yearly sales report repository."""

from typing import Optional

from sqlalchemy.orm import Session

from dealer_reports.models.yearly_report import YearlyReportModel
from dealer_reports.repositories.base import BaseRepository


class YearlyReportRepository(BaseRepository[YearlyReportModel]):
    def __init__(self, db: Session):
        super().__init__(db, YearlyReportModel)

    def get_for_year(self, year: int) -> Optional[YearlyReportModel]:
        return self.get(year)

    def get_latest(self) -> Optional[YearlyReportModel]:
        return self.db.query(self.model).order_by(self.model.year.desc()).first()
