"""Daily sales report repository."""

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from dealer_reports.models.daily_report import DailyReportModel
from dealer_reports.repositories.base import BaseRepository


class DailyReportRepository(BaseRepository[DailyReportModel]):
    def __init__(self, db: Session):
        super().__init__(db, DailyReportModel)

    def get_between(self, start: date, end: date) -> List[DailyReportModel]:
        return (
            self.db.query(self.model)
            .filter(self.model.report_date >= start, self.model.report_date <= end)
            .order_by(self.model.report_date)
            .all()
        )

    def get_latest(self) -> Optional[DailyReportModel]:
        return self.db.query(self.model).order_by(self.model.report_date.desc()).first()
