"""Finance record writes that keep monthly net profit in step."""

import logging
from datetime import date
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from dealer_reports.models.finance_record import FinanceRecordModel
from dealer_reports.repositories.finance_record_repo import FinanceRecordRepository
from dealer_reports.schemas.finance_record import (
    FinanceRecord,
    FinanceRecordCreate,
    FinanceRecordResult,
    FinanceRecordUpdate,
)
from dealer_reports.services.report_generation_service import ReportGenerationService

logger = logging.getLogger(__name__)


class FinanceService:
    def __init__(
        self,
        db: Session,
        finance_repo: FinanceRecordRepository,
        report_service: ReportGenerationService,
    ):
        self.db = db
        self.records = finance_repo
        self.reports = report_service

    def record_finance_record(self, data: FinanceRecordCreate) -> FinanceRecordResult:
        record = FinanceRecordModel(**data.model_dump())
        self._commit(lambda: self.records.create(record))
        ok, error = self._regenerate(record.record_date)
        return FinanceRecordResult(
            record=FinanceRecord.model_validate(record), reports_regenerated=ok, report_error=error
        )

    def update_finance_record(self, record_id: int, data: FinanceRecordUpdate) -> FinanceRecordResult:
        record = self._get_or_raise(record_id)
        old_date = record.record_date

        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None or field == "description":
                setattr(record, field, value)
        self._commit(lambda: self.records.update(record))

        ok, error = True, None
        if (old_date.year, old_date.month) != (record.record_date.year, record.record_date.month):
            ok, error = self._regenerate(old_date)
        new_ok, new_error = self._regenerate(record.record_date)
        ok = ok and new_ok
        error = error or new_error

        return FinanceRecordResult(
            record=FinanceRecord.model_validate(record), reports_regenerated=ok, report_error=error
        )

    def delete_finance_record(self, record_id: int) -> bool:
        """Delete the record; returns whether the month's reports were rebuilt."""
        record = self._get_or_raise(record_id)
        record_date = record.record_date
        self._commit(lambda: self.records.delete(record_id))
        ok, _ = self._regenerate(record_date)
        return ok

    def _get_or_raise(self, record_id: int) -> FinanceRecordModel:
        record = self.records.get(record_id)
        if record is None:
            raise ValueError(f"Finance record {record_id} not found")
        return record

    def _commit(self, work) -> None:
        try:
            work()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def _regenerate(self, record_date: date) -> Tuple[bool, Optional[str]]:
        try:
            self.reports.regenerate_reports_for_month(record_date.year, record_date.month)
            return True, None
        except Exception as exc:
            logger.warning(
                "Reports for %d-%02d not regenerated after finance change: %s",
                record_date.year, record_date.month, exc,
            )
            return False, str(exc)
