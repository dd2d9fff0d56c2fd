"""Report generation tracker repository (single row)."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dealer_reports.database import dialect_insert
from dealer_reports.models.report_tracker import TRACKER_ID, ReportTrackerModel
from dealer_reports.repositories.base import BaseRepository


class ReportTrackerRepository(BaseRepository[ReportTrackerModel]):
    def __init__(self, db: Session):
        super().__init__(db, ReportTrackerModel)

    def get_instance(self) -> ReportTrackerModel:
        """Return the tracker row, creating it with null cursors if absent.

        The row's primary key is fixed, so concurrent first accesses collapse
        onto one row: the losing insert is a no-op (or an IntegrityError on
        dialects without ON CONFLICT, after which the winner's row is read).
        """
        tracker = self.get(TRACKER_ID)
        if tracker is not None:
            return tracker

        insert = dialect_insert(self.db)
        if insert is not None:
            self.db.execute(insert(self.model).values(id=TRACKER_ID).on_conflict_do_nothing())
        else:
            try:
                with self.db.begin_nested():
                    self.db.add(ReportTrackerModel(id=TRACKER_ID))
            except IntegrityError:
                pass
        return self.db.get(self.model, TRACKER_ID, populate_existing=True)
