"""Report generation tracker — a single-row table of "last generated" cursors."""

from sqlalchemy import CheckConstraint, Column, Date, DateTime, Integer, func

from dealer_reports.database import Base

TRACKER_ID = 1


class ReportTrackerModel(Base):
    __tablename__ = "report_generation_tracker"
    __table_args__ = (
        CheckConstraint(f"id = {TRACKER_ID}", name="ck_report_tracker_singleton"),
    )

    id = Column(Integer, primary_key=True, autoincrement=False, default=TRACKER_ID)
    last_daily_report_date = Column(Date, nullable=True)
    last_monthly_report_year = Column(Integer, nullable=True)
    last_monthly_report_month = Column(Integer, nullable=True)
    last_yearly_report_year = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return (
            f"<ReportTracker daily={self.last_daily_report_date} "
            f"monthly={self.last_monthly_report_year}-{self.last_monthly_report_month} "
            f"yearly={self.last_yearly_report_year}>"
        )
