"""Sale writes with best-effort report refresh.

A sale is committed before any report work starts, so a failing report
generation never loses or blocks the sale itself; the failure is logged and
surfaced on the returned :class:`SaleResult`.
"""

import logging
from datetime import date
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from dealer_reports.models.sale import SaleModel
from dealer_reports.repositories.sale_repo import SaleRepository
from dealer_reports.schemas.sale import Sale, SaleCreate, SaleResult, SaleUpdate
from dealer_reports.services.report_generation_service import ReportGenerationService
from dealer_reports.utils.financial_math import to_decimal, to_money

logger = logging.getLogger(__name__)


class SalesService:
    def __init__(
        self,
        db: Session,
        sale_repo: SaleRepository,
        report_service: ReportGenerationService,
    ):
        self.db = db
        self.sales = sale_repo
        self.reports = report_service

    def record_sale(self, data: SaleCreate) -> SaleResult:
        sale = SaleModel(
            **data.model_dump(),
            profit_loss=to_money(data.sale_price - data.purchase_cost),
        )
        try:
            self.sales.create(sale)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Recorded sale %d on %s (profit %s)", sale.id, sale.sale_date, sale.profit_loss)
        ok, error = self._refresh(sale.sale_date)
        return SaleResult(sale=Sale.model_validate(sale), reports_generated=ok, report_error=error)

    def update_sale(self, sale_id: int, data: SaleUpdate) -> SaleResult:
        sale = self._get_or_raise(sale_id)
        old_date = sale.sale_date

        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None or field == "notes":
                setattr(sale, field, value)
        sale.profit_loss = to_money(to_decimal(sale.sale_price) - to_decimal(sale.purchase_cost))

        try:
            self.sales.update(sale)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        ok, error = True, None
        if sale.sale_date != old_date:
            # The old day, month and year lost this sale; the new date is
            # refreshed last so the tracker ends on it.
            ok, error = self._refresh(old_date)
        new_ok, new_error = self._refresh(sale.sale_date)
        ok = ok and new_ok
        error = error or new_error

        return SaleResult(sale=Sale.model_validate(sale), reports_generated=ok, report_error=error)

    def delete_sale(self, sale_id: int) -> bool:
        """Delete the sale and refresh its date's reports.

        Returns whether the report refresh succeeded.
        """
        sale = self._get_or_raise(sale_id)
        sale_date = sale.sale_date
        try:
            self.sales.delete(sale_id)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Deleted sale %d from %s", sale_id, sale_date)
        ok, _ = self._refresh(sale_date)
        return ok

    def _get_or_raise(self, sale_id: int) -> SaleModel:
        sale = self.sales.get(sale_id)
        if sale is None:
            raise ValueError(f"Sale {sale_id} not found")
        return sale

    def _refresh(self, sale_date: date) -> Tuple[bool, Optional[str]]:
        try:
            self.reports.generate_reports_for_sale(sale_date)
            return True, None
        except Exception as exc:
            logger.warning("Reports not refreshed for %s; sale kept: %s", sale_date, exc)
            return False, str(exc)
