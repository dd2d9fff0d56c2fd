"""Sale schemas."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class SaleBase(BaseModel):
    car_id: int
    buyer_id: Optional[int] = None
    sale_price: Decimal = Field(..., ge=0)
    purchase_cost: Decimal = Field(..., ge=0)
    sale_date: date
    notes: Optional[str] = None


class SaleCreate(SaleBase):
    pass


class SaleUpdate(BaseModel):
    sale_price: Optional[Decimal] = Field(default=None, ge=0)
    purchase_cost: Optional[Decimal] = Field(default=None, ge=0)
    sale_date: Optional[date] = None
    notes: Optional[str] = None


class Sale(SaleBase):
    id: int
    profit_loss: Decimal

    model_config = {"from_attributes": True}


class SaleResult(BaseModel):
    """A committed sale plus the outcome of the best-effort report refresh."""

    sale: Sale
    reports_generated: bool
    report_error: Optional[str] = None
