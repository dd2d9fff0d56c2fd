"""Finance record schemas."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class FinanceRecordBase(BaseModel):
    type: str = "expense"
    category: str
    cost: Decimal
    record_date: date
    description: Optional[str] = None


class FinanceRecordCreate(FinanceRecordBase):
    pass


class FinanceRecordUpdate(BaseModel):
    type: Optional[str] = None
    category: Optional[str] = None
    cost: Optional[Decimal] = None
    record_date: Optional[date] = None
    description: Optional[str] = None


class FinanceRecord(FinanceRecordBase):
    id: int

    model_config = {"from_attributes": True}


class FinanceRecordResult(BaseModel):
    record: FinanceRecord
    reports_regenerated: bool
    report_error: Optional[str] = None
