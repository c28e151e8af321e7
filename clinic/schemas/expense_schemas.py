from pydantic import Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

from .base_schemas import CamelModel, money_field

class ExpenseBase(CamelModel):
    expense_type: str = Field(..., min_length=1)
    description: Optional[str] = None
    amount: Decimal = money_field()

class ExpenseCreate(ExpenseBase):
    date: Optional[datetime] = None  # defaults to now

class ExpenseUpdate(CamelModel):
    date: Optional[datetime] = None
    expense_type: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    amount: Optional[Decimal] = money_field(None)

class ExpenseResponse(ExpenseBase):
    id: int
    date: datetime
