from pydantic import Field
from typing import Optional
from decimal import Decimal

from .base_schemas import CamelModel, money_field

# --- Medicine ---
class MedicineBase(CamelModel):
    name: str = Field(..., min_length=1)
    price: Decimal = money_field()
    quantity: int = 0

class MedicineCreate(MedicineBase):
    pass

class MedicineUpdate(CamelModel):
    # total_earnings is maintained by billing only
    name: Optional[str] = Field(None, min_length=1)
    price: Optional[Decimal] = money_field(None)
    quantity: Optional[int] = None

class MedicineResponse(MedicineBase):
    id: int
    total_earnings: Decimal

# --- Treatment ---
class TreatmentBase(CamelModel):
    name: str = Field(..., min_length=1)
    price: Decimal = money_field()

class TreatmentCreate(TreatmentBase):
    pass

class TreatmentUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    price: Optional[Decimal] = money_field(None)

class TreatmentResponse(TreatmentBase):
    id: int
