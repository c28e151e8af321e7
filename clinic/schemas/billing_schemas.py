from pydantic import Field
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from .base_schemas import CamelModel, money_field
from .patient_schemas import PatientResponse

# --- Line items ---

class TreatmentLine(CamelModel):
    treatment_id: int
    treatment_name: str
    amount: Decimal = money_field()  # may override the catalog price

class MedicineLine(CamelModel):
    medicine_id: int
    medicine_name: str
    quantity: int = Field(..., gt=0)
    unit_price: Decimal = money_field()
    amount: Decimal = money_field()

class BillCreate(CamelModel):
    patient_id: int
    treatment_items: List[TreatmentLine] = []
    medicine_items: List[MedicineLine] = []
    paid_amount: Optional[Decimal] = money_field(None)  # missing or null means nothing paid yet

class SettlePayment(CamelModel):
    amount: Decimal = money_field()

# --- Responses ---

class BillTreatmentItemResponse(TreatmentLine):
    id: int
    bill_id: int

class BillMedicineItemResponse(MedicineLine):
    id: int
    bill_id: int

class BillResponse(CamelModel):
    id: int
    patient_id: int
    bill_date: datetime
    total_amount: Decimal
    paid_amount: Decimal
    pending_amount: Decimal
    status: str

class BillWithItems(BillResponse):
    patient: PatientResponse
    treatment_items: List[BillTreatmentItemResponse] = []
    medicine_items: List[BillMedicineItemResponse] = []
