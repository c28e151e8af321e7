from pydantic import Field
from typing import List, Optional
from datetime import datetime

from .base_schemas import CamelModel

# --- Visit ---
class VisitBase(CamelModel):
    complaints: str = Field(..., min_length=1)
    diagnosis: str = Field(..., min_length=1)
    treatment: Optional[str] = None
    prescription: Optional[str] = None

class VisitCreate(VisitBase):
    patient_id: int

class VisitResponse(VisitBase):
    id: int
    patient_id: int
    visit_date: datetime

# --- Patient ---
class PatientCreate(CamelModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    # Initial visit, recorded only when both complaints and diagnosis are given
    complaints: Optional[str] = None
    diagnosis: Optional[str] = None
    treatment: Optional[str] = None
    prescription: Optional[str] = None

class PatientResponse(CamelModel):
    id: int
    name: str
    phone: str
    registration_date: datetime

class PatientWithVisits(PatientResponse):
    visits: List[VisitResponse] = []
