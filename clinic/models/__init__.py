# Models package - exports all models
from ..database import Base
from .user_models import User
from .patient_models import Patient, Visit
from .catalog_models import Medicine, Treatment
from .billing_models import Bill, BillStatus, BillTreatmentItem, BillMedicineItem
from .expense_models import Expense

__all__ = [
    "Base",  # Re-exported from database
    "User",
    "Patient",
    "Visit",
    "Medicine",
    "Treatment",
    "Bill",
    "BillStatus",
    "BillTreatmentItem",
    "BillMedicineItem",
    "Expense",
]
