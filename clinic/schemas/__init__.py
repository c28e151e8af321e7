# Schemas package - exports all Pydantic models
from .auth_schemas import Token, LoginRequest
from .patient_schemas import (
    VisitCreate, VisitResponse, PatientCreate,
    PatientResponse, PatientWithVisits
)
from .catalog_schemas import (
    MedicineCreate, MedicineUpdate, MedicineResponse,
    TreatmentCreate, TreatmentUpdate, TreatmentResponse
)
from .billing_schemas import (
    TreatmentLine, MedicineLine, BillCreate, SettlePayment,
    BillResponse, BillWithItems
)
from .expense_schemas import ExpenseCreate, ExpenseUpdate, ExpenseResponse
from .report_schemas import MonthlyReport, LabelledMonthlyReport, ReportOverview, DashboardStats

__all__ = [
    "Token",
    "LoginRequest",
    "VisitCreate",
    "VisitResponse",
    "PatientCreate",
    "PatientResponse",
    "PatientWithVisits",
    "MedicineCreate",
    "MedicineUpdate",
    "MedicineResponse",
    "TreatmentCreate",
    "TreatmentUpdate",
    "TreatmentResponse",
    "TreatmentLine",
    "MedicineLine",
    "BillCreate",
    "SettlePayment",
    "BillResponse",
    "BillWithItems",
    "ExpenseCreate",
    "ExpenseUpdate",
    "ExpenseResponse",
    "MonthlyReport",
    "LabelledMonthlyReport",
    "ReportOverview",
    "DashboardStats",
]
