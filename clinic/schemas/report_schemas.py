from pydantic import Field
from typing import List
from decimal import Decimal

from .base_schemas import CamelModel

class MonthlyReport(CamelModel):
    treatment_earnings: Decimal
    medicine_earnings: Decimal
    total_earnings: Decimal
    total_expenses: Decimal
    profit: Decimal
    patient_count: int
    bill_count: int

class LabelledMonthlyReport(MonthlyReport):
    month: str  # YYYY-MM
    label: str  # Jan, Feb, ...

class ReportOverview(CamelModel):
    current_month: LabelledMonthlyReport
    last_month: LabelledMonthlyReport
    last_6_months: List[LabelledMonthlyReport] = Field(..., alias="last6Months")

class DashboardStats(CamelModel):
    total_patients: int
    today_patients: int
    pending_payments: int
    total_revenue: Decimal
