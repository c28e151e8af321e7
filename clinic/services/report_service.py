"""
Reporting Service Layer
Monthly earnings/expenses/profit and dashboard figures, recomputed from the ledger on every call
"""

from sqlalchemy.orm import Session
from sqlalchemy import func, distinct
from datetime import datetime
from typing import Optional
import logging

from ..models import Bill, BillStatus, BillTreatmentItem, BillMedicineItem, Expense, Patient, Visit
from ..utils.money import to_money
from ..utils.dates import DateRange, month_range, shift_month, month_label, current_month, day_range

logger = logging.getLogger(__name__)


class ReportService:
    """Service class for reports and dashboard stats"""

    @staticmethod
    def summarize_range(db: Session, period: DateRange) -> dict:
        start, end = period

        def billed(item_model):
            return db.query(func.sum(item_model.amount))\
                .select_from(item_model)\
                .join(Bill, item_model.bill_id == Bill.id)\
                .filter(Bill.bill_date >= start, Bill.bill_date <= end)\
                .scalar()

        treatment_earnings = to_money(billed(BillTreatmentItem))
        medicine_earnings = to_money(billed(BillMedicineItem))
        total_earnings = treatment_earnings + medicine_earnings

        total_expenses = to_money(
            db.query(func.sum(Expense.amount)).filter(Expense.date >= start, Expense.date <= end).scalar()
        )

        # Visit based: a patient seen twice counts once, a registration without a visit not at all
        patient_count = db.query(func.count(distinct(Visit.patient_id)))\
            .filter(Visit.visit_date >= start, Visit.visit_date <= end)\
            .scalar() or 0

        bill_count = db.query(func.count(Bill.id))\
            .filter(Bill.bill_date >= start, Bill.bill_date <= end)\
            .scalar() or 0

        return {
            "treatment_earnings": treatment_earnings,
            "medicine_earnings": medicine_earnings,
            "total_earnings": total_earnings,
            "total_expenses": total_expenses,
            "profit": total_earnings - total_expenses,
            "patient_count": patient_count,
            "bill_count": bill_count,
        }

    @staticmethod
    def monthly_report(db: Session, month: str) -> dict:
        return ReportService.summarize_range(db, month_range(month))

    @staticmethod
    def labelled_report(db: Session, month: str) -> dict:
        return {"month": month, "label": month_label(month), **ReportService.monthly_report(db, month)}

    @staticmethod
    def report_overview(db: Session, month: Optional[str] = None) -> dict:
        """
        Report for `month` (default: this month), the month before it,
        and the six months ending at `month`, oldest first.
        """
        month = month or current_month()
        month_range(month)  # validate before doing any work
        logger.debug("Building report overview for %s", month)
        return {
            "current_month": ReportService.labelled_report(db, month),
            "last_month": ReportService.labelled_report(db, shift_month(month, -1)),
            "last_6_months": [
                ReportService.labelled_report(db, shift_month(month, offset))
                for offset in range(-5, 1)
            ],
        }

    @staticmethod
    def dashboard_stats(db: Session, now: Optional[datetime] = None) -> dict:
        start, end = day_range(now)
        today_patients = db.query(func.count(distinct(Visit.patient_id)))\
            .filter(Visit.visit_date >= start, Visit.visit_date < end)\
            .scalar() or 0

        return {
            "total_patients": db.query(func.count(Patient.id)).scalar() or 0,
            "today_patients": today_patients,
            "pending_payments": db.query(func.count(Bill.id)).filter(Bill.status == BillStatus.PENDING.value).scalar() or 0,
            # Cash actually collected, not the billed total
            "total_revenue": to_money(db.query(func.sum(Bill.paid_amount)).scalar()),
        }
