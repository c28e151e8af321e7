"""
Billing Service Layer
Bill totals, atomic bill creation with stock updates, and payment settlement
"""

from sqlalchemy.orm import Session, joinedload, selectinload
from sqlalchemy.exc import SQLAlchemyError
from decimal import Decimal
from typing import List, Sequence, Tuple
import logging

from .. import config
from ..exceptions import ClinicError, NotFound, ValidationError, PersistenceError
from ..models import Bill, BillStatus, BillTreatmentItem, BillMedicineItem, Patient, Treatment
from ..schemas.billing_schemas import BillCreate, TreatmentLine, MedicineLine
from ..utils.money import to_money, money_sum
from .inventory_service import InventoryService

logger = logging.getLogger(__name__)


class BillingService:
    """Service class for bill creation and settlement"""

    @staticmethod
    def settlement_state(total_amount, paid_amount) -> Tuple[Decimal, str]:
        """(pending_amount, status) for a bill. Overpayment gives a negative pending amount."""
        pending = to_money(total_amount) - to_money(paid_amount)
        status = BillStatus.PAID if pending <= 0 else BillStatus.PENDING
        return pending, status.value

    @staticmethod
    def compute_totals(
        treatment_lines: Sequence[TreatmentLine],
        medicine_lines: Sequence[MedicineLine],
        paid_amount=None,
    ) -> dict:
        total = money_sum([line.amount for line in treatment_lines] + [line.amount for line in medicine_lines])
        paid = to_money(paid_amount)
        pending, status = BillingService.settlement_state(total, paid)
        return {
            "total_amount": total,
            "paid_amount": paid,
            "pending_amount": pending,
            "status": status,
        }

    @staticmethod
    def check_line_amounts(medicine_lines: Sequence[MedicineLine]):
        for line in medicine_lines:
            expected = to_money(to_money(line.unit_price) * line.quantity)
            if to_money(line.amount) != expected:
                raise ValidationError(
                    f"Amount for {line.medicine_name} is {line.amount}, expected {expected} "
                    f"({line.quantity} x {line.unit_price})"
                )

    @staticmethod
    def create_bill(db: Session, bill_in: BillCreate) -> Bill:
        """
        Persist a bill, its line items and the resulting stock movements
        as one transaction. Any failure leaves nothing behind.
        """
        try:
            patient = db.query(Patient).filter(Patient.id == bill_in.patient_id).first()
            if not patient:
                raise NotFound.for_entity("Patient", bill_in.patient_id)

            treatment_ids = {line.treatment_id for line in bill_in.treatment_items}
            if treatment_ids:
                known = {row.id for row in db.query(Treatment.id).filter(Treatment.id.in_(treatment_ids)).all()}
                missing = sorted(treatment_ids - known)
                if missing:
                    raise NotFound.for_entity("Treatment", missing[0])

            if config.STRICT_LINE_AMOUNTS:
                BillingService.check_line_amounts(bill_in.medicine_items)

            totals = BillingService.compute_totals(
                bill_in.treatment_items, bill_in.medicine_items, bill_in.paid_amount
            )
            bill = Bill(patient_id=patient.id, **totals)
            db.add(bill)
            db.flush()

            for line in bill_in.treatment_items:
                db.add(BillTreatmentItem(
                    bill_id=bill.id,
                    treatment_id=line.treatment_id,
                    treatment_name=line.treatment_name,
                    amount=to_money(line.amount),
                ))

            for line in bill_in.medicine_items:
                db.add(BillMedicineItem(
                    bill_id=bill.id,
                    medicine_id=line.medicine_id,
                    medicine_name=line.medicine_name,
                    quantity=line.quantity,
                    unit_price=to_money(line.unit_price),
                    amount=to_money(line.amount),
                ))
                InventoryService.consume(db, line.medicine_id, line.quantity, line.amount)

            bill_id = bill.id
            db.commit()
        except ClinicError:
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Bill creation failed for patient %s", bill_in.patient_id)
            raise PersistenceError("Failed to create bill") from e

        logger.info(
            "Created bill %s for patient %s: total=%s paid=%s status=%s",
            bill_id, bill_in.patient_id, totals["total_amount"], totals["paid_amount"], totals["status"],
        )
        return BillingService.get_bill(db, bill_id)

    @staticmethod
    def settle_payment(db: Session, bill_id: int, amount) -> Bill:
        """Add `amount` to what has been paid so far. Never decreases paid_amount."""
        amount = to_money(amount)
        if amount < 0:
            raise ValidationError("Settlement amount must not be negative")

        try:
            bill = db.query(Bill).filter(Bill.id == bill_id).with_for_update().first()
            if not bill:
                raise NotFound.for_entity("Bill", bill_id)

            new_paid = to_money(bill.paid_amount) + amount
            new_pending, status = BillingService.settlement_state(bill.total_amount, new_paid)
            bill.paid_amount = new_paid
            bill.pending_amount = new_pending
            bill.status = status
            db.commit()
        except ClinicError:
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Settlement failed for bill %s", bill_id)
            raise PersistenceError("Failed to settle payment") from e

        if new_pending < 0:
            logger.warning("Bill %s overpaid by %s", bill_id, -new_pending)
        logger.info("Settled %s on bill %s: paid=%s pending=%s", amount, bill_id, new_paid, new_pending)
        return BillingService.get_bill(db, bill_id)

    @staticmethod
    def _with_items(query):
        return query.options(
            joinedload(Bill.patient),
            selectinload(Bill.treatment_items),
            selectinload(Bill.medicine_items),
        )

    @staticmethod
    def get_bill(db: Session, bill_id: int) -> Bill:
        bill = BillingService._with_items(db.query(Bill)).filter(Bill.id == bill_id).first()
        if not bill:
            raise NotFound.for_entity("Bill", bill_id)
        return bill

    @staticmethod
    def list_bills(db: Session) -> List[Bill]:
        return BillingService._with_items(db.query(Bill)).order_by(Bill.bill_date.desc(), Bill.id.desc()).all()
