from decimal import Decimal

import pytest

from clinic import config
from clinic.exceptions import NotFound, ValidationError
from clinic.models import Bill, BillMedicineItem, BillTreatmentItem, Medicine
from clinic.schemas import BillCreate
from clinic.services import BillingService


def medicine_line(medicine, quantity, unit_price, amount):
    return {
        "medicine_id": medicine.id,
        "medicine_name": medicine.name,
        "quantity": quantity,
        "unit_price": unit_price,
        "amount": amount,
    }


def treatment_line(treatment, amount):
    return {"treatment_id": treatment.id, "treatment_name": treatment.name, "amount": amount}


def test_fully_paid_medicine_bill(db, make_patient, make_medicine):
    patient = make_patient("Asha Rao", "9000000001")
    medicine = make_medicine(price="50.00", quantity=10)

    bill = BillingService.create_bill(db, BillCreate(
        patient_id=patient.id,
        medicine_items=[medicine_line(medicine, 2, "50.00", "100.00")],
        paid_amount="100.00",
    ))

    assert bill.total_amount == Decimal("100.00")
    assert bill.paid_amount == Decimal("100.00")
    assert bill.pending_amount == Decimal("0.00")
    assert bill.status == "paid"

    stock = db.query(Medicine).filter(Medicine.id == medicine.id).first()
    assert stock.quantity == 8
    assert stock.total_earnings == Decimal("100.00")


def test_partial_payment_then_settle(db, make_patient, make_medicine):
    patient = make_patient()
    medicine = make_medicine(price="50.00", quantity=10)

    bill = BillingService.create_bill(db, BillCreate(
        patient_id=patient.id,
        medicine_items=[medicine_line(medicine, 2, "50.00", "100.00")],
        paid_amount="40.00",
    ))
    assert bill.pending_amount == Decimal("60.00")
    assert bill.status == "pending"

    settled = BillingService.settle_payment(db, bill.id, Decimal("60.00"))
    assert settled.paid_amount == Decimal("100.00")
    assert settled.pending_amount == Decimal("0.00")
    assert settled.status == "paid"


def test_overpayment_is_stored_as_negative_pending(db, make_patient, make_medicine):
    patient = make_patient()
    medicine = make_medicine(price="50.00", quantity=10)
    bill = BillingService.create_bill(db, BillCreate(
        patient_id=patient.id,
        medicine_items=[medicine_line(medicine, 2, "50.00", "100.00")],
        paid_amount="40.00",
    ))

    settled = BillingService.settle_payment(db, bill.id, Decimal("70.00"))

    assert settled.paid_amount == Decimal("110.00")
    assert settled.pending_amount == Decimal("-10.00")
    assert settled.status == "paid"


def test_total_is_exact_sum_of_mixed_lines(db, make_patient, make_medicine, make_treatment):
    patient = make_patient()
    cleaning = make_treatment("Cleaning", "333.33")
    xray = make_treatment("X-Ray", "0.10")
    syrup = make_medicine("Cough Syrup", "0.10", 5)
    tabs = make_medicine("Amoxicillin", "12.35", 100)

    bill = BillingService.create_bill(db, BillCreate(
        patient_id=patient.id,
        treatment_items=[treatment_line(cleaning, "333.33"), treatment_line(xray, "0.20")],
        medicine_items=[medicine_line(syrup, 3, "0.10", "0.30"), medicine_line(tabs, 7, "12.35", "86.45")],
    ))

    assert bill.total_amount == Decimal("420.28")
    assert bill.paid_amount == Decimal("0.00")
    assert bill.pending_amount == bill.total_amount - bill.paid_amount
    assert bill.status == "pending"
    assert [i.treatment_name for i in bill.treatment_items] == ["Cleaning", "X-Ray"]
    assert [i.medicine_name for i in bill.medicine_items] == ["Cough Syrup", "Amoxicillin"]
    assert sum(i.amount for i in bill.treatment_items) + sum(i.amount for i in bill.medicine_items) == bill.total_amount


def test_manual_treatment_price_is_snapshotted(db, make_patient, make_treatment):
    patient = make_patient()
    consult = make_treatment("Consultation", "300.00")

    bill = BillingService.create_bill(db, BillCreate(
        patient_id=patient.id,
        treatment_items=[treatment_line(consult, "250.00")],
    ))

    consult.price = Decimal("500.00")
    db.commit()

    item = db.query(BillTreatmentItem).filter(BillTreatmentItem.bill_id == bill.id).one()
    assert item.amount == Decimal("250.00")
    assert item.treatment_name == "Consultation"


def test_empty_bill_is_paid(db, make_patient):
    patient = make_patient()
    bill = BillingService.create_bill(db, BillCreate(patient_id=patient.id))
    assert bill.total_amount == Decimal("0.00")
    assert bill.status == "paid"


def test_unknown_patient_is_rejected(db, make_medicine):
    medicine = make_medicine(quantity=10)
    with pytest.raises(NotFound):
        BillingService.create_bill(db, BillCreate(
            patient_id=999,
            medicine_items=[medicine_line(medicine, 1, "50.00", "50.00")],
        ))
    assert db.query(Bill).count() == 0
    assert db.query(Medicine).filter(Medicine.id == medicine.id).one().quantity == 10


def test_unknown_treatment_is_rejected(db, make_patient):
    patient = make_patient()
    with pytest.raises(NotFound):
        BillingService.create_bill(db, BillCreate(
            patient_id=patient.id,
            treatment_items=[{"treatment_id": 42, "treatment_name": "Ghost", "amount": "10.00"}],
        ))
    assert db.query(Bill).count() == 0


def test_unknown_medicine_rolls_back_whole_bill(db, make_patient, make_medicine, make_treatment):
    patient = make_patient()
    medicine = make_medicine(quantity=10)
    consult = make_treatment()

    with pytest.raises(NotFound):
        BillingService.create_bill(db, BillCreate(
            patient_id=patient.id,
            treatment_items=[treatment_line(consult, "300.00")],
            medicine_items=[
                medicine_line(medicine, 2, "50.00", "100.00"),
                {"medicine_id": 999, "medicine_name": "Missing", "quantity": 1, "unit_price": "1.00", "amount": "1.00"},
            ],
        ))

    assert db.query(Bill).count() == 0
    assert db.query(BillTreatmentItem).count() == 0
    assert db.query(BillMedicineItem).count() == 0
    stock = db.query(Medicine).filter(Medicine.id == medicine.id).one()
    assert stock.quantity == 10
    assert stock.total_earnings == Decimal("0.00")


def test_strict_mode_rejects_mismatched_amount(db, make_patient, make_medicine, monkeypatch):
    monkeypatch.setattr(config, "STRICT_LINE_AMOUNTS", True)
    patient = make_patient()
    medicine = make_medicine(quantity=10)

    with pytest.raises(ValidationError):
        BillingService.create_bill(db, BillCreate(
            patient_id=patient.id,
            medicine_items=[medicine_line(medicine, 2, "50.00", "90.00")],
        ))
    assert db.query(Bill).count() == 0


def test_caller_amount_is_trusted_by_default(db, make_patient, make_medicine):
    patient = make_patient()
    medicine = make_medicine(quantity=10)

    bill = BillingService.create_bill(db, BillCreate(
        patient_id=patient.id,
        medicine_items=[medicine_line(medicine, 2, "50.00", "90.00")],
    ))
    assert bill.total_amount == Decimal("90.00")
    assert db.query(Medicine).filter(Medicine.id == medicine.id).one().total_earnings == Decimal("90.00")


def test_settlement_is_monotonic(db, make_patient, make_treatment):
    patient = make_patient()
    consult = make_treatment("Root canal", "1000.00")
    bill = BillingService.create_bill(db, BillCreate(
        patient_id=patient.id,
        treatment_items=[treatment_line(consult, "1000.00")],
    ))

    paid_so_far = bill.paid_amount
    for amount in ("0.00", "250.00", "249.99", "0.01", "500.00"):
        bill = BillingService.settle_payment(db, bill.id, Decimal(amount))
        assert bill.paid_amount >= paid_so_far
        assert bill.pending_amount == bill.total_amount - bill.paid_amount
        assert (bill.status == "paid") == (bill.pending_amount <= 0)
        paid_so_far = bill.paid_amount

    assert bill.paid_amount == Decimal("1000.00")
    assert bill.status == "paid"


def test_settle_unknown_bill(db):
    with pytest.raises(NotFound):
        BillingService.settle_payment(db, 12345, Decimal("10.00"))


def test_settle_rejects_negative_amount(db, make_patient, make_treatment):
    patient = make_patient()
    consult = make_treatment()
    bill = BillingService.create_bill(db, BillCreate(
        patient_id=patient.id, treatment_items=[treatment_line(consult, "300.00")], paid_amount="100.00",
    ))
    with pytest.raises(ValidationError):
        BillingService.settle_payment(db, bill.id, Decimal("-50.00"))
    assert BillingService.get_bill(db, bill.id).paid_amount == Decimal("100.00")


def test_list_bills_newest_first_with_items(db, make_patient, make_treatment):
    patient = make_patient()
    consult = make_treatment()
    first = BillingService.create_bill(db, BillCreate(patient_id=patient.id, treatment_items=[treatment_line(consult, "1.00")]))
    second = BillingService.create_bill(db, BillCreate(patient_id=patient.id, treatment_items=[treatment_line(consult, "2.00")]))

    bills = BillingService.list_bills(db)
    assert [b.id for b in bills] == [second.id, first.id]
    assert bills[0].patient.name == "Asha Rao"
    assert len(bills[0].treatment_items) == 1
