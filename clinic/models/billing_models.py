from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Numeric
from sqlalchemy.orm import relationship
from datetime import datetime
import enum
from ..database import Base

class BillStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"

# --- BILLING ---

class Bill(Base):
    __tablename__ = "bills"
    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    bill_date = Column(DateTime, default=datetime.now, nullable=False, index=True)

    total_amount = Column(Numeric(10, 2), nullable=False, default=0)
    paid_amount = Column(Numeric(10, 2), nullable=False, default=0)
    pending_amount = Column(Numeric(10, 2), nullable=False, default=0)  # negative when overpaid
    status = Column(String(20), nullable=False, default=BillStatus.PENDING.value, index=True)

    patient = relationship("Patient", back_populates="bills")
    treatment_items = relationship(
        "BillTreatmentItem", back_populates="bill", order_by="BillTreatmentItem.id"
    )
    medicine_items = relationship(
        "BillMedicineItem", back_populates="bill", order_by="BillMedicineItem.id"
    )

class BillTreatmentItem(Base):
    __tablename__ = "bill_treatment_items"
    id = Column(Integer, primary_key=True, index=True)
    bill_id = Column(Integer, ForeignKey("bills.id"), nullable=False, index=True)
    treatment_id = Column(Integer, ForeignKey("treatments.id"), nullable=False, index=True)
    treatment_name = Column(String, nullable=False)  # snapshot at billing time
    amount = Column(Numeric(10, 2), nullable=False)

    bill = relationship("Bill", back_populates="treatment_items")
    treatment = relationship("Treatment")

class BillMedicineItem(Base):
    __tablename__ = "bill_medicine_items"
    id = Column(Integer, primary_key=True, index=True)
    bill_id = Column(Integer, ForeignKey("bills.id"), nullable=False, index=True)
    medicine_id = Column(Integer, ForeignKey("medicines.id"), nullable=False, index=True)
    medicine_name = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)

    bill = relationship("Bill", back_populates="medicine_items")
    medicine = relationship("Medicine")
