from sqlalchemy import Column, Integer, String, ForeignKey, Text, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from ..database import Base

# --- PATIENTS & VISITS ---

class Patient(Base):
    __tablename__ = "patients"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    phone = Column(String, nullable=False, index=True)
    registration_date = Column(DateTime, default=datetime.now, nullable=False, index=True)

    visits = relationship(
        "Visit",
        back_populates="patient",
        order_by="[Visit.visit_date.desc(), Visit.id.desc()]",
    )
    bills = relationship("Bill", back_populates="patient")

class Visit(Base):
    """One consultation. Append-only history."""
    __tablename__ = "visits"
    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    visit_date = Column(DateTime, default=datetime.now, nullable=False, index=True)
    complaints = Column(Text, nullable=False)
    diagnosis = Column(Text, nullable=False)
    treatment = Column(Text, nullable=True)
    prescription = Column(Text, nullable=True)

    patient = relationship("Patient", back_populates="visits")
