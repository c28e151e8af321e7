import os
import tempfile
from datetime import datetime
from decimal import Decimal

# Point the app at a throwaway SQLite file before anything imports clinic.database
_db_dir = tempfile.mkdtemp(prefix="clinic-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_db_dir, "clinic.db")
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "admin123"
os.environ["ALLOW_NEGATIVE_STOCK"] = "true"
os.environ["STRICT_LINE_AMOUNTS"] = "false"

import pytest
from fastapi.testclient import TestClient

from clinic.database import Base, engine, SessionLocal
from clinic.main import app
from clinic.models import Patient, Visit, Medicine, Treatment


@pytest.fixture(autouse=True)
def reset_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_patient(db):
    def _make(name="Asha Rao", phone="9000000001", registration_date=None):
        patient = Patient(name=name, phone=phone, registration_date=registration_date or datetime.now())
        db.add(patient)
        db.commit()
        return patient
    return _make


@pytest.fixture
def make_visit(db):
    def _make(patient, visit_date=None, complaints="Fever", diagnosis="Viral fever"):
        visit = Visit(
            patient_id=patient.id,
            visit_date=visit_date or datetime.now(),
            complaints=complaints,
            diagnosis=diagnosis,
        )
        db.add(visit)
        db.commit()
        return visit
    return _make


@pytest.fixture
def make_medicine(db):
    def _make(name="Paracetamol", price="50.00", quantity=10):
        medicine = Medicine(name=name, price=Decimal(price), quantity=quantity, total_earnings=Decimal("0"))
        db.add(medicine)
        db.commit()
        return medicine
    return _make


@pytest.fixture
def make_treatment(db):
    def _make(name="Consultation", price="300.00"):
        treatment = Treatment(name=name, price=Decimal(price))
        db.add(treatment)
        db.commit()
        return treatment
    return _make
