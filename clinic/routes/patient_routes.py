from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, selectinload
from typing import List
import logging

from ..database import get_db, commit
from ..exceptions import NotFound
from ..models import Patient, Visit
from ..schemas import PatientCreate, PatientResponse, PatientWithVisits, VisitCreate, VisitResponse

logger = logging.getLogger(__name__)

router = APIRouter()

# --- Helpers ---

def get_patient_or_404(db: Session, patient_id: int) -> Patient:
    patient = db.query(Patient).options(selectinload(Patient.visits)).filter(Patient.id == patient_id).first()
    if not patient:
        raise NotFound.for_entity("Patient", patient_id)
    return patient

# --- Patient Routes ---

@router.get("/patients", response_model=List[PatientWithVisits])
def list_patients(db: Session = Depends(get_db)):
    return db.query(Patient)\
        .options(selectinload(Patient.visits))\
        .order_by(Patient.registration_date.desc(), Patient.id.desc())\
        .all()

@router.get("/patients/{patient_id}", response_model=PatientWithVisits)
def get_patient(patient_id: int, db: Session = Depends(get_db)):
    return get_patient_or_404(db, patient_id)

@router.post("/patients", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
def register_patient(patient_in: PatientCreate, db: Session = Depends(get_db)):
    patient = Patient(name=patient_in.name.strip(), phone=patient_in.phone.strip())
    db.add(patient)
    db.flush()

    # Initial visit goes in the same transaction as the patient
    if patient_in.complaints and patient_in.diagnosis:
        db.add(Visit(
            patient_id=patient.id,
            complaints=patient_in.complaints,
            diagnosis=patient_in.diagnosis,
            treatment=patient_in.treatment or None,
            prescription=patient_in.prescription or None,
        ))

    patient_id = patient.id
    commit(db, "register patient")
    logger.info("Registered patient %s", patient_id)
    return db.query(Patient).filter(Patient.id == patient_id).first()

# --- Visit Routes ---

@router.get("/patients/{patient_id}/visits", response_model=List[VisitResponse])
def list_visits(patient_id: int, db: Session = Depends(get_db)):
    return get_patient_or_404(db, patient_id).visits

@router.post("/visits", response_model=VisitResponse, status_code=status.HTTP_201_CREATED)
def record_visit(visit_in: VisitCreate, db: Session = Depends(get_db)):
    if not db.query(Patient.id).filter(Patient.id == visit_in.patient_id).first():
        raise NotFound.for_entity("Patient", visit_in.patient_id)

    visit = Visit(**visit_in.dict())
    db.add(visit)
    db.flush()
    visit_id = visit.id
    commit(db, "record visit")
    return db.query(Visit).filter(Visit.id == visit_id).first()
