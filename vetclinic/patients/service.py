"""
Patient Service - Business logic for patient records.

Every operation is scoped to the veterinarian that owns the record; a patient
owned by someone else is reported as not found.
"""
from typing import Dict, List
import logging

from sqlalchemy.orm import Session, joinedload

from ..database import save
from ..exceptions import NotFoundException, parse_record_id
from .models import Patient
from .schemas import PatientData, PatientDischarge, PatientResponse

# Set up logging
logger = logging.getLogger(__name__)


def get_owned_patient(db: Session, raw_id: str, veterinarian_id: int) -> Patient:
    """
    Get a patient of the given veterinarian by the id given in a path.

    Raises:
        NotFoundException: If the id is malformed, unknown, or owned by someone else
    """
    patient_id = parse_record_id(raw_id, f"Sorry, there is no patient {raw_id}")
    patient = (
        db.query(Patient)
        .options(joinedload(Patient.veterinarian))
        .filter(Patient.id == patient_id, Patient.veterinarian_id == veterinarian_id)
        .first()
    )
    if not patient:
        raise NotFoundException(f"Sorry, there is no patient {raw_id}")
    return patient


def list_patients(db: Session, veterinarian_id: int) -> List[PatientResponse]:
    """List the active patients of a veterinarian, oldest admission first."""
    patients = (
        db.query(Patient)
        .options(joinedload(Patient.veterinarian))
        .filter(Patient.veterinarian_id == veterinarian_id, Patient.is_active.is_(True))
        .order_by(Patient.admitted_at, Patient.id)
        .all()
    )
    return [PatientResponse.from_model(patient) for patient in patients]


def register_patient(db: Session, veterinarian_id: int, data: PatientData) -> Dict[str, str]:
    """Create a patient owned by the given veterinarian."""
    patient = Patient(veterinarian_id=veterinarian_id, **data.model_dump())
    save(db, patient)
    logger.info(f"Patient {patient.id} registered by veterinarian {veterinarian_id}")
    return {"msg": "Successful patient registration"}


def update_patient(db: Session, raw_id: str, veterinarian_id: int, data: PatientData) -> Dict[str, str]:
    """Overwrite the fields of a patient."""
    patient = get_owned_patient(db, raw_id, veterinarian_id)
    for field, value in data.model_dump().items():
        setattr(patient, field, value)
    save(db, patient)
    logger.info(f"Patient {patient.id} updated by veterinarian {veterinarian_id}")
    return {"msg": "Successful patient update"}


def discharge_patient(db: Session, raw_id: str, veterinarian_id: int,
                      data: PatientDischarge) -> Dict[str, str]:
    """Soft delete a patient by recording its discharge."""
    patient = get_owned_patient(db, raw_id, veterinarian_id)
    patient.discharge(data.discharged_at)
    save(db, patient)
    logger.info(f"Patient {patient.id} discharged by veterinarian {veterinarian_id}")
    return {"msg": "Date of successful patient departure"}
