"""
Patient Router - API endpoints for the patients of the authenticated veterinarian.
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth.dependencies import AuthenticatedVeterinarian, get_current_veterinarian
from ..core.schemas import MessageResponse
from ..database import get_db
from .schemas import PatientData, PatientDischarge, PatientResponse
from .service import (
    discharge_patient,
    get_owned_patient,
    list_patients,
    register_patient,
    update_patient,
)

router = APIRouter(tags=["Patients"])


@router.get("/pacientes", response_model=List[PatientResponse])
def list_patients_route(
    db: Session = Depends(get_db),
    current: AuthenticatedVeterinarian = Depends(get_current_veterinarian),
):
    """
    List the active patients of the authenticated veterinarian.
    """
    return list_patients(db, current.id)


@router.get("/paciente/{patient_id}", response_model=PatientResponse)
def get_patient_route(
    patient_id: str,
    db: Session = Depends(get_db),
    current: AuthenticatedVeterinarian = Depends(get_current_veterinarian),
):
    return PatientResponse.from_model(get_owned_patient(db, patient_id, current.id))


@router.post("/paciente/registro", response_model=MessageResponse)
def register_patient_route(
    data: PatientData,
    db: Session = Depends(get_db),
    current: AuthenticatedVeterinarian = Depends(get_current_veterinarian),
):
    """
    Register a patient under the authenticated veterinarian.
    """
    return register_patient(db, current.id, data)


@router.put("/paciente/actualizar/{patient_id}", response_model=MessageResponse)
def update_patient_route(
    patient_id: str,
    data: PatientData,
    db: Session = Depends(get_db),
    current: AuthenticatedVeterinarian = Depends(get_current_veterinarian),
):
    return update_patient(db, patient_id, current.id, data)


@router.delete("/paciente/eliminar/{patient_id}", response_model=MessageResponse)
def discharge_patient_route(
    patient_id: str,
    data: PatientDischarge,
    db: Session = Depends(get_db),
    current: AuthenticatedVeterinarian = Depends(get_current_veterinarian),
):
    """
    Discharge a patient. The record is kept and marked inactive.
    """
    return discharge_patient(db, patient_id, current.id, data)
