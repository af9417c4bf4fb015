"""
Patient Schemas - Pydantic models for patient record validation and serialization.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from ..core.schemas import RequiredStr
from ..veterinarians.schemas import VeterinarianSummary
from .models import Patient


class PatientData(BaseModel):
    """
    Patient Data Schema - Fields required to register or update a patient

    Fields:
    - name: Patient's name
    - owner: Owner's name
    - email: Owner's email address
    - mobile: Owner's mobile phone
    - landline: Owner's landline phone
    - admitted_at: Admission date and time
    - symptoms: Symptoms reported on admission
    """
    model_config = ConfigDict(populate_by_name=True)

    name: RequiredStr = Field(alias="nombre")
    owner: RequiredStr = Field(alias="propietario")
    email: EmailStr
    mobile: RequiredStr = Field(alias="celular")
    landline: RequiredStr = Field(alias="convencional")
    admitted_at: datetime = Field(alias="ingreso")
    symptoms: RequiredStr = Field(alias="sintomas")


class PatientDischarge(BaseModel):
    """
    Patient Discharge Schema - Body of the soft delete endpoint
    """
    model_config = ConfigDict(populate_by_name=True)

    discharged_at: datetime = Field(alias="salida")


class PatientResponse(BaseModel):
    """
    Patient Response Schema - Patient record with its owning veterinarian
    """
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(alias="_id")
    name: str = Field(alias="nombre")
    owner: str = Field(alias="propietario")
    email: str
    mobile: str = Field(alias="celular")
    landline: str = Field(alias="convencional")
    admitted_at: datetime = Field(alias="ingreso")
    symptoms: str = Field(alias="sintomas")
    discharged_at: Optional[datetime] = Field(default=None, alias="salida")
    is_active: bool = Field(alias="estado")
    veterinarian: VeterinarianSummary = Field(alias="veterinario")

    @classmethod
    def from_model(cls, patient: Patient) -> "PatientResponse":
        """Build the response from a database record."""
        return cls(
            id=patient.id,
            name=patient.name,
            owner=patient.owner,
            email=patient.email,
            mobile=patient.mobile,
            landline=patient.landline,
            admitted_at=patient.admitted_at,
            symptoms=patient.symptoms,
            discharged_at=patient.discharged_at,
            is_active=patient.is_active,
            veterinarian=VeterinarianSummary(
                id=patient.veterinarian.id,
                name=patient.veterinarian.name,
                surname=patient.veterinarian.surname,
            ),
        )
