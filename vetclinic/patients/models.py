"""
Patient Model - Animals under the care of a veterinarian.
"""
from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship

from ..database import Base


class Patient(Base):
    """
    Patient Model - Stores a patient record owned by one veterinarian

    Fields:
    - id: Primary key
    - name: Patient's name
    - owner: Name of the patient's owner
    - email, mobile, landline: Owner contact details
    - admitted_at: Admission date and time
    - symptoms: Symptoms reported on admission
    - discharged_at: Discharge date and time, set on soft delete
    - is_active: False once the patient has been discharged
    - veterinarian_id: Foreign key to the owning veterinarian
    """
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    owner = Column(String, nullable=False)
    email = Column(String, nullable=False)
    mobile = Column(String, nullable=False)
    landline = Column(String, nullable=False)
    admitted_at = Column(DateTime(timezone=True), nullable=False)
    symptoms = Column(String, nullable=False)
    discharged_at = Column(DateTime(timezone=True), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    veterinarian_id = Column(Integer, ForeignKey("veterinarians.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    veterinarian = relationship("Veterinarian", back_populates="patients")

    def __repr__(self):
        """String representation of the Patient model"""
        return f"<Patient(id={self.id}, name='{self.name}', veterinarian_id={self.veterinarian_id})>"

    def discharge(self, discharged_at: datetime) -> None:
        """Soft delete: keep the record but mark it inactive."""
        self.discharged_at = discharged_at
        self.is_active = False
