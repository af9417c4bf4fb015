"""
Veterinarian Schemas - Pydantic models for profile data validation and serialization.

Python attribute names are English; the JSON names used by the clinic
frontend are declared as aliases.
"""
from pydantic import BaseModel, ConfigDict, Field

from ..core.schemas import NormalizedEmail, Password, RequiredStr
from .models import Veterinarian


class VeterinarianProfile(BaseModel):
    """
    Veterinarian Profile Schema - Public view of a veterinarian

    Never carries the password hash or the pending token.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(alias="_id")
    name: str = Field(alias="nombre")
    surname: str = Field(alias="apellido")
    address: str = Field(alias="direccion")
    phone: str = Field(alias="telefono")
    email: str

    @classmethod
    def from_model(cls, veterinarian: Veterinarian) -> "VeterinarianProfile":
        """Build the public view from a database record."""
        return cls(
            id=veterinarian.id,
            name=veterinarian.name,
            surname=veterinarian.surname,
            address=veterinarian.address,
            phone=veterinarian.phone,
            email=veterinarian.email,
        )


class VeterinarianSummary(BaseModel):
    """
    Veterinarian Summary Schema - Owner reference embedded in patient records
    """
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(alias="_id")
    name: str = Field(alias="nombre")
    surname: str = Field(alias="apellido")


class ProfileFields(BaseModel):
    """
    Profile Fields Schema - Mutable profile fields, all required
    """
    model_config = ConfigDict(populate_by_name=True)

    email: NormalizedEmail
    name: RequiredStr = Field(alias="nombre")
    surname: RequiredStr = Field(alias="apellido")
    address: RequiredStr = Field(alias="direccion")
    phone: RequiredStr = Field(alias="telefono")


class ProfileUpdate(ProfileFields):
    """
    Profile Update Schema - Body of the profile update endpoint
    """


class PasswordUpdate(BaseModel):
    """
    Password Update Schema - Change of password by an authenticated veterinarian

    Fields:
    - current_password: Password currently in use
    - new_password: Replacement password
    """
    model_config = ConfigDict(populate_by_name=True)

    current_password: Password = Field(alias="passwordactual")
    new_password: Password = Field(alias="passwordnuevo")
