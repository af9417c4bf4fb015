"""
Authentication Schemas - Pydantic models for the credential lifecycle endpoints.
"""
from pydantic import BaseModel, ConfigDict, Field

from ..core.schemas import NormalizedEmail, Password
from ..veterinarians.models import Veterinarian
from ..veterinarians.schemas import ProfileFields, VeterinarianProfile


class Registration(ProfileFields):
    """
    Registration Schema - Used when a veterinarian signs up

    Extends the profile fields with:
    - password: Plain text password (hashed before storage)
    """
    password: Password


class Login(BaseModel):
    """
    Login Schema - Used for authentication

    Fields:
    - email: Veterinarian's email address
    - password: Plain text password
    """
    email: NormalizedEmail
    password: Password


class EmailRequest(BaseModel):
    """
    Email Request Schema - Password recovery and confirmation resend requests
    """
    email: NormalizedEmail


class NewPassword(BaseModel):
    """
    New Password Schema - Password chosen with a reset token

    Fields:
    - password: New password
    - confirm_password: Repetition of the new password
    """
    model_config = ConfigDict(populate_by_name=True)

    password: Password
    confirm_password: Password = Field(alias="confirmpassword")


class LoginResponse(VeterinarianProfile):
    """
    Login Response Schema - Session token plus the public profile
    """
    token: str

    @classmethod
    def for_session(cls, veterinarian: Veterinarian, token: str) -> "LoginResponse":
        profile = VeterinarianProfile.from_model(veterinarian)
        return cls(token=token, **profile.model_dump())
