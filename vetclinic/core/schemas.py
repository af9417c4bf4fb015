"""
Shared Pydantic types used by the request and response schemas.
"""
from typing import Annotated

from pydantic import BaseModel, EmailStr, AfterValidator, StringConstraints

# Required text field: surrounding blanks are dropped and an empty value is rejected
RequiredStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# bcrypt only hashes the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def _check_password_length(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")
    return value


# Passwords are kept verbatim, only emptiness and excess length are rejected
Password = Annotated[str, StringConstraints(min_length=1), AfterValidator(_check_password_length)]

# Email addresses are stored and compared in lowercase
NormalizedEmail = Annotated[EmailStr, AfterValidator(lambda value: value.lower())]


class MessageResponse(BaseModel):
    """
    Message Response Schema - Body of every command endpoint

    Fields:
    - msg: Human readable outcome
    """
    msg: str
