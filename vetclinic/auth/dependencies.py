"""
FastAPI dependencies for authentication.

The caller's identity is resolved from the ``Authorization: Bearer`` header
into an immutable value built for the current request only.
"""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ConfigDict
from sqlalchemy.orm import Session

from ..config import Settings, get_settings
from ..core.security import verify_access_token
from ..database import get_db
from ..exceptions import UnauthorizedException
from ..veterinarians.models import Veterinarian
from ..veterinarians.schemas import VeterinarianProfile

# Missing headers are reported by get_current_veterinarian, not by the scheme
bearer_scheme = HTTPBearer(auto_error=False)


class AuthenticatedVeterinarian(VeterinarianProfile):
    """Identity of the veterinarian making the current request."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)


def get_current_veterinarian(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthenticatedVeterinarian:
    """
    Get the authenticated veterinarian from the session token.

    Args:
        credentials: Bearer credentials from the Authorization header
        db: Database session
        settings: Application settings

    Returns:
        AuthenticatedVeterinarian: Identity and public profile of the caller

    Raises:
        UnauthorizedException: If the header is missing or the token cannot be verified
    """
    if credentials is None:
        raise UnauthorizedException("Sorry, you must provide a token")

    payload = verify_access_token(credentials.credentials, settings)
    veterinarian_id = payload.get("id") if payload else None
    if not isinstance(veterinarian_id, int):
        raise UnauthorizedException()

    veterinarian = db.query(Veterinarian).filter(
        Veterinarian.id == veterinarian_id,
        Veterinarian.is_active.is_(True),
    ).first()
    if not veterinarian:
        raise UnauthorizedException()

    return AuthenticatedVeterinarian.from_model(veterinarian)
