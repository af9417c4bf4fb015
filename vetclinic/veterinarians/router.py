"""
Veterinarian Router - API endpoints for the authenticated veterinarian's profile.
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth.dependencies import AuthenticatedVeterinarian, get_current_veterinarian
from ..core.mail import Mailer, get_mailer
from ..core.schemas import MessageResponse
from ..database import get_db
from .schemas import PasswordUpdate, ProfileUpdate, VeterinarianProfile
from .service import get_veterinarian, list_veterinarians, update_password, update_profile

router = APIRouter(tags=["Veterinarians"])


@router.get("/perfil", response_model=VeterinarianProfile)
def get_my_profile(current: AuthenticatedVeterinarian = Depends(get_current_veterinarian)):
    """
    Get the profile of the authenticated veterinarian.
    """
    return current


@router.get("/veterinarios", response_model=List[VeterinarianProfile])
def list_veterinarians_route(
    db: Session = Depends(get_db),
    current: AuthenticatedVeterinarian = Depends(get_current_veterinarian),
):
    return list_veterinarians(db)


# Registered before /veterinario/{veterinarian_id} so the literal path wins
@router.put("/veterinario/actualizarpassword", response_model=MessageResponse)
async def update_my_password(
    data: PasswordUpdate,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
    current: AuthenticatedVeterinarian = Depends(get_current_veterinarian),
):
    """
    Change the password of the authenticated veterinarian.

    The current password must be given again.
    """
    return await update_password(db, current.id, data, mailer)


@router.get("/veterinario/{veterinarian_id}", response_model=VeterinarianProfile)
def get_veterinarian_route(
    veterinarian_id: str,
    db: Session = Depends(get_db),
    current: AuthenticatedVeterinarian = Depends(get_current_veterinarian),
):
    """
    Get the public profile of a veterinarian by id.
    """
    return VeterinarianProfile.from_model(get_veterinarian(db, veterinarian_id))


@router.put("/veterinario/{veterinarian_id}", response_model=MessageResponse)
def update_profile_route(
    veterinarian_id: str,
    data: ProfileUpdate,
    db: Session = Depends(get_db),
    current: AuthenticatedVeterinarian = Depends(get_current_veterinarian),
):
    """
    Update the authenticated veterinarian's profile.

    Changing the email to one already registered is rejected.
    """
    return update_profile(db, veterinarian_id, current.id, data)
