"""
Veterinarian Service - Business logic for profile management.
"""
from typing import Dict, List
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.mail import Mailer, MailDeliveryError
from ..core.security import hash_password, verify_password
from ..database import save
from ..exceptions import ConflictException, ForbiddenException, NotFoundException, parse_record_id
from ..auth.exceptions import InvalidCredentialsException
from .models import Veterinarian
from .schemas import PasswordUpdate, ProfileUpdate, VeterinarianProfile

# Set up logging
logger = logging.getLogger(__name__)


def get_veterinarian(db: Session, raw_id: str) -> Veterinarian:
    """
    Get a veterinarian by the id given in a path.

    Args:
        db: Database session
        raw_id: Id as received in the URL

    Returns:
        Veterinarian: Database record

    Raises:
        NotFoundException: If the id is malformed or no veterinarian has it
    """
    veterinarian_id = parse_record_id(raw_id)
    veterinarian = db.query(Veterinarian).filter(Veterinarian.id == veterinarian_id).first()
    if not veterinarian:
        raise NotFoundException(f"Sorry, there is no vet {raw_id}")
    return veterinarian


def list_veterinarians(db: Session) -> List[VeterinarianProfile]:
    """List the public profiles of all active veterinarians."""
    veterinarians = (
        db.query(Veterinarian)
        .filter(Veterinarian.is_active.is_(True))
        .order_by(Veterinarian.id)
        .all()
    )
    return [VeterinarianProfile.from_model(veterinarian) for veterinarian in veterinarians]


def update_profile(db: Session, raw_id: str, current_id: int, data: ProfileUpdate) -> Dict[str, str]:
    """
    Overwrite the mutable profile fields of a veterinarian.

    Args:
        db: Database session
        raw_id: Id of the profile to update, as received in the URL
        current_id: Id of the authenticated veterinarian
        data: New profile fields

    Raises:
        NotFoundException: If the id is malformed or unknown
        ForbiddenException: If the profile belongs to someone else
        ConflictException: If the new email is used by another veterinarian
    """
    veterinarian = get_veterinarian(db, raw_id)
    if veterinarian.id != current_id:
        logger.warning(f"Veterinarian {current_id} tried to update profile {veterinarian.id}")
        raise ForbiddenException("Sorry, you can only update your own profile")

    if veterinarian.email != data.email:
        taken = db.query(Veterinarian).filter(
            Veterinarian.email == data.email,
            Veterinarian.id != veterinarian.id,
        ).first()
        if taken:
            raise ConflictException()

    veterinarian.name = data.name
    veterinarian.surname = data.surname
    veterinarian.address = data.address
    veterinarian.phone = data.phone
    veterinarian.email = data.email
    try:
        save(db, veterinarian)
    except IntegrityError:
        raise ConflictException()

    logger.info(f"Profile updated for veterinarian {veterinarian.id}")
    return {"msg": "Profile updated successfully"}


async def update_password(db: Session, current_id: int, data: PasswordUpdate,
                          mailer: Mailer) -> Dict[str, str]:
    """
    Change the password of the authenticated veterinarian.

    Raises:
        NotFoundException: If the record disappeared after authentication
        InvalidCredentialsException: If the current password is wrong
    """
    veterinarian = db.query(Veterinarian).filter(Veterinarian.id == current_id).first()
    if not veterinarian:
        raise NotFoundException(f"Sorry, there is no vet {current_id}")

    if not verify_password(data.current_password, veterinarian.password_hash):
        logger.warning(f"Password update failed for veterinarian {current_id}: wrong current password")
        raise InvalidCredentialsException("Sorry, the current password is not correct")

    veterinarian.password_hash = hash_password(data.new_password)
    save(db, veterinarian)
    logger.info(f"Password updated for veterinarian {current_id}")

    try:
        await mailer.send_password_changed(veterinarian.email, veterinarian.name)
    except MailDeliveryError:
        logger.warning(f"Password changed notification to {veterinarian.email} failed")

    return {"msg": "Password updated successfully"}
