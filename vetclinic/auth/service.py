"""
Authentication service layer for the credential lifecycle.

Token slot transitions handled here:
- registration and confirmation resend store a confirmation token
- confirmation consumes it and marks the account confirmed
- a recovery request overwrites the slot with a reset token
- a new password submission consumes the reset token
"""
import logging
from typing import Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import Settings
from ..core.mail import Mailer, MailDeliveryError
from ..core.security import (
    create_access_token,
    generate_single_use_token,
    hash_password,
    verify_password,
)
from ..database import save
from ..exceptions import ConflictException, ValidationFailedException
from ..veterinarians.models import CONFIRMATION, PASSWORD_RESET, Veterinarian
from .exceptions import (
    AlreadyConfirmedOrInvalidException,
    InvalidCredentialsException,
    InvalidTokenException,
    NotRegisteredException,
    NotVerifiedException,
    PasswordMismatchException,
)
from .schemas import Login, LoginResponse, NewPassword, Registration

# Set up logging
logger = logging.getLogger(__name__)


def find_by_email(db: Session, email: str) -> Optional[Veterinarian]:
    return db.query(Veterinarian).filter(Veterinarian.email == email).first()


def find_by_token(db: Session, token: str) -> Optional[Veterinarian]:
    return db.query(Veterinarian).filter(Veterinarian.token == token).first()


def _require_token(token: str) -> str:
    if not token or not token.strip():
        raise ValidationFailedException("Sorry, account cannot be validated")
    return token


async def register_veterinarian(db: Session, data: Registration, mailer: Mailer) -> Dict[str, str]:
    """
    Register a new, unconfirmed veterinarian and email the confirmation link.

    The confirmation email is sent before the record is written. A delivery
    failure is logged and the account is still created, so that the owner
    can ask for the link again.

    Args:
        db: Database session
        data: Registration data
        mailer: Mailer used for the confirmation email

    Returns:
        Dict with the outcome message

    Raises:
        ConflictException: If the email is already registered
    """
    logger.info(f"Registration attempt for email: {data.email}")

    if find_by_email(db, data.email):
        logger.warning(f"Registration failed: Email {data.email} already registered")
        raise ConflictException()

    veterinarian = Veterinarian(
        email=data.email,
        name=data.name,
        surname=data.surname,
        address=data.address,
        phone=data.phone,
        password_hash=hash_password(data.password),
        token=generate_single_use_token(),
        token_purpose=CONFIRMATION,
        confirmed=False,
    )

    email_sent = True
    try:
        await mailer.send_confirmation(veterinarian.email, veterinarian.token)
    except MailDeliveryError:
        email_sent = False
        logger.error(f"Confirmation email to {data.email} failed, creating the account anyway")

    try:
        save(db, veterinarian)
    except IntegrityError:
        logger.warning(f"Registration failed: Email {data.email} registered concurrently")
        raise ConflictException()
    logger.info(f"Veterinarian account created: {veterinarian.id}")

    if not email_sent:
        return {"msg": "Account created but the confirmation email could not be sent, "
                       "please request a new one"}
    return {"msg": "Check your email to confirm your account"}


def confirm_email(db: Session, token: str) -> Dict[str, str]:
    """
    Confirm an account with the token emailed at registration.

    Raises:
        ValidationFailedException: If the token is blank
        AlreadyConfirmedOrInvalidException: If no record holds the token as a
            confirmation token
    """
    _require_token(token)
    veterinarian = find_by_token(db, token)
    if not veterinarian or not veterinarian.holds_token(token, CONFIRMATION):
        raise AlreadyConfirmedOrInvalidException()

    veterinarian.confirm()
    save(db, veterinarian)
    logger.info(f"Email confirmed for veterinarian {veterinarian.id}")
    return {"msg": "Token confirmed, you can now log in"}


async def resend_confirmation(db: Session, email: str, mailer: Mailer) -> Dict[str, str]:
    """
    Issue a fresh confirmation token for an unconfirmed account.

    Raises:
        NotRegisteredException: If the email is unknown
        ConflictException: If the account is already confirmed
        MailDeliveryError: If the email cannot be sent; nothing is stored
    """
    veterinarian = find_by_email(db, email)
    if not veterinarian:
        raise NotRegisteredException()
    if veterinarian.confirmed:
        raise ConflictException("The account has already been confirmed")

    token = generate_single_use_token()
    await mailer.send_confirmation(veterinarian.email, token)
    veterinarian.issue_token(token, CONFIRMATION)
    save(db, veterinarian)
    logger.info(f"Confirmation token reissued for veterinarian {veterinarian.id}")
    return {"msg": "Check your email to confirm your account"}


def login(db: Session, credentials: Login, settings: Settings) -> LoginResponse:
    """
    Authenticate a veterinarian and issue a session token.

    Raises:
        NotRegisteredException: If the email is unknown
        NotVerifiedException: If the account is not confirmed, whatever the password
        InvalidCredentialsException: If the password does not match
    """
    veterinarian = find_by_email(db, credentials.email)
    if not veterinarian:
        logger.warning(f"Login failed: {credentials.email} is not registered")
        raise NotRegisteredException()

    if not veterinarian.confirmed:
        logger.warning(f"Login failed: {credentials.email} is not confirmed")
        raise NotVerifiedException()

    if not verify_password(credentials.password, veterinarian.password_hash):
        logger.warning(f"Login failed: Invalid credentials for {credentials.email}")
        raise InvalidCredentialsException()

    token = create_access_token(veterinarian.id, settings)
    logger.info(f"Login successful: Veterinarian {veterinarian.id}")
    return LoginResponse.for_session(veterinarian, token)


async def request_password_recovery(db: Session, email: str, mailer: Mailer) -> Dict[str, str]:
    """
    Store a reset token and email the recovery link.

    Any pending token is overwritten.

    Raises:
        NotRegisteredException: If the email is unknown
        MailDeliveryError: If the email cannot be sent; nothing is stored
    """
    veterinarian = find_by_email(db, email)
    if not veterinarian:
        logger.warning(f"Password recovery failed: {email} is not registered")
        raise NotRegisteredException()

    token = generate_single_use_token()
    await mailer.send_password_recovery(veterinarian.email, token)
    veterinarian.issue_token(token, PASSWORD_RESET)
    save(db, veterinarian)
    logger.info(f"Password recovery requested for veterinarian {veterinarian.id}")
    return {"msg": "Check your email to reset your account"}


def check_recovery_token(db: Session, token: str) -> Dict[str, str]:
    """
    Check that a reset token is pending. The token is not consumed.

    Raises:
        InvalidTokenException: If no record holds the token as a reset token
    """
    _require_token(token)
    veterinarian = find_by_token(db, token)
    if not veterinarian or not veterinarian.holds_token(token, PASSWORD_RESET):
        raise InvalidTokenException()
    return {"msg": "Token confirmed, you can now create your new password"}


async def set_new_password(db: Session, token: str, data: NewPassword,
                           mailer: Mailer) -> Dict[str, str]:
    """
    Replace the password of the record holding a reset token.

    The token is consumed. The password-changed notification is best effort.

    Raises:
        PasswordMismatchException: If the password and its confirmation differ
        InvalidTokenException: If no record holds the token as a reset token
    """
    _require_token(token)
    if data.password != data.confirm_password:
        raise PasswordMismatchException()

    veterinarian = find_by_token(db, token)
    if not veterinarian or not veterinarian.holds_token(token, PASSWORD_RESET):
        raise InvalidTokenException()

    veterinarian.clear_token()
    veterinarian.password_hash = hash_password(data.password)
    save(db, veterinarian)
    logger.info(f"Password reset completed for veterinarian {veterinarian.id}")

    try:
        await mailer.send_password_changed(veterinarian.email, veterinarian.name)
    except MailDeliveryError:
        logger.warning(f"Password changed notification to {veterinarian.email} failed")

    return {"msg": "Congratulations, you can now log in with your new password"}
