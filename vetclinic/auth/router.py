"""
Authentication routes for the veterinary clinic.

Registration, email confirmation, login and password recovery. None of
these routes require a session token.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..config import Settings, get_settings
from ..core.mail import Mailer, get_mailer
from ..core.schemas import MessageResponse
from ..database import get_db
from .schemas import EmailRequest, Login, LoginResponse, NewPassword, Registration
from .service import (
    check_recovery_token,
    confirm_email,
    login,
    register_veterinarian,
    request_password_recovery,
    resend_confirmation,
    set_new_password,
)

router = APIRouter(tags=["Authentication"])


@router.post("/registro", response_model=MessageResponse, status_code=status.HTTP_200_OK,
             summary="Register a veterinarian")
async def register_route(
    registration: Registration,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    """
    Create an unconfirmed account and email the confirmation link.
    """
    return await register_veterinarian(db, registration, mailer)


@router.get("/confirmar/{token}", response_model=MessageResponse, summary="Confirm an account")
def confirm_email_route(token: str, db: Session = Depends(get_db)):
    """
    Confirm the email address with the token sent at registration.
    """
    return confirm_email(db, token)


@router.post("/reenviar-confirmacion", response_model=MessageResponse,
             summary="Resend the confirmation email")
async def resend_confirmation_route(
    data: EmailRequest,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    return await resend_confirmation(db, data.email, mailer)


@router.post("/login", response_model=LoginResponse, summary="Log in")
def login_route(
    credentials: Login,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Exchange email and password for a session token.

    Returns:
        LoginResponse with the session token and the public profile
    """
    return login(db, credentials, settings)


@router.post("/recuperar-password", response_model=MessageResponse,
             summary="Request a password reset")
async def request_password_recovery_route(
    data: EmailRequest,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    """
    Email a password reset link to a registered veterinarian.
    """
    return await request_password_recovery(db, data.email, mailer)


@router.get("/recuperar-password/{token}", response_model=MessageResponse,
            summary="Check a password reset token")
def check_recovery_token_route(token: str, db: Session = Depends(get_db)):
    return check_recovery_token(db, token)


@router.post("/nuevo-password/{token}", response_model=MessageResponse,
             summary="Set a new password")
async def new_password_route(
    token: str,
    data: NewPassword,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    """
    Replace the password using a pending reset token.
    """
    return await set_new_password(db, token, data, mailer)
