"""
Email delivery for account confirmation, password recovery and notifications.
Messages are sent through FastAPI-Mail using the SMTP settings of the application.
"""
from datetime import datetime
import logging

from fastapi import Request
from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType
from fastapi_mail.errors import ConnectionErrors

from ..config import Settings
from ..exceptions import UpstreamFailureException

# Set up logging
logger = logging.getLogger(__name__)

APP_NAME = "Veterinary Clinic"


class MailDeliveryError(UpstreamFailureException):
    """Exception raised when the SMTP server cannot deliver a message."""


def build_connection_config(settings: Settings) -> ConnectionConfig:
    """
    Map the application settings onto a FastAPI-Mail connection config.

    Args:
        settings: Application settings

    Returns:
        ConnectionConfig: SMTP connection configuration
    """
    return ConnectionConfig(
        MAIL_USERNAME=settings.mail_username,
        MAIL_PASSWORD=settings.mail_password,
        MAIL_FROM=settings.mail_from,
        MAIL_FROM_NAME=APP_NAME,
        MAIL_PORT=settings.mail_port,
        MAIL_SERVER=settings.mail_server,
        MAIL_STARTTLS=settings.mail_starttls,
        MAIL_SSL_TLS=settings.mail_ssl_tls,
        USE_CREDENTIALS=settings.use_credentials,
        VALIDATE_CERTS=settings.validate_certs,
        SUPPRESS_SEND=int(settings.mail_suppress_send),
    )


def _render(title: str, paragraphs: list) -> str:
    body = "\n".join(f"<p>{paragraph}</p>" for paragraph in paragraphs)
    return f"""
    <html>
        <head>
            <title>{APP_NAME} - {title}</title>
        </head>
        <body style="font-family: Arial, sans-serif; line-height: 1.6;">
            <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
                <h1>{APP_NAME}</h1>
                {body}
                <p>Best regards,<br>{APP_NAME} Team</p>
                <p style="font-size: 12px; color: #777;">
                    &copy; {datetime.now().year} {APP_NAME}. All rights reserved.
                </p>
            </div>
        </body>
    </html>
    """


class Mailer:
    """
    Sends the account lifecycle emails.

    Links point at the frontend, which forwards the token to the API.
    """

    def __init__(self, settings: Settings):
        self.frontend_url = settings.frontend_url.rstrip("/")
        self.fast_mail = FastMail(build_connection_config(settings))

    async def send_confirmation(self, email: str, token: str) -> None:
        """Send the link that confirms a new account."""
        link = f"{self.frontend_url}/confirmar/{token}"
        html = _render("Confirm your account", [
            "Thank you for registering with our clinic.",
            f'Please <a href="{link}">confirm your account</a> to be able to log in.',
            f"If the button does not work, paste this link into your browser: {link}",
            "If you did not create an account, please ignore this email.",
        ])
        await self._send(email, f"{APP_NAME} - Confirm your account", html)

    async def send_password_recovery(self, email: str, token: str) -> None:
        """Send the link that authorizes a password reset."""
        link = f"{self.frontend_url}/recuperar-password/{token}"
        html = _render("Reset your password", [
            "We received a request to reset the password of your account.",
            f'Please <a href="{link}">reset your password</a> to continue.',
            f"If the button does not work, paste this link into your browser: {link}",
            "If you did not request a password reset, please ignore this email.",
        ])
        await self._send(email, f"{APP_NAME} - Reset your password", html)

    async def send_password_changed(self, email: str, name: str) -> None:
        """Notify the owner of an account that its password was changed."""
        html = _render("Password changed", [
            f"Hello {name},",
            "This email confirms that the password of your account has been changed.",
            "If you did not make this change, please contact support immediately.",
        ])
        await self._send(email, f"{APP_NAME} - Password changed", html)

    async def _send(self, email: str, subject: str, html: str) -> None:
        message = MessageSchema(
            subject=subject,
            recipients=[email],
            body=html,
            subtype=MessageType.html,
        )
        logger.info(f"Sending '{subject}' to {email}")
        try:
            await self.fast_mail.send_message(message)
        except ConnectionErrors as e:
            logger.error(f"Failed to send '{subject}' to {email}: {e}")
            raise MailDeliveryError() from e
        logger.info(f"Email '{subject}' sent to {email}")


def get_mailer(request: Request) -> Mailer:
    """Mailer dependency - returns the mailer created at application startup."""
    return request.app.state.mailer
