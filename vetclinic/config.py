"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from functools import lru_cache
from typing import List

from fastapi import Request
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.

    Attributes:
        database_url: SQLAlchemy connection string
        secret_key: Secret key for JWT session token signing
        algorithm: Algorithm used for JWT encoding (typically HS256)
        access_token_expire_minutes: Session token lifetime in minutes

        # Email settings
        mail_username: SMTP server username
        mail_password: SMTP server password
        mail_from: Sender email address
        mail_port: SMTP server port
        mail_server: SMTP server hostname
        mail_starttls: Whether to use STARTTLS
        mail_ssl_tls: Whether to use SSL/TLS
        use_credentials: Whether to use credentials for SMTP
        validate_certs: Whether to validate certificates
        mail_suppress_send: Build messages without contacting the SMTP server

        # Frontend settings
        frontend_url: Base URL used in confirmation and recovery links
        cors_origins: Origins allowed by the CORS middleware

        log_level: Root logging level
    """
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Database settings
    database_url: str = "sqlite:///./vetclinic.db"

    # JWT settings
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # Email settings
    mail_username: str = ""
    mail_password: str = ""
    mail_from: str = "no-reply@vetclinic.example.com"
    mail_port: int = 587
    mail_server: str = "localhost"
    mail_starttls: bool = True
    mail_ssl_tls: bool = False
    use_credentials: bool = True
    validate_certs: bool = True
    mail_suppress_send: bool = False

    # Frontend settings
    frontend_url: str = "http://localhost:3000"
    cors_origins: List[str] = ["http://localhost:3000"]

    log_level: str = "INFO"


@lru_cache
def load_settings() -> Settings:
    """Build the process settings once from the environment."""
    return Settings()


def get_settings(request: Request) -> Settings:
    """
    Settings dependency - returns the settings the application was created with.

    Args:
        request: Incoming request, used to reach the application state

    Returns:
        Settings: Application settings
    """
    return request.app.state.settings
