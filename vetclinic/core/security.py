"""
Core security utilities for authentication and password handling.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
import logging
import secrets

from jose import jwt, JWTError
from passlib.context import CryptContext

from ..config import Settings

# Set up logging
logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        str: Hashed password
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password to compare against

    Returns:
        bool: True if password matches hash
    """
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(veterinarian_id: int, settings: Settings,
                        expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed session token bound to a veterinarian.

    Args:
        veterinarian_id: Identity carried in the ``id`` claim
        settings: Application settings holding the key and algorithm
        expires_delta: Token lifetime, defaults to the configured one

    Returns:
        str: Encoded JWT token
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode = {"id": veterinarian_id, "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def verify_access_token(token: str, settings: Settings) -> Optional[Dict[str, Any]]:
    """
    Verify and decode a session token.

    Expired, malformed and badly signed tokens are not distinguished.

    Returns:
        Dict containing token payload if valid, None if invalid
    """
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        logger.debug(f"Session token rejected: {e}")
        return None


def generate_single_use_token() -> str:
    """
    Generate an opaque token for email confirmation or password recovery.

    Returns:
        str: URL-safe random token
    """
    return secrets.token_urlsafe(32)
