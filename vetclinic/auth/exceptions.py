"""
Authentication-specific exceptions.
"""
from fastapi import status

from ..exceptions import AppException, NotFoundException, ValidationFailedException


class InvalidCredentialsException(AppException):
    """Exception raised when a password does not match the stored hash."""
    def __init__(self, detail: str = "Sorry, the password is not correct"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class NotVerifiedException(AppException):
    """Exception raised when an unconfirmed account tries to log in."""
    def __init__(self, detail: str = "Sorry, you need to verify your account"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotRegisteredException(NotFoundException):
    """Exception raised when no veterinarian uses the given email."""
    def __init__(self, detail: str = "Sorry, the user is not registered"):
        super().__init__(detail=detail)


class AlreadyConfirmedOrInvalidException(NotFoundException):
    """
    Exception raised when no record holds a confirmation token.

    A consumed token and one that was never issued look the same.
    """
    def __init__(self, detail: str = "The account has already been confirmed"):
        super().__init__(detail=detail)


class InvalidTokenException(NotFoundException):
    """Exception raised when a reset token does not match any record."""
    def __init__(self, detail: str = "Sorry, account cannot be validated"):
        super().__init__(detail=detail)


class PasswordMismatchException(ValidationFailedException):
    """Exception raised when a password and its confirmation differ."""
    def __init__(self, detail: str = "Sorry, passwords don't match"):
        super().__init__(detail=detail)
