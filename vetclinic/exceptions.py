"""
Global exception handlers and custom exception classes.
"""
import logging
import re

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

# Set up logging
logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Sorry, something went wrong, please try again later"

# Largest key a 64-bit INTEGER column can store
MAX_RECORD_ID = 2 ** 63 - 1


class AppException(Exception):
    """
    Base exception class for application-specific exceptions.
    """
    def __init__(self, status_code: int, detail: str):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


class ValidationFailedException(AppException):
    """Exception raised when a required field is missing or inconsistent."""
    def __init__(self, detail: str = "Sorry, you must fill in all fields"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class UnauthorizedException(AppException):
    """Exception raised when the session token is missing or cannot be verified."""
    def __init__(self, detail: str = "Invalid token format"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class ForbiddenException(AppException):
    """Exception raised when the caller acts on a record it does not own."""
    def __init__(self, detail: str = "Sorry, you cannot modify this record"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFoundException(AppException):
    """Exception raised when an id is malformed or no such record exists."""
    def __init__(self, detail: str = "Sorry, the record does not exist"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictException(AppException):
    """Exception raised when a unique value is already taken."""
    def __init__(self, detail: str = "Sorry, the email is already registered"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class UpstreamFailureException(AppException):
    """Exception raised when the mail or persistence collaborator fails."""
    def __init__(self, detail: str = GENERIC_ERROR_MESSAGE):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


def parse_record_id(raw_id: str, detail: str = "Sorry, it must be a valid id") -> int:
    """
    Convert a path id into a primary key.

    Raises:
        NotFoundException: If the id is not a positive integer within the key range
    """
    if not re.fullmatch(r"[0-9]+", raw_id):
        raise NotFoundException(detail)
    record_id = int(raw_id)
    if record_id == 0 or record_id > MAX_RECORD_ID:
        raise NotFoundException(detail)
    return record_id


async def app_exception_handler(request: Request, exc: AppException):
    """
    Handler for application-specific exceptions.

    Args:
        request: The request that caused the exception
        exc: The exception instance

    Returns:
        JSONResponse: Standardized error response
    """
    if exc.status_code >= 500:
        logger.error(f"Application error on {request.url.path}: {exc.detail}")
    else:
        logger.info(f"Request rejected on {request.url.path}: {exc.status_code} {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"msg": exc.detail}
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Handler for routing errors raised by the framework, such as unknown paths
    and unsupported methods.
    """
    logger.info(f"HTTP error on {request.url.path}: {exc.status_code} {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"msg": exc.detail},
        headers=exc.headers
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for request validation exceptions.

    Missing or blank fields are reported as a 400 with the validation details.
    """
    logger.info(f"Validation error on {request.url.path}: {exc.errors()}")
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "msg": "Sorry, you must fill in all fields",
            "errors": errors
        }
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handler for persistence failures that escaped the service layer."""
    logger.error(f"Database error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"msg": GENERIC_ERROR_MESSAGE}
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Last-resort handler so that every request gets a response."""
    logger.exception(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"msg": GENERIC_ERROR_MESSAGE}
    )


# Register exception handlers with FastAPI app
def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
