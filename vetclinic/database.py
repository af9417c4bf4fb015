"""
Database connection and session management.
Provides SQLAlchemy engine and session factories, and the base class for models.
"""
import logging

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .exceptions import UpstreamFailureException

# Set up logging
logger = logging.getLogger(__name__)

# Create base class for declarative models
Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """
    Create the SQLAlchemy engine for a connection string.

    SQLite connections are shared across the threads of the request
    executor, so the same-thread check is disabled for them.
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create the session factory bound to an engine."""
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db(request: Request):
    """
    Database dependency - Creates and yields a database session.

    The session is automatically closed after the request is processed,
    even if an exception occurs during request handling.

    Yields:
        SQLAlchemy Session: Database session
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def save(db: Session, instance) -> None:
    """
    Persist a new or modified record and refresh it.

    Raises:
        IntegrityError: If a unique constraint is violated, after rollback
        UpstreamFailureException: If the database fails for any other reason
    """
    db.add(instance)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error saving {instance!r}: {str(e)}")
        raise UpstreamFailureException() from e
    db.refresh(instance)
