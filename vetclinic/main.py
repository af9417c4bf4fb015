"""
Main FastAPI application entry point.
Configures the application, middleware, and includes routers.
"""
from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .auth.router import router as auth_router
from .config import Settings, load_settings
from .core.mail import Mailer
from .core.middleware import setup_middlewares
from .database import Base, create_db_engine, create_session_factory
from .exceptions import register_exception_handlers
from .patients.router import router as patients_router
from .veterinarians.router import router as veterinarians_router

# Import all models here so the tables are known to the metadata
from .patients.models import Patient  # noqa: F401
from .veterinarians.models import Veterinarian  # noqa: F401

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create database tables if they don't exist
    Base.metadata.create_all(bind=app.state.engine)
    logger.info("Starting Veterinary Clinic API...")
    yield
    app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application around one settings instance.

    Args:
        settings: Application settings, read from the environment when omitted

    Returns:
        FastAPI: Configured application
    """
    settings = settings or load_settings()

    # Configure logging
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title="Veterinary Clinic API",
        description="API for veterinarians and the patients under their care",
        version="1.0.0",
        docs_url="/api/v1/docs",
        openapi_url="/api/v1.docs.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = create_db_engine(settings.database_url)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.mailer = Mailer(settings)

    # Register exception handlers
    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Setup custom middleware
    setup_middlewares(app)

    # Include routers
    app.include_router(auth_router, prefix="/api")
    app.include_router(veterinarians_router, prefix="/api")
    app.include_router(patients_router, prefix="/api")

    @app.get("/")
    def root():
        """
        Root endpoint.

        Returns:
            dict: Welcome message and API version
        """
        return {"message": "Welcome to the Veterinary Clinic API", "version": app.version}

    @app.get("/health")
    async def health_check():
        """
        Health check endpoint for monitoring.
        """
        return {"status": "healthy"}

    return app
