"""
Test configuration for the veterinary clinic backend.
"""
from dataclasses import dataclass
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from vetclinic.config import Settings
from vetclinic.core.mail import MailDeliveryError, get_mailer
from vetclinic.database import Base, get_db
from vetclinic.main import create_app

# Test database URL
TEST_DATABASE_URL = "sqlite://"

# Create test database engine
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

REGISTRATION = {
    "email": "a@example.com",
    "password": "p1",
    "nombre": "Ana",
    "apellido": "Bravo",
    "direccion": "Av. Amazonas 123",
    "telefono": "0991112222",
}


@dataclass
class SentMail:
    kind: str
    email: str
    token: Optional[str] = None


class RecordingMailer:
    """Stands in for the SMTP mailer and keeps what would have been sent."""

    def __init__(self):
        self.sent: List[SentMail] = []
        self.fail = False

    async def send_confirmation(self, email, token):
        self._record(SentMail("confirmation", email, token))

    async def send_password_recovery(self, email, token):
        self._record(SentMail("recovery", email, token))

    async def send_password_changed(self, email, name):
        self._record(SentMail("password_changed", email))

    def last(self, kind: str) -> SentMail:
        return [mail for mail in self.sent if mail.kind == kind][-1]

    def _record(self, mail: SentMail):
        if self.fail:
            raise MailDeliveryError()
        self.sent.append(mail)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        secret_key="test-secret-key",
        database_url=TEST_DATABASE_URL,
        mail_suppress_send=True,
        frontend_url="http://frontend.example.com",
    )


@pytest.fixture(scope="function")
def db():
    """
    Create a fresh database for each test.
    """
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    # Drop tables after test
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture(scope="function")
def client(db, mailer, settings):
    """
    Create a test client with a test database session and a recording mailer.
    """
    app = create_app(settings)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mailer] = lambda: mailer

    with TestClient(app) as client:
        yield client

    app.dependency_overrides = {}


@pytest.fixture
def register(client, mailer):
    """Register a veterinarian through the API and return the confirmation token."""
    def _register(**overrides):
        body = {**REGISTRATION, **overrides}
        response = client.post("/api/registro", json=body)
        assert response.status_code == 200, response.text
        return mailer.last("confirmation").token
    return _register


@pytest.fixture
def confirmed(client, register):
    """Register and confirm the default veterinarian."""
    def _confirmed(**overrides):
        token = register(**overrides)
        assert client.get(f"/api/confirmar/{token}").status_code == 200
        return {**REGISTRATION, **overrides}
    return _confirmed


@pytest.fixture
def login_headers(client, confirmed):
    """Authorization headers for a confirmed veterinarian."""
    def _login_headers(**overrides):
        data = confirmed(**overrides)
        response = client.post("/api/login", json={"email": data["email"], "password": data["password"]})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _login_headers


@pytest.fixture
def registration():
    """Registration body of the default veterinarian."""
    return dict(REGISTRATION)
