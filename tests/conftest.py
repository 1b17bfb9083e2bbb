"""Shared fixtures

Every test gets its own SQLite database file and a freshly built application.
"""
import base64
from datetime import datetime, timedelta

import pytest
from argon2 import PasswordHasher
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.services import AttendanceService, CredentialService

TEST_SECRET = base64.b64encode(b"attendance-ledger-test-secret-0123456789").decode()
DEFAULT_PASSWORD = "correct horse battery staple"


class FakeClock:
    """Mutable clock for services that take a clock callable"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


def fast_password_hasher() -> PasswordHasher:
    return PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'ledger.db'}",
        SESSION_SECRET=TEST_SECRET,
        RATE_LIMIT_ENABLED=False,
        LOGGING_ENABLED=False,
        ENCRYPTION_ENABLED=False,
        PASSWORD_HASH_TIME_COST=1,
        PASSWORD_HASH_MEMORY_COST=8,
        PASSWORD_HASH_PARALLELISM=1,
    )


@pytest.fixture
def local_clock() -> FakeClock:
    """Local wall-clock used by the attendance service: 29 Feb 2024, 09:15:30"""
    return FakeClock(datetime(2024, 2, 29, 9, 15, 30, 123456))


@pytest.fixture
def app(settings, local_clock):
    application = create_app(settings)
    application.state.attendance_service = AttendanceService(clock=local_clock)
    yield application
    application.state.engine.dispose()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def credential_service() -> CredentialService:
    return CredentialService(fast_password_hasher())


def register(client, email: str, password: str = DEFAULT_PASSWORD):
    return client.post("/api/v1/register", json={"email": email, "password": password})


def login(client, email: str, password: str = DEFAULT_PASSWORD):
    return client.post("/api/v1/login", json={"email": email, "password": password})


def auth_headers(client, email: str, password: str = DEFAULT_PASSWORD) -> dict:
    """Register (if needed) and log in, returning the Authorization header"""
    register(client, email, password)
    response = login(client, email, password)
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['data']['access_token']}"}
