"""Settings validation at startup"""
import base64

import pytest
from pydantic import ValidationError

from app.core.config import Settings
from tests.conftest import TEST_SECRET


def make_settings(monkeypatch, **overrides) -> Settings:
    for name in ("SESSION_SECRET", "SESSION_ALGORITHM", "SESSION_TTL_HOURS"):
        monkeypatch.delenv(name, raising=False)
    values = {"DATABASE_URL": "sqlite://", "SESSION_SECRET": TEST_SECRET}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_defaults(monkeypatch):
    settings = make_settings(monkeypatch)

    assert settings.SESSION_ALGORITHM == "HS256"
    assert settings.SESSION_TTL_HOURS == 6
    assert settings.API_PREFIX == "/api/v1"
    assert settings.session_secret_bytes == base64.b64decode(TEST_SECRET)
    assert settings.is_sqlite


def test_missing_secret(monkeypatch):
    monkeypatch.delenv("SESSION_SECRET", raising=False)

    with pytest.raises(ValidationError):
        Settings(_env_file=None, DATABASE_URL="sqlite://")


@pytest.mark.parametrize("secret", ["", "   ", "not base64!", base64.b64encode(b"short").decode()])
def test_unusable_secret(monkeypatch, secret):
    with pytest.raises(ValidationError):
        make_settings(monkeypatch, SESSION_SECRET=secret)


@pytest.mark.parametrize("hours", [5, 25])
def test_ttl_bounds(monkeypatch, hours):
    with pytest.raises(ValidationError):
        make_settings(monkeypatch, SESSION_TTL_HOURS=hours)


def test_ttl_upper_bound_accepted(monkeypatch):
    assert make_settings(monkeypatch, SESSION_TTL_HOURS=24).SESSION_TTL_HOURS == 24


@pytest.mark.parametrize("algorithm", ["none", "RS256", "hs256"])
def test_algorithm_allow_list(monkeypatch, algorithm):
    with pytest.raises(ValidationError):
        make_settings(monkeypatch, SESSION_ALGORITHM=algorithm)
