"""Unit tests for core/config.py -- Settings validation and env parsing.

Settings is constructed directly here (not via get_settings) so each test
sees only the environment it sets up.
"""

import pytest

from core.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SECRET_KEY", "CREDENTIALS", "TOKEN_EXPIRE_SECONDS", "REQUIRE_AUTH_FOR_WRITES"):
        monkeypatch.delenv(name, raising=False)


def test_debug_generates_secret_key():
    settings = Settings(debug=True)
    assert len(settings.secret_key) >= 32


def test_production_requires_secret_key():
    with pytest.raises(ValueError, match="SECRET_KEY is required"):
        Settings(debug=False)


def test_short_secret_key_rejected():
    with pytest.raises(ValueError, match="at least 32"):
        Settings(debug=True, secret_key="too-short")


def test_defaults():
    settings = Settings(debug=True)
    assert settings.token_expire_seconds == 3600
    assert settings.require_auth_for_writes is True
    assert settings.credentials == {"admin": "1234", "usuario": "abcd"}
    assert settings.token_issuer != ""
    assert settings.token_audience != ""


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "k" * 40)
    monkeypatch.setenv("CREDENTIALS", '{"ops": "s3cret"}')
    monkeypatch.setenv("TOKEN_EXPIRE_SECONDS", "60")
    monkeypatch.setenv("REQUIRE_AUTH_FOR_WRITES", "false")
    settings = Settings(debug=False)
    assert settings.secret_key == "k" * 40
    assert settings.credentials == {"ops": "s3cret"}
    assert settings.token_expire_seconds == 60
    assert settings.require_auth_for_writes is False


def test_non_positive_expiry_rejected():
    with pytest.raises(ValueError):
        Settings(debug=True, token_expire_seconds=0)
