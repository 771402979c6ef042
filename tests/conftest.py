"""
tests/conftest.py -- Shared test fixtures for FleetGate tests.

This module provides:
  - FakeClock: a settable clock for TokenAuthority expiry tests
  - authority / credential_store: components built with test constants
  - _patch_lifespan(): wires test components into app.state, bypassing real startup
  - api_client: TestClient with a valid bearer token, writes gated
  - open_client: TestClient with REQUIRE_AUTH_FOR_WRITES behaviour switched off

The vehicle store is rebuilt for every test so create/update/delete tests do
not see each other's changes.

DEBUG and BCRYPT_ROUNDS must be set before any api/auth/core import so
get_settings() auto-generates SECRET_KEY in dev mode (instead of raising)
and bcrypt hashing stays fast.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import asynccontextmanager

# CRITICAL: set before any project import.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient

from api.main import app
from auth.store import CredentialStore
from auth.tokens import TokenAuthority
from fleet.gate import ResourceGate
from fleet.store import DEFAULT_VEHICLES, VehicleStore

TEST_SECRET = "test-secret-key-with-at-least-32-characters"
TEST_ISSUER = "fleetgate-test"
TEST_AUDIENCE = "fleetgate-test-clients"
TEST_CREDENTIALS = {"admin": "1234", "usuario": "abcd"}


class FakeClock:
    """Callable clock whose time only moves when a test moves it."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def authority(clock: FakeClock) -> TokenAuthority:
    return TokenAuthority(TEST_SECRET, TEST_ISSUER, TEST_AUDIENCE, ttl_seconds=3600, clock=clock)


@pytest.fixture(scope="session")
def credential_store() -> CredentialStore:
    """Session-scoped: the store is immutable and bcrypt hashing is the slow part."""
    return CredentialStore.from_plaintext(TEST_CREDENTIALS, rounds=4)


# ---------------------------------------------------------------------------
# API clients
# ---------------------------------------------------------------------------


def _patch_lifespan(credential_store: CredentialStore, authority: TokenAuthority, gate: ResourceGate):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.credential_store = credential_store
        app.state.token_authority = authority
        app.state.vehicle_store = gate.store
        app.state.gate = gate
        yield

    return test_lifespan


def _client(credential_store: CredentialStore, require_auth: bool) -> Generator[tuple[TestClient, str], None, None]:
    authority = TokenAuthority(TEST_SECRET, TEST_ISSUER, TEST_AUDIENCE, ttl_seconds=3600)
    gate = ResourceGate(VehicleStore(DEFAULT_VEHICLES), authority, require_auth=require_auth)
    token = authority.issue("admin")

    app.router.lifespan_context = _patch_lifespan(credential_store, authority, gate)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield client, token


@pytest.fixture
def api_client(credential_store: CredentialStore) -> Generator[tuple[TestClient, str], None, None]:
    """Yield (client, token) with writes requiring a bearer token."""
    yield from _client(credential_store, require_auth=True)


@pytest.fixture
def open_client(credential_store: CredentialStore) -> Generator[tuple[TestClient, str], None, None]:
    """Yield (client, token) with token checks on writes switched off."""
    yield from _client(credential_store, require_auth=False)
