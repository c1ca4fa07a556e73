"""Shared test fixtures for the GRC dashboard test suite."""

from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from grc.app import create_app
from grc.auth import Caller
from grc.config import Settings
from grc.schemas.organization import MemberCreate, OrganizationCreate
from grc.services.organizations import add_member, create_organization
from grc.store import data_store

ALICE = "user-alice"
BOB = "user-bob"
CAROL = "user-carol"


class ScriptedOutcomeSource:
    """Deterministic outcome source; tests flip ``succeed`` or edit ``counts``."""

    def __init__(self) -> None:
        self.succeed = True
        self.counts = {
            "records_processed": 250,
            "records_updated": 20,
            "records_created": 7,
            "errors": 1,
        }
        self.calls: list[str] = []

    def connection_succeeded(self, integration: dict[str, Any]) -> bool:
        self.calls.append(f"test:{integration['id']}")
        return self.succeed

    def sync_counts(self, integration: dict[str, Any]) -> dict[str, int]:
        self.calls.append(f"sync:{integration['id']}")
        return dict(self.counts)


def _test_settings() -> Settings:
    """Return settings suitable for testing."""
    return Settings(
        environment="development",
        debug=True,
        log_format="console",
        rate_limit_default="1000/minute",
        allowed_origins="http://localhost:5173,http://localhost:3000",
    )


@pytest.fixture
def settings():
    """Test settings."""
    return _test_settings()


@pytest.fixture
def outcomes():
    """Scripted outcome source shared by the app and service-level tests."""
    return ScriptedOutcomeSource()


@pytest.fixture
def app(settings, outcomes):
    """Create a fresh FastAPI app for testing."""
    return create_app(settings, outcome_source=outcomes)


@pytest.fixture
def client(app):
    """HTTP test client."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_store():
    """Reset the global data store before each test."""
    data_store.reset()
    yield
    data_store.reset()


@pytest.fixture
def store():
    """The global data store, already reset."""
    return data_store


@pytest.fixture
def users(store):
    """Users mirrored from the auth provider."""
    store.add_user(ALICE, name="Alice Admin", email="alice@example.com")
    store.add_user(BOB, name=None, email="bob@example.com")
    store.add_user(CAROL, name="Carol Viewer", email="carol@example.com")
    return {"alice": ALICE, "bob": BOB, "carol": CAROL}


@pytest.fixture
def alice():
    return Caller(user_id=ALICE)


@pytest.fixture
def bob():
    return Caller(user_id=BOB)


@pytest.fixture
def carol():
    return Caller(user_id=CAROL)


@pytest.fixture
def auth_headers(settings):
    """Build the identity header the upstream auth provider would forward."""

    def _headers(user_id: str) -> dict[str, str]:
        return {settings.caller_header: user_id}

    return _headers


@pytest.fixture
def sample_org(store, users, alice):
    """An organization administered by Alice, with Carol as a viewer."""
    org_id = create_organization(
        store,
        alice,
        OrganizationCreate(name="ACME Corporation", description="Widgets", industry="manufacturing"),
    )
    add_member(store, alice, org_id, MemberCreate(user_id=CAROL, role="viewer"))
    return org_id


@pytest.fixture
def other_org(store, users, bob):
    """An organization Bob administers and Alice does not belong to."""
    return create_organization(store, bob, OrganizationCreate(name="Globex"))
