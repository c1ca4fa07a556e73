"""Integration lifecycle — connection tests and data syncs.

No external system is contacted. Outcomes come from an ``OutcomeSource``;
``RandomOutcomeSource`` fabricates them. A real connector replaces the
outcome source and keeps the status/timestamp contract below:

* test succeeds  -> status "active", ``last_sync`` stamped
* test fails     -> status "error", ``last_sync`` untouched
* sync           -> requires status "active"; stamps ``last_sync`` only
"""

from __future__ import annotations

import random
import uuid
from typing import Any, Protocol, TypedDict

import structlog

from grc.auth import Caller
from grc.errors import InvalidState, NotFound
from grc.models.base import utcnow
from grc.schemas.enums import IntegrationStatus
from grc.schemas.integration import IntegrationCreate
from grc.services.organizations import require_caller, require_membership
from grc.store import DataStore

logger = structlog.get_logger()

CONNECTION_OK = "Connection successful"
CONNECTION_FAILED = "Connection failed - please check configuration"

# Inclusive ranges for fabricated sync counters
SYNC_RANGES = {
    "records_processed": (100, 1099),
    "records_updated": (10, 59),
    "records_created": (5, 24),
    "errors": (0, 2),
}


class SyncCounts(TypedDict):
    records_processed: int
    records_updated: int
    records_created: int
    errors: int


class OutcomeSource(Protocol):
    """Decides how a connection test or sync against an integration turns out."""

    def connection_succeeded(self, integration: dict[str, Any]) -> bool: ...

    def sync_counts(self, integration: dict[str, Any]) -> SyncCounts: ...


class RandomOutcomeSource:
    """Stand-in outcome source that fabricates results."""

    def __init__(self, success_rate: float = 0.7, rng: random.Random | None = None) -> None:
        if not 0.0 <= success_rate <= 1.0:
            raise ValueError("success_rate must be between 0 and 1")
        self.success_rate = success_rate
        self._rng = rng or random.Random()

    def connection_succeeded(self, integration: dict[str, Any]) -> bool:
        return self._rng.random() < self.success_rate

    def sync_counts(self, integration: dict[str, Any]) -> SyncCounts:
        return SyncCounts(**{
            key: self._rng.randint(low, high) for key, (low, high) in SYNC_RANGES.items()
        })


def create_integration(store: DataStore, caller: Caller | None, data: IntegrationCreate) -> str:
    """Configure an integration in "pending" status and return its id."""
    membership = require_membership(store, caller, data.organization_id)

    integration_id = str(uuid.uuid4())
    store.integrations.insert({
        "id": integration_id,
        "organization_id": data.organization_id,
        "name": data.name,
        "type": data.type,
        "status": IntegrationStatus.PENDING.value,
        "endpoint": data.endpoint,
        "last_sync": None,
        "sync_frequency": data.sync_frequency,
        "config": data.config,
        "created_by": membership["user_id"],
    })
    logger.info(
        "integration_created",
        integration_id=integration_id,
        organization_id=data.organization_id,
        type=data.type,
    )
    return integration_id


def list_integrations(store: DataStore, caller: Caller | None, organization_id: str) -> list[dict[str, Any]]:
    require_membership(store, caller, organization_id)
    integrations = store.integrations.find("by_organization", organization_id)
    integrations.sort(key=lambda i: i["name"])
    return integrations


def get_integration(store: DataStore, caller: Caller | None, integration_id: str) -> dict[str, Any]:
    """Fetch an integration the caller may see.

    Raises:
        AuthenticationRequired: No caller identity.
        NotFound: The id does not resolve.
        AuthorizationDenied: The caller is not a member of its organization.
    """
    require_caller(caller)
    integration = store.integrations.get(integration_id)
    if integration is None:
        raise NotFound("Integration not found")
    require_membership(store, caller, integration["organization_id"])
    return integration


def update_integration_status(
    store: DataStore,
    caller: Caller | None,
    integration_id: str,
    status: str,
) -> dict[str, Any]:
    """Set an integration's status; moving to "active" stamps ``last_sync``."""
    get_integration(store, caller, integration_id)
    changes: dict[str, Any] = {"status": status}
    if status == IntegrationStatus.ACTIVE.value:
        changes["last_sync"] = utcnow()
    updated = store.integrations.patch(integration_id, changes)
    logger.info("integration_status_changed", integration_id=integration_id, status=status)
    return updated


def run_connection_test(
    store: DataStore,
    caller: Caller | None,
    integration_id: str,
    outcomes: OutcomeSource,
) -> dict[str, Any]:
    """Run a connection test and record the resulting status."""
    integration = get_integration(store, caller, integration_id)

    if outcomes.connection_succeeded(integration):
        update_integration_status(store, caller, integration_id, IntegrationStatus.ACTIVE.value)
        return {"success": True, "message": CONNECTION_OK}

    update_integration_status(store, caller, integration_id, IntegrationStatus.ERROR.value)
    logger.warning("integration_test_failed", integration_id=integration_id)
    return {"success": False, "message": CONNECTION_FAILED}


def sync_integration(
    store: DataStore,
    caller: Caller | None,
    integration_id: str,
    outcomes: OutcomeSource,
) -> SyncCounts:
    """Synchronise data from an active integration and stamp ``last_sync``.

    Raises:
        InvalidState: The integration is not "active"; nothing is written.
    """
    integration = get_integration(store, caller, integration_id)
    if integration["status"] != IntegrationStatus.ACTIVE.value:
        raise InvalidState("Integration not active")

    counts = outcomes.sync_counts(integration)
    store.integrations.patch(integration_id, {"last_sync": utcnow()})
    logger.info("integration_synced", integration_id=integration_id, **counts)
    return counts
