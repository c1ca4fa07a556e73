"""Append-only audit trail."""

from __future__ import annotations

import json
import uuid
from typing import Any

import structlog

from grc.auth import Caller
from grc.models.base import utcnow
from grc.services.organizations import require_membership
from grc.store import DataStore

logger = structlog.get_logger()


def serialise_changes(changes: dict[str, Any]) -> str:
    """Encode a field diff as a JSON string with stable key order."""
    return json.dumps(changes, sort_keys=True, default=str)


def record_audit(
    store: DataStore,
    *,
    organization_id: str,
    entity_type: str,
    entity_id: str,
    action: str,
    user_id: str,
    changes: dict[str, Any] | None = None,
) -> str:
    """Append one audit entry and return its id. Entries are never modified."""
    entry_id = str(uuid.uuid4())
    store.audit_logs.insert({
        "id": entry_id,
        "organization_id": organization_id,
        "entity_type": entity_type,
        "entity_id": entity_id,
        "action": action,
        "user_id": user_id,
        "changes": serialise_changes(changes) if changes is not None else None,
        "timestamp": utcnow(),
    })
    logger.info(
        "audit_recorded",
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        user_id=user_id,
    )
    return entry_id


def list_audit_logs(
    store: DataStore,
    caller: Caller | None,
    organization_id: str,
    entity_type: str | None = None,
    entity_id: str | None = None,
) -> list[dict[str, Any]]:
    """Audit entries for an organization, newest first.

    ``entity_type`` and ``entity_id`` each narrow the result independently;
    together they select one entity's history.
    """
    require_membership(store, caller, organization_id)

    if entity_type and entity_id:
        entries = [
            e for e in store.audit_logs.find("by_entity", entity_type, entity_id)
            if e["organization_id"] == organization_id
        ]
    else:
        entries = store.audit_logs.find("by_organization", organization_id)
        if entity_type:
            entries = [e for e in entries if e["entity_type"] == entity_type]
        if entity_id:
            entries = [e for e in entries if e["entity_id"] == entity_id]

    entries.sort(key=lambda e: e["timestamp"], reverse=True)
    return entries
