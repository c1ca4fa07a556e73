"""Controls — safeguards whose effectiveness is assessed outside this service."""

from __future__ import annotations

import uuid
from typing import Any

import structlog

from grc.auth import Caller
from grc.errors import NotFound
from grc.schemas.control import ControlCreate, ControlUpdate
from grc.services.organizations import require_caller, require_membership
from grc.store import DataStore

logger = structlog.get_logger()


def create_control(store: DataStore, caller: Caller | None, data: ControlCreate) -> str:
    """Record a control; effectiveness starts as "not_tested" unless given."""
    membership = require_membership(store, caller, data.organization_id)

    control_id = str(uuid.uuid4())
    store.controls.insert({
        "id": control_id,
        **data.model_dump(),
        "created_by": membership["user_id"],
    })
    logger.info("control_created", control_id=control_id, organization_id=data.organization_id)
    return control_id


def list_controls(store: DataStore, caller: Caller | None, organization_id: str) -> list[dict[str, Any]]:
    """Controls of an organization, sorted by title."""
    require_membership(store, caller, organization_id)
    controls = store.controls.find("by_organization", organization_id)
    controls.sort(key=lambda c: c["title"])
    return controls


def update_control(
    store: DataStore,
    caller: Caller | None,
    control_id: str,
    update: ControlUpdate,
) -> dict[str, Any]:
    """Record externally assessed effectiveness and test dates."""
    require_caller(caller)
    control = store.controls.get(control_id)
    if control is None:
        raise NotFound("Control not found")
    require_membership(store, caller, control["organization_id"])

    changes = update.model_dump(exclude_none=True)
    if not changes:
        return control
    logger.info("control_updated", control_id=control_id, fields=sorted(changes))
    return store.controls.patch(control_id, changes)
