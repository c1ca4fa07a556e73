"""Compliance frameworks and their requirements.

A requirement belongs to exactly one framework, and a framework to one
organization; requirement access is gated by the framework's organization.
"""

from __future__ import annotations

import uuid
from typing import Any

import structlog

from grc.auth import Caller
from grc.errors import NotFound
from grc.schemas.compliance import FrameworkCreate, RequirementCreate, RequirementUpdate
from grc.services.organizations import require_caller, require_membership
from grc.store import DataStore

logger = structlog.get_logger()


def create_framework(store: DataStore, caller: Caller | None, data: FrameworkCreate) -> str:
    """Register a compliance framework for an organization and return its id."""
    membership = require_membership(store, caller, data.organization_id)

    framework_id = str(uuid.uuid4())
    store.frameworks.insert({
        "id": framework_id,
        **data.model_dump(),
        "created_by": membership["user_id"],
    })
    logger.info("framework_created", framework_id=framework_id, organization_id=data.organization_id)
    return framework_id


def list_frameworks(store: DataStore, caller: Caller | None, organization_id: str) -> list[dict[str, Any]]:
    """Frameworks of an organization, sorted by name."""
    require_membership(store, caller, organization_id)
    frameworks = store.frameworks.find("by_organization", organization_id)
    frameworks.sort(key=lambda f: f["name"])
    return frameworks


def get_framework(store: DataStore, caller: Caller | None, framework_id: str) -> dict[str, Any]:
    require_caller(caller)
    framework = store.frameworks.get(framework_id)
    if framework is None:
        raise NotFound("Framework not found")
    require_membership(store, caller, framework["organization_id"])
    return framework


def create_requirement(
    store: DataStore,
    caller: Caller | None,
    framework_id: str,
    data: RequirementCreate,
) -> str:
    get_framework(store, caller, framework_id)

    requirement_id = str(uuid.uuid4())
    store.requirements.insert({
        "id": requirement_id,
        "framework_id": framework_id,
        **data.model_dump(),
        "last_assessed": None,
    })
    logger.info(
        "requirement_created",
        requirement_id=requirement_id,
        framework_id=framework_id,
        code=data.requirement_id,
    )
    return requirement_id


def list_requirements(store: DataStore, caller: Caller | None, framework_id: str) -> list[dict[str, Any]]:
    get_framework(store, caller, framework_id)
    requirements = store.requirements.find("by_framework", framework_id)
    requirements.sort(key=lambda r: r["requirement_id"])
    return requirements


def update_requirement(
    store: DataStore,
    caller: Caller | None,
    requirement_id: str,
    update: RequirementUpdate,
) -> dict[str, Any]:
    require_caller(caller)
    requirement = store.requirements.get(requirement_id)
    if requirement is None:
        raise NotFound("Requirement not found")
    get_framework(store, caller, requirement["framework_id"])

    changes = update.model_dump(exclude_none=True)
    if not changes:
        return requirement
    logger.info("requirement_updated", requirement_id=requirement_id, fields=sorted(changes))
    return store.requirements.patch(requirement_id, changes)
