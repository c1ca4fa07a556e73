"""Organizations, memberships and the authorization gate.

Every organization-scoped operation passes through ``require_caller`` and
``require_membership`` before touching tenant data.
"""

from __future__ import annotations

import uuid
from typing import Any

import structlog

from grc.auth import Caller
from grc.errors import AuthenticationRequired, AuthorizationDenied, NotFound
from grc.models.base import utcnow
from grc.schemas.enums import Role
from grc.schemas.organization import MemberCreate, OrganizationCreate
from grc.store import DataStore

logger = structlog.get_logger()


def require_caller(caller: Caller | None) -> str:
    """Return the caller's user id or fail with AuthenticationRequired."""
    if caller is None or not caller.user_id:
        raise AuthenticationRequired()
    return caller.user_id


def find_membership(store: DataStore, organization_id: str, user_id: str) -> dict[str, Any] | None:
    return store.memberships.first("by_org_user", organization_id, user_id)


def require_membership(store: DataStore, caller: Caller | None, organization_id: str) -> dict[str, Any]:
    """Return the caller's membership for the organization.

    Raises:
        AuthenticationRequired: No caller identity.
        AuthorizationDenied: The caller is not a member.
    """
    user_id = require_caller(caller)
    membership = find_membership(store, organization_id, user_id)
    if membership is None:
        logger.warning("authorization_denied", organization_id=organization_id, user_id=user_id)
        raise AuthorizationDenied()
    return membership


def _add_membership(store: DataStore, organization_id: str, user_id: str, role: str) -> dict[str, Any]:
    membership = {
        "id": str(uuid.uuid4()),
        "organization_id": organization_id,
        "user_id": user_id,
        "role": role,
        "joined_at": utcnow(),
    }
    store.memberships.insert(membership)
    return membership


def create_organization(store: DataStore, caller: Caller | None, data: OrganizationCreate) -> str:
    """Create an organization and make its creator an admin member."""
    user_id = require_caller(caller)

    organization_id = str(uuid.uuid4())
    store.organizations.insert({
        "id": organization_id,
        "name": data.name,
        "description": data.description,
        "industry": data.industry,
        "created_by": user_id,
        "created_at": utcnow(),
    })
    _add_membership(store, organization_id, user_id, Role.ADMIN.value)

    logger.info("organization_created", organization_id=organization_id, user_id=user_id)
    return organization_id


def list_organizations(store: DataStore, caller: Caller | None) -> list[dict[str, Any]]:
    """Organizations the caller belongs to, each annotated with the caller's role.

    Unauthenticated callers get an empty list rather than an error.
    """
    if caller is None or not caller.user_id:
        return []

    organizations = []
    for membership in store.memberships.find("by_user", caller.user_id):
        org = store.organizations.get(membership["organization_id"])
        if org is None:
            continue
        organizations.append({**org, "role": membership["role"]})
    organizations.sort(key=lambda o: o["created_at"])
    return organizations


def get_organization(store: DataStore, caller: Caller | None, organization_id: str) -> dict[str, Any]:
    membership = require_membership(store, caller, organization_id)
    org = store.organizations.get(organization_id)
    if org is None:
        raise NotFound("Organization not found")
    return {**org, "role": membership["role"]}


def add_member(
    store: DataStore,
    caller: Caller | None,
    organization_id: str,
    data: MemberCreate,
) -> str:
    """Grant a user membership. Only admins of the organization may do this."""
    acting = require_membership(store, caller, organization_id)
    if acting["role"] != Role.ADMIN.value:
        raise AuthorizationDenied("Admin role required")

    membership = _add_membership(store, organization_id, data.user_id, data.role)
    logger.info(
        "member_added",
        organization_id=organization_id,
        user_id=data.user_id,
        role=data.role,
        added_by=acting["user_id"],
    )
    return membership["id"]


def list_members(store: DataStore, caller: Caller | None, organization_id: str) -> list[dict[str, Any]]:
    require_membership(store, caller, organization_id)
    members = [
        {**m, "user_name": store.display_name(m["user_id"])}
        for m in store.memberships.find("by_organization", organization_id)
    ]
    members.sort(key=lambda m: m["joined_at"])
    return members
