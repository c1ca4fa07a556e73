"""Organization, membership, dashboard and audit endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from grc.auth import Caller, get_caller
from grc.schemas.audit import AuditLogResponse
from grc.schemas.dashboard import DashboardStats
from grc.schemas.enums import AuditEntityType
from grc.schemas.organization import (
    CreatedResponse,
    MemberCreate,
    MembershipResponse,
    OrganizationCreate,
    OrganizationResponse,
)
from grc.services import audit, dashboard
from grc.services import organizations as org_service
from grc.store import data_store

router = APIRouter(prefix="/organizations", tags=["organizations"])


@router.post("", response_model=CreatedResponse, status_code=201)
async def create_organization(
    request: OrganizationCreate,
    caller: Caller | None = Depends(get_caller),
) -> CreatedResponse:
    """Create an organization; the caller becomes its admin."""
    return CreatedResponse(id=org_service.create_organization(data_store, caller, request))


@router.get("", response_model=list[OrganizationResponse])
async def list_organizations(caller: Caller | None = Depends(get_caller)) -> list[dict]:
    """Organizations the caller belongs to. Empty when unauthenticated."""
    return org_service.list_organizations(data_store, caller)


@router.get("/{organization_id}", response_model=OrganizationResponse)
async def get_organization(
    organization_id: str,
    caller: Caller | None = Depends(get_caller),
) -> dict:
    return org_service.get_organization(data_store, caller, organization_id)


@router.get("/{organization_id}/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    organization_id: str,
    caller: Caller | None = Depends(get_caller),
) -> dict:
    """Risk, control and compliance summary counts."""
    return dashboard.get_dashboard_stats(data_store, caller, organization_id)


@router.get("/{organization_id}/members", response_model=list[MembershipResponse])
async def list_members(
    organization_id: str,
    caller: Caller | None = Depends(get_caller),
) -> list[dict]:
    return org_service.list_members(data_store, caller, organization_id)


@router.post("/{organization_id}/members", response_model=CreatedResponse, status_code=201)
async def add_member(
    organization_id: str,
    request: MemberCreate,
    caller: Caller | None = Depends(get_caller),
) -> CreatedResponse:
    """Add a user to the organization. Requires the admin role."""
    return CreatedResponse(id=org_service.add_member(data_store, caller, organization_id, request))


@router.get("/{organization_id}/audit-logs", response_model=list[AuditLogResponse])
async def list_audit_logs(
    organization_id: str,
    entity_type: AuditEntityType | None = Query(default=None),
    entity_id: str | None = Query(default=None),
    caller: Caller | None = Depends(get_caller),
) -> list[dict]:
    """Audit trail for the organization, newest first."""
    return audit.list_audit_logs(
        data_store,
        caller,
        organization_id,
        entity_type=entity_type.value if entity_type else None,
        entity_id=entity_id,
    )
