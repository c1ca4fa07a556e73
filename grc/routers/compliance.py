"""Compliance framework and requirement endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from grc.auth import Caller, get_caller
from grc.schemas.compliance import (
    FrameworkCreate,
    FrameworkResponse,
    RequirementCreate,
    RequirementResponse,
    RequirementUpdate,
)
from grc.schemas.organization import CreatedResponse
from grc.services import compliance as compliance_service
from grc.store import data_store

router = APIRouter(prefix="/compliance", tags=["compliance"])


@router.post("/frameworks", response_model=CreatedResponse, status_code=201)
async def create_framework(
    request: FrameworkCreate,
    caller: Caller | None = Depends(get_caller),
) -> CreatedResponse:
    return CreatedResponse(id=compliance_service.create_framework(data_store, caller, request))


@router.get("/frameworks", response_model=list[FrameworkResponse])
async def list_frameworks(
    organization_id: str = Query(...),
    caller: Caller | None = Depends(get_caller),
) -> list[dict]:
    return compliance_service.list_frameworks(data_store, caller, organization_id)


@router.post("/frameworks/{framework_id}/requirements", response_model=CreatedResponse, status_code=201)
async def create_requirement(
    framework_id: str,
    request: RequirementCreate,
    caller: Caller | None = Depends(get_caller),
) -> CreatedResponse:
    return CreatedResponse(
        id=compliance_service.create_requirement(data_store, caller, framework_id, request)
    )


@router.get("/frameworks/{framework_id}/requirements", response_model=list[RequirementResponse])
async def list_requirements(
    framework_id: str,
    caller: Caller | None = Depends(get_caller),
) -> list[dict]:
    return compliance_service.list_requirements(data_store, caller, framework_id)


@router.patch("/requirements/{requirement_id}", response_model=RequirementResponse)
async def update_requirement(
    requirement_id: str,
    request: RequirementUpdate,
    caller: Caller | None = Depends(get_caller),
) -> dict:
    """Record a requirement's assessed status or evidence."""
    return compliance_service.update_requirement(data_store, caller, requirement_id, request)
