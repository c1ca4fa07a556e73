"""Control endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from grc.auth import Caller, get_caller
from grc.schemas.control import ControlCreate, ControlResponse, ControlUpdate
from grc.schemas.organization import CreatedResponse
from grc.services import controls as control_service
from grc.store import data_store

router = APIRouter(prefix="/controls", tags=["controls"])


@router.post("", response_model=CreatedResponse, status_code=201)
async def create_control(
    request: ControlCreate,
    caller: Caller | None = Depends(get_caller),
) -> CreatedResponse:
    return CreatedResponse(id=control_service.create_control(data_store, caller, request))


@router.get("", response_model=list[ControlResponse])
async def list_controls(
    organization_id: str = Query(...),
    caller: Caller | None = Depends(get_caller),
) -> list[dict]:
    return control_service.list_controls(data_store, caller, organization_id)


@router.patch("/{control_id}", response_model=ControlResponse)
async def update_control(
    control_id: str,
    request: ControlUpdate,
    caller: Caller | None = Depends(get_caller),
) -> dict:
    """Record an effectiveness assessment or new test dates."""
    return control_service.update_control(data_store, caller, control_id, request)
