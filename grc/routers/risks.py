"""Risk register endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from grc.auth import Caller, get_caller
from grc.schemas.organization import CreatedResponse
from grc.schemas.risk import (
    RiskControlCreate,
    RiskControlResponse,
    RiskCreate,
    RiskMatrix,
    RiskResponse,
    RiskUpdate,
)
from grc.services import dashboard
from grc.services.organizations import require_caller
from grc.services import risks as risk_service
from grc.store import data_store

router = APIRouter(prefix="/risks", tags=["risks"])


@router.post("", response_model=CreatedResponse, status_code=201)
async def create_risk(
    request: RiskCreate,
    caller: Caller | None = Depends(get_caller),
) -> CreatedResponse:
    """Register a risk. Its score is computed from likelihood and impact."""
    return CreatedResponse(id=risk_service.create_risk(data_store, caller, request))


@router.get("", response_model=list[RiskResponse])
async def list_risks(
    organization_id: str = Query(...),
    caller: Caller | None = Depends(get_caller),
) -> list[dict]:
    return risk_service.list_risks(data_store, caller, organization_id)


@router.get("/matrix/{organization_id}", response_model=RiskMatrix)
async def get_risk_matrix(
    organization_id: str,
    caller: Caller | None = Depends(get_caller),
) -> dict:
    """Likelihood × impact heat-map counts."""
    return dashboard.get_risk_matrix(data_store, caller, organization_id)


@router.get("/matrix-levels", response_model=dict[str, dict[str, str]])
async def get_risk_matrix_levels(caller: Caller | None = Depends(get_caller)) -> dict:
    """High / medium / low bucket of each matrix cell, for heat-map shading."""
    require_caller(caller)
    return dashboard.risk_matrix_levels()


@router.get("/{risk_id}", response_model=RiskResponse)
async def get_risk(risk_id: str, caller: Caller | None = Depends(get_caller)) -> dict:
    return risk_service.get_risk(data_store, caller, risk_id)


@router.patch("/{risk_id}", response_model=CreatedResponse)
async def update_risk(
    risk_id: str,
    request: RiskUpdate,
    caller: Caller | None = Depends(get_caller),
) -> CreatedResponse:
    """Apply a partial update; the score is recomputed if likelihood or impact changes."""
    return CreatedResponse(id=risk_service.update_risk(data_store, caller, risk_id, request))


@router.get("/{risk_id}/controls", response_model=list[RiskControlResponse])
async def list_risk_controls(risk_id: str, caller: Caller | None = Depends(get_caller)) -> list[dict]:
    return risk_service.list_risk_controls(data_store, caller, risk_id)


@router.post("/{risk_id}/controls", response_model=CreatedResponse, status_code=201)
async def link_control(
    risk_id: str,
    request: RiskControlCreate,
    caller: Caller | None = Depends(get_caller),
) -> CreatedResponse:
    return CreatedResponse(id=risk_service.link_control(data_store, caller, risk_id, request))
