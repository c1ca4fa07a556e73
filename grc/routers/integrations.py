"""System integration endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from grc.auth import Caller, get_caller
from grc.schemas.integration import (
    ConnectionTestResult,
    IntegrationCreate,
    IntegrationResponse,
    IntegrationStatusUpdate,
    SyncResult,
)
from grc.schemas.organization import CreatedResponse
from grc.services import integrations as integration_service
from grc.services.integrations import OutcomeSource
from grc.store import data_store

router = APIRouter(prefix="/integrations", tags=["integrations"])


def get_outcome_source(request: Request) -> OutcomeSource:
    """The outcome source configured on the application."""
    return request.app.state.outcome_source


@router.post("", response_model=CreatedResponse, status_code=201)
async def create_integration(
    request: IntegrationCreate,
    caller: Caller | None = Depends(get_caller),
) -> CreatedResponse:
    """Configure an integration. It starts in "pending" until tested."""
    return CreatedResponse(id=integration_service.create_integration(data_store, caller, request))


@router.get("", response_model=list[IntegrationResponse])
async def list_integrations(
    organization_id: str = Query(...),
    caller: Caller | None = Depends(get_caller),
) -> list[dict]:
    return integration_service.list_integrations(data_store, caller, organization_id)


@router.get("/{integration_id}", response_model=IntegrationResponse)
async def get_integration(integration_id: str, caller: Caller | None = Depends(get_caller)) -> dict:
    return integration_service.get_integration(data_store, caller, integration_id)


@router.patch("/{integration_id}/status", response_model=IntegrationResponse)
async def update_integration_status(
    integration_id: str,
    request: IntegrationStatusUpdate,
    caller: Caller | None = Depends(get_caller),
) -> dict:
    return integration_service.update_integration_status(
        data_store, caller, integration_id, request.status
    )


@router.post("/{integration_id}/test", response_model=ConnectionTestResult)
async def test_connection(
    integration_id: str,
    caller: Caller | None = Depends(get_caller),
    outcomes: OutcomeSource = Depends(get_outcome_source),
) -> dict:
    """Test connectivity and set the status to "active" or "error"."""
    return integration_service.run_connection_test(data_store, caller, integration_id, outcomes)


@router.post("/{integration_id}/sync", response_model=SyncResult)
async def sync_data(
    integration_id: str,
    caller: Caller | None = Depends(get_caller),
    outcomes: OutcomeSource = Depends(get_outcome_source),
) -> dict:
    """Synchronise an active integration. Fails with 409 if it is not active."""
    return integration_service.sync_integration(data_store, caller, integration_id, outcomes)
