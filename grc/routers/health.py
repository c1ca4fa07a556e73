"""Monitoring endpoints: liveness, readiness and a summary health view."""

from __future__ import annotations

import time
from typing import Awaitable, Callable

from fastapi import APIRouter, Request

from grc.schemas.health import HealthResponse, ServiceHealth
from grc.store import data_store

router = APIRouter(tags=["health"])

Check = Callable[[], Awaitable[None]]


async def _check_app() -> None:
    return None


async def _check_store() -> None:
    # Tenancy tables back every authorization decision
    len(data_store.organizations)
    data_store.memberships.first("by_org_user", "", "")


async def _probe(name: str, check: Check) -> ServiceHealth:
    """Time one check; any exception marks the service unhealthy."""
    started = time.monotonic()
    try:
        await check()
    except Exception as exc:
        return ServiceHealth(
            service=name,
            status="unhealthy",
            latency_ms=round((time.monotonic() - started) * 1000, 2),
            details=str(exc)[:200],
        )
    return ServiceHealth(
        service=name,
        status="healthy",
        latency_ms=round((time.monotonic() - started) * 1000, 2),
    )


async def _report(request: Request, checks: dict[str, Check], failed_status: str) -> HealthResponse:
    settings = request.app.state.settings
    services = [await _probe(name, check) for name, check in checks.items()]
    healthy = all(s.status == "healthy" for s in services)
    return HealthResponse(
        status="healthy" if healthy else failed_status,
        version=settings.app_version,
        environment=settings.environment,
        services=services,
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Is the application running?"""
    return await _report(request, {"app": _check_app}, failed_status="degraded")


@router.get("/health/ready", response_model=HealthResponse)
async def readiness_check(request: Request) -> HealthResponse:
    """Can the application serve tenant data?"""
    return await _report(
        request,
        {"app": _check_app, "data_store": _check_store},
        failed_status="unhealthy",
    )


@router.get("/health/live")
async def liveness_check() -> dict[str, str]:
    return {"status": "alive"}
