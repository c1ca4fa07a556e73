"""Schemas for the monitoring endpoints."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

CheckStatus = Literal["healthy", "unhealthy"]


class ServiceHealth(BaseModel):
    """Result of one dependency check."""

    service: str
    status: CheckStatus
    latency_ms: float | None = None
    details: str | None = None


class HealthResponse(BaseModel):
    """Aggregate health of the service and its data store."""

    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
    environment: str
    services: list[ServiceHealth]
