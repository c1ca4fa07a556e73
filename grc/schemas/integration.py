"""Schemas for system integration endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from grc.schemas.enums import IntegrationStatus, IntegrationType, SyncFrequency


class IntegrationCreate(BaseModel):
    """Request to configure a connection to an external system."""

    model_config = ConfigDict(use_enum_values=True)

    organization_id: str
    name: str = Field(..., min_length=1, max_length=255)
    type: IntegrationType
    endpoint: str | None = Field(default=None, description="e.g. https://api.example.com/v1")
    sync_frequency: SyncFrequency
    config: str | None = Field(default=None, description="JSON configuration blob")


class IntegrationStatusUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    status: IntegrationStatus


class IntegrationResponse(BaseModel):
    id: str
    organization_id: str
    name: str
    type: IntegrationType
    status: IntegrationStatus
    endpoint: str | None = None
    last_sync: datetime | None = None
    sync_frequency: SyncFrequency
    config: str | None = None
    created_by: str


class ConnectionTestResult(BaseModel):
    """Outcome of a connection test."""

    success: bool
    message: str


class SyncResult(BaseModel):
    """Counters reported by a data synchronisation run."""

    records_processed: int = Field(..., ge=0)
    records_updated: int = Field(..., ge=0)
    records_created: int = Field(..., ge=0)
    errors: int = Field(..., ge=0)
