"""Schemas for compliance framework and requirement endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from grc.schemas.enums import FrameworkStatus, Priority, RequirementStatus


class FrameworkCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    organization_id: str
    name: str = Field(..., min_length=1, max_length=255)
    description: str
    version: str | None = None
    status: FrameworkStatus = FrameworkStatus.DRAFT


class FrameworkResponse(BaseModel):
    id: str
    organization_id: str
    name: str
    description: str
    version: str | None = None
    status: FrameworkStatus
    created_by: str


class RequirementCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    requirement_id: str = Field(..., min_length=1, description="e.g. SOX-404, GDPR-25")
    title: str = Field(..., min_length=1, max_length=500)
    description: str
    category: str
    priority: Priority
    status: RequirementStatus = RequirementStatus.NOT_STARTED
    owner: str = Field(..., min_length=1)
    due_date: datetime | None = None
    evidence: str | None = None


class RequirementUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    status: RequirementStatus | None = None
    evidence: str | None = None
    last_assessed: datetime | None = None


class RequirementResponse(BaseModel):
    id: str
    framework_id: str
    requirement_id: str
    title: str
    description: str
    category: str
    priority: Priority
    status: RequirementStatus
    owner: str
    due_date: datetime | None = None
    last_assessed: datetime | None = None
    evidence: str | None = None
