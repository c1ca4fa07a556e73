"""Schemas for organization and membership endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from grc.schemas.enums import Role


class OrganizationCreate(BaseModel):
    """Request to create an organization."""

    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    industry: str | None = Field(default=None, max_length=100)


class OrganizationResponse(BaseModel):
    """An organization annotated with the caller's role in it."""

    id: str
    name: str
    description: str | None = None
    industry: str | None = None
    created_by: str
    created_at: datetime
    role: Role


class MemberCreate(BaseModel):
    """Request to add a user to an organization."""

    model_config = ConfigDict(use_enum_values=True)

    user_id: str = Field(..., min_length=1)
    role: Role = Role.VIEWER


class MembershipResponse(BaseModel):
    """A user's membership in an organization."""

    id: str
    organization_id: str
    user_id: str
    user_name: str
    role: Role
    joined_at: datetime


class UserResponse(BaseModel):
    """The authenticated user as known to this service."""

    id: str
    name: str | None = None
    email: str | None = None


class CreatedResponse(BaseModel):
    """Identifier of a newly created record."""

    id: str
