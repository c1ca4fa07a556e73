"""Schemas for control endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from grc.schemas.enums import ControlFrequency, ControlType, Effectiveness


class ControlCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    organization_id: str
    title: str = Field(..., min_length=1, max_length=500)
    description: str
    type: ControlType
    frequency: ControlFrequency
    effectiveness: Effectiveness = Effectiveness.NOT_TESTED
    owner: str = Field(..., min_length=1)
    last_tested: datetime | None = None
    next_test_due: datetime | None = None


class ControlUpdate(BaseModel):
    """Externally assessed control attributes."""

    model_config = ConfigDict(use_enum_values=True)

    effectiveness: Effectiveness | None = None
    last_tested: datetime | None = None
    next_test_due: datetime | None = None


class ControlResponse(BaseModel):
    id: str
    organization_id: str
    title: str
    description: str
    type: ControlType
    frequency: ControlFrequency
    effectiveness: Effectiveness
    owner: str
    last_tested: datetime | None = None
    next_test_due: datetime | None = None
    created_by: str
