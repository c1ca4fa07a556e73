"""Schemas for risk management endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from grc.schemas.enums import Level, MitigationLevel, RiskCategory, RiskStatus


class RiskCreate(BaseModel):
    """Request to register a new risk."""

    model_config = ConfigDict(use_enum_values=True)

    organization_id: str
    title: str = Field(..., min_length=1, max_length=500)
    description: str
    category: RiskCategory
    likelihood: Level
    impact: Level
    owner: str = Field(..., min_length=1, description="User id of the risk owner")
    due_date: datetime | None = None


class RiskUpdate(BaseModel):
    """Partial update of a risk. Omitted fields are left untouched."""

    model_config = ConfigDict(use_enum_values=True)

    title: str | None = Field(default=None, min_length=1, max_length=500)
    description: str | None = None
    likelihood: Level | None = None
    impact: Level | None = None
    status: RiskStatus | None = None

    @property
    def changes_score(self) -> bool:
        """Whether applying this update requires a new risk score."""
        return self.likelihood is not None or self.impact is not None


class RiskResponse(BaseModel):
    """A risk with its owner's display name resolved."""

    id: str
    organization_id: str
    title: str
    description: str
    category: RiskCategory
    likelihood: Level
    impact: Level
    risk_score: int = Field(..., ge=1, le=25)
    risk_level: str
    status: RiskStatus
    owner: str
    owner_name: str
    due_date: datetime | None = None
    created_by: str
    last_updated: datetime


class RiskControlCreate(BaseModel):
    """Request to map a control onto a risk."""

    model_config = ConfigDict(use_enum_values=True)

    control_id: str
    mitigation_level: MitigationLevel


class RiskControlResponse(BaseModel):
    """A risk-to-control mapping."""

    id: str
    risk_id: str
    control_id: str
    control_title: str
    mitigation_level: MitigationLevel


# likelihood -> impact -> number of risks
RiskMatrix = dict[str, dict[str, int]]
