"""Schemas for dashboard aggregates."""

from __future__ import annotations

from pydantic import BaseModel


class RiskStats(BaseModel):
    total: int
    high: int
    medium: int
    low: int


class ControlStats(BaseModel):
    total: int
    effective: int
    partially_effective: int
    ineffective: int
    not_tested: int


class ComplianceStats(BaseModel):
    """Requirement counts summed across all of an organization's frameworks."""

    total: int
    compliant: int
    non_compliant: int
    in_progress: int


class DashboardStats(BaseModel):
    risks: RiskStats
    controls: ControlStats
    compliance: ComplianceStats
