"""Dashboard aggregation — summary counts and the likelihood × impact matrix."""

from __future__ import annotations

from typing import Any

from grc.auth import Caller
from grc.schemas.enums import Effectiveness, RequirementStatus
from grc.services.organizations import require_membership
from grc.services.scoring import LEVELS, matrix_cell_level, risk_level
from grc.store import DataStore


def compute_risk_stats(risks: list[dict[str, Any]]) -> dict[str, int]:
    """Count risks per score bucket. high + medium + low always equals total."""
    stats = {"total": len(risks), "high": 0, "medium": 0, "low": 0}
    for risk in risks:
        stats[risk_level(risk["risk_score"])] += 1
    return stats


def compute_control_stats(controls: list[dict[str, Any]]) -> dict[str, int]:
    """Count controls per effectiveness value."""
    stats = {"total": len(controls)}
    for value in Effectiveness:
        stats[value.value] = sum(1 for c in controls if c["effectiveness"] == value.value)
    return stats


def compute_compliance_stats(requirements: list[dict[str, Any]]) -> dict[str, int]:
    def _count(status: RequirementStatus) -> int:
        return sum(1 for r in requirements if r["status"] == status.value)

    return {
        "total": len(requirements),
        "compliant": _count(RequirementStatus.COMPLIANT),
        "non_compliant": _count(RequirementStatus.NON_COMPLIANT),
        "in_progress": _count(RequirementStatus.IN_PROGRESS),
    }


def empty_risk_matrix() -> dict[str, dict[str, int]]:
    return {likelihood: {impact: 0 for impact in LEVELS} for likelihood in LEVELS}


def risk_matrix_levels() -> dict[str, dict[str, str]]:
    """Score bucket of every matrix cell, derived from its coordinates alone.

    Used to shade the heat map; independent of how many risks a cell holds.
    """
    return {
        likelihood: {impact: matrix_cell_level(likelihood, impact) for impact in LEVELS}
        for likelihood in LEVELS
    }


def build_risk_matrix(risks: list[dict[str, Any]]) -> dict[str, dict[str, int]]:
    """Count risks per (likelihood, impact) cell.

    The matrix holds raw counts; its cells sum to the number of risks.
    """
    matrix = empty_risk_matrix()
    for risk in risks:
        matrix[risk["likelihood"]][risk["impact"]] += 1
    return matrix


def get_dashboard_stats(store: DataStore, caller: Caller | None, organization_id: str) -> dict[str, Any]:
    """Risk, control and compliance summaries for one organization.

    Compliance counts are summed across every framework the organization
    owns, reading each framework's requirements in turn.
    """
    require_membership(store, caller, organization_id)

    risks = store.risks.find("by_organization", organization_id)
    controls = store.controls.find("by_organization", organization_id)

    compliance = {"total": 0, "compliant": 0, "non_compliant": 0, "in_progress": 0}
    for framework in store.frameworks.find("by_organization", organization_id):
        requirements = store.requirements.find("by_framework", framework["id"])
        for key, count in compute_compliance_stats(requirements).items():
            compliance[key] += count

    return {
        "risks": compute_risk_stats(risks),
        "controls": compute_control_stats(controls),
        "compliance": compliance,
    }


def get_risk_matrix(store: DataStore, caller: Caller | None, organization_id: str) -> dict[str, dict[str, int]]:
    """Risk counts per (likelihood, impact) cell for one organization."""
    require_membership(store, caller, organization_id)
    return build_risk_matrix(store.risks.find("by_organization", organization_id))
