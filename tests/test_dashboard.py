"""Dashboard aggregation tests — risk buckets, control/compliance counts, matrix."""

from __future__ import annotations

import itertools
import random

import pytest

from grc.errors import AuthorizationDenied
from grc.schemas.compliance import FrameworkCreate, RequirementCreate
from grc.schemas.control import ControlCreate
from grc.schemas.risk import RiskCreate
from grc.services.compliance import create_framework, create_requirement
from grc.services.controls import create_control
from grc.services.dashboard import (
    build_risk_matrix,
    compute_control_stats,
    compute_risk_stats,
    empty_risk_matrix,
    get_dashboard_stats,
    get_risk_matrix,
    risk_matrix_levels,
)
from grc.services.risks import create_risk
from grc.services.scoring import LEVELS, calculate_risk_score, risk_level


def _add_risk(store, caller, org_id, likelihood, impact, title="Risk"):
    return create_risk(store, caller, RiskCreate(
        organization_id=org_id,
        title=title,
        description="d",
        category="operational",
        likelihood=likelihood,
        impact=impact,
        owner=caller.user_id,
    ))


def _add_requirement(store, caller, framework_id, code, status):
    return create_requirement(store, caller, framework_id, RequirementCreate(
        requirement_id=code,
        title=f"Requirement {code}",
        description="d",
        category="access",
        priority="high",
        status=status,
        owner=caller.user_id,
    ))


# ─── Pure aggregations ──────────────────────────────────────────────────────

class TestRiskStats:
    """Tests for compute_risk_stats."""

    def test_empty(self):
        assert compute_risk_stats([]) == {"total": 0, "high": 0, "medium": 0, "low": 0}

    def test_bucket_boundaries(self):
        risks = [{"risk_score": s} for s in (8, 9, 14, 15)]
        assert compute_risk_stats(risks) == {"total": 4, "high": 1, "medium": 2, "low": 1}

    def test_buckets_partition_total(self):
        """high + medium + low equals total for any mix of scores."""
        rng = random.Random(1234)
        pairs = list(itertools.product(LEVELS, LEVELS))
        for _ in range(20):
            risks = [{"risk_score": calculate_risk_score(*rng.choice(pairs))} for _ in range(rng.randint(0, 40))]
            stats = compute_risk_stats(risks)
            assert stats["high"] + stats["medium"] + stats["low"] == stats["total"] == len(risks)


class TestControlStats:
    """Tests for compute_control_stats."""

    def test_counts_each_effectiveness(self):
        controls = [{"effectiveness": e} for e in (
            "effective", "effective", "partially_effective", "ineffective", "not_tested", "not_tested",
        )]
        assert compute_control_stats(controls) == {
            "total": 6,
            "effective": 2,
            "partially_effective": 1,
            "ineffective": 1,
            "not_tested": 2,
        }


class TestRiskMatrix:
    """Tests for build_risk_matrix."""

    def test_empty_matrix_has_25_zero_cells(self):
        matrix = empty_risk_matrix()
        assert list(matrix) == LEVELS
        assert all(list(row) == LEVELS for row in matrix.values())
        assert sum(sum(row.values()) for row in matrix.values()) == 0

    def test_counts_per_cell(self):
        risks = [
            {"likelihood": "high", "impact": "low"},
            {"likelihood": "high", "impact": "low"},
            {"likelihood": "very_low", "impact": "very_high"},
        ]
        matrix = build_risk_matrix(risks)
        assert matrix["high"]["low"] == 2
        assert matrix["very_low"]["very_high"] == 1
        assert matrix["low"]["high"] == 0

    def test_cells_sum_to_risk_count(self):
        rng = random.Random(99)
        risks = [{"likelihood": rng.choice(LEVELS), "impact": rng.choice(LEVELS)} for _ in range(57)]
        matrix = build_risk_matrix(risks)
        assert sum(sum(row.values()) for row in matrix.values()) == 57


# ─── Organization-level views ───────────────────────────────────────────────

class TestDashboardStats:
    """Tests for get_dashboard_stats against the store."""

    def test_empty_organization(self, store, sample_org, alice):
        stats = get_dashboard_stats(store, alice, sample_org)
        assert stats["risks"]["total"] == 0
        assert stats["controls"]["total"] == 0
        assert stats["compliance"] == {"total": 0, "compliant": 0, "non_compliant": 0, "in_progress": 0}

    def test_risk_buckets(self, store, sample_org, alice):
        _add_risk(store, alice, sample_org, "very_high", "very_high")
        _add_risk(store, alice, sample_org, "medium", "medium")
        _add_risk(store, alice, sample_org, "low", "high")
        stats = get_dashboard_stats(store, alice, sample_org)
        assert stats["risks"] == {"total": 3, "high": 1, "medium": 1, "low": 1}

    def test_controls_counted(self, store, sample_org, alice):
        for effectiveness in ("effective", "ineffective", "not_tested"):
            create_control(store, alice, ControlCreate(
                organization_id=sample_org,
                title=f"Control {effectiveness}",
                description="d",
                type="preventive",
                frequency="monthly",
                effectiveness=effectiveness,
                owner=alice.user_id,
            ))
        controls = get_dashboard_stats(store, alice, sample_org)["controls"]
        assert controls["total"] == 3
        assert controls["effective"] == 1
        assert controls["partially_effective"] == 0

    def test_compliance_summed_across_frameworks(self, store, sample_org, alice):
        sox = create_framework(store, alice, FrameworkCreate(organization_id=sample_org, name="SOX", description="d"))
        gdpr = create_framework(store, alice, FrameworkCreate(organization_id=sample_org, name="GDPR", description="d"))
        _add_requirement(store, alice, sox, "SOX-302", "compliant")
        _add_requirement(store, alice, sox, "SOX-404", "non_compliant")
        _add_requirement(store, alice, gdpr, "GDPR-25", "compliant")
        _add_requirement(store, alice, gdpr, "GDPR-32", "in_progress")
        _add_requirement(store, alice, gdpr, "GDPR-33", "not_started")

        compliance = get_dashboard_stats(store, alice, sample_org)["compliance"]
        assert compliance == {"total": 5, "compliant": 2, "non_compliant": 1, "in_progress": 1}

    def test_other_org_data_excluded(self, store, sample_org, other_org, alice, bob):
        _add_risk(store, bob, other_org, "high", "high")
        assert get_dashboard_stats(store, alice, sample_org)["risks"]["total"] == 0

    def test_requires_membership(self, store, sample_org, bob):
        with pytest.raises(AuthorizationDenied):
            get_dashboard_stats(store, bob, sample_org)


class TestGetRiskMatrix:
    """Tests for get_risk_matrix against the store."""

    def test_matrix_matches_risks(self, store, sample_org, alice):
        _add_risk(store, alice, sample_org, "high", "medium", title="a")
        _add_risk(store, alice, sample_org, "high", "medium", title="b")
        _add_risk(store, alice, sample_org, "very_low", "low", title="c")
        matrix = get_risk_matrix(store, alice, sample_org)
        assert matrix["high"]["medium"] == 2
        assert matrix["very_low"]["low"] == 1
        assert sum(sum(row.values()) for row in matrix.values()) == 3

    def test_requires_membership(self, store, sample_org, bob):
        with pytest.raises(AuthorizationDenied):
            get_risk_matrix(store, bob, sample_org)


class TestRiskMatrixLevels:
    """Tests for risk_matrix_levels."""

    def test_every_cell_bucketed_from_coordinates(self):
        levels = risk_matrix_levels()
        assert list(levels) == LEVELS
        for likelihood, row in levels.items():
            assert list(row) == LEVELS
            for impact, level in row.items():
                assert level == risk_level(calculate_risk_score(likelihood, impact))

    def test_six_high_cells(self):
        levels = risk_matrix_levels()
        assert sum(level == "high" for row in levels.values() for level in row.values()) == 6
