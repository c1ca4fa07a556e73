"""Structural tests for models, schemas, settings and the initial migration."""

from __future__ import annotations

import importlib.util
from datetime import datetime, timezone
from pathlib import Path

import pytest
import sqlalchemy as sa
from alembic.migration import MigrationContext
from alembic.operations import Operations
from pydantic import ValidationError

from grc.config import Settings
from grc.models import (
    AuditLog,
    Base,
    ComplianceFramework,
    ComplianceRequirement,
    Control,
    Integration,
    Membership,
    Organization,
    Risk,
    RiskControl,
    User,
)
from grc.models.base import utcnow
from grc.schemas.enums import Level
from grc.schemas.integration import SyncResult
from grc.schemas.organization import MemberCreate, OrganizationCreate
from grc.schemas.risk import RiskCreate, RiskResponse, RiskUpdate

MIGRATION = Path(__file__).resolve().parent.parent / "alembic" / "versions" / "001_initial_schema.py"


def _load_migration():
    spec = importlib.util.spec_from_file_location("initial_schema", MIGRATION)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


# ─── Base model tests ───────────────────────────────────────────────────────

class TestBaseModel:
    """Tests for the SQLAlchemy base model."""

    def test_utcnow_returns_utc(self):
        now = utcnow()
        assert now.tzinfo == timezone.utc

    def test_utcnow_is_current(self):
        before = datetime.now(timezone.utc)
        now = utcnow()
        after = datetime.now(timezone.utc)
        assert before <= now <= after

    def test_all_tables_registered(self):
        assert set(Base.metadata.tables) == {
            "users",
            "organizations",
            "organization_members",
            "risks",
            "controls",
            "risk_controls",
            "compliance_frameworks",
            "compliance_requirements",
            "integrations",
            "audit_logs",
        }


# ─── Table structure ────────────────────────────────────────────────────────

class TestModelColumns:
    """Tests for columns and indexes on each table."""

    def test_risk_columns(self):
        columns = {c.name for c in Risk.__table__.columns}
        assert {"organization_id", "likelihood", "impact", "risk_score", "status", "owner",
                "due_date", "created_by", "last_updated"} <= columns

    def test_risk_indexes(self):
        names = {i.name for i in Risk.__table__.indexes}
        assert names == {"ix_risks_by_organization", "ix_risks_by_owner", "ix_risks_by_status",
                         "ix_risks_by_category"}

    def test_membership_pair_unique(self):
        index = next(i for i in Membership.__table__.indexes if i.name == "ix_organization_members_by_org_user")
        assert index.unique
        assert [c.name for c in index.columns] == ["organization_id", "user_id"]

    def test_audit_entity_index(self):
        index = next(i for i in AuditLog.__table__.indexes if i.name == "ix_audit_logs_by_entity")
        assert [c.name for c in index.columns] == ["entity_type", "entity_id"]

    def test_nullable_fields(self):
        assert Integration.__table__.c.last_sync.nullable
        assert Control.__table__.c.last_tested.nullable
        assert ComplianceRequirement.__table__.c.evidence.nullable
        assert Organization.__table__.c.description.nullable
        assert User.__table__.c.email.nullable
        assert not Risk.__table__.c.risk_score.nullable

    def test_foreign_keys(self):
        targets = {fk.target_fullname for fk in RiskControl.__table__.foreign_keys}
        assert targets == {"risks.id", "controls.id"}
        targets = {fk.target_fullname for fk in ComplianceRequirement.__table__.foreign_keys}
        assert "compliance_frameworks.id" in targets
        assert ComplianceFramework.__table__.c.organization_id.foreign_keys

    def test_repr(self):
        risk = Risk(title="Supplier insolvency", risk_score=12)
        assert "score=12" in repr(risk)


# ─── Migration ──────────────────────────────────────────────────────────────

class TestInitialMigration:
    """The migration builds the same tables and indexes as the models."""

    @pytest.fixture
    def migrated(self):
        module = _load_migration()
        engine = sa.create_engine("sqlite://")
        with engine.begin() as conn:
            context = MigrationContext.configure(conn)
            with Operations.context(context):
                module.upgrade()
            inspector = sa.inspect(conn)
            yield {
                table: {i["name"] for i in inspector.get_indexes(table)}
                for table in inspector.get_table_names()
            }

    def test_revision(self):
        module = _load_migration()
        assert module.revision == "001"
        assert module.down_revision is None

    def test_tables_match_models(self, migrated):
        assert set(migrated) == set(Base.metadata.tables)

    def test_indexes_match_models(self, migrated):
        for name, table in Base.metadata.tables.items():
            assert {i.name for i in table.indexes} == migrated[name], name


# ─── Schemas ────────────────────────────────────────────────────────────────

class TestSchemas:
    """Pydantic request/response validation."""

    def test_enum_fields_stored_as_strings(self):
        risk = RiskCreate(
            organization_id="o", title="t", description="d", category="financial",
            likelihood=Level.HIGH, impact="low", owner="u",
        )
        assert risk.likelihood == "high"
        assert isinstance(risk.likelihood, str)

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            RiskCreate(
                organization_id="o", title="t", description="d", category="weather",
                likelihood="low", impact="low", owner="u",
            )

    def test_update_changes_score(self):
        assert RiskUpdate(impact="high").changes_score
        assert RiskUpdate(likelihood="low").changes_score
        assert not RiskUpdate(title="x", status="mitigated").changes_score

    def test_update_rejects_unknown_status(self):
        with pytest.raises(ValidationError):
            RiskUpdate(status="closed")

    def test_risk_score_range(self):
        base = dict(
            id="r", organization_id="o", title="t", description="d", category="financial",
            likelihood="low", impact="low", risk_level="low", status="identified", owner="u",
            owner_name="U", created_by="u", last_updated=utcnow(),
        )
        assert RiskResponse(risk_score=4, **base).risk_score == 4
        with pytest.raises(ValidationError):
            RiskResponse(risk_score=26, **base)

    def test_organization_name_required(self):
        with pytest.raises(ValidationError):
            OrganizationCreate(name="")

    def test_member_default_role(self):
        assert MemberCreate(user_id="u").role == "viewer"

    def test_sync_result_non_negative(self):
        with pytest.raises(ValidationError):
            SyncResult(records_processed=-1, records_updated=0, records_created=0, errors=0)


# ─── Settings ───────────────────────────────────────────────────────────────

class TestSettings:
    """Tests for environment-driven configuration."""

    def test_defaults(self):
        settings = Settings()
        assert settings.api_prefix == "/api"
        assert settings.caller_header == "X-User-ID"
        assert settings.integration_success_rate == 0.7

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("GRC_INTEGRATION_SUCCESS_RATE", "0.25")
        monkeypatch.setenv("GRC_ENVIRONMENT", "staging")
        settings = Settings()
        assert settings.integration_success_rate == 0.25
        assert settings.environment == "staging"

    def test_origins_list(self):
        settings = Settings(allowed_origins="http://a.test, http://b.test,")
        assert settings.allowed_origins_list == ["http://a.test", "http://b.test"]

    @pytest.mark.parametrize("field,value", [
        ("environment", "qa"),
        ("log_format", "xml"),
        ("integration_success_rate", 1.5),
    ])
    def test_invalid_values_rejected(self, field, value):
        with pytest.raises(ValidationError):
            Settings(**{field: value})
