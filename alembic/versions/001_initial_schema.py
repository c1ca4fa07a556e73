"""Initial schema — all GRC dashboard tables.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # Users (mirrored from the auth provider)
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"])

    # Organizations
    op.create_table(
        "organizations",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("industry", sa.String(100), nullable=True),
        sa.Column("created_by", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_organizations_by_created_by", "organizations", ["created_by"])

    # Memberships
    op.create_table(
        "organization_members",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("organization_id", sa.String(36), sa.ForeignKey("organizations.id"), nullable=False),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("role", sa.String(10), nullable=False, server_default="viewer"),
        sa.Column("joined_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_organization_members_by_organization", "organization_members", ["organization_id"])
    op.create_index("ix_organization_members_by_user", "organization_members", ["user_id"])
    op.create_index(
        "ix_organization_members_by_org_user",
        "organization_members",
        ["organization_id", "user_id"],
        unique=True,
    )

    # Risks
    op.create_table(
        "risks",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("organization_id", sa.String(36), sa.ForeignKey("organizations.id"), nullable=False),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("category", sa.String(20), nullable=False),
        sa.Column("likelihood", sa.String(10), nullable=False),
        sa.Column("impact", sa.String(10), nullable=False),
        sa.Column("risk_score", sa.Integer, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="identified"),
        sa.Column("owner", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_by", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("last_updated", sa.DateTime(timezone=True), server_default=sa.func.now()),
        *_timestamps(),
    )
    op.create_index("ix_risks_by_organization", "risks", ["organization_id"])
    op.create_index("ix_risks_by_owner", "risks", ["owner"])
    op.create_index("ix_risks_by_status", "risks", ["status"])
    op.create_index("ix_risks_by_category", "risks", ["category"])

    # Controls
    op.create_table(
        "controls",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("organization_id", sa.String(36), sa.ForeignKey("organizations.id"), nullable=False),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("frequency", sa.String(20), nullable=False),
        sa.Column("effectiveness", sa.String(30), nullable=False, server_default="not_tested"),
        sa.Column("owner", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("last_tested", sa.DateTime(timezone=True), nullable=True),
        sa.Column("next_test_due", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_by", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_controls_by_organization", "controls", ["organization_id"])
    op.create_index("ix_controls_by_owner", "controls", ["owner"])
    op.create_index("ix_controls_by_effectiveness", "controls", ["effectiveness"])

    # Risk-control mappings
    op.create_table(
        "risk_controls",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("risk_id", sa.String(36), sa.ForeignKey("risks.id"), nullable=False),
        sa.Column("control_id", sa.String(36), sa.ForeignKey("controls.id"), nullable=False),
        sa.Column("mitigation_level", sa.String(10), nullable=False),
    )
    op.create_index("ix_risk_controls_by_risk", "risk_controls", ["risk_id"])
    op.create_index("ix_risk_controls_by_control", "risk_controls", ["control_id"])

    # Compliance frameworks
    op.create_table(
        "compliance_frameworks",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("organization_id", sa.String(36), sa.ForeignKey("organizations.id"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("version", sa.String(50), nullable=True),
        sa.Column("status", sa.String(10), nullable=False, server_default="draft"),
        sa.Column("created_by", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_compliance_frameworks_by_organization", "compliance_frameworks", ["organization_id"])

    # Compliance requirements
    op.create_table(
        "compliance_requirements",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("framework_id", sa.String(36), sa.ForeignKey("compliance_frameworks.id"), nullable=False),
        sa.Column("requirement_id", sa.String(50), nullable=False),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("priority", sa.String(10), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="not_started"),
        sa.Column("owner", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_assessed", sa.DateTime(timezone=True), nullable=True),
        sa.Column("evidence", sa.Text, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_compliance_requirements_by_framework", "compliance_requirements", ["framework_id"])
    op.create_index("ix_compliance_requirements_by_owner", "compliance_requirements", ["owner"])
    op.create_index("ix_compliance_requirements_by_status", "compliance_requirements", ["status"])

    # Integrations
    op.create_table(
        "integrations",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("organization_id", sa.String(36), sa.ForeignKey("organizations.id"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("status", sa.String(10), nullable=False, server_default="pending"),
        sa.Column("endpoint", sa.String(500), nullable=True),
        sa.Column("last_sync", sa.DateTime(timezone=True), nullable=True),
        sa.Column("sync_frequency", sa.String(10), nullable=False),
        sa.Column("config", sa.Text, nullable=True),
        sa.Column("created_by", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_integrations_by_organization", "integrations", ["organization_id"])
    op.create_index("ix_integrations_by_status", "integrations", ["status"])

    # Audit logs
    op.create_table(
        "audit_logs",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("organization_id", sa.String(36), sa.ForeignKey("organizations.id"), nullable=False),
        sa.Column("entity_type", sa.String(20), nullable=False),
        sa.Column("entity_id", sa.String(36), nullable=False),
        sa.Column("action", sa.String(20), nullable=False),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("changes", sa.Text, nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_audit_logs_by_organization", "audit_logs", ["organization_id"])
    op.create_index("ix_audit_logs_by_entity", "audit_logs", ["entity_type", "entity_id"])
    op.create_index("ix_audit_logs_by_user", "audit_logs", ["user_id"])
    op.create_index("ix_audit_logs_by_timestamp", "audit_logs", ["timestamp"])


def downgrade() -> None:
    op.drop_table("audit_logs")
    op.drop_table("integrations")
    op.drop_table("compliance_requirements")
    op.drop_table("compliance_frameworks")
    op.drop_table("risk_controls")
    op.drop_table("controls")
    op.drop_table("risks")
    op.drop_table("organization_members")
    op.drop_table("organizations")
    op.drop_table("users")
