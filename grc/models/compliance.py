"""Compliance framework and requirement models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from grc.models.base import Base, IdMixin, TimestampMixin


class ComplianceFramework(IdMixin, TimestampMixin, Base):
    """A compliance standard adopted by an organization (e.g. SOX, GDPR)."""

    __tablename__ = "compliance_frameworks"
    __table_args__ = (Index("ix_compliance_frameworks_by_organization", "organization_id"),)

    organization_id: Mapped[str] = mapped_column(ForeignKey("organizations.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    version: Mapped[str | None] = mapped_column(String(50), nullable=True)
    status: Mapped[str] = mapped_column(String(10), nullable=False, default="draft")
    created_by: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False)

    def __repr__(self) -> str:
        return f"<ComplianceFramework {self.name}>"


class ComplianceRequirement(IdMixin, TimestampMixin, Base):
    """An individually trackable obligation within one framework."""

    __tablename__ = "compliance_requirements"
    __table_args__ = (
        Index("ix_compliance_requirements_by_framework", "framework_id"),
        Index("ix_compliance_requirements_by_owner", "owner"),
        Index("ix_compliance_requirements_by_status", "status"),
    )

    framework_id: Mapped[str] = mapped_column(ForeignKey("compliance_frameworks.id"), nullable=False)
    requirement_id: Mapped[str] = mapped_column(String(50), nullable=False)  # e.g. SOX-404
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    priority: Mapped[str] = mapped_column(String(10), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="not_started")
    owner: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False)
    due_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    last_assessed: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    evidence: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<ComplianceRequirement {self.requirement_id} ({self.status})>"
