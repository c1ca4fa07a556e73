"""Audit log model — append-only."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from grc.models.base import Base, IdMixin, utcnow


class AuditLog(IdMixin, Base):
    """An immutable record of a change to a tracked entity."""

    __tablename__ = "audit_logs"
    __table_args__ = (
        Index("ix_audit_logs_by_organization", "organization_id"),
        Index("ix_audit_logs_by_entity", "entity_type", "entity_id"),
        Index("ix_audit_logs_by_user", "user_id"),
        Index("ix_audit_logs_by_timestamp", "timestamp"),
    )

    organization_id: Mapped[str] = mapped_column(ForeignKey("organizations.id"), nullable=False)
    entity_type: Mapped[str] = mapped_column(String(20), nullable=False)
    entity_id: Mapped[str] = mapped_column(String(36), nullable=False)
    action: Mapped[str] = mapped_column(String(20), nullable=False)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False)
    changes: Mapped[str | None] = mapped_column(Text, nullable=True)  # JSON
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def __repr__(self) -> str:
        return f"<AuditLog {self.entity_type}:{self.entity_id[:8]} {self.action}>"
