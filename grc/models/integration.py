"""System integration model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from grc.models.base import Base, IdMixin, TimestampMixin


class Integration(IdMixin, TimestampMixin, Base):
    """A configured connection to an external system."""

    __tablename__ = "integrations"
    __table_args__ = (
        Index("ix_integrations_by_organization", "organization_id"),
        Index("ix_integrations_by_status", "status"),
    )

    organization_id: Mapped[str] = mapped_column(ForeignKey("organizations.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(10), nullable=False, default="pending")
    endpoint: Mapped[str | None] = mapped_column(String(500), nullable=True)
    last_sync: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    sync_frequency: Mapped[str] = mapped_column(String(10), nullable=False)
    config: Mapped[str | None] = mapped_column(Text, nullable=True)  # JSON
    created_by: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False)

    def __repr__(self) -> str:
        return f"<Integration {self.name} ({self.status})>"
