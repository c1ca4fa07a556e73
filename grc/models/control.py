"""Control model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from grc.models.base import Base, IdMixin, TimestampMixin


class Control(IdMixin, TimestampMixin, Base):
    """A safeguard. Effectiveness is assessed externally, never derived."""

    __tablename__ = "controls"
    __table_args__ = (
        Index("ix_controls_by_organization", "organization_id"),
        Index("ix_controls_by_owner", "owner"),
        Index("ix_controls_by_effectiveness", "effectiveness"),
    )

    organization_id: Mapped[str] = mapped_column(ForeignKey("organizations.id"), nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    frequency: Mapped[str] = mapped_column(String(20), nullable=False)
    effectiveness: Mapped[str] = mapped_column(String(30), nullable=False, default="not_tested")
    owner: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False)
    last_tested: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    next_test_due: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_by: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False)

    def __repr__(self) -> str:
        return f"<Control {self.title[:40]} ({self.effectiveness})>"
