"""Risk register models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from grc.models.base import Base, IdMixin, TimestampMixin, utcnow


class Risk(IdMixin, TimestampMixin, Base):
    """A tracked risk. ``risk_score`` is derived from likelihood and impact."""

    __tablename__ = "risks"
    __table_args__ = (
        Index("ix_risks_by_organization", "organization_id"),
        Index("ix_risks_by_owner", "owner"),
        Index("ix_risks_by_status", "status"),
        Index("ix_risks_by_category", "category"),
    )

    organization_id: Mapped[str] = mapped_column(ForeignKey("organizations.id"), nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    likelihood: Mapped[str] = mapped_column(String(10), nullable=False)
    impact: Mapped[str] = mapped_column(String(10), nullable=False)
    risk_score: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="identified")
    owner: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False)
    due_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_by: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False)
    last_updated: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def __repr__(self) -> str:
        return f"<Risk {self.title[:40]} score={self.risk_score}>"


class RiskControl(IdMixin, Base):
    """Maps a control onto the risk it mitigates."""

    __tablename__ = "risk_controls"
    __table_args__ = (
        Index("ix_risk_controls_by_risk", "risk_id"),
        Index("ix_risk_controls_by_control", "control_id"),
    )

    risk_id: Mapped[str] = mapped_column(ForeignKey("risks.id"), nullable=False)
    control_id: Mapped[str] = mapped_column(ForeignKey("controls.id"), nullable=False)
    mitigation_level: Mapped[str] = mapped_column(String(10), nullable=False)
