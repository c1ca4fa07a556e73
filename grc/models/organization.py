"""Organization and membership models — the tenancy boundary."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from grc.models.base import Base, IdMixin, TimestampMixin, utcnow


class Organization(IdMixin, TimestampMixin, Base):
    """A tenant. Every other record except audit entries belongs to one."""

    __tablename__ = "organizations"
    __table_args__ = (Index("ix_organizations_by_created_by", "created_by"),)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    industry: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_by: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False)

    def __repr__(self) -> str:
        return f"<Organization {self.name}>"


class Membership(IdMixin, Base):
    """Binds a user to an organization with a role."""

    __tablename__ = "organization_members"
    __table_args__ = (
        Index("ix_organization_members_by_organization", "organization_id"),
        Index("ix_organization_members_by_user", "user_id"),
        Index("ix_organization_members_by_org_user", "organization_id", "user_id", unique=True),
    )

    organization_id: Mapped[str] = mapped_column(ForeignKey("organizations.id"), nullable=False)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False)
    role: Mapped[str] = mapped_column(String(10), nullable=False, default="viewer")
    joined_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def __repr__(self) -> str:
        return f"<Membership org={self.organization_id[:8]} user={self.user_id[:8]} ({self.role})>"
