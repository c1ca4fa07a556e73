"""Schemas for the audit trail."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from grc.schemas.enums import AuditAction, AuditEntityType


class AuditLogResponse(BaseModel):
    id: str
    organization_id: str
    entity_type: AuditEntityType
    entity_id: str
    action: AuditAction
    user_id: str
    changes: str | None = None
    timestamp: datetime
