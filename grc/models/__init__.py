"""Database models for the GRC dashboard."""

from grc.models.base import Base
from grc.models.user import User
from grc.models.organization import Organization, Membership
from grc.models.risk import Risk, RiskControl
from grc.models.control import Control
from grc.models.compliance import ComplianceFramework, ComplianceRequirement
from grc.models.integration import Integration
from grc.models.audit import AuditLog

__all__ = [
    "Base",
    "User",
    "Organization",
    "Membership",
    "Risk",
    "RiskControl",
    "Control",
    "ComplianceFramework",
    "ComplianceRequirement",
    "Integration",
    "AuditLog",
]
