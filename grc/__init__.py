"""GRC dashboard: multi-tenant governance, risk and compliance tracking."""

__version__ = "1.0.0"
