"""Audit logging package."""

from home_budget.audit.logger import AuditLogger, create_audit_logger

__all__ = ["AuditLogger", "create_audit_logger"]
