"""
Audit Models for Home Budget

Every write to the local store and every fallback taken on a storage
failure is recorded as an AuditEvent. Events are logged through structlog
and kept in a short in-memory history; they are never persisted.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Loading
    DATA_LOADED = "data_loaded"
    DATA_LOAD_FAILED = "data_load_failed"
    LEGACY_KEYS_NORMALIZED = "legacy_keys_normalized"

    # Monthly records
    RECORD_SAVED = "record_saved"
    RECORD_WRITE_SKIPPED = "record_write_skipped"

    # Savings ledger
    LEDGER_UPDATED = "ledger_updated"

    # Electricity
    CALCULATION_REJECTED = "calculation_rejected"
    REPORT_EXPORTED = "report_exported"

    # System events
    STORAGE_ERROR = "storage_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """A single audit event."""

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(
        default_factory=_utc_now,
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # What the event is about: a storage key, a month id or a transaction id
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'month', 'ledger', 'storage_key')"
    )
    entity_id: Optional[str] = None

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None
    is_user_action: bool = False

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.record_saved("2025-12", source="electricity")
        event = AuditEventBuilder.storage_error("HomeBudget_Data", "write", exc)
    """

    @staticmethod
    def data_loaded(key: str, entries: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_LOADED,
            severity=AuditSeverity.DEBUG,
            entity_type="storage_key",
            entity_id=key,
            description=f"Loaded {entries} entries from {key}",
            details={"entries": entries},
        )

    @staticmethod
    def data_load_failed(key: str, error: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="storage_key",
            entity_id=key,
            description=f"Failed to load or parse {key}; starting empty",
            error_message=error,
        )

    @staticmethod
    def legacy_keys_normalized(key: str, renamed: dict[str, str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEGACY_KEYS_NORMALIZED,
            severity=AuditSeverity.WARNING,
            entity_type="storage_key",
            entity_id=key,
            description=f"Rewrote {len(renamed)} legacy month keys in {key}",
            details={"renamed": renamed},
        )

    @staticmethod
    def record_saved(month_id: str, source: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_SAVED,
            entity_type="month",
            entity_id=month_id,
            description=f"Saved {source} update for {month_id}",
            details={"source": source},
            is_user_action=True,
        )

    @staticmethod
    def record_write_skipped(month_id: str, source: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_WRITE_SKIPPED,
            severity=AuditSeverity.DEBUG,
            entity_type="month",
            entity_id=month_id,
            description=f"Skipped unchanged {source} update for {month_id}",
            details={"source": source},
        )

    @staticmethod
    def ledger_updated(action: str, transaction_id: str, size: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_UPDATED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Ledger {action}: {transaction_id}",
            details={"action": action, "ledger_size": size},
            is_user_action=True,
        )

    @staticmethod
    def calculation_rejected(errors: list[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CALCULATION_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="electricity",
            description="Electricity save rejected: inputs are not valid",
            details={"errors": errors},
            is_user_action=True,
        )

    @staticmethod
    def report_exported(month_id: str, filename: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_EXPORTED,
            entity_type="month",
            entity_id=month_id,
            description=f"Calculation report exported: {filename}",
            details={"filename": filename},
            is_user_action=True,
        )

    @staticmethod
    def storage_error(key: str, operation: str, error: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            entity_type="storage_key",
            entity_id=key,
            description=f"Storage {operation} failed for {key}",
            details={"operation": operation},
            error_message=error,
        )
