"""
Audit Logger

Every write to the local store, every skipped write and every fallback
taken on a storage failure is logged. Storage failures are not shown to
the user, so this log is the only trace they leave.

The audit logger:
- Is synchronous; the whole budget runs on the UI thread
- Keeps the most recent events in memory for inspection
"""

from collections import deque
from typing import Optional

import structlog

from home_budget.config import get_settings
from home_budget.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(ensure_ascii=False)
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs events to the structured local log and appends them to a bounded
    in-memory history.
    """

    def __init__(self, history_size: int = 200):
        """
        Initialize audit logger.

        Args:
            history_size: How many recent events to keep in memory.
                          0 disables the history.
        """
        self._history: deque[AuditEvent] = deque(maxlen=history_size)
        self._logger = structlog.get_logger("home_budget.audit")

    @property
    def recent_events(self) -> list[AuditEvent]:
        """Recent events, oldest first."""
        return list(self._history)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event."""
        self._history.append(event)
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_data_loaded(self, key: str, entries: int) -> None:
        self.log(AuditEventBuilder.data_loaded(key=key, entries=entries))

    def log_data_load_failed(self, key: str, error: Exception) -> None:
        self.log(AuditEventBuilder.data_load_failed(key=key, error=str(error)))

    def log_legacy_keys_normalized(self, key: str, renamed: dict[str, str]) -> None:
        self.log(AuditEventBuilder.legacy_keys_normalized(key=key, renamed=renamed))

    def log_record_saved(self, month_id: str, source: str) -> None:
        self.log(AuditEventBuilder.record_saved(month_id=month_id, source=source))

    def log_record_write_skipped(self, month_id: str, source: str) -> None:
        self.log(AuditEventBuilder.record_write_skipped(month_id=month_id, source=source))

    def log_ledger_updated(self, action: str, transaction_id: str, size: int) -> None:
        self.log(AuditEventBuilder.ledger_updated(
            action=action,
            transaction_id=transaction_id,
            size=size,
        ))

    def log_calculation_rejected(self, errors: list[str]) -> None:
        self.log(AuditEventBuilder.calculation_rejected(errors=errors))

    def log_report_exported(self, month_id: str, filename: str) -> None:
        self.log(AuditEventBuilder.report_exported(month_id=month_id, filename=filename))

    def log_storage_error(
        self,
        key: str,
        operation: str,
        error: Exception,
    ) -> None:
        """Log a storage failure that was handled by falling back."""
        self.log(AuditEventBuilder.storage_error(
            key=key,
            operation=operation,
            error=str(error),
        ))


def create_audit_logger(history_size: Optional[int] = None) -> AuditLogger:
    """Create an audit logger sized from settings unless told otherwise."""
    if history_size is None:
        history_size = get_settings().app.audit_history_size
    return AuditLogger(history_size=history_size)
