"""
Monthly Record Store

Holds every month's record in memory and persists the whole mapping as one
JSON blob under a single storage key.

DESIGN DECISION: Writes are skipped when nothing changed. The UI saves on
every keystroke, so each save serializes the proposed record and compares
it with the snapshot last written for that month; identical snapshots
cause no storage write and no "saved" event.

FAILURE SEMANTICS:
- A blob that cannot be read or parsed is logged and replaced by an empty
  mapping for the session. Nothing is recovered.
- A failed write is logged; the in-memory record keeps the update and the
  next save for that month tries again. Saving the last written values
  instead discards the failed update.
"""

import copy
import json
from enum import Enum
from typing import Any, Mapping, Optional

from home_budget.audit import AuditLogger
from home_budget.models.budget import MonthlyRecord
from home_budget.records.legacy import normalize_legacy_keys
from home_budget.records.merge import merge_electricity_update, merge_expenses_update
from home_budget.services.storage import KeyValueStorage, StorageError

DEFAULT_MONTHLY_KEY = "HomeBudget_Data"


class SaveOutcome(str, Enum):
    """What happened to a save request."""
    WRITTEN = "written"        # persisted to storage
    UNCHANGED = "unchanged"    # identical to the last write, skipped
    FAILED = "failed"          # storage write failed, kept in memory only
    REJECTED = "rejected"      # nothing to save (e.g. invalid inputs)


def serialize_record(record: Mapping) -> str:
    """Canonical text form used to detect unchanged records."""
    return json.dumps(record, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


class MonthlyRecordStore:
    """
    Month id -> record mapping backed by a KeyValueStorage.

    Records are plain JSON objects so that fields written by other app
    versions survive untouched. Use get_record() for a typed view.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = DEFAULT_MONTHLY_KEY,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._key = key
        self._audit_logger = audit_logger or AuditLogger()
        self._records: dict[str, dict] = {}
        self._persisted: dict[str, str] = {}

    @property
    def key(self) -> str:
        return self._key

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load(self) -> dict[str, dict]:
        """
        Read, normalize and cache the stored mapping.

        Legacy month keys are rewritten and, if any were, the normalized
        mapping is written back once.
        """
        try:
            raw_text = self._storage.get_item(self._key)
            parsed = json.loads(raw_text) if raw_text else {}
        except (StorageError, ValueError) as e:
            self._audit_logger.log_data_load_failed(self._key, e)
            parsed = {}

        if not isinstance(parsed, dict):
            self._audit_logger.log_data_load_failed(
                self._key,
                ValueError(f"expected a JSON object, got {type(parsed).__name__}"),
            )
            parsed = {}

        records, renamed = normalize_legacy_keys(parsed)
        self._records = records
        moved = set(renamed.values())
        self._persisted = {
            month_id: serialize_record(record)
            for month_id, record in records.items()
            if month_id not in moved
        }

        if renamed:
            self._audit_logger.log_legacy_keys_normalized(self._key, renamed)
            self._write()

        self._audit_logger.log_data_loaded(self._key, len(self._records))
        return self.all()

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def get(self, month_id: str) -> Optional[dict]:
        """A copy of the raw record for a month, or None."""
        record = self._records.get(month_id)
        return copy.deepcopy(record) if record is not None else None

    def get_record(self, month_id: str) -> Optional[MonthlyRecord]:
        """Typed view of a month's record, or None."""
        record = self._records.get(month_id)
        if record is None:
            return None
        return MonthlyRecord.model_validate(record)

    def months(self) -> list[str]:
        """All month ids, sorted."""
        return sorted(self._records)

    def all(self) -> dict[str, dict]:
        return copy.deepcopy(self._records)

    def __contains__(self, month_id: str) -> bool:
        return month_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    # -------------------------------------------------------------------------
    # Saving
    # -------------------------------------------------------------------------

    def save_electricity(
        self,
        month_id: str,
        amount: Any,
        record: Optional[Mapping],
    ) -> SaveOutcome:
        """Merge and persist an electricity-tab save."""
        merged = merge_electricity_update(self._records.get(month_id), amount, record)
        return self._commit(month_id, merged, source="electricity")

    def save_expenses(
        self,
        month_id: str,
        payload: Mapping,
    ) -> SaveOutcome:
        """Merge and persist an expenses-tab save."""
        merged = merge_expenses_update(self._records.get(month_id), payload)
        return self._commit(month_id, merged, source="expenses")

    def _commit(self, month_id: str, proposed: dict, source: str) -> SaveOutcome:
        proposed["month"] = month_id
        snapshot = serialize_record(proposed)

        if self._persisted.get(month_id) == snapshot:
            # Drops any unwritten value left in memory by a failed save
            self._records[month_id] = proposed
            self._audit_logger.log_record_write_skipped(month_id, source)
            return SaveOutcome.UNCHANGED

        self._records[month_id] = proposed
        if not self._write():
            return SaveOutcome.FAILED

        self._audit_logger.log_record_saved(month_id, source)
        return SaveOutcome.WRITTEN

    def _write(self) -> bool:
        """Persist the whole mapping; on success every month counts as written."""
        try:
            self._storage.set_item(self._key, json.dumps(self._records, ensure_ascii=False))
        except StorageError as e:
            self._audit_logger.log_storage_error(self._key, "write", e)
            return False

        self._persisted = {
            month_id: serialize_record(record)
            for month_id, record in self._records.items()
        }
        return True
