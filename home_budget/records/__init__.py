"""Monthly record store: merge policy, legacy keys and persistence."""

from home_budget.records.legacy import (
    is_legacy_fallback_key,
    normalize_legacy_keys,
    parse_month_key,
)
from home_budget.records.merge import merge_electricity_update, merge_expenses_update
from home_budget.records.store import (
    DEFAULT_MONTHLY_KEY,
    MonthlyRecordStore,
    SaveOutcome,
    serialize_record,
)

__all__ = [
    "DEFAULT_MONTHLY_KEY",
    "MonthlyRecordStore",
    "SaveOutcome",
    "is_legacy_fallback_key",
    "merge_electricity_update",
    "merge_expenses_update",
    "normalize_legacy_keys",
    "parse_month_key",
    "serialize_record",
]
