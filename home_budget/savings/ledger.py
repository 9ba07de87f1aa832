"""
Savings Ledger

One flat list of income and expense transactions, not partitioned by month.
Every mutation replaces the whole stored list.

Balance = sum(income amounts) - sum(expense amounts). The monthly snapshot
folds the ledger up to the end of each calendar month of a year, which is
what the savings trend chart shows.
"""

import calendar
import json
from datetime import datetime, timezone, tzinfo
from typing import Optional

from pydantic import ValidationError

from home_budget.audit import AuditLogger
from home_budget.models.budget import ExpenseCategory, IncomeItem, TransactionType
from home_budget.services.storage import KeyValueStorage, StorageError

DEFAULT_SAVINGS_KEY = "HomeBudget_GlobalSavings"


class SavingsLedger:
    """
    The global savings ledger.

    Entries are kept as stored JSON objects; entries that fail to validate
    stay in storage but are left out of every calculation.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = DEFAULT_SAVINGS_KEY,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._key = key
        self._audit_logger = audit_logger or AuditLogger()
        self._entries: list[dict] = []

    def load(self) -> list[IncomeItem]:
        """Read the stored ledger. Unreadable or non-list blobs load as empty."""
        try:
            raw_text = self._storage.get_item(self._key)
            parsed = json.loads(raw_text) if raw_text else []
        except (StorageError, ValueError) as e:
            self._audit_logger.log_data_load_failed(self._key, e)
            parsed = []

        if not isinstance(parsed, list):
            self._audit_logger.log_data_load_failed(
                self._key,
                ValueError(f"expected a JSON array, got {type(parsed).__name__}"),
            )
            parsed = []

        self._entries = [entry for entry in parsed if isinstance(entry, dict)]
        self._audit_logger.log_data_loaded(self._key, len(self._entries))
        return self.items

    @property
    def items(self) -> list[IncomeItem]:
        """Valid transactions in stored order."""
        items = []
        for entry in self._entries:
            try:
                items.append(IncomeItem.model_validate(entry))
            except ValidationError:
                continue
        return items

    def __len__(self) -> int:
        return len(self._entries)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_transaction(
        self,
        category: ExpenseCategory,
        amount: float,
        transaction_type: TransactionType = TransactionType.INCOME,
        note: Optional[str] = None,
        date: Optional[datetime] = None,
    ) -> IncomeItem:
        """
        Append a transaction and persist the ledger.

        The item is returned even if the write fails; it stays in memory
        and the failure is audited.

        Raises:
            ValueError: If amount is not greater than zero
        """
        if amount <= 0:
            raise ValueError(f"Amount must be greater than zero, got {amount}")

        kwargs = {"type": TransactionType(transaction_type), "note": note or None}
        if date is not None:
            kwargs["date"] = date.isoformat()
        item = IncomeItem.for_category(category, amount, **kwargs)
        self.add_item(item)
        return item

    def add_item(self, item: IncomeItem) -> bool:
        """Append an item. Returns False if the ledger could not be written."""
        self._entries = [*self._entries, item.to_storage_dict()]
        if not self._persist():
            return False
        self._audit_logger.log_ledger_updated("add", item.id, len(self._entries))
        return True

    def delete_transaction(self, transaction_id: str) -> bool:
        """
        Remove every entry with the id.

        Returns False if none matched or if the ledger could not be written;
        a failed write still removes the entry from memory.
        """
        remaining = [e for e in self._entries if e.get("id") != transaction_id]
        if len(remaining) == len(self._entries):
            return False

        self._entries = remaining
        if not self._persist():
            return False
        self._audit_logger.log_ledger_updated("delete", transaction_id, len(self._entries))
        return True

    def _persist(self) -> bool:
        try:
            self._storage.set_item(self._key, json.dumps(self._entries, ensure_ascii=False))
        except StorageError as e:
            self._audit_logger.log_storage_error(self._key, "write", e)
            return False
        return True

    # -------------------------------------------------------------------------
    # Calculations
    # -------------------------------------------------------------------------

    def balance(self, until: Optional[datetime] = None) -> float:
        """Running balance, optionally only over entries dated up to `until`."""
        total = 0.0
        for item in self.items:
            if until is not None and item.timestamp > until:
                continue
            total += item.signed_amount
        return total

    def monthly_snapshot(self, year: int, tz: tzinfo = timezone.utc) -> list[float]:
        """
        Cumulative balance at the end of each month of `year`.

        Returns 12 values, January first. Each includes every entry up to
        23:59:59.999999 on the month's last day in `tz`.
        """
        snapshot = []
        for month in range(1, 13):
            last_day = calendar.monthrange(year, month)[1]
            end_of_month = datetime(year, month, last_day, 23, 59, 59, 999999, tzinfo=tz)
            snapshot.append(self.balance(until=end_of_month))
        return snapshot
