"""Tests for the savings ledger."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from home_budget.models.audit import AuditEventType
from home_budget.models.budget import PREDEFINED_INCOME_CATEGORIES, TransactionType
from home_budget.savings import SavingsLedger
from home_budget.services.storage import InMemoryKeyValueStorage


KEY = "HomeBudget_GlobalSavings"
SALARY = PREDEFINED_INCOME_CATEGORIES[0]


def _entry(entry_id, amount, date, type_=None):
    entry = {
        "id": entry_id,
        "categoryId": SALARY.id,
        "categoryName": SALARY.name,
        "amount": amount,
        "date": date,
    }
    if type_ is not None:
        entry["type"] = type_
    return entry


@pytest.fixture
def ledger(storage, audit_logger):
    ledger = SavingsLedger(storage, key=KEY, audit_logger=audit_logger)
    ledger.load()
    return ledger


class TestLedgerMutations:
    """Tests for adding and deleting transactions."""

    def test_add_income_and_expense(self, ledger):
        """Test the balance after an income and an expense."""
        ledger.add_transaction(SALARY, 100)
        ledger.add_transaction(SALARY, 30, TransactionType.EXPENSE)

        assert ledger.balance() == 70

    def test_whole_list_is_persisted(self, ledger, storage):
        """Test that every mutation rewrites the full list."""
        ledger.add_transaction(SALARY, 100, note="бонус")
        ledger.add_transaction(SALARY, 50)

        stored = json.loads(storage.get_item(KEY))
        assert len(stored) == 2
        assert stored[0]["note"] == "бонус"
        assert stored[0]["type"] == "income"
        assert storage.write_counts[KEY] == 2

    @pytest.mark.parametrize("amount", [0, -5])
    def test_non_positive_amount_is_rejected(self, ledger, storage, amount):
        """Test that zero and negative amounts raise."""
        with pytest.raises(ValueError):
            ledger.add_transaction(SALARY, amount)
        assert storage.get_item(KEY) is None

    def test_unknown_type_is_rejected(self, ledger):
        with pytest.raises(ValueError):
            ledger.add_transaction(SALARY, 10, "transfer")

    def test_explicit_date(self, ledger):
        """Test that a given date is stored."""
        when = datetime(2025, 6, 1, 12, tzinfo=timezone.utc)
        item = ledger.add_transaction(SALARY, 10, date=when)
        assert item.timestamp == when

    def test_delete_transaction(self, ledger, storage):
        """Test that deleting removes the entry and persists."""
        keep = ledger.add_transaction(SALARY, 100)
        drop = ledger.add_transaction(SALARY, 40)

        assert ledger.delete_transaction(drop.id) is True
        assert [item.id for item in ledger.items] == [keep.id]
        assert len(json.loads(storage.get_item(KEY))) == 1

    def test_delete_unknown_id(self, ledger, storage):
        """Test that deleting a missing id does not write."""
        ledger.add_transaction(SALARY, 100)

        assert ledger.delete_transaction("missing") is False
        assert storage.write_counts[KEY] == 1

    def test_write_failure_is_logged(self, flaky_storage, audit_logger):
        """Test that a failed persist keeps the transaction in memory."""
        ledger = SavingsLedger(flaky_storage, key=KEY, audit_logger=audit_logger)
        ledger.load()
        flaky_storage.fail_writes = True

        ledger.add_transaction(SALARY, 25)

        assert ledger.balance() == 25
        types = [event.event_type for event in audit_logger.recent_events]
        assert AuditEventType.STORAGE_ERROR in types
        assert AuditEventType.LEDGER_UPDATED not in types

    def test_failed_writes_are_reported(self, flaky_storage, audit_logger):
        """Test that add_item and delete_transaction return False when not written."""
        ledger = SavingsLedger(flaky_storage, key=KEY, audit_logger=audit_logger)
        ledger.load()
        item = ledger.add_transaction(SALARY, 40)
        flaky_storage.fail_writes = True

        assert ledger.add_item(item.model_copy(update={"id": "other"})) is False
        assert ledger.delete_transaction(item.id) is False
        assert [i.id for i in ledger.items] == ["other"]

        updates = [
            event for event in audit_logger.recent_events
            if event.event_type == AuditEventType.LEDGER_UPDATED
        ]
        assert len(updates) == 1


class TestLedgerLoad:
    """Tests for loading stored ledgers."""

    def test_untyped_entries_are_income(self, audit_logger):
        """Test that entries without a type add to the balance."""
        storage = InMemoryKeyValueStorage({KEY: json.dumps([
            _entry("a", 100, "2025-01-10T10:00:00.000Z"),
            _entry("b", 30, "2025-01-11T10:00:00.000Z", "expense"),
        ])})
        ledger = SavingsLedger(storage, key=KEY, audit_logger=audit_logger)
        ledger.load()

        assert ledger.balance() == 70

    def test_invalid_entries_are_skipped_but_kept(self, audit_logger):
        """Test that unreadable entries survive in storage."""
        storage = InMemoryKeyValueStorage({KEY: json.dumps([
            {"foo": 1},
            _entry("a", 100, "2025-01-10T10:00:00.000Z"),
        ])})
        ledger = SavingsLedger(storage, key=KEY, audit_logger=audit_logger)
        ledger.load()

        assert len(ledger.items) == 1
        assert len(ledger) == 2

        ledger.add_transaction(SALARY, 5)
        assert len(json.loads(storage.get_item(KEY))) == 3

    @pytest.mark.parametrize("blob", ["{broken", '{"a": 1}', "42"])
    def test_corrupted_blob_loads_empty(self, audit_logger, blob):
        """Test that a blob that is not a JSON array is ignored."""
        storage = InMemoryKeyValueStorage({KEY: blob})
        ledger = SavingsLedger(storage, key=KEY, audit_logger=audit_logger)

        assert ledger.load() == []
        types = [event.event_type for event in audit_logger.recent_events]
        assert AuditEventType.DATA_LOAD_FAILED in types


class TestLedgerCalculations:
    """Tests for the balance and the monthly snapshot."""

    @pytest.fixture
    def history(self, audit_logger):
        storage = InMemoryKeyValueStorage({KEY: json.dumps([
            _entry("a", 10, "2024-12-31T12:00:00.000Z"),
            _entry("b", 100, "2025-01-15T08:00:00.000Z"),
            _entry("c", 40, "2025-03-10T08:00:00.000Z", "expense"),
            _entry("d", 25, "2025-03-31T23:30:00.000Z"),
            _entry("e", 500, "2026-01-01T00:00:00.000Z"),
        ])})
        ledger = SavingsLedger(storage, key=KEY, audit_logger=audit_logger)
        ledger.load()
        return ledger

    def test_balance(self, history):
        assert history.balance() == 595

    def test_balance_until(self, history):
        """Test the balance at a point in time."""
        until = datetime(2025, 2, 1, tzinfo=timezone.utc)
        assert history.balance(until=until) == 110

    def test_monthly_snapshot(self, history):
        """Test the month-end cumulative balances of a year."""
        snapshot = history.monthly_snapshot(2025)

        assert len(snapshot) == 12
        assert snapshot[0] == 110
        assert snapshot[1] == 110
        assert snapshot[2] == 95
        assert snapshot[11] == 95

    def test_monthly_snapshot_respects_timezone(self, history):
        """Test that month ends follow the given timezone."""
        eet = timezone(timedelta(hours=2))
        snapshot = history.monthly_snapshot(2025, tz=eet)

        # 23:30 UTC on 31 March is already April in UTC+2
        assert snapshot[2] == 70
        assert snapshot[3] == 95

    def test_empty_year(self, history):
        assert history.monthly_snapshot(2020) == [0.0] * 12


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
