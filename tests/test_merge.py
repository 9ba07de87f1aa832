"""Tests for the monthly record merge policy."""

import copy
import json

import pytest

from home_budget.models.budget import ExpenseItem
from home_budget.records import merge_electricity_update, merge_expenses_update


FOOD_ITEM = {
    "id": "a1",
    "categoryId": "food",
    "categoryName": "Храна",
    "categoryIcon": "ShoppingCart",
    "categoryColor": "bg-green-100",
    "amount": 30,
    "date": "2025-12-02T09:00:00.000Z",
}
FUEL_ITEM = {
    "id": "b2",
    "categoryId": "fuel",
    "categoryName": "Гориво",
    "amount": 40,
    "date": "2025-12-05T18:30:00.000Z",
}


@pytest.fixture
def existing():
    return {
        "month": "2025-12",
        "tab": "electricity",
        "inputs": {"old_t1": 100.0, "new_t1": 150.0},
        "results": {"cost_em1_eur": 10.15},
        "expenses": {
            "saved_em2_eur": 19.85,
            "fixed_expenses": {"credit_eur": 300, "phone_eur": 20},
            "additional_expenses": [FOOD_ITEM, FUEL_ITEM],
        },
        "incomes": [],
        "meta": {"generated_at": "2025-12-01T08:00:00.000Z"},
    }


def _electricity_snapshot(**overrides):
    snapshot = {
        "month": "2025-12",
        "tab": "electricity",
        "inputs": {"old_t1": 100.0, "new_t1": 160.0, "invoice_total": 30.0},
        "results": {"cost_em1_eur": 11.65, "em2_remainder_eur": 18.35},
        "meta": {"generated_at": "2025-12-09T08:00:00.000Z"},
    }
    snapshot.update(overrides)
    return snapshot


class TestElectricityMerge:
    """Tests for electricity-tab saves."""

    def test_additional_expenses_are_preserved(self, existing):
        """Test that the list survives byte-for-byte."""
        before = json.dumps(existing["expenses"]["additional_expenses"], sort_keys=True)
        merged = merge_electricity_update(existing, 18.35, _electricity_snapshot())

        after = json.dumps(merged["expenses"]["additional_expenses"], sort_keys=True)
        assert after == before

    def test_incoming_list_is_ignored(self, existing):
        """Test that a stray list in the snapshot does not replace the stored one."""
        snapshot = _electricity_snapshot(expenses={"additional_expenses": []})
        merged = merge_electricity_update(existing, 18.35, snapshot)

        assert merged["expenses"]["additional_expenses"] == [FOOD_ITEM, FUEL_ITEM]

    def test_saved_em2_takes_incoming_amount(self, existing):
        """Test that the fresh remainder overrides the stored one."""
        merged = merge_electricity_update(existing, 18.3456, _electricity_snapshot())
        assert merged["expenses"]["saved_em2_eur"] == 18.3456

    def test_saved_em2_keeps_existing_for_non_number(self, existing):
        """Test that a non-numeric amount leaves the stored value."""
        merged = merge_electricity_update(existing, None, _electricity_snapshot())
        assert merged["expenses"]["saved_em2_eur"] == 19.85

    def test_saved_em2_defaults_to_zero(self):
        """Test a new month saved without an amount."""
        merged = merge_electricity_update(None, "n/a", _electricity_snapshot())
        assert merged["expenses"]["saved_em2_eur"] == 0

    def test_sections_merge_per_field(self, existing):
        """Test that incoming inputs and results override per key."""
        merged = merge_electricity_update(existing, 18.35, _electricity_snapshot())

        assert merged["inputs"] == {"old_t1": 100.0, "new_t1": 160.0, "invoice_total": 30.0}
        assert merged["results"] == {"cost_em1_eur": 11.65, "em2_remainder_eur": 18.35}

    def test_fixed_expenses_merge_per_field(self, existing):
        """Test that fixed expenses the update does not mention survive."""
        snapshot = _electricity_snapshot(expenses={"fixed_expenses": {"phone_eur": 25}})
        merged = merge_electricity_update(existing, 18.35, snapshot)

        assert merged["expenses"]["fixed_expenses"] == {"credit_eur": 300, "phone_eur": 25}

    def test_existing_meta_wins(self, existing):
        """Test that the first generation time is kept."""
        merged = merge_electricity_update(existing, 18.35, _electricity_snapshot())
        assert merged["meta"] == {"generated_at": "2025-12-01T08:00:00.000Z"}

    def test_new_month(self):
        """Test a first save into an empty month."""
        merged = merge_electricity_update(None, 18.35, _electricity_snapshot())

        assert merged["month"] == "2025-12"
        assert merged["tab"] == "electricity"
        assert merged["meta"]["generated_at"] == "2025-12-09T08:00:00.000Z"
        assert merged["expenses"]["additional_expenses"] == []
        assert merged["expenses"]["fixed_expenses"] == {}
        assert merged["incomes"] == []

    def test_unknown_fields_survive(self, existing):
        """Test that fields written elsewhere are carried over."""
        existing["custom"] = {"x": 1}
        merged = merge_electricity_update(existing, 18.35, _electricity_snapshot())
        assert merged["custom"] == {"x": 1}

    def test_arguments_are_not_modified(self, existing):
        """Test that the merge is pure."""
        snapshot = _electricity_snapshot()
        existing_before = copy.deepcopy(existing)
        snapshot_before = copy.deepcopy(snapshot)

        merged = merge_electricity_update(existing, 18.35, snapshot)
        merged["expenses"]["additional_expenses"].append({"id": "zzz"})

        assert existing == existing_before
        assert snapshot == snapshot_before


class TestExpensesMerge:
    """Tests for expenses-tab saves."""

    def test_list_is_replaced(self, existing):
        """Test that the payload list replaces the stored one exactly."""
        payload = {"additional_expenses": [FUEL_ITEM]}
        merged = merge_expenses_update(existing, payload)

        assert merged["expenses"]["additional_expenses"] == [FUEL_ITEM]

    def test_empty_list_clears(self, existing):
        """Test that deleting every item is saved."""
        merged = merge_expenses_update(existing, {"additional_expenses": []})
        assert merged["expenses"]["additional_expenses"] == []

    def test_missing_list_keeps_existing(self, existing):
        """Test that a payload without a list leaves it alone."""
        merged = merge_expenses_update(existing, {"fixed_expenses": {"internet_eur": 15}})
        assert merged["expenses"]["additional_expenses"] == [FOOD_ITEM, FUEL_ITEM]

    def test_fixed_expenses_merge_per_field(self, existing):
        """Test that fixed expenses merge key by key."""
        merged = merge_expenses_update(existing, {"fixed_expenses": {"internet_eur": 15}})

        assert merged["expenses"]["fixed_expenses"] == {
            "credit_eur": 300,
            "phone_eur": 20,
            "internet_eur": 15,
        }

    def test_saved_em2_only_changes_for_numbers(self, existing):
        """Test that saved_em2_eur changes only when a number is given."""
        kept = merge_expenses_update(existing, {"saved_em2_eur": "19"})
        flag = merge_expenses_update(existing, {"saved_em2_eur": True})
        changed = merge_expenses_update(existing, {"saved_em2_eur": 21.5})

        assert kept["expenses"]["saved_em2_eur"] == 19.85
        assert flag["expenses"]["saved_em2_eur"] == 19.85
        assert changed["expenses"]["saved_em2_eur"] == 21.5

    def test_electricity_sections_are_kept(self, existing):
        """Test that an expenses save does not touch the electricity snapshot."""
        merged = merge_expenses_update(existing, {"additional_expenses": []})

        assert merged["inputs"] == existing["inputs"]
        assert merged["results"] == existing["results"]
        assert merged["meta"] == existing["meta"]

    def test_new_month_is_stamped(self):
        """Test that a new record gets a generation time."""
        merged = merge_expenses_update(
            None,
            {"additional_expenses": [FOOD_ITEM]},
            generated_at="2025-12-10T12:00:00.000Z",
        )

        assert merged["meta"] == {"generated_at": "2025-12-10T12:00:00.000Z"}
        assert merged["inputs"] == {}
        assert merged["results"] == {}
        assert merged["incomes"] == []
        assert merged["expenses"]["saved_em2_eur"] is None

    def test_model_items_are_stored_as_json(self):
        """Test that model instances in the payload become stored dicts."""
        item = ExpenseItem.model_validate(FOOD_ITEM)
        merged = merge_expenses_update(None, {"additional_expenses": [item]})

        stored = merged["expenses"]["additional_expenses"][0]
        assert stored["categoryName"] == "Храна"
        assert stored["amount"] == 30.0

    def test_arguments_are_not_modified(self, existing):
        """Test that the merge is pure."""
        payload = {"additional_expenses": [FUEL_ITEM]}
        existing_before = copy.deepcopy(existing)

        merged = merge_expenses_update(existing, payload)
        merged["expenses"]["additional_expenses"][0]["amount"] = 999

        assert existing == existing_before
        assert FUEL_ITEM["amount"] == 40


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
