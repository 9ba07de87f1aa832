"""
Merge policy for monthly records.

Two tabs write into the same month record, each knowing only part of it:

- The electricity tab owns the electricity snapshot and the meter 2
  remainder. It never sees ad-hoc expenses, so it must leave the
  additional-expenses list exactly as it found it.
- The expenses tab owns the additional-expenses list and always submits
  its full current state, so the list is replaced, never appended to.

Everything else is merged field by field: an incoming section overrides
the existing one per key, and keys the update does not mention survive.

Both functions are pure. They work on plain JSON objects and never modify
their arguments.
"""

import copy
import math
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel

from home_budget.models.budget import utc_now_iso


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _plain(value: Any) -> Any:
    """Deep-copy a value into plain JSON types (models become dicts)."""
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_none=True, mode="json")
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return copy.deepcopy(value)


def _section(record: Mapping, name: str) -> dict:
    value = record.get(name)
    return dict(value) if isinstance(value, Mapping) else {}


def merge_electricity_update(
    existing: Optional[Mapping],
    incoming_amount: Any,
    incoming_record: Optional[Mapping],
) -> dict:
    """
    Merge an electricity-tab save into a month record.

    Args:
        existing: The stored record, or None for a new month
        incoming_amount: Freshly computed meter 2 remainder
        incoming_record: Electricity snapshot (inputs, results, meta, ...)

    Returns:
        The merged record. additional_expenses is copied unchanged from
        the existing record.
    """
    existing = _plain(existing or {})
    incoming = _plain(incoming_record or {})

    existing_expenses = _section(existing, "expenses")
    incoming_expenses = _section(incoming, "expenses")

    if _is_number(incoming_amount):
        saved_em2 = incoming_amount
    elif _is_number(existing_expenses.get("saved_em2_eur")):
        saved_em2 = existing_expenses["saved_em2_eur"]
    else:
        saved_em2 = 0

    merged = dict(existing)
    for name in ("month", "tab"):
        value = existing.get(name) or incoming.get(name)
        if value is not None:
            merged[name] = value
    merged["meta"] = existing.get("meta") or incoming.get("meta") or {}
    merged["inputs"] = {**_section(existing, "inputs"), **_section(incoming, "inputs")}
    merged["results"] = {**_section(existing, "results"), **_section(incoming, "results")}
    merged["expenses"] = {
        **existing_expenses,
        **incoming_expenses,
        "saved_em2_eur": saved_em2,
        "fixed_expenses": {
            **_section(existing_expenses, "fixed_expenses"),
            **_section(incoming_expenses, "fixed_expenses"),
        },
        "additional_expenses": existing_expenses.get("additional_expenses") or [],
    }
    merged["incomes"] = existing.get("incomes") or []
    return merged


def merge_expenses_update(
    existing: Optional[Mapping],
    payload: Mapping,
    generated_at: Optional[str] = None,
) -> dict:
    """
    Merge an expenses-tab save into a month record.

    Args:
        existing: The stored record, or None for a new month
        payload: May carry fixed_expenses (partial), additional_expenses
                 (the full list) and saved_em2_eur
        generated_at: Timestamp stamped into meta when the record has none

    Returns:
        The merged record. additional_expenses equals the payload list when
        one is given; saved_em2_eur changes only when the payload holds a
        number.
    """
    existing = _plain(existing or {})
    payload = _plain(payload or {})

    existing_expenses = _section(existing, "expenses")

    incoming_list = payload.get("additional_expenses")
    if isinstance(incoming_list, list):
        additional = incoming_list
    else:
        additional = existing_expenses.get("additional_expenses") or []

    if _is_number(payload.get("saved_em2_eur")):
        saved_em2 = payload["saved_em2_eur"]
    else:
        saved_em2 = existing_expenses.get("saved_em2_eur")

    merged = dict(existing)
    merged["meta"] = existing.get("meta") or {"generated_at": generated_at or utc_now_iso()}
    merged["inputs"] = existing.get("inputs") or {}
    merged["results"] = existing.get("results") or {}
    merged["incomes"] = existing.get("incomes") or []
    merged["expenses"] = {
        **existing_expenses,
        "fixed_expenses": {
            **_section(existing_expenses, "fixed_expenses"),
            **_section(payload, "fixed_expenses"),
        },
        "additional_expenses": additional,
        "saved_em2_eur": saved_em2,
    }
    return merged
