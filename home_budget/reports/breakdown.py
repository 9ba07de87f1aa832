"""
Monthly expense breakdown.

Aggregates one month's record into the segments the reports view charts:
the meter 2 electricity remainder, the three fixed expenses and the
additional expenses grouped by category name. Zero and negative fixed
amounts are left out. Segments are sorted by value, largest first.
"""

import math
from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from home_budget.models.budget import (
    CREDIT_CATEGORY_NAME,
    ELECTRICITY_CATEGORY_NAME,
    INTERNET_CATEGORY_NAME,
    PHONE_CATEGORY_NAME,
    MonthlyRecord,
)

# Fallback for items written before categories existed
UNCATEGORIZED_NAME = "Други"


class BreakdownSegment(BaseModel):
    name: str
    value: float
    percentage: float = 0.0


class MonthlyBreakdown(BaseModel):
    """Expense segments of one month."""

    month: Optional[str] = None
    segments: list[BreakdownSegment] = Field(default_factory=list)

    @property
    def total(self) -> float:
        return sum(segment.value for segment in self.segments)

    @property
    def is_empty(self) -> bool:
        return not self.segments


def _amount(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value) if math.isfinite(value) else 0.0


def monthly_breakdown(
    record: Union[Mapping, MonthlyRecord, None],
) -> MonthlyBreakdown:
    """
    Build the expense breakdown of a month record.

    Works on raw stored records as well as typed ones; items missing a
    category name are grouped under a generic label.
    """
    if record is None:
        return MonthlyBreakdown()
    if isinstance(record, MonthlyRecord):
        record = record.model_dump(by_alias=True, exclude_none=True)

    expenses = record.get("expenses")
    if not isinstance(expenses, Mapping):
        return MonthlyBreakdown(month=record.get("month"))

    values: list[tuple[str, float]] = []

    em2 = _amount(expenses.get("saved_em2_eur"))
    if em2 > 0:
        values.append((ELECTRICITY_CATEGORY_NAME, em2))

    fixed = expenses.get("fixed_expenses")
    if isinstance(fixed, Mapping):
        for field, name in (
            ("credit_eur", CREDIT_CATEGORY_NAME),
            ("phone_eur", PHONE_CATEGORY_NAME),
            ("internet_eur", INTERNET_CATEGORY_NAME),
        ):
            amount = _amount(fixed.get(field))
            if amount > 0:
                values.append((name, amount))

    grouped: dict[str, float] = {}
    additional = expenses.get("additional_expenses")
    if isinstance(additional, list):
        for item in additional:
            if not isinstance(item, Mapping):
                continue
            name = item.get("categoryName") or item.get("name") or UNCATEGORIZED_NAME
            grouped[name] = grouped.get(name, 0.0) + _amount(item.get("amount"))
    values.extend(grouped.items())

    total = sum(value for _, value in values)
    segments = [
        BreakdownSegment(
            name=name,
            value=value,
            percentage=(value / total) * 100 if total > 0 else 0.0,
        )
        for name, value in values
    ]
    segments.sort(key=lambda s: s.value, reverse=True)

    return MonthlyBreakdown(month=record.get("month"), segments=segments)
