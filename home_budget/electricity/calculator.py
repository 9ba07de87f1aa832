"""
Electricity Bill Allocator

Splits one electricity invoice between two meters. Meter 1 has day (T1)
and night (T2) readings and is costed at the tariff prices; whatever is
left of the invoice total is the remainder owed for meter 2.

Validation happens in two stages:

STAGE 1 - PARSING:
- Every one of the seven fields must be a finite number
- Any failure produces a single generic error and stops here

STAGE 2 - LOGICAL CHECKS:
- A new reading may not be lower than the old one (checked per tariff,
  both tariffs always checked)

A negative remainder is not an error: the result stays valid and carries
a warning, since the invoice total was most likely mistyped.

IMPORTANT: Nothing here raises on bad input and nothing is rounded.
Errors and warnings are values on the result; rounding belongs to the
snapshot and report code.
"""

import math
from datetime import datetime
from typing import Optional

from home_budget.formatting import round_currency, round_energy
from home_budget.models.budget import utc_now_iso
from home_budget.models.electricity import ElectricityInputs, ElectricityResult


PARSE_ERROR = "Please enter valid numeric values."
T1_REGRESSION_ERROR = "Error: the new T1 reading must be greater than or equal to the old one."
T2_REGRESSION_ERROR = "Error: the new T2 reading must be greater than or equal to the old one."
NEGATIVE_REMAINDER_WARNING = (
    "Note: the remainder is negative. Check the readings or the invoice total."
)

# Tab tag stored with electricity snapshots
ELECTRICITY_TAB = "electricity"


def parse_decimal(text: str) -> Optional[float]:
    """
    Parse a form field to a float.

    Surrounding whitespace is ignored and a single decimal comma is
    accepted ("0,14986"). Returns None for empty, non-numeric or
    non-finite input.
    """
    if text is None:
        return None
    text = str(text).strip()
    if not text:
        return None
    if text.count(",") == 1 and "." not in text:
        text = text.replace(",", ".")
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _parse_inputs(inputs: ElectricityInputs) -> Optional[dict[str, float]]:
    """Stage 1: parse every field, or None if any field is not a number."""
    parsed = {}
    for name in ElectricityInputs.model_fields:
        value = parse_decimal(getattr(inputs, name))
        if value is None:
            return None
        parsed[name] = value
    return parsed


def _validate_readings(values: dict[str, float]) -> list[str]:
    """Stage 2: meter readings must not go backwards."""
    errors = []
    if values["new_t1"] < values["old_t1"]:
        errors.append(T1_REGRESSION_ERROR)
    if values["new_t2"] < values["old_t2"]:
        errors.append(T2_REGRESSION_ERROR)
    return errors


def calculate_electricity(inputs: ElectricityInputs) -> ElectricityResult:
    """
    Compute the meter 1 cost and the meter 2 remainder.

    cost_em1 = (new_t1 - old_t1) * price_t1 + (new_t2 - old_t2) * price_t2
    em2_remainder = invoice_total - cost_em1
    """
    values = _parse_inputs(inputs)
    if values is None:
        return ElectricityResult(is_valid=False, errors=[PARSE_ERROR])

    errors = _validate_readings(values)
    if errors:
        return ElectricityResult(is_valid=False, errors=errors)

    cons_t1 = values["new_t1"] - values["old_t1"]
    cons_t2 = values["new_t2"] - values["old_t2"]
    total_cons = cons_t1 + cons_t2

    cost_em1 = (cons_t1 * values["price_t1"]) + (cons_t2 * values["price_t2"])
    em2_remainder = values["invoice_total"] - cost_em1

    warnings = []
    if em2_remainder < 0:
        warnings.append(NEGATIVE_REMAINDER_WARNING)

    return ElectricityResult(
        cons_t1=cons_t1,
        cons_t2=cons_t2,
        total_cons=total_cons,
        cost_em1=cost_em1,
        em2_remainder=em2_remainder,
        is_valid=True,
        warnings=warnings,
    )


def build_electricity_record(
    month_id: str,
    inputs: ElectricityInputs,
    result: ElectricityResult,
    generated_at: Optional[datetime] = None,
) -> Optional[dict]:
    """
    Build the snapshot persisted when the electricity tab is saved.

    Returns None for invalid results; there is nothing to persist.
    Energy values are rounded to 3 decimals and money to 2.
    """
    if not result.is_valid:
        return None

    values = _parse_inputs(inputs)
    if values is None:
        return None

    return {
        "month": month_id,
        "tab": ELECTRICITY_TAB,
        "inputs": {
            "old_t1": values["old_t1"],
            "new_t1": values["new_t1"],
            "old_t2": values["old_t2"],
            "new_t2": values["new_t2"],
            "day_price_with_vat": values["price_t1"],
            "night_price_with_vat": values["price_t2"],
            "invoice_total": values["invoice_total"],
        },
        "results": {
            "cons_t1_kwh": round_energy(result.cons_t1),
            "cons_t2_kwh": round_energy(result.cons_t2),
            "total_cons_em1_kwh": round_energy(result.total_cons),
            "cost_em1_eur": round_currency(result.cost_em1),
            "em2_remainder_eur": round_currency(result.em2_remainder),
        },
        "meta": {
            "generated_at": (
                generated_at.isoformat() if generated_at is not None else utc_now_iso()
            ),
        },
    }
