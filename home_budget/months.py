"""
Month identifiers.

Monthly records are keyed by a canonical "YYYY-MM" id. Older data used
display labels such as "Декември 2025"; the tables here let the legacy
normalizer map those labels back to ids.
"""

import re
from datetime import date
from typing import Optional

CANONICAL_MONTH_ID = re.compile(r"^\d{4}-\d{2}$")

# Bulgarian display names, January first
BG_MONTH_NAMES = (
    "Януари", "Февруари", "Март", "Април", "Май", "Юни",
    "Юли", "Август", "Септември", "Октомври", "Ноември", "Декември",
)

# Lower-case month name variants found in legacy keys -> month number.
BG_MONTH_VARIANTS: dict[str, int] = {
    "януари": 1, "яну": 1, "ян": 1,
    "февруари": 2, "фев": 2,
    "март": 3, "мар": 3,
    "април": 4, "апр": 4,
    "май": 5,
    "юни": 6,
    "юли": 7,
    "август": 8, "авг": 8,
    "септември": 9, "сеп": 9,
    "октомври": 10, "окт": 10,
    "ноември": 11, "ное": 11,
    "декември": 12, "дек": 12,
}

EN_MONTH_VARIANTS: dict[str, int] = {
    "january": 1, "jan": 1,
    "february": 2, "feb": 2,
    "march": 3, "mar": 3,
    "april": 4, "apr": 4,
    "may": 5,
    "june": 6, "jun": 6,
    "july": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sept": 9, "sep": 9,
    "october": 10, "oct": 10,
    "november": 11, "nov": 11,
    "december": 12, "dec": 12,
}


def month_id_from_date(d: Optional[date] = None) -> str:
    """Canonical id of the month containing d (today by default)."""
    d = d or date.today()
    return f"{d.year:04d}-{d.month:02d}"


def is_canonical_month_id(key: str) -> bool:
    """True for "YYYY-MM" keys with a month between 01 and 12."""
    if not isinstance(key, str) or not CANONICAL_MONTH_ID.match(key):
        return False
    return 1 <= int(key[5:]) <= 12


def make_month_id(year: int, month: int) -> str:
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    return f"{year:04d}-{month:02d}"


def month_label(month_id: str) -> str:
    """
    Bulgarian display label for a canonical month id.

    >>> month_label("2025-12")
    'Декември 2025'

    Non-canonical ids (e.g. legacy fallback keys) are returned unchanged.
    """
    if not is_canonical_month_id(month_id):
        return month_id
    year, month = month_id.split("-")
    return f"{BG_MONTH_NAMES[int(month) - 1]} {year}"
