"""
Legacy month-key normalization.

Early versions of the app stored monthly records under display labels
("Декември 2025", "December 2025") instead of "YYYY-MM" ids. At load time
those keys are rewritten:

1. A mapping whose keys are all canonical is returned untouched.
2. Otherwise each key is parsed for a four-digit year and a Bulgarian or
   English month name (full or abbreviated). No year means the current
   year.
3. A key with no recognizable month, or one whose month id is already
   taken, is moved to a fallback key "legacy-00", "legacy-01", ... in
   encounter order. No record is dropped.

Keys that are already canonical or already fallback keys pass through,
so normalizing twice changes nothing.
"""

import re
from datetime import date
from typing import Any, Optional

from home_budget.months import (
    BG_MONTH_VARIANTS,
    EN_MONTH_VARIANTS,
    is_canonical_month_id,
    make_month_id,
)

LEGACY_KEY = re.compile(r"^legacy-\d{2,}$")
YEAR_PATTERN = re.compile(r"(?<!\d)(\d{4})(?!\d)")


def _variant_patterns(variants: dict[str, int]) -> list[tuple[re.Pattern, int]]:
    # Longest names first so "март" wins over "мар"; names must start a word
    ordered = sorted(variants.items(), key=lambda item: len(item[0]), reverse=True)
    return [
        (re.compile(rf"(?<![^\W\d_]){re.escape(name)}"), month)
        for name, month in ordered
    ]


_MONTH_PATTERNS = _variant_patterns(BG_MONTH_VARIANTS) + _variant_patterns(EN_MONTH_VARIANTS)


def is_legacy_fallback_key(key: str) -> bool:
    return bool(LEGACY_KEY.match(key))


def parse_month_key(key: str, today: Optional[date] = None) -> Optional[str]:
    """
    Convert a month label to a "YYYY-MM" id.

    Returns None when no month name can be recognized.
    """
    if not isinstance(key, str):
        return None
    key = key.strip()
    if not key:
        return None
    if is_canonical_month_id(key):
        return key

    lower = key.lower()
    for pattern, month in _MONTH_PATTERNS:
        if pattern.search(lower):
            year_match = YEAR_PATTERN.search(lower)
            year = int(year_match.group(1)) if year_match else (today or date.today()).year
            return make_month_id(year, month)
    return None


def normalize_legacy_keys(
    raw: Any,
    today: Optional[date] = None,
) -> tuple[dict, dict[str, str]]:
    """
    Rewrite legacy month keys of a stored mapping.

    Args:
        raw: The parsed blob stored under the monthly key
        today: Reference date for keys without a year

    Returns:
        (normalized_mapping, renamed) where renamed maps every rewritten
        key to its new key. An empty renamed dict means nothing changed.
        Values are never modified.
    """
    if not isinstance(raw, dict):
        return {}, {}

    if all(is_canonical_month_id(k) for k in raw):
        return raw, {}

    reserved = {k for k in raw if is_canonical_month_id(k) or is_legacy_fallback_key(k)}
    out: dict = {}
    renamed: dict[str, str] = {}
    fallback_index = 0

    def next_fallback() -> str:
        nonlocal fallback_index
        while True:
            candidate = f"legacy-{fallback_index:02d}"
            fallback_index += 1
            if candidate not in reserved and candidate not in out:
                return candidate

    for key, value in raw.items():
        if key in reserved:
            out[key] = value
            continue

        month_id = parse_month_key(key, today=today)
        if month_id is None or month_id in reserved or month_id in out:
            new_key = next_fallback()
        else:
            new_key = month_id

        out[new_key] = value
        renamed[key] = new_key

    return out, renamed
