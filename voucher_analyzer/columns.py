"""
Column-role heuristics.

Header names in voucher exports drift ("Customer Name", "CUSTOMER",
"Total  Amount (USD)"), so every lookup compares names lowercased with all
whitespace removed. Everything keyword-driven lives here so an explicit
user-supplied column mapping can replace it without touching aggregation.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping, Sequence

from voucher_analyzer.config import (
    COUNT_MODE,
    ENTITY_COLUMN_KEYWORDS,
    FALLBACK_LABEL_KEYWORDS,
    LABEL_EXCLUDED_KEYWORDS,
    MEASURE_COLUMN_KEYWORDS,
    PAYMENT_STATUS_KEYWORDS,
    PREFERRED_LABEL_KEYWORDS,
    TOTAL_COLUMN_KEYWORDS,
)

WHITESPACE_RE = re.compile(r"\s+")


def compact_key(text: str) -> str:
    return WHITESPACE_RE.sub("", str(text).lower())


def header_matches(column_name: str, keywords: Iterable[str]) -> bool:
    compact = compact_key(column_name)
    return any(compact_key(keyword) in compact for keyword in keywords)


def _first_match(columns: Sequence[str], keywords: Iterable[str]) -> str | None:
    for column in columns:
        if header_matches(column, keywords):
            return column
    return None


def classify_label_candidates(columns: Sequence[str]) -> list[str]:
    return [column for column in columns if not header_matches(column, LABEL_EXCLUDED_KEYWORDS)]


def pick_default_label(columns: Sequence[str]) -> str | None:
    candidates = classify_label_candidates(columns)
    preferred = _first_match(candidates, PREFERRED_LABEL_KEYWORDS)
    if preferred is not None:
        return preferred
    fallback = _first_match(candidates, FALLBACK_LABEL_KEYWORDS)
    if fallback is not None:
        return fallback
    return candidates[0] if candidates else None


def pick_default_measure(columns: Sequence[str]) -> str | None:
    measure = _first_match(columns, MEASURE_COLUMN_KEYWORDS)
    if measure is not None:
        return measure
    return columns[1] if len(columns) > 1 else None


def measure_options(columns: Sequence[str]) -> list[str]:
    """Choices for the measure picker: count mode first, then amount columns."""
    return [COUNT_MODE] + [column for column in columns if header_matches(column, MEASURE_COLUMN_KEYWORDS)]


def find_payment_status_column(columns: Sequence[str]) -> str | None:
    return _first_match(columns, PAYMENT_STATUS_KEYWORDS)


def find_total_column(columns: Sequence[str]) -> str | None:
    # "total amount" wins over "total paid" regardless of column order.
    for keyword in TOTAL_COLUMN_KEYWORDS:
        column = _first_match(columns, (keyword,))
        if column is not None:
            return column
    return None


def find_entity_column(columns: Sequence[str]) -> str | None:
    return _first_match(columns, ENTITY_COLUMN_KEYWORDS)


def find_field_by_key(row: Mapping[str, Any], key_part: str) -> Any:
    wanted = compact_key(key_part)
    for column, value in row.items():
        if compact_key(column) == wanted:
            return value
    return None
