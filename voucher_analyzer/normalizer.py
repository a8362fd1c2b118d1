"""
Tolerant value parsing for spreadsheet exports.

Currency cells arrive as "$1,234.56", plain numbers or junk like "N/A";
date cells arrive as native datetimes, Excel serials, day-first strings or
anything a human typed. Every helper here degrades to ``None`` (or a display
placeholder) instead of raising.
"""

from __future__ import annotations

import math
import re
import warnings
from datetime import date, datetime, timedelta, timezone
from numbers import Real
from typing import Any

import pandas as pd

NON_NUMERIC_RE = re.compile(r"[^0-9.\-]+")
LEADING_NUMBER_RE = re.compile(r"^-?(?:\d+\.?\d*|\.\d+)")
DAY_FIRST_RE = re.compile(r"^(\d{1,2})[./-](\d{1,2})[./-](\d{4})")

EXCEL_EPOCH = datetime(1899, 12, 30)
EXCEL_SERIAL_RANGE = (25000, 60000)


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if value is pd.NaT:
        return True
    return isinstance(value, str) and value == ""


def stringify(value: Any) -> str:
    """Render a cell the way a spreadsheet shows it: 1001.0 -> "1001"."""
    if is_blank(value):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    return str(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def parse_money(raw: Any) -> float | None:
    if _is_number(raw):
        number = float(raw)
        return None if math.isnan(number) else number
    if raw is None or isinstance(raw, (bool, date)):
        return None

    stripped = NON_NUMERIC_RE.sub("", str(raw))
    match = LEADING_NUMBER_RE.match(stripped)
    if not match:
        return None
    return float(match.group(0))


def _utc_midnight(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


def _parse_day_first(text: str) -> datetime | None:
    match = DAY_FIRST_RE.match(text)
    if not match:
        return None
    day, month, year = (int(part) for part in match.groups())
    if year <= 1000 or not 1 <= month <= 12 or not 1 <= day <= 31:
        return None
    try:
        return _utc_midnight(year, month, day)
    except ValueError:
        # 31/04, 29/02 outside leap years, ...
        return None


def parse_date(raw: Any) -> datetime | None:
    """
    Normalize a date-like cell to its calendar day at UTC midnight.

    Strings shaped like D/M/YYYY (separators ``/ . -``) are read day-first
    when that gives a real calendar day; otherwise they go through the
    generic parser like any other text, so "10/13/2024" is 13 Oct 2024
    while "31/02/2025" stays unparseable.
    """
    if is_blank(raw) or raw is False:
        return None
    if isinstance(raw, pd.Timestamp):
        raw = raw.to_pydatetime()
    if isinstance(raw, (datetime, date)):
        return _utc_midnight(raw.year, raw.month, raw.day)
    if _is_number(raw):
        number = float(raw)
        low, high = EXCEL_SERIAL_RANGE
        if low <= number <= high:
            serial = EXCEL_EPOCH + timedelta(days=number)
            return _utc_midnight(serial.year, serial.month, serial.day)

    text = str(raw).strip()
    if not text:
        return None
    day_first = _parse_day_first(text)
    if day_first is not None:
        return day_first

    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        try:
            parsed = pd.to_datetime(text, errors="coerce")
        except (ValueError, TypeError, OverflowError):
            return None
    if pd.isna(parsed):
        return None
    return _utc_midnight(parsed.year, parsed.month, parsed.day)


def days_between(start: Any, end: Any) -> int | None:
    start_day = parse_date(start)
    end_day = parse_date(end)
    if start_day is None or end_day is None:
        return None
    days = round((end_day - start_day) / timedelta(days=1))
    return days if days >= 0 else None


def format_currency(value: Any) -> str:
    number = parse_money(value)
    if number is None:
        return "$0.00"
    return f"${number:,.2f}"


def format_display_date(value: Any) -> str:
    if is_blank(value) or value == 0:
        return "N/A"
    parsed = parse_date(value)
    if parsed is None:
        return stringify(value)
    return parsed.strftime("%m/%d/%Y")
