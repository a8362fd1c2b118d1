"""Display helpers for the ranked list and its drill-down transaction cards."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from voucher_analyzer.columns import find_field_by_key
from voucher_analyzer.config import (
    CUSTOMER_KEYS,
    END_DATE_KEYS,
    INVOICE_KEYS,
    PURPOSE_KEYS,
    PV_CODE_KEYS,
    START_DATE_KEYS,
    TRANSACTION_VALUE_KEYS,
)
from voucher_analyzer.models import Row
from voucher_analyzer.normalizer import days_between, format_currency, format_display_date, is_blank, stringify


@dataclass(frozen=True)
class TransactionCard:
    title: str
    amount: str
    customer: str | None
    invoice_no: str | None
    date: str
    expire_date: str
    processing_days: int | None
    purpose: str | None


def first_field(row: Row, keys: Iterable[str]) -> Any:
    """First non-empty field among ``keys``, matched fuzzily."""
    for key in keys:
        value = find_field_by_key(row, key)
        if not is_blank(value) and value != 0:
            return value
    return None


def _optional_text(value: Any) -> str | None:
    return None if value is None else stringify(value)


def format_entry_value(value: float, count_mode: bool) -> str:
    if count_mode:
        return f"{value:,.0f}"
    return format_currency(value)


def transaction_value(row: Row) -> Any:
    value = first_field(row, TRANSACTION_VALUE_KEYS)
    return 0 if value is None else value


def describe_transaction(row: Row, index: int) -> TransactionCard:
    """Card for the ``index``-th (0-based) transaction of an expanded entry."""
    pv_code = first_field(row, PV_CODE_KEYS)
    start = first_field(row, START_DATE_KEYS)
    end = first_field(row, END_DATE_KEYS)
    return TransactionCard(
        title=stringify(pv_code) if pv_code is not None else f"Transaction #{index + 1}",
        amount=format_currency(transaction_value(row)),
        customer=_optional_text(first_field(row, CUSTOMER_KEYS)),
        invoice_no=_optional_text(first_field(row, INVOICE_KEYS)),
        date=format_display_date(start),
        expire_date=format_display_date(end),
        processing_days=days_between(start, end),
        purpose=_optional_text(first_field(row, PURPOSE_KEYS)),
    )


def transaction_badge(detail_count: int) -> str | None:
    if detail_count > 1:
        return f"{detail_count} transactions"
    return None
