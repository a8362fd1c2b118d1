"""
Filter, rank and drill-down stages.

All three stages take the same settled row set so the chart, the ranked
list and the transaction details always agree with each other.
"""

from __future__ import annotations

from typing import Sequence

from voucher_analyzer.columns import find_payment_status_column
from voucher_analyzer.config import ALL_ITEMS, COUNT_MODE, SETTLED_STATUS
from voucher_analyzer.models import AggregateEntry, DetailedAggregateEntry, Row
from voucher_analyzer.normalizer import is_blank, parse_money, stringify


def filter_settled_rows(rows: Sequence[Row], columns: Sequence[str]) -> tuple[Row, ...]:
    status_column = find_payment_status_column(columns)
    if status_column is None:
        return tuple(rows)
    return tuple(
        row for row in rows
        if stringify(row.get(status_column)).strip().lower() == SETTLED_STATUS
    )


def validate_top_n(top_n: int | None) -> None:
    if top_n is ALL_ITEMS:
        return
    if isinstance(top_n, bool) or not isinstance(top_n, int) or top_n <= 0:
        raise ValueError(f"top_n must be a positive integer or ALL_ITEMS, got {top_n!r}")


def aggregate(
    rows: Sequence[Row],
    label_column: str | None,
    measure: str | None,
    top_n: int | None = ALL_ITEMS,
) -> list[AggregateEntry]:
    """
    Rank labels by summed measure (or row count in count mode).

    Unparseable and non-positive measure values are skipped without
    affecting their group. Ties keep first-encounter order.
    """
    validate_top_n(top_n)
    if not rows or not label_column or not measure:
        return []

    count_mode = measure == COUNT_MODE
    totals: dict[str, float] = {}
    for row in rows:
        label = row.get(label_column)
        if is_blank(label):
            continue
        key = stringify(label)
        if count_mode:
            totals[key] = totals.get(key, 0) + 1
            continue
        value = parse_money(row.get(measure))
        if value is not None and value > 0:
            totals[key] = totals.get(key, 0) + value

    ranked = sorted(
        (AggregateEntry(name=name, value=value) for name, value in totals.items()),
        key=lambda entry: entry.value,
        reverse=True,
    )
    if top_n is ALL_ITEMS:
        return ranked
    return ranked[:top_n]


def _sort_value(row: Row, measure: str | None) -> float:
    if not measure or measure == COUNT_MODE:
        return 0.0
    return parse_money(row.get(measure)) or 0.0


def group_details(
    rows: Sequence[Row],
    entries: Sequence[AggregateEntry],
    label_column: str | None,
    measure: str | None,
) -> list[DetailedAggregateEntry]:
    if not entries or not label_column or not rows:
        return [DetailedAggregateEntry(name=e.name, value=e.value, details=()) for e in entries]

    groups: dict[str, list[Row]] = {}
    for row in rows:
        groups.setdefault(stringify(row.get(label_column)), []).append(row)

    detailed: list[DetailedAggregateEntry] = []
    for entry in entries:
        members = sorted(
            groups.get(entry.name, []),
            key=lambda row: _sort_value(row, measure),
            reverse=True,
        )
        detailed.append(DetailedAggregateEntry(name=entry.name, value=entry.value, details=tuple(members)))
    return detailed
