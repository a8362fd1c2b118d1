from __future__ import annotations

from typing import Sequence

from voucher_analyzer.columns import find_entity_column, find_payment_status_column, find_total_column
from voucher_analyzer.config import ALL_ITEMS, COUNT_MODE, COUNT_MODE_LABEL
from voucher_analyzer.models import Row, SummaryStats
from voucher_analyzer.normalizer import is_blank, parse_money, stringify


def compute_summary_stats(rows: Sequence[Row], columns: Sequence[str]) -> SummaryStats:
    """Stat-card figures; independent of the chosen label, measure and top-N."""
    total_column = find_total_column(columns)
    total_monetary = 0.0
    if total_column is not None:
        total_monetary = sum(parse_money(row.get(total_column)) or 0.0 for row in rows)

    entity_column = find_entity_column(columns)
    entities: set[str] = set()
    if entity_column is not None:
        for row in rows:
            value = row.get(entity_column)
            if not is_blank(value):
                entities.add(stringify(value))

    return SummaryStats(
        total_rows=len(rows),
        distinct_entities=len(entities),
        total_monetary=total_monetary,
    )


def measure_display_name(measure: str | None) -> str:
    if measure == COUNT_MODE:
        return COUNT_MODE_LABEL
    return measure or ""


def scope_label(top_n: int | None) -> str:
    return "All" if top_n is ALL_ITEMS else f"Top {top_n}"


def build_title(
    columns: Sequence[str],
    label_column: str | None,
    measure: str | None,
    top_n: int | None,
) -> str:
    if not label_column or not measure:
        return "Top Items"
    suffix = " (Paid Only)" if find_payment_status_column(columns) else ""
    return f"{scope_label(top_n)} {label_column} by {measure_display_name(measure)}{suffix}"


def build_chart_notice(
    columns: Sequence[str],
    label_column: str,
    measure: str,
    top_n: int | None,
) -> str:
    suffix = " (Paid items only)" if find_payment_status_column(columns) else ""
    return f"Chart updated: {scope_label(top_n)} {label_column} by {measure_display_name(measure)}{suffix}."
