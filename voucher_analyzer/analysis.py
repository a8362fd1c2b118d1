"""
One pass of the pipeline: rows + selection -> everything the dashboard shows.

``run_analysis`` is pure. ``Analyzer`` only remembers the last call so that
re-rendering with an unchanged selection skips the table scans; dropping the
memo never changes a result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from voucher_analyzer.aggregation import aggregate, filter_settled_rows, group_details, validate_top_n
from voucher_analyzer.columns import find_payment_status_column
from voucher_analyzer.config import COUNT_MODE, DEFAULT_TOP_N
from voucher_analyzer.models import AggregateEntry, DetailedAggregateEntry, Row, SummaryStats
from voucher_analyzer.summary import build_title, compute_summary_stats, measure_display_name


@dataclass(frozen=True)
class Selection:
    label_column: str | None = None
    measure: str | None = None
    top_n: int | None = DEFAULT_TOP_N

    def __post_init__(self) -> None:
        validate_top_n(self.top_n)

    @property
    def is_configured(self) -> bool:
        return bool(self.label_column and self.measure)

    @property
    def count_mode(self) -> bool:
        return self.measure == COUNT_MODE


@dataclass(frozen=True)
class AnalysisResult:
    selection: Selection
    payment_column: str | None
    settled_rows: tuple[Row, ...]
    entries: tuple[AggregateEntry, ...]
    detailed_entries: tuple[DetailedAggregateEntry, ...]
    stats: SummaryStats
    title: str
    measure_name: str = ""
    count_mode: bool = False

    @property
    def has_chart(self) -> bool:
        return bool(self.entries)


def run_analysis(rows: Sequence[Row], columns: Sequence[str], selection: Selection) -> AnalysisResult:
    settled = filter_settled_rows(rows, columns)
    entries = aggregate(settled, selection.label_column, selection.measure, selection.top_n)
    detailed = group_details(settled, entries, selection.label_column, selection.measure)
    return AnalysisResult(
        selection=selection,
        payment_column=find_payment_status_column(columns),
        settled_rows=settled,
        entries=tuple(entries),
        detailed_entries=tuple(detailed),
        stats=compute_summary_stats(settled, columns),
        title=build_title(columns, selection.label_column, selection.measure, selection.top_n),
        measure_name=measure_display_name(selection.measure),
        count_mode=selection.count_mode,
    )


@dataclass
class Analyzer:
    _last_rows: Sequence[Row] | None = field(default=None, repr=False)
    _last_key: tuple | None = field(default=None, repr=False)
    _last_result: AnalysisResult | None = field(default=None, repr=False)

    def analyze(self, rows: Sequence[Row], columns: Sequence[str], selection: Selection) -> AnalysisResult:
        key = (tuple(columns), selection)
        if self._last_result is not None and rows is self._last_rows and key == self._last_key:
            return self._last_result
        result = run_analysis(rows, columns, selection)
        self._last_rows = rows
        self._last_key = key
        self._last_result = result
        return result

    def clear(self) -> None:
        self._last_rows = None
        self._last_key = None
        self._last_result = None
