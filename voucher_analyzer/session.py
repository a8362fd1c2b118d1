"""
Dashboard state owner.

Holds the current Row set and selection tuple, routes boundary failures
(decode, export) into user notices, and ignores decode results that were
superseded by a newer load.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence

from voucher_analyzer.analysis import AnalysisResult, Analyzer, Selection
from voucher_analyzer.charts import render_chart_png
from voucher_analyzer.columns import classify_label_candidates, pick_default_label, pick_default_measure
from voucher_analyzer.config import CHART_BAR, CHART_TYPES, DEFAULT_TOP_N, PNG_MIME, XLSX_MIME
from voucher_analyzer.export import ExportError, chart_file_name, details_file_name, flatten_for_export, write_details_workbook
from voucher_analyzer.loader import DecodeError, LoadedSheet, Source, load_rows
from voucher_analyzer.models import Row
from voucher_analyzer.summary import build_chart_notice

INFO = "info"
SUCCESS = "success"
WARNING = "warning"
ERROR = "error"


@dataclass(frozen=True)
class Notice:
    level: str
    message: str


@dataclass(frozen=True)
class ExportArtifact:
    file_name: str
    data: bytes
    mime: str


class DashboardSession:
    def __init__(self) -> None:
        self.file_name: str | None = None
        self.rows: tuple[Row, ...] = ()
        self.columns: tuple[str, ...] = ()
        self.selection = Selection(top_n=DEFAULT_TOP_N)
        self.chart_type = CHART_BAR
        self.notice: Notice | None = None
        self.load_warnings: list[str] = []
        self._load_token = 0
        self._analyzer = Analyzer()
        self._last_chart_key: tuple | None = None

    @property
    def is_data_loaded(self) -> bool:
        return bool(self.rows)

    # ── Loading ───────────────────────────────────────────────────────────────

    def begin_load(self, file_name: str) -> int:
        self._load_token += 1
        self.notice = Notice(INFO, "Processing your file...")
        return self._load_token

    def is_current(self, token: int) -> bool:
        return token == self._load_token

    def finish_load(self, token: int, loaded: LoadedSheet) -> bool:
        """Apply a decoded sheet; returns False when the result was stale or empty."""
        if not self.is_current(token):
            return False
        if loaded.is_empty:
            self.notice = Notice(INFO, "The selected file is empty or has no data rows.")
            return False

        self.file_name = loaded.file_name
        self.rows = loaded.rows
        self.columns = loaded.columns
        self.load_warnings = list(loaded.warnings)
        self.selection = Selection(
            label_column=pick_default_label(self.columns),
            measure=pick_default_measure(self.columns),
            top_n=self.selection.top_n,
        )
        self._analyzer.clear()
        self._last_chart_key = None
        self.notice = Notice(SUCCESS, f'File "{loaded.file_name}" loaded. Defaulting to Top Customers view.')
        return True

    def fail_load(self, token: int, exc: Exception) -> None:
        if not self.is_current(token):
            return
        self.notice = Notice(
            ERROR,
            f"An error occurred while processing the file. Please ensure it is a valid spreadsheet or CSV file. ({exc})",
        )

    def load(self, source: Source, file_name: str) -> bool:
        token = self.begin_load(file_name)
        try:
            loaded = load_rows(source, file_name=file_name)
        except DecodeError as exc:
            self.fail_load(token, exc)
            return False
        return self.finish_load(token, loaded)

    # ── Selection ─────────────────────────────────────────────────────────────

    def set_label_column(self, label_column: str | None) -> None:
        self.selection = replace(self.selection, label_column=label_column)

    def set_measure(self, measure: str | None) -> None:
        self.selection = replace(self.selection, measure=measure)

    def set_top_n(self, top_n: int | None) -> None:
        self.selection = replace(self.selection, top_n=top_n)

    def set_chart_type(self, chart_type: str) -> None:
        if chart_type not in CHART_TYPES:
            raise ValueError(f"Unknown chart type {chart_type!r}; expected one of {CHART_TYPES}")
        self.chart_type = chart_type

    def label_options(self) -> Sequence[str]:
        return classify_label_candidates(self.columns)

    # ── Analysis ──────────────────────────────────────────────────────────────

    def analysis(self) -> AnalysisResult:
        result = self._analyzer.analyze(self.rows, self.columns, self.selection)
        chart_key = (self.file_name, self.selection)
        if result.has_chart and chart_key != self._last_chart_key:
            self._last_chart_key = chart_key
            self.notice = Notice(
                INFO,
                build_chart_notice(
                    self.columns,
                    self.selection.label_column,
                    self.selection.measure,
                    self.selection.top_n,
                ),
            )
        return result

    # ── Export ────────────────────────────────────────────────────────────────

    def export_details(self) -> ExportArtifact | None:
        result = self.analysis()
        if not result.has_chart:
            self.notice = Notice(WARNING, "No data available to export.")
            return None
        try:
            data = write_details_workbook(flatten_for_export(result.detailed_entries))
        except ExportError as exc:
            self.notice = Notice(ERROR, f"Failed to export data. ({exc})")
            return None
        self.notice = Notice(SUCCESS, "Top data exported successfully.")
        return ExportArtifact(details_file_name(self.file_name, self.selection.top_n), data, XLSX_MIME)

    def export_chart(self) -> ExportArtifact | None:
        result = self.analysis()
        if not self.is_data_loaded:
            self.notice = Notice(WARNING, "No data available to export.")
            return None
        try:
            data = render_chart_png(
                result.entries,
                self.chart_type,
                self.selection.label_column,
                result.measure_name,
                result.title,
            )
        except ExportError as exc:
            self.notice = Notice(ERROR, f"Failed to export chart. ({exc})")
            return None
        self.notice = Notice(SUCCESS, "Chart exported successfully.")
        return ExportArtifact(chart_file_name(self.file_name), data, PNG_MIME)
