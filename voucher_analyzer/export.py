from __future__ import annotations

import io
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Sequence

import openpyxl
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import IllegalCharacterError

from voucher_analyzer.config import ALL_ITEMS, EXPORT_CHART_SUFFIX, EXPORT_DETAILS_SUFFIX, EXPORT_SHEET_NAME
from voucher_analyzer.models import DetailedAggregateEntry

HEADER_COLOR = "2563EB"


class ExportError(RuntimeError):
    """A spreadsheet or image export could not be produced."""


def flatten_for_export(entries: Sequence[DetailedAggregateEntry]) -> list[dict[str, Any]]:
    """Detail rows verbatim, or a ``{name, value}`` stand-in for entries without any."""
    records: list[dict[str, Any]] = []
    for entry in entries:
        if entry.details:
            records.extend(dict(row) for row in entry.details)
        else:
            records.append({"name": entry.name, "value": entry.value})
    return records


def export_base_name(file_name: str | None) -> str:
    if not file_name:
        return "export"
    return Path(file_name).stem or "export"


def details_file_name(file_name: str | None, top_n: int | None) -> str:
    scope = "all" if top_n is ALL_ITEMS else f"top_{top_n}"
    return f"{export_base_name(file_name)}_{scope}_{EXPORT_DETAILS_SUFFIX}.xlsx"


def chart_file_name(file_name: str | None) -> str:
    return f"{export_base_name(file_name)}_{EXPORT_CHART_SUFFIX}.png"


def collect_headers(records: Sequence[Mapping[str, Any]]) -> list[str]:
    headers: dict[str, None] = {}
    for record in records:
        for key in record:
            headers.setdefault(str(key), None)
    return list(headers)


def _cell_value(value: Any) -> Any:
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.replace(tzinfo=None)
    return value


def _infer_col_widths(headers: list[str], records: Sequence[Mapping[str, Any]], min_width: int = 10, max_width: int = 60, sample: int = 300) -> list[int]:
    widths = [len(header) + 2 for header in headers]
    for record in records[:sample]:
        for i, header in enumerate(headers):
            value = record.get(header)
            if value is not None:
                widths[i] = max(widths[i], len(str(value)) + 2)
    return [max(min_width, min(max_width, width)) for width in widths]


def _style_sheet(ws, col_widths: list[int]) -> None:
    """Bold white header on a colored band, frozen header row, column widths."""
    fill = PatternFill("solid", fgColor=HEADER_COLOR)
    font = Font(bold=True, color="FFFFFF")
    for cell in ws[1]:
        cell.font = font
        cell.fill = fill
        cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=False)
    ws.freeze_panes = "A2"
    for i, width in enumerate(col_widths, start=1):
        ws.column_dimensions[get_column_letter(i)].width = width


def write_details_workbook(records: Sequence[Mapping[str, Any]]) -> bytes:
    headers = collect_headers(records)
    try:
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = EXPORT_SHEET_NAME
        if headers:
            ws.append(headers)
            for record in records:
                ws.append([_cell_value(record.get(header)) for header in headers])
            _style_sheet(ws, _infer_col_widths(headers, records))
        buffer = io.BytesIO()
        wb.save(buffer)
    except (IllegalCharacterError, ValueError, TypeError) as exc:
        raise ExportError(f"Could not write workbook: {exc}") from exc
    return buffer.getvalue()
