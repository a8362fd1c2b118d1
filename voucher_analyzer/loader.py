"""
loader.py — turns an uploaded voucher file into Rows

Supports: .csv .tsv .txt .xlsx .xlsm .xls .ods

Public API:
    loaded = load_rows("vouchers.xlsx")
    loaded = load_rows(uploaded_bytes, file_name="vouchers.xlsx")

Workbooks keep native cell values (numbers, datetimes); text files are read
as strings. Only the first sheet is used. A sheet with headers but no data,
or a blank text file, is not an error: check ``loaded.is_empty``.
"""

from __future__ import annotations

import csv
import io
import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, BinaryIO, Union

import chardet
import pandas as pd

from voucher_analyzer.config import ALL_FORMATS, EXCEL_FORMATS, ODS_FORMATS, TEXT_FORMATS
from voucher_analyzer.models import Row, columns_from_rows, freeze_rows

Source = Union[str, Path, bytes, BinaryIO]


class DecodeError(ValueError):
    """The file could not be turned into rows."""


@dataclass(frozen=True)
class LoadedSheet:
    rows: tuple[Row, ...]
    columns: tuple[str, ...]
    file_name: str
    detected_format: str
    sheet_name: str | None = None
    sheet_names: tuple[str, ...] = ()
    detected_encoding: str | None = None
    delimiter: str | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rows


# ══════════════════════════════════════════════════════════════════════════════
# CELL NORMALIZATION
# ══════════════════════════════════════════════════════════════════════════════

def normalize_cell(value: Any) -> Any:
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, pd.Timestamp):
        value = value.to_pydatetime()
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            # keep the wall-clock day the sheet shows
            return value.replace(tzinfo=None)
        return value
    if hasattr(value, "item") and not isinstance(value, (str, bytes)):
        # numpy scalar
        return normalize_cell(value.item())
    if isinstance(value, str):
        return value.replace("\x00", "")
    return value


def _is_blank_cell(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def frame_to_rows(df: pd.DataFrame) -> tuple[tuple[Row, ...], int]:
    """Convert a frame to read-only rows; returns (rows, blank_rows_dropped)."""
    headers = [str(column) for column in df.columns]
    records: list[dict[str, Any]] = []
    dropped = 0
    for values in df.itertuples(index=False, name=None):
        record = {header: normalize_cell(value) for header, value in zip(headers, values)}
        if all(_is_blank_cell(value) for value in record.values()):
            dropped += 1
            continue
        records.append(record)
    return freeze_rows(records), dropped


# ══════════════════════════════════════════════════════════════════════════════
# TEXT FILES
# ══════════════════════════════════════════════════════════════════════════════

def _detect_encoding(raw: bytes) -> str:
    result = chardet.detect(raw)
    encoding = result.get("encoding")
    return encoding or "utf-8"


def _read_text_safely(raw: bytes, preferred_encoding: str) -> str:
    """
    Decode line by line: UTF-8, then the detected encoding, then latin-1,
    finally cp1252 with replacement so a stray byte never aborts the load.
    """
    decoded_lines: list[str] = []
    for raw_line in raw.split(b"\n"):
        decoded: str | None = None
        for enc in ("utf-8", preferred_encoding, "latin-1"):
            try:
                decoded = raw_line.decode(enc)
                break
            except (LookupError, UnicodeDecodeError):
                continue
        if decoded is None:
            decoded = raw_line.decode("cp1252", errors="replace")
        decoded_lines.append(decoded.replace("\x00", ""))
    return "\n".join(decoded_lines).lstrip("\ufeff")


def _detect_delimiter(text: str) -> str:
    sample_lines = [line for line in text.splitlines() if line.strip()][:50]
    sample = "\n".join(sample_lines[:25])
    if sample:
        try:
            return csv.Sniffer().sniff(sample, delimiters=",;\t|").delimiter
        except csv.Error:
            pass

    best_delim = ","
    best_width = 1
    for delim in (",", ";", "\t", "|"):
        rows = [row for row in csv.reader(io.StringIO(sample), delimiter=delim) if any(cell.strip() for cell in row)]
        if len(rows) < 2:
            continue
        mode_width, _ = Counter(len(row) for row in rows).most_common(1)[0]
        if mode_width > best_width:
            best_width = mode_width
            best_delim = delim
    return best_delim


def _load_text(raw: bytes, file_name: str, suffix: str) -> LoadedSheet:
    encoding = _detect_encoding(raw)
    text = _read_text_safely(raw, encoding)
    delimiter = "\t" if suffix == ".tsv" else _detect_delimiter(text)
    if not text.strip():
        return LoadedSheet(
            rows=(),
            columns=(),
            file_name=file_name,
            detected_format=suffix.lstrip("."),
            detected_encoding=encoding,
            delimiter=delimiter,
        )

    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            on_bad_lines="skip",
            sep=delimiter,
            engine="python",
        )
    except Exception as exc:
        raise DecodeError(f"Could not parse {suffix} file: {exc}") from exc

    rows, dropped = frame_to_rows(df)
    warnings: list[str] = []
    if dropped:
        warnings.append(f"Dropped {dropped} blank row(s).")
    return LoadedSheet(
        rows=rows,
        columns=columns_from_rows(rows) or tuple(str(column) for column in df.columns),
        file_name=file_name,
        detected_format=suffix.lstrip("."),
        detected_encoding=encoding,
        delimiter=delimiter,
        warnings=warnings,
    )


# ══════════════════════════════════════════════════════════════════════════════
# WORKBOOKS
# ══════════════════════════════════════════════════════════════════════════════

def _workbook_engine(suffix: str) -> str:
    if suffix == ".xls":
        try:
            import xlrd  # noqa: F401
        except ImportError as exc:
            raise DecodeError(".xls files require xlrd — run: pip install xlrd") from exc
        return "xlrd"
    if suffix in ODS_FORMATS:
        try:
            import odf  # noqa: F401
        except ImportError as exc:
            raise DecodeError(".ods files require odfpy — run: pip install odfpy") from exc
        return "odf"
    return "openpyxl"


def _load_workbook(raw: bytes, file_name: str, suffix: str) -> LoadedSheet:
    engine = _workbook_engine(suffix)
    try:
        with pd.ExcelFile(io.BytesIO(raw), engine=engine) as xf:
            sheet_names = [str(name) for name in xf.sheet_names]
            if not sheet_names:
                raise DecodeError(f"{file_name} contains no sheets.")
            df = pd.read_excel(xf, sheet_name=xf.sheet_names[0], dtype=object)
    except DecodeError:
        raise
    except Exception as exc:
        raise DecodeError(f"Could not open workbook: {exc}") from exc

    rows, dropped = frame_to_rows(df)
    warnings: list[str] = []
    if len(sheet_names) > 1:
        warnings.append(
            f"Multiple sheets found ({len(sheet_names)} total); "
            f"used '{sheet_names[0]}'. Ignored: {sheet_names[1:]}"
        )
    if dropped:
        warnings.append(f"Dropped {dropped} blank row(s).")
    return LoadedSheet(
        rows=rows,
        columns=columns_from_rows(rows) or tuple(str(column) for column in df.columns),
        file_name=file_name,
        detected_format=suffix.lstrip("."),
        sheet_name=sheet_names[0],
        sheet_names=tuple(sheet_names),
        warnings=warnings,
    )


# ══════════════════════════════════════════════════════════════════════════════
# PUBLIC API
# ══════════════════════════════════════════════════════════════════════════════

def _read_source(source: Source) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise DecodeError(f"File not found: {path}")
        return path.read_bytes()
    return source.read()


def load_rows(source: Source, file_name: str | None = None) -> LoadedSheet:
    """
    Decode a voucher file.

    Raises:
        DecodeError  for missing files, unsupported extensions, unreadable
                     content and missing optional engines (xlrd, odfpy).
    """
    if file_name is None:
        if isinstance(source, (str, Path)):
            file_name = Path(source).name
        else:
            file_name = getattr(source, "name", None) or ""
    suffix = Path(file_name).suffix.lower()
    if suffix not in ALL_FORMATS:
        supported = ", ".join(sorted(ALL_FORMATS))
        raise DecodeError(f"Unsupported format '{suffix or '[missing extension]'}'. Supported: {supported}")

    raw = _read_source(source)
    if suffix in TEXT_FORMATS:
        return _load_text(raw, file_name, suffix)
    if suffix in EXCEL_FORMATS or suffix in ODS_FORMATS:
        return _load_workbook(raw, file_name, suffix)
    raise DecodeError(f"Unhandled format: {suffix}")
