"""Shared constants for the voucher analyzer."""

from __future__ import annotations

# ── Measure selection ─────────────────────────────────────────────────────────
COUNT_MODE = "COUNT_OF_LABELS"
COUNT_MODE_LABEL = "Total Cooperated"

# ── Top-N ─────────────────────────────────────────────────────────────────────
ALL_ITEMS = None
DEFAULT_TOP_N = 10
TOP_N_OPTIONS = (10, 20, 30, 50, 100, ALL_ITEMS)

# ── Column role keywords (matched after lowercasing and removing whitespace) ──
LABEL_EXCLUDED_KEYWORDS = ("payment", "total amount", "price", "tax", "date")
PREFERRED_LABEL_KEYWORDS = ("customer", "supplier")
FALLBACK_LABEL_KEYWORDS = ("pv code",)
PAYMENT_STATUS_KEYWORDS = ("payment",)
TOTAL_COLUMN_KEYWORDS = ("total amount", "total paid")
ENTITY_COLUMN_KEYWORDS = ("supplier", "customer")
MEASURE_COLUMN_KEYWORDS = ("total amount",)

SETTLED_STATUS = "paid"

# ── Drill-down field keys ─────────────────────────────────────────────────────
PV_CODE_KEYS = ("pv code",)
INVOICE_KEYS = ("invoice no",)
CUSTOMER_KEYS = ("customer", "supplier")
START_DATE_KEYS = ("date", "create date")
END_DATE_KEYS = ("expire date", "paid date")
PURPOSE_KEYS = ("purpose",)
TRANSACTION_VALUE_KEYS = ("total amount", "total paid")

# ── Export ────────────────────────────────────────────────────────────────────
EXPORT_SHEET_NAME = "Top Data Details"
EXPORT_DETAILS_SUFFIX = "details"
EXPORT_CHART_SUFFIX = "chart"
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PNG_MIME = "image/png"

# ── Input formats ─────────────────────────────────────────────────────────────
TEXT_FORMATS = {".csv", ".tsv", ".txt"}
EXCEL_FORMATS = {".xlsx", ".xlsm", ".xls"}
ODS_FORMATS = {".ods"}
ALL_FORMATS = TEXT_FORMATS | EXCEL_FORMATS | ODS_FORMATS

# ── Charts ────────────────────────────────────────────────────────────────────
CHART_BAR = "Bar"
CHART_DOUGHNUT = "Doughnut"
CHART_TYPES = (CHART_BAR, CHART_DOUGHNUT)
BAR_COLOR = "#60a5fa"
DOUGHNUT_COLORS = [
    "#0088FE", "#00C49F", "#FFBB28", "#FF8042", "#8884d8",
    "#82ca9d", "#ffc658", "#d0ed57", "#a4de6c", "#8dd1e1",
]
EMPTY_CHART_MESSAGE = "Please upload a file and configure the data to see the chart."
