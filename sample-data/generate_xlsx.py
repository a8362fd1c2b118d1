#!/usr/bin/env python3
"""
Generates sample-data/sample_vouchers.xlsx, a payment-voucher export with the
quirks the analyzer has to tolerate.

Run from the repo root:
    python sample-data/generate_xlsx.py

Quirks baked in:
  - "Total Amount" mixes "$1,234.56" text, plain numbers and "N/A"
  - "Payment Status" mixes "Paid", " paid ", "PAID" and "Pending"
  - "Date" mixes native datetimes and DD/MM/YYYY text
  - one blank row in the middle of the data
  - a second sheet that the analyzer ignores
"""

from datetime import datetime
from pathlib import Path

import openpyxl

OUTPUT = Path(__file__).parent / "sample_vouchers.xlsx"

wb = openpyxl.Workbook()
ws = wb.active
ws.title = "Vouchers"

ws.append([
    "PV Code", "Customer Name", "Invoice No", "Date", "Expire Date",
    "Purpose", "Tax", "Total Amount", "Payment Status",
])

data = [
    ["PV-0001", "Angkor Trading",   "INV-1001", datetime(2024, 1, 3),  "10/01/2024",        "Office supplies", 10.0,  "$1,250.00", "Paid"],
    ["PV-0002", "Mekong Logistics", "INV-1002", "05/01/2024",          "20/01/2024",        "Freight",         25.5,  2890.75,     "paid "],
    ["PV-0003", "Angkor Trading",   "INV-1003", "12/01/2024",          datetime(2024, 2, 1), "Printer toner",  4.0,   "$320.40",   "PAID"],
    ["PV-0004", "Bayon Foods",      "INV-1004", datetime(2024, 1, 15), None,                "Catering",        12.0,  "N/A",       "Paid"],
    [None,      None,               None,       None,                  None,                None,              None,  None,        None],
    ["PV-0005", "Mekong Logistics", "INV-1005", "31/02/2024",          "02/03/2024",        "Warehousing",     40.0,  "$4,100.00", "Pending"],
    ["PV-0006", "Bayon Foods",      "INV-1006", "01/02/2024",          "15/02/2024",        "Catering",        8.0,   "$780.00",   "Paid"],
    ["PV-0007", "Tonle Sap Marine", "INV-1007", "03/02/2024",          "03/02/2024",        "Boat repair",     60.0,  "$5,600.00", "Paid"],
    ["PV-0008", "Angkor Trading",   "INV-1008", "14/02/2024",          "01/03/2024",        "Stationery",      2.0,   "$95.10",    "Paid"],
]

for row in data:
    ws.append(row)

notes = wb.create_sheet("Notes")
notes.append(["Exported from the finance system; only the first sheet is analyzed."])

wb.save(OUTPUT)
print(f"Created: {OUTPUT}")
