"""
CSV and PDF projections of the screens' data. No business rules live here:
every number comes from the calculators or the query results.
"""
from __future__ import annotations

from typing import Iterable, Sequence

import pandas as pd
from fpdf import FPDF

from core.calculators import job_number, row_totals
from core.models import DAILY_ROW_COLUMNS, Client, CostLine, DailyRowInput, Item, JobRow, ReportData

DAILY_ENTRY_HEADERS = ["Job No.", "Client Name", "Job Reference", "Material"] + [label for _, label in DAILY_ROW_COLUMNS]
REPORT_HEADERS = ["Date", "Client", "Job Ref", "Material"] + [label for _, label in DAILY_ROW_COLUMNS]
ACCOUNTS_HEADERS = ["Date", "Job No", "Client Name", "Job Reference", "Billed", "Bill No."]
DASHBOARD_HEADERS = [
    "Date", "Job No", "Client Name", "Job Ref", "Material",
    "Total Sheets", "Material Cost", "Print Clicks", "Click Cost", "Total Cost",
]
PDF_HEADERS = ["Job No.", "Client", "Job Ref", "Material", "Design Charges", "SS Qty", "F&B Qty", "Finishing", "Waste"]


def _to_csv(records: list[list], columns: list[str]) -> str:
    return pd.DataFrame(records, columns=columns).to_csv(index=False, lineterminator="\n")


def _daily_entry_records(
    date: str,
    rows: Sequence[DailyRowInput],
    clients: Iterable[Client],
    items: Iterable[Item],
) -> list[list]:
    client_names = {c.id: c.name for c in clients}
    item_names = {i.sku: i.name for i in items}
    return [
        [
            job_number(date, n),
            client_names.get(r.client_id, ""),
            r.job_reference,
            item_names.get(r.material_sku, ""),
            r.designing_charges,
            r.ss_qty,
            r.fb_qty,
            r.finishing,
            r.waste,
        ]
        for n, r in enumerate(rows, start=1)
    ]


def daily_entry_csv(
    date: str,
    rows: Sequence[DailyRowInput],
    clients: Iterable[Client],
    items: Iterable[Item],
) -> str:
    return _to_csv(_daily_entry_records(date, rows, clients, items), DAILY_ENTRY_HEADERS)


def report_csv(report: ReportData) -> str:
    records = [
        [r.date, r.client_name, r.job_reference, r.material_name,
         r.designing_charges, r.ss_qty, r.fb_qty, r.finishing, r.waste]
        for r in report.rows
    ]
    return _to_csv(records, REPORT_HEADERS)


def accounts_csv(jobs: Iterable[JobRow]) -> str:
    records = [
        [j.date, job_number(j.date, j.serial_no), j.client_name, j.job_reference,
         "Yes" if j.is_billed else "No", j.bill_no or ""]
        for j in jobs
    ]
    return _to_csv(records, ACCOUNTS_HEADERS)


def dashboard_csv(lines: Iterable[CostLine]) -> str:
    records = [
        [
            ln.job.date,
            job_number(ln.job.date, ln.job.serial_no),
            ln.job.client_name,
            ln.job.job_reference,
            ln.job.material_name,
            ln.total_sheets,
            f"{ln.material_cost:.2f}",
            ln.print_clicks,
            f"{ln.click_cost:.2f}",
            f"{ln.total_cost:.2f}",
        ]
        for ln in lines
    ]
    return _to_csv(records, DASHBOARD_HEADERS)


# -------------------------
# PDF (landscape daily sheet)
# -------------------------

def _latin1(s) -> str:
    # Core PDF fonts are latin-1 only.
    return str(s).encode("latin-1", "replace").decode("latin-1")


def daily_entry_pdf(
    date: str,
    day: str,
    rows: Sequence[DailyRowInput],
    clients: Iterable[Client],
    items: Iterable[Item],
    *,
    start_reading: int,
    end_reading: int,
    total_impressions: int,
) -> bytes:
    body = _daily_entry_records(date, rows, clients, items)
    t = row_totals(rows)
    body.append(["Total", "", "", "", t.designing_charges, t.ss_qty, t.fb_qty, t.finishing, t.waste])

    pdf = FPDF(orientation="L", unit="mm", format="A4")
    pdf.set_auto_page_break(auto=True, margin=12)
    pdf.add_page()

    pdf.set_font("Helvetica", "B", 18)
    pdf.cell(0, 10, _latin1(f"Daily Production - {date} ({day})"), new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 12)
    pdf.cell(0, 6, _latin1(f"Total Impressions: {total_impressions}"), new_x="LMARGIN", new_y="NEXT")
    pdf.cell(0, 6, _latin1(f"Machine Readings: {start_reading} - {end_reading}"), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(4)

    widths = [24, 50, 45, 45, 30, 20, 20, 22, 20]
    row_h = 7

    pdf.set_font("Helvetica", "B", 10)
    pdf.set_fill_color(230, 230, 230)
    for w, h in zip(widths, PDF_HEADERS):
        pdf.cell(w, row_h, _latin1(h), border=1, align="C", fill=True)
    pdf.ln(row_h)

    for i, rec in enumerate(body):
        is_total = i == len(body) - 1
        pdf.set_font("Helvetica", "B" if is_total else "", 9)
        for col, (w, v) in enumerate(zip(widths, rec)):
            align = "R" if col >= 4 else "L"
            pdf.cell(w, row_h, _latin1(v), border=1, align=align)
        pdf.ln(row_h)

    return bytes(pdf.output())
