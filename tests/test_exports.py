"""
Tests for CSV/PDF exports.
"""
import io

import pandas as pd
import pytest

from core.models import Client, CostLine, DailyRowInput, Item, JobRow, ReportData
from core.services.exports import (
    ACCOUNTS_HEADERS,
    DAILY_ENTRY_HEADERS,
    DASHBOARD_HEADERS,
    REPORT_HEADERS,
    accounts_csv,
    daily_entry_csv,
    daily_entry_pdf,
    dashboard_csv,
    report_csv,
)

DAY = "2024-03-05"


@pytest.fixture
def clients():
    return [Client(id=1, name="Alpha, Inc."), Client(id=2, name="Beta")]


@pytest.fixture
def items():
    return [Item(sku="PAP-001", name="A4 Paper", uom="sheets")]


@pytest.fixture
def rows():
    return [
        DailyRowInput(client_id=1, job_reference="flyers", material_sku="PAP-001", ss_qty=10, fb_qty=5, waste=2),
        DailyRowInput(client_id=2, job_reference="cards", material_sku="PAP-001", fb_qty=3, designing_charges=50.0),
    ]


def _read(text):
    return pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=False)


def test_daily_entry_csv(rows, clients, items):
    df = _read(daily_entry_csv(DAY, rows, clients, items))
    assert list(df.columns) == DAILY_ENTRY_HEADERS
    assert list(df["Job No."]) == ["5-Mar-01", "5-Mar-02"]
    assert list(df["Client Name"]) == ["Alpha, Inc.", "Beta"]
    assert list(df["Material"]) == ["A4 Paper", "A4 Paper"]
    assert list(df["F&B Qty"]) == ["5", "3"]


def test_report_csv():
    report = ReportData(
        rows=[JobRow(id=1, date=DAY, client_name="Beta", material_name="A4 Paper", job_reference="x", ss_qty=3)]
    )
    df = _read(report_csv(report))
    assert list(df.columns) == REPORT_HEADERS
    assert df.iloc[0]["Date"] == DAY
    assert df.iloc[0]["SS Qty"] == "3"


def test_accounts_csv():
    jobs = [
        JobRow(id=1, serial_no=2, date=DAY, client_name="Beta", job_reference="x", is_billed=True, bill_no="INV-1"),
        JobRow(id=2, serial_no=3, date=DAY, client_name="Beta", job_reference="y"),
    ]
    df = _read(accounts_csv(jobs))
    assert list(df.columns) == ACCOUNTS_HEADERS
    assert list(df["Job No"]) == ["5-Mar-02", "5-Mar-03"]
    assert list(df["Billed"]) == ["Yes", "No"]
    assert list(df["Bill No."]) == ["INV-1", ""]


def test_dashboard_csv_money_two_decimals():
    job = JobRow(id=1, serial_no=1, date=DAY, client_name="Beta", material_name="A4 Paper")
    line = CostLine(job=job, total_sheets=17, material_cost=8.5, print_clicks=22, click_cost=94.754, total_cost=103.254)
    df = _read(dashboard_csv([line]))
    assert list(df.columns) == DASHBOARD_HEADERS
    assert df.iloc[0]["Material Cost"] == "8.50"
    assert df.iloc[0]["Click Cost"] == "94.75"
    assert df.iloc[0]["Total Cost"] == "103.25"


def test_daily_entry_pdf_is_pdf(rows, clients, items):
    data = daily_entry_pdf(
        DAY, "Tuesday", rows, clients, items, start_reading=100, end_reading=129, total_impressions=29
    )
    assert isinstance(data, bytes)
    assert data.startswith(b"%PDF")
