from __future__ import annotations

import logging
from typing import Iterable, Optional

from core.calculators import click_cost, impressions, material_cost, material_usage, production_value
from core.models import CostLine, CostSummary, DailyRow, JobRow, ReportData, TopClient
from core.services.clients import list_clients
from core.services.daily_entry import get_latest_header_before, list_headers
from core.services.items import list_items
from core.store import ROWS_KEY, KeyValueStore
from core.utils import to_int

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "Unknown Client"
UNKNOWN_MATERIAL = "Unknown Material"
UNKNOWN_DATE = "Unknown Date"

TOP_CLIENTS_LIMIT = 5

BILLING_ALL = "all"
BILLING_BILLED = "billed"
BILLING_UNBILLED = "unbilled"

__all__ = [
    "get_report_data",
    "get_finalized_jobs",
    "update_billing_info",
    "get_latest_header_before",
    "filter_billing_jobs",
    "cost_report",
]


def _join_rows(store: KeyValueStore, *, start: Optional[str] = None, end: Optional[str] = None) -> list[JobRow]:
    """Saved rows joined with their header date and client/material names."""
    client_names = {c.id: c.name for c in list_clients(store)}
    item_names = {i.sku: i.name for i in list_items(store)}

    header_dates = {
        h.id: h.date
        for h in list_headers(store)
        if (start is None or h.date >= start) and (end is None or h.date <= end)
    }

    out: list[JobRow] = []
    for d in store.get(ROWS_KEY, []):
        row = DailyRow.from_dict(d)
        if start is not None or end is not None:
            if row.header_id not in header_dates:
                continue
        out.append(
            JobRow(
                **row.to_dict(),
                date=header_dates.get(row.header_id, UNKNOWN_DATE),
                client_name=client_names.get(row.client_id, UNKNOWN_CLIENT),
                material_name=item_names.get(row.material_sku, UNKNOWN_MATERIAL),
            )
        )
    return out


def get_report_data(store: KeyValueStore, start: str, end: str) -> ReportData:
    """
    Production summary for headers dated start..end (both inclusive).
    ISO dates compare correctly as strings.
    """
    rows = _join_rows(store, start=start, end=end)

    report = ReportData(rows=rows)
    job_counts: dict[int, int] = {}
    for r in rows:
        report.total_waste += r.waste
        report.total_production_value += production_value(r)
        report.total_impressions += impressions(r)
        job_counts[r.client_id] = job_counts.get(r.client_id, 0) + 1

    client_names = {c.id: c.name for c in list_clients(store)}
    # sorted() is stable: equal counts keep first-seen order.
    ranked = sorted(job_counts.items(), key=lambda kv: kv[1], reverse=True)[:TOP_CLIENTS_LIMIT]
    report.top_clients = [
        TopClient(client_name=client_names.get(cid, UNKNOWN_CLIENT), job_count=n) for cid, n in ranked
    ]
    return report


def get_finalized_jobs(store: KeyValueStore) -> list[JobRow]:
    # Rows whose header no longer resolves are dropped.
    return [r for r in _join_rows(store) if r.date != UNKNOWN_DATE]


def update_billing_info(store: KeyValueStore, row_id: int, is_billed: bool, bill_no: Optional[str]) -> bool:
    """
    Set billing flags on one saved row. A missing row is logged and ignored:
    billing is a non-critical action and never interrupts the caller.
    """
    rows = store.get(ROWS_KEY, [])
    for d in rows:
        if to_int(d.get("id")) == int(row_id):
            d["is_billed"] = bool(is_billed)
            d["bill_no"] = (str(bill_no).strip() or None) if bill_no is not None else None
            store.set(ROWS_KEY, rows)
            logger.info("Billing updated: row=%s billed=%s bill_no=%r", row_id, d["is_billed"], d["bill_no"])
            return True

    logger.warning("Billing update skipped: row %s not found", row_id)
    return False


def filter_billing_jobs(jobs: Iterable[JobRow], *, search: str = "", status: str = BILLING_ALL) -> list[JobRow]:
    """Accounts view: search + billed/unbilled filter, unbilled first then newest date."""
    term = str(search or "").strip().lower()
    out = []
    for j in jobs:
        haystack = [j.client_name.lower(), j.job_reference.lower(), (j.bill_no or "").lower()]
        if term and not any(term in h for h in haystack):
            continue
        if status == BILLING_BILLED and not j.is_billed:
            continue
        if status == BILLING_UNBILLED and j.is_billed:
            continue
        out.append(j)

    out.sort(key=lambda j: j.date, reverse=True)
    out.sort(key=lambda j: j.is_billed)
    return out


def cost_report(store: KeyValueStore, start: str, end: str, *, click_charge: float) -> tuple[list[CostLine], CostSummary]:
    """
    Per-job cost: material (sheets x item price) + machine clicks (impressions x click charge).
    """
    prices = {i.sku: i.price for i in list_items(store)}
    jobs = [j for j in get_finalized_jobs(store) if start <= j.date <= end]
    jobs.sort(key=lambda j: (j.date, j.id), reverse=True)

    lines: list[CostLine] = []
    summary = CostSummary()
    for j in jobs:
        m_cost = material_cost(j, prices.get(j.material_sku, 0.0))
        c_cost = click_cost(j, click_charge)
        line = CostLine(
            job=j,
            total_sheets=material_usage(j),
            material_cost=m_cost,
            print_clicks=impressions(j),
            click_cost=c_cost,
            total_cost=m_cost + c_cost,
        )
        lines.append(line)
        summary.total_material_cost += line.material_cost
        summary.total_click_cost += line.click_cost
        summary.total_cost += line.total_cost
        summary.total_clicks += line.print_clicks
    return lines, summary
