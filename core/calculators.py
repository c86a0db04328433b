"""
Formulas shared by the daily sheet, reports, the cost dashboard and exports.

Impressions count a front-and-back sheet twice (two passes through the
machine); material usage counts it once (one physical sheet). Waste is
counted once in both.
"""
from __future__ import annotations

from typing import Iterable

from core.models import DailyRowInput, RowTotals
from core.utils import parse_iso_date


def impressions(row: DailyRowInput) -> int:
    return int(row.ss_qty) + int(row.fb_qty) * 2 + int(row.waste)


def material_usage(row: DailyRowInput) -> int:
    return int(row.ss_qty) + int(row.fb_qty) + int(row.waste)


def production_value(row: DailyRowInput) -> float:
    return float(row.designing_charges) + float(row.finishing)


def total_impressions(rows: Iterable[DailyRowInput]) -> int:
    return sum(impressions(r) for r in rows)


def row_totals(rows: Iterable[DailyRowInput]) -> RowTotals:
    totals = RowTotals()
    for r in rows:
        totals.add(r)
    return totals


def machine_end_reading(start_reading: int, rows: Iterable[DailyRowInput]) -> int:
    return int(start_reading) + total_impressions(rows)


def machine_production(start_reading: int, end_reading: int) -> int:
    return max(0, int(end_reading) - int(start_reading))


def material_cost(row: DailyRowInput, unit_price: float) -> float:
    return material_usage(row) * float(unit_price)


def click_cost(row: DailyRowInput, click_charge: float) -> float:
    return impressions(row) * float(click_charge)


def day_name(date_str: str) -> str:
    return parse_iso_date(date_str).strftime("%A")


def job_number(date_str: str, serial_no: int) -> str:
    """
    Printable job number: {day}-{Mon}-{NN}

    Example:
      2024-03-05, serial 1 -> 5-Mar-01
    """
    d = parse_iso_date(date_str)
    return f"{d.day}-{d.strftime('%b')}-{int(serial_no):02d}"
