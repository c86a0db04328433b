"""
Tests for shared production and cost formulas.
"""
import pytest

from core.calculators import (
    click_cost,
    day_name,
    impressions,
    job_number,
    machine_end_reading,
    machine_production,
    material_cost,
    material_usage,
    production_value,
    row_totals,
    total_impressions,
)
from core.config import Settings
from core.models import DailyRowInput


@pytest.fixture
def row():
    return DailyRowInput(
        client_id=1, material_sku="PAP-001", ss_qty=10, fb_qty=5, waste=2, designing_charges=150.0, finishing=40.0
    )


def test_impressions_count_front_and_back_twice(row):
    assert impressions(row) == 10 + 10 + 2


def test_material_usage_counts_front_and_back_once(row):
    assert material_usage(row) == 10 + 5 + 2


def test_production_value(row):
    assert production_value(row) == pytest.approx(190.0)


def test_totals(row):
    other = DailyRowInput(client_id=2, material_sku="X", ss_qty=0, fb_qty=3, waste=1, finishing=10.0)
    assert total_impressions([row, other]) == 29
    t = row_totals([row, other])
    assert (t.ss_qty, t.fb_qty, t.waste) == (10, 8, 3)
    assert t.finishing == pytest.approx(50.0)
    assert t.designing_charges == pytest.approx(150.0)


def test_machine_readings(row):
    assert machine_end_reading(1000, [row]) == 1022
    assert machine_production(1000, 1022) == 22
    assert machine_production(1000, 900) == 0


def test_costs(row):
    assert material_cost(row, 0.5) == pytest.approx(8.5)
    assert click_cost(row, 2.0) == pytest.approx(44.0)


def test_default_click_charge_includes_tax(tmp_path):
    s = Settings(data_dir=tmp_path, db_path=tmp_path / "app.db", log_dir=tmp_path / "logs")
    assert s.click_charge == pytest.approx(3.65 * 1.18)


@pytest.mark.parametrize(
    "date, serial, expected",
    [("2024-03-05", 1, "5-Mar-01"), ("2024-12-25", 12, "25-Dec-12")],
)
def test_job_number(date, serial, expected):
    assert job_number(date, serial) == expected


def test_day_name():
    assert day_name("2024-03-05") == "Tuesday"
