from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Optional

from core.utils import to_float, to_int


class Role(str, Enum):
    ADMIN = "Admin"
    DESIGNER = "Designer"  # print operator
    ACCOUNTS = "Accounts"


@dataclass
class Client:
    id: int
    name: str
    phone: Optional[str] = None
    billing_name: Optional[str] = None
    is_active: bool = True

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "Client":
        return cls(
            id=to_int(d.get("id")),
            name=str(d.get("name") or ""),
            phone=d.get("phone"),
            billing_name=d.get("billing_name"),
            is_active=bool(d.get("is_active", True)),
        )


@dataclass
class Item:
    sku: str
    name: str
    uom: str
    stock_qty: int = 0
    reorder_level: int = 0
    price: float = 0.0  # unit cost, used by the cost dashboard

    @property
    def is_low_stock(self) -> bool:
        return self.stock_qty <= self.reorder_level

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "Item":
        # Records written before prices existed have no "price".
        return cls(
            sku=str(d.get("sku") or ""),
            name=str(d.get("name") or ""),
            uom=str(d.get("uom") or ""),
            stock_qty=to_int(d.get("stock_qty")),
            reorder_level=to_int(d.get("reorder_level")),
            price=to_float(d.get("price")),
        )


HEADER_MUTABLE_FIELDS = ("day_name", "total_impressions", "machine_start_reading", "machine_end_reading")


@dataclass
class DailyHeader:
    id: int
    date: str  # YYYY-MM-DD
    day_name: str = ""
    total_impressions: int = 0
    machine_start_reading: int = 0
    machine_end_reading: int = 0

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "DailyHeader":
        return cls(
            id=to_int(d.get("id")),
            date=str(d.get("date") or ""),
            day_name=str(d.get("day_name") or ""),
            total_impressions=to_int(d.get("total_impressions")),
            machine_start_reading=to_int(d.get("machine_start_reading")),
            machine_end_reading=to_int(d.get("machine_end_reading")),
        )


# Numeric row columns, in display order, with their screen/export labels.
DAILY_ROW_COLUMNS = (
    ("designing_charges", "Designing Charges"),
    ("ss_qty", "SS Qty"),
    ("fb_qty", "F&B Qty"),
    ("finishing", "Finishing"),
    ("waste", "Waste"),
)
DAILY_ROW_NUMERIC_FIELDS = tuple(k for k, _ in DAILY_ROW_COLUMNS)


@dataclass
class DailyRowInput:
    """One job line as entered on the daily sheet (no ids yet)."""

    client_id: int = 0
    job_reference: str = ""
    designing_charges: float = 0.0
    material_sku: str = ""
    ss_qty: int = 0  # single-sided sheets
    fb_qty: int = 0  # front-and-back sheets
    finishing: float = 0.0
    waste: int = 0

    def to_dict(self) -> dict:
        return asdict(self)

    def input_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(DailyRowInput)}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "DailyRowInput":
        return cls(**_row_input_kwargs(d))


def _row_input_kwargs(d: dict[str, Any]) -> dict[str, Any]:
    return {
        "client_id": to_int(d.get("client_id")),
        "job_reference": str(d.get("job_reference") or ""),
        "designing_charges": to_float(d.get("designing_charges")),
        "material_sku": str(d.get("material_sku") or ""),
        "ss_qty": to_int(d.get("ss_qty")),
        "fb_qty": to_int(d.get("fb_qty")),
        "finishing": to_float(d.get("finishing")),
        "waste": to_int(d.get("waste")),
    }


@dataclass
class DailyRow(DailyRowInput):
    id: int = 0
    header_id: int = 0
    serial_no: int = 0  # 1-based position within the day
    is_billed: bool = False
    bill_no: Optional[str] = None

    def to_input(self) -> DailyRowInput:
        return DailyRowInput(**self.input_dict())

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "DailyRow":
        return cls(
            **_row_input_kwargs(d),
            id=to_int(d.get("id")),
            header_id=to_int(d.get("header_id")),
            serial_no=to_int(d.get("serial_no")),
            is_billed=bool(d.get("is_billed", False)),
            bill_no=d.get("bill_no") or None,
        )


@dataclass
class JobRow(DailyRow):
    """A saved row joined with its day and display names."""

    date: str = ""
    client_name: str = ""
    material_name: str = ""


@dataclass
class RowTotals:
    designing_charges: float = 0.0
    ss_qty: int = 0
    fb_qty: int = 0
    finishing: float = 0.0
    waste: int = 0

    def add(self, row: DailyRowInput) -> "RowTotals":
        self.designing_charges += row.designing_charges
        self.ss_qty += row.ss_qty
        self.fb_qty += row.fb_qty
        self.finishing += row.finishing
        self.waste += row.waste
        return self


@dataclass
class TopClient:
    client_name: str
    job_count: int


@dataclass
class ReportData:
    rows: list[JobRow] = field(default_factory=list)
    total_production_value: float = 0.0
    total_impressions: int = 0
    total_waste: int = 0
    top_clients: list[TopClient] = field(default_factory=list)


@dataclass
class Draft:
    rows: list[DailyRowInput]
    start_reading: int = 0


@dataclass
class CostLine:
    job: JobRow
    total_sheets: int
    material_cost: float
    print_clicks: int
    click_cost: float
    total_cost: float


@dataclass
class CostSummary:
    total_material_cost: float = 0.0
    total_click_cost: float = 0.0
    total_cost: float = 0.0
    total_clicks: int = 0
