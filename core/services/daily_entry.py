from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

from core.calculators import day_name, job_number, machine_end_reading, material_usage, total_impressions
from core.errors import ValidationError
from core.models import HEADER_MUTABLE_FIELDS, Client, DailyHeader, DailyRow, DailyRowInput
from core.services.drafts import clear_draft, load_draft
from core.store import HEADER_COUNTER, HEADERS_KEY, ITEMS_KEY, ROW_COUNTER, ROWS_KEY, KeyValueStore
from core.utils import parse_iso_date, to_int

logger = logging.getLogger(__name__)

RowLike = Union[DailyRowInput, dict]


@dataclass
class DayState:
    """What the daily sheet should show when a date is opened."""

    date: str
    rows: list[DailyRowInput]
    start_reading: int
    finalized: bool
    from_draft: bool = False


def _as_inputs(rows: Iterable[RowLike]) -> list[DailyRowInput]:
    return [r if isinstance(r, DailyRowInput) else DailyRowInput.from_dict(r) for r in rows]


def _apply_usage(stock: dict[str, int], rows: Iterable[DailyRowInput], sign: int) -> dict[str, int]:
    """
    Add (sign=+1, reversal) or subtract (sign=-1) each row's material usage
    against the in-memory stock snapshot. Returns the net delta per sku.
    """
    delta: dict[str, int] = {}
    for r in rows:
        sku = r.material_sku
        if sku not in stock:
            logger.warning("Material %r not in item list; stock not adjusted", sku)
            continue
        used = material_usage(r)
        stock[sku] += sign * used
        delta[sku] = delta.get(sku, 0) + sign * used
    return delta


# -------------------------
# Reads
# -------------------------

def list_headers(store: KeyValueStore) -> list[DailyHeader]:
    return [DailyHeader.from_dict(d) for d in store.get(HEADERS_KEY, [])]


def get_header(store: KeyValueStore, date: str) -> Optional[DailyHeader]:
    return next((h for h in list_headers(store) if h.date == date), None)


def get_daily_entry(store: KeyValueStore, date: str) -> tuple[Optional[DailyHeader], list[DailyRow]]:
    header = get_header(store, date)
    if header is None:
        return None, []
    rows = [DailyRow.from_dict(d) for d in store.get(ROWS_KEY, []) if to_int(d.get("header_id")) == header.id]
    return header, sorted(rows, key=lambda r: r.serial_no)


def get_latest_header_before(store: KeyValueStore, date: str) -> Optional[DailyHeader]:
    earlier = [h for h in list_headers(store) if h.date < date]
    if not earlier:
        return None
    return max(earlier, key=lambda h: h.date)


def is_day_finalized(store: KeyValueStore, date: str) -> bool:
    return get_header(store, date) is not None


def default_start_reading(store: KeyValueStore, date: str) -> int:
    prev = get_latest_header_before(store, date)
    return prev.machine_end_reading if prev else 0


def default_job_reference(date: str, index: int) -> str:
    return job_number(date, index + 1)


def selectable_clients(clients: Iterable[Client], rows: Iterable[RowLike]) -> list[Client]:
    # Deactivated clients stay pickable on rows that already reference them.
    used = {r.client_id for r in _as_inputs(rows)}
    return [c for c in clients if c.is_active or c.id in used]


def load_day(store: KeyValueStore, date: str) -> DayState:
    """
    A saved day loads its rows (finalized); otherwise a draft if one exists;
    otherwise an empty sheet whose start reading continues from the previous day.
    """
    header, rows = get_daily_entry(store, date)
    if header is not None:
        return DayState(
            date=date,
            rows=[r.to_input() for r in rows],
            start_reading=header.machine_start_reading,
            finalized=True,
        )

    draft = load_draft(store, date)
    if draft is not None:
        return DayState(date=date, rows=draft.rows, start_reading=draft.start_reading, finalized=False, from_draft=True)

    return DayState(date=date, rows=[], start_reading=default_start_reading(store, date), finalized=False)


# -------------------------
# Validation (run by the screen before saving)
# -------------------------

def validate_daily_entry(
    date: Optional[str],
    rows: Iterable[RowLike],
    *,
    start_reading: Optional[int] = None,
    end_reading: Optional[int] = None,
) -> None:
    if not date:
        raise ValidationError("Date cannot be empty.")
    try:
        parse_iso_date(date)
    except ValueError:
        raise ValidationError(f"Invalid date: {date!r}. Use YYYY-MM-DD.")

    inputs = _as_inputs(rows)
    if any(not r.client_id or not r.material_sku for r in inputs):
        raise ValidationError("Client Name and Material cannot be empty for any row.")

    for n, r in enumerate(inputs, start=1):
        if min(r.ss_qty, r.fb_qty, r.waste) < 0:
            raise ValidationError(f"Row {n}: quantities cannot be negative.")

    # Manual machine reading: the counter delta must match computed impressions.
    if end_reading is not None:
        delta = int(end_reading) - int(start_reading or 0)
        total = total_impressions(inputs)
        if delta != total:
            raise ValidationError(
                f"Machine reading difference ({delta}) does not match total impressions ({total})."
            )


def build_header(date: str, start_reading: int, rows: Iterable[RowLike]) -> DailyHeader:
    inputs = _as_inputs(rows)
    return DailyHeader(
        id=0,
        date=date,
        day_name=day_name(date),
        total_impressions=total_impressions(inputs),
        machine_start_reading=int(start_reading),
        machine_end_reading=machine_end_reading(start_reading, inputs),
    )


# -------------------------
# Reconciliation
# -------------------------

def save_daily_entry(store: KeyValueStore, header_data: DailyHeader, rows: Iterable[RowLike]) -> DailyHeader:
    """
    Save one day's sheet. At most one header exists per date; re-saving a date
    updates that header in place and replaces its whole row set.

    Stock: on re-save every previously saved row's usage is added back, then
    every incoming row's usage is subtracted, both against one in-memory
    snapshot of the items (full reverse + reapply, so a changed material is
    handled the same as an unchanged one). Items are written once.

    Write order is items -> headers -> rows.
    """
    incoming = _as_inputs(rows)
    date = header_data.date

    headers: list[dict[str, Any]] = store.get(HEADERS_KEY, [])
    all_rows: list[dict[str, Any]] = store.get(ROWS_KEY, [])
    items: list[dict[str, Any]] = store.get(ITEMS_KEY, [])
    stock = {str(d.get("sku")): to_int(d.get("stock_qty")) for d in items}

    idx = next((i for i, h in enumerate(headers) if h.get("date") == date), None)

    if idx is not None:
        header_id = to_int(headers[idx].get("id"))
        updated = dict(headers[idx])
        for f in HEADER_MUTABLE_FIELDS:
            updated[f] = getattr(header_data, f)
        headers[idx] = updated

        old_rows = [DailyRow.from_dict(d) for d in all_rows if to_int(d.get("header_id")) == header_id]
        reversed_delta = _apply_usage(stock, old_rows, +1)
        logger.info("Reversed stock for %d saved row(s) on %s: %s", len(old_rows), date, reversed_delta)
    else:
        header_id = store.next_id(HEADER_COUNTER)
        new_header = DailyHeader(
            id=header_id,
            date=date,
            **{f: getattr(header_data, f) for f in HEADER_MUTABLE_FIELDS},
        )
        headers.append(new_header.to_dict())

    applied_delta = _apply_usage(stock, incoming, -1)

    for d in items:
        d["stock_qty"] = stock[str(d.get("sku"))]
    store.set(ITEMS_KEY, items)

    new_rows = [
        DailyRow(
            **r.input_dict(),
            id=store.next_id(ROW_COUNTER),
            header_id=header_id,
            serial_no=n,
            is_billed=False,
            bill_no=None,
        )
        for n, r in enumerate(incoming, start=1)
    ]
    kept = [d for d in all_rows if to_int(d.get("header_id")) != header_id]

    store.set(HEADERS_KEY, headers)
    store.set(ROWS_KEY, kept + [r.to_dict() for r in new_rows])

    logger.info(
        "Daily entry saved: date=%s header_id=%s rows=%d (%s) stock=%s",
        date,
        header_id,
        len(new_rows),
        "updated" if idx is not None else "created",
        applied_delta,
    )
    return DailyHeader.from_dict(next(h for h in headers if to_int(h.get("id")) == header_id))


def finalize_day(
    store: KeyValueStore,
    date: str,
    rows: Iterable[RowLike],
    *,
    start_reading: int,
    end_reading: Optional[int] = None,
) -> DailyHeader:
    """Validate, save and drop the draft: the sheet's "Finalize & Close Day"."""
    inputs = _as_inputs(rows)
    validate_daily_entry(date, inputs, start_reading=start_reading, end_reading=end_reading)
    header = save_daily_entry(store, build_header(date, start_reading, inputs), inputs)
    clear_draft(store, date)
    return header
