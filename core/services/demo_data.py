from __future__ import annotations

import logging
import random
from datetime import date, timedelta

from core.models import Client, DailyRowInput, Item
from core.services.daily_entry import build_header, default_job_reference, default_start_reading, save_daily_entry
from core.services.drafts import list_draft_dates, draft_key
from core.store import (
    CLIENT_COUNTER,
    CLIENTS_KEY,
    COLLECTION_KEYS,
    COUNTER_KEYS,
    HEADERS_KEY,
    ITEMS_KEY,
    ROWS_KEY,
    KeyValueStore,
)

logger = logging.getLogger(__name__)

DEFAULT_CLIENTS = [
    ("Prime Graphics", "123-456-7890", "Prime Graphics Inc."),
    ("Creative Solutions", "098-765-4321", "Creative Solutions LLC"),
]
DEFAULT_ITEMS = [
    # sku, name, uom, opening stock, reorder level, unit price
    ("PAP-001", "A4 Paper 80gsm", "sheets", 5000, 1000, 0.60),
    ("BRD-001", "Art Board 300gsm", "sheets", 2000, 500, 4.50),
    ("STK-001", "Glossy Sticker A4", "sheets", 1500, 300, 6.00),
    ("PVC-001", "PVC Sticker", "sheets", 1000, 200, 12.00),
]


def init_database(store: KeyValueStore) -> None:
    """First-run seed; each collection is only written if it is absent."""
    if not store.has(CLIENTS_KEY):
        store.set(
            CLIENTS_KEY,
            [
                Client(id=store.next_id(CLIENT_COUNTER), name=n, phone=p, billing_name=b).to_dict()
                for n, p, b in DEFAULT_CLIENTS
            ],
        )
    if not store.has(ITEMS_KEY):
        store.set(
            ITEMS_KEY,
            [
                Item(sku=s, name=n, uom=u, stock_qty=q, reorder_level=r, price=p).to_dict()
                for s, n, u, q, r, p in DEFAULT_ITEMS
            ],
        )
    if not store.has(HEADERS_KEY):
        store.set(HEADERS_KEY, [])
    if not store.has(ROWS_KEY):
        store.set(ROWS_KEY, [])


def wipe_all(store: KeyValueStore) -> None:
    # Collections, counters and every pending draft.
    for date_str in list_draft_dates(store):
        store.delete(draft_key(date_str))
    for key in COLLECTION_KEYS + COUNTER_KEYS:
        store.delete(key)
    logger.info("All data wiped")


def load_demo_data(store: KeyValueStore, *, days: int = 5, seed: int = 7) -> None:
    """A few finalized days ending yesterday, saved through the normal reconciliation."""
    random.seed(seed)
    init_database(store)

    clients = [Client.from_dict(d) for d in store.get(CLIENTS_KEY, [])]
    items = [Item.from_dict(d) for d in store.get(ITEMS_KEY, [])]
    if not clients or not items:
        return

    base_date = date.today() - timedelta(days=days)
    for i in range(days):
        day = (base_date + timedelta(days=i)).isoformat()
        rows = []
        for n in range(random.randint(2, 5)):
            rows.append(
                DailyRowInput(
                    client_id=random.choice(clients).id,
                    job_reference=default_job_reference(day, n),
                    designing_charges=float(random.choice([0, 100, 250])),
                    material_sku=random.choice(items).sku,
                    ss_qty=random.randint(0, 60),
                    fb_qty=random.randint(0, 40),
                    finishing=float(random.choice([0, 50, 120])),
                    waste=random.randint(0, 5),
                )
            )
        start = default_start_reading(store, day)
        save_daily_entry(store, build_header(day, start, rows), rows)

    logger.info("Demo data loaded: %d day(s)", days)
