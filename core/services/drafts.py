from __future__ import annotations

import logging
from typing import Iterable, Optional

from core.models import DailyRowInput, Draft
from core.store import DRAFT_PREFIX, KeyValueStore
from core.utils import to_int

logger = logging.getLogger(__name__)


def draft_key(date: str) -> str:
    return f"{DRAFT_PREFIX}{date}"


def save_draft(store: KeyValueStore, date: str, rows: Iterable[DailyRowInput], start_reading: int) -> None:
    # Same shape the entry screen has always written: {rows, startReading}
    payload = {"rows": [r.input_dict() for r in rows], "startReading": int(start_reading or 0)}
    store.set(draft_key(date), payload)


def load_draft(store: KeyValueStore, date: str) -> Optional[Draft]:
    raw = store.get(draft_key(date))
    if raw is None:
        return None
    if not isinstance(raw, dict) or not isinstance(raw.get("rows"), list):
        logger.error("Ignoring malformed draft for %s", date)
        return None
    try:
        rows = [DailyRowInput.from_dict(r) for r in raw["rows"]]
    except AttributeError:
        logger.error("Ignoring malformed draft rows for %s", date)
        return None
    return Draft(rows=rows, start_reading=to_int(raw.get("startReading")))


def clear_draft(store: KeyValueStore, date: str) -> None:
    store.delete(draft_key(date))


def list_draft_dates(store: KeyValueStore) -> list[str]:
    return [k[len(DRAFT_PREFIX):] for k in store.keys(DRAFT_PREFIX)]
