from __future__ import annotations

from datetime import datetime, date, timedelta, timezone


def iso_now() -> str:
    # Use UTC ISO timestamps for consistency.
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def parse_iso_date(value: str) -> date:
    return date.fromisoformat(str(value))


def next_iso_date(value: str) -> str:
    return (parse_iso_date(value) + timedelta(days=1)).isoformat()


def to_int(v, default: int = 0) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        return default


def to_float(v, default: float = 0.0) -> float:
    try:
        return float(v)
    except (TypeError, ValueError):
        return default
