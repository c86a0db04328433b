"""
Key/value persistence used by every repository.

Each collection is stored whole under one key as a JSON document; callers read
the entire collection, change it in memory and write it back. Two backends:

- ``MemoryStore``: a dict of JSON strings (tests, scratch sessions)
- ``SqliteStore``: the ``kv_store`` table of the app database
"""
from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Optional

import streamlit as st

from core.db import ensure_schema, get_conn, q, x
from core.utils import iso_now, to_int

logger = logging.getLogger(__name__)

CLIENTS_KEY = "clients"
ITEMS_KEY = "items"
HEADERS_KEY = "daily_headers"
ROWS_KEY = "daily_rows"

CLIENT_COUNTER = "client_id_counter"
HEADER_COUNTER = "daily_header_id_counter"
ROW_COUNTER = "daily_row_id_counter"

DRAFT_PREFIX = "daily_entry_draft_"

COLLECTION_KEYS = (CLIENTS_KEY, ITEMS_KEY, HEADERS_KEY, ROWS_KEY)
COUNTER_KEYS = (CLIENT_COUNTER, HEADER_COUNTER, ROW_COUNTER)


class KeyValueStore:
    """Serialization and counters on top of a raw string-keyed backend."""

    def _read(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def _write(self, key: str, text: str) -> None:
        raise NotImplementedError

    def _remove(self, key: str) -> None:
        raise NotImplementedError

    def keys(self, prefix: str = "") -> list[str]:
        raise NotImplementedError

    def get(self, key: str, default: Any = None) -> Any:
        raw = self._read(key)
        if not raw:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Unparseable value under key %r; using default", key)
            return default

    def set(self, key: str, value: Any) -> None:
        self._write(key, json.dumps(value))

    def has(self, key: str) -> bool:
        return self._read(key) is not None

    def delete(self, key: str) -> None:
        self._remove(key)

    def next_id(self, counter_key: str) -> int:
        current = to_int(self.get(counter_key, 1), 1)
        self.set(counter_key, current + 1)
        return current


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def _read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def _write(self, key: str, text: str) -> None:
        self._data[key] = text

    def _remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self, prefix: str = "") -> list[str]:
        return sorted(k for k in self._data if k.startswith(prefix))


class SqliteStore(KeyValueStore):
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn
        ensure_schema(conn)

    def _read(self, key: str) -> Optional[str]:
        rows = q(self.conn, "SELECT value FROM kv_store WHERE key=?", (key,))
        return str(rows[0]["value"]) if rows else None

    def _write(self, key: str, text: str) -> None:
        x(
            self.conn,
            """
            INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at
            """,
            (key, text, iso_now()),
        )

    def _remove(self, key: str) -> None:
        x(self.conn, "DELETE FROM kv_store WHERE key=?", (key,))

    def keys(self, prefix: str = "") -> list[str]:
        rows = q(
            self.conn,
            "SELECT key FROM kv_store WHERE substr(key, 1, ?) = ? ORDER BY key",
            (len(prefix), prefix),
        )
        return [str(r["key"]) for r in rows]


@st.cache_resource
def get_store(db_path: Path) -> SqliteStore:
    return SqliteStore(get_conn(db_path))
