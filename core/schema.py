SCHEMA_SQL = r"""
-- Key/value blobs: every collection (clients, items, daily_headers, daily_rows),
-- every id counter and every per-date draft is one row holding a JSON document.
CREATE TABLE IF NOT EXISTS kv_store (
  key TEXT PRIMARY KEY,
  value TEXT NOT NULL,
  updated_at TEXT NOT NULL              -- ISO datetime (UTC)
);
"""
