"""Database schema for the local SQLite vault.

The vault is a plain key/value table of JSON documents; the goal engine
decides what lives under each key.
"""

from __future__ import annotations

# Schema version tracking
SCHEMA_VERSION = 1

CREATE_DOCUMENTS_TABLE = """
CREATE TABLE IF NOT EXISTS documents (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at DATETIME NOT NULL
)
"""

SELECT_DOCUMENT = "SELECT value FROM documents WHERE key = ?"

UPSERT_DOCUMENT = """
INSERT INTO documents (key, value, updated_at) VALUES (?, ?, ?)
ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
"""

DELETE_DOCUMENT = "DELETE FROM documents WHERE key = ?"
