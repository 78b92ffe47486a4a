"""SQLite implementation of DocumentStore."""

from __future__ import annotations

import json
import sqlite3
from datetime import UTC, datetime
from pathlib import Path

from pathly_cli.adapters.sqlite.connection import open_connection
from pathly_cli.adapters.sqlite.schema import (
    DELETE_DOCUMENT,
    SELECT_DOCUMENT,
    UPSERT_DOCUMENT,
)
from pathly_cli.repositories import DocumentStore, JSONValue


class SqliteDocumentStore(DocumentStore):
    """JSON documents in a single key/value table."""

    def __init__(self, db_path: str | Path | None = None):
        """Initialize SQLite document store.

        Args:
            db_path: Optional database file path. If None, uses default location.
        """
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = open_connection(self.db_path)
        return self._connection

    async def get(self, key: str) -> JSONValue | None:
        row = self.connection.execute(SELECT_DOCUMENT, (key,)).fetchone()
        if row is None:
            return None
        return json.loads(row["value"])

    async def set(self, key: str, value: JSONValue) -> None:
        payload = json.dumps(value, ensure_ascii=False)
        self.connection.execute(
            UPSERT_DOCUMENT, (key, payload, datetime.now(UTC).isoformat())
        )
        self.connection.commit()

    async def delete(self, key: str) -> bool:
        cursor = self.connection.execute(DELETE_DOCUMENT, (key,))
        self.connection.commit()
        return cursor.rowcount > 0

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None
