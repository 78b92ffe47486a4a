"""SQLite adapter module - Local vault storage implementation."""

from pathly_cli.adapters.sqlite.connection import default_db_path, open_connection
from pathly_cli.adapters.sqlite.document_store import SqliteDocumentStore

__all__ = [
    "SqliteDocumentStore",
    "default_db_path",
    "open_connection",
]
