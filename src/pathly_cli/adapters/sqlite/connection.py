"""Database connection management for the SQLite vault.

Connections are opened in WAL mode, new database files get owner-only
permissions, and pending schema migrations run before first use.
"""

from __future__ import annotations

import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from pathly_cli.adapters.sqlite.migrations import ALL_MIGRATIONS, MigrationRunner

DEFAULT_DB_NAME = "vault.db"


def default_db_path() -> Path:
    """Location of the vault when the config does not set one."""
    return Path(user_data_dir("pathly_cli")) / DEFAULT_DB_NAME


def open_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Open and migrate a vault connection.

    Args:
        db_path: Path to database file. If None, uses default location.

    Returns:
        sqlite3.Connection configured for Pathly usage
    """
    path = Path(db_path) if db_path is not None else default_db_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    is_new_database = not path.exists()

    connection = sqlite3.connect(
        str(path),
        check_same_thread=False,
        timeout=30.0,  # Wait up to 30s for locks
    )
    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA journal_mode = WAL")

    if is_new_database:
        os.chmod(path, 0o600)

    MigrationRunner(connection).run_migrations(ALL_MIGRATIONS)
    return connection
