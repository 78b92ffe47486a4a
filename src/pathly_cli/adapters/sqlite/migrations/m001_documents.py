"""Migration 001: create the documents table."""

import sqlite3

from pathly_cli.adapters.sqlite.schema import CREATE_DOCUMENTS_TABLE

from .runner import Migration


class DocumentsTableMigration(Migration):
    @property
    def version(self) -> int:
        return 1

    @property
    def description(self) -> str:
        return "Create documents key/value table"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute(CREATE_DOCUMENTS_TABLE)


documents_migration = DocumentsTableMigration()

ALL_MIGRATIONS = [documents_migration]
