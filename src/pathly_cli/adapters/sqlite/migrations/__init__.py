"""Schema migrations for the SQLite vault."""

from .m001_documents import ALL_MIGRATIONS
from .runner import Migration, MigrationRunner

__all__ = ["ALL_MIGRATIONS", "Migration", "MigrationRunner"]
