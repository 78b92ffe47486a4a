"""Adapters module - implementations of the repository ports.

- sqlite: Local SQLite vault (DocumentStore)
- memory: In-process DocumentStore
- notifications: Reminder scheduler for the CLI
"""

from .memory import InMemoryDocumentStore
from .notifications import LoggingNotificationScheduler
from .sqlite import SqliteDocumentStore

__all__ = [
    "SqliteDocumentStore",
    "InMemoryDocumentStore",
    "LoggingNotificationScheduler",
]
