"""Repository interfaces for the Pathly CLI.

This package contains abstract base classes (ABCs) that define the contracts
for persistence and reminders. These are the "Ports" in the Hexagonal
Architecture.

Implementations (Adapters) are in:
- pathly_cli.adapters.sqlite (local SQLite vault)
- pathly_cli.adapters.memory (in-process store)
- pathly_cli.adapters.notifications (reminder scheduling)
"""

from .repository import DocumentStore, JSONValue, NotificationScheduler

__all__ = [
    "DocumentStore",
    "NotificationScheduler",
    "JSONValue",
]
