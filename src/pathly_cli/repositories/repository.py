"""Repository abstraction layer for Pathly CLI.

This module defines the abstract base classes (interfaces) the engine talks
to, following the hexagonal architecture (Ports & Adapters) pattern. The
goal engine never touches storage or reminders directly; it goes through:

- ``DocumentStore``: asynchronous key/value store of JSON documents
- ``NotificationScheduler``: schedules and cancels goal reminders
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

# JSON-serializable document
JSONValue = Any


class DocumentStore(ABC):
    """Abstract base class for document persistence.

    Documents are JSON-serializable values stored under string keys.
    """

    @abstractmethod
    async def get(self, key: str) -> JSONValue | None:
        """Read the document stored under ``key``.

        Args:
            key: Document key

        Returns:
            Decoded JSON value, or None if the key is absent

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError("DocumentStore.get() must be implemented by adapter")

    @abstractmethod
    async def set(self, key: str, value: JSONValue) -> None:
        """Store ``value`` under ``key``, replacing any previous document.

        Args:
            key: Document key
            value: JSON-serializable value

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError("DocumentStore.set() must be implemented by adapter")

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove the document stored under ``key``.

        Returns:
            True if a document was removed
        """
        raise NotImplementedError(
            "DocumentStore.delete() must be implemented by adapter"
        )


class NotificationScheduler(ABC):
    """Abstract base class for goal reminder scheduling."""

    @abstractmethod
    async def schedule(
        self,
        goal_id: int,
        title: str,
        time_of_day: str,
        days: list[int],
    ) -> list[str]:
        """Schedule reminders for a goal.

        Args:
            goal_id: Goal the reminders belong to
            title: Text shown in the reminder
            time_of_day: ``HH:MM`` in local time
            days: Weekdays (0=Monday .. 6=Sunday); empty means every day

        Returns:
            Opaque handles to pass to ``cancel`` later
        """
        raise NotImplementedError(
            "NotificationScheduler.schedule() must be implemented by adapter"
        )

    @abstractmethod
    async def cancel(self, handles: list[str]) -> None:
        """Cancel previously scheduled reminders."""
        raise NotImplementedError(
            "NotificationScheduler.cancel() must be implemented by adapter"
        )
