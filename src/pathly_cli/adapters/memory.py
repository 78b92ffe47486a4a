"""In-process DocumentStore, used for ephemeral sessions and tests."""

from __future__ import annotations

import copy
import json

from pathly_cli.repositories import DocumentStore, JSONValue


class InMemoryDocumentStore(DocumentStore):
    """Keeps documents in a dict.

    Values are round-tripped through JSON on write so that anything the
    SQLite vault would reject is rejected here too.
    """

    def __init__(self, initial: dict[str, JSONValue] | None = None):
        self._documents: dict[str, JSONValue] = copy.deepcopy(initial or {})

    async def get(self, key: str) -> JSONValue | None:
        value = self._documents.get(key)
        return copy.deepcopy(value)

    async def set(self, key: str, value: JSONValue) -> None:
        self._documents[key] = json.loads(json.dumps(value))

    async def delete(self, key: str) -> bool:
        return self._documents.pop(key, None) is not None

    def keys(self) -> list[str]:
        return list(self._documents)
