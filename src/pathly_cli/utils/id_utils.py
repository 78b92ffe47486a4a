"""Integer record IDs derived from the creation timestamp."""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime


def generate_id(existing: Collection[int], now: datetime | None = None) -> int:
    """Return the creation time in epoch milliseconds, bumped past collisions.

    Args:
        existing: IDs already in use
        now: Creation instant (defaults to the current time)
    """
    candidate = int((now or datetime.now()).timestamp() * 1000)
    while candidate in existing:
        candidate += 1
    return candidate
