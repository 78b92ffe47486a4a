"""Lifetime points ledger."""

from __future__ import annotations

import logging

from pathly_cli.repositories import DocumentStore
from pathly_cli.services.storage_service import PointsStorage

logger = logging.getLogger(__name__)


class PointsLedger:
    """Running total of every point ever earned.

    The total only grows. Editing, archiving or deleting goals never touches
    it, and every award is persisted before ``award`` returns. One ledger is
    owned by the process and handed to the services that award points.
    """

    def __init__(self, store: DocumentStore, total: int = 0):
        self.storage = PointsStorage(store)
        self._total = max(0, total)

    @property
    def total(self) -> int:
        return self._total

    async def load(self) -> int:
        """Read the persisted total (0 if missing or unreadable)."""
        self._total = await self.storage.load()
        return self._total

    async def award(self, amount: int) -> int:
        """Add ``amount`` points and persist the new total.

        Non-positive amounts are ignored so the total can never decrease.

        Returns:
            The new total
        """
        if amount <= 0:
            return self._total
        new_total = self._total + amount
        await self.storage.save(new_total)
        self._total = new_total
        logger.info("awarded %d points (lifetime total %d)", amount, new_total)
        return new_total

    async def raise_to(self, total: int) -> int:
        """Lift the total to at least ``total`` (used by data import)."""
        return await self.award(total - self._total)
