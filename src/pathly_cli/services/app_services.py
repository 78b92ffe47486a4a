"""Wiring of the goal engine services around one document store."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import datetime

from pathly_cli.adapters import LoggingNotificationScheduler, SqliteDocumentStore
from pathly_cli.models import Statistics
from pathly_cli.repositories import DocumentStore, NotificationScheduler
from pathly_cli.services.config_service import ConfigService, get_config_service
from pathly_cli.services.data_service import DataService
from pathly_cli.services.goal_service import GoalService
from pathly_cli.services.points_service import PointsLedger
from pathly_cli.services.reward_service import RewardService
from pathly_cli.services.statistics_service import calculate_statistics


class AppServices:
    """One ledger, one reward service and one goal service sharing a store.

    The ledger is created here and handed to every service that awards or
    spends points, so there is exactly one owner of the lifetime total.
    """

    def __init__(
        self,
        store: DocumentStore,
        scheduler: NotificationScheduler | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.store = store
        self.clock = clock or datetime.now
        self.ledger = PointsLedger(store)
        self.rewards = RewardService(store)
        self.goals = GoalService(store, self.ledger, self.rewards, scheduler, self.clock)
        self.data = DataService(self.goals, self.rewards, self.ledger)

    async def load(self) -> AppServices:
        """Load the ledger, rewards and goals (rolling over recurring goals)."""
        await self.ledger.load()
        await self.rewards.load()
        await self.goals.load()
        return self

    def statistics(self) -> Statistics:
        return calculate_statistics(
            self.goals.goals,
            self.rewards.rewards,
            self.ledger.total,
            self.clock(),
        )

    async def redeem_reward(self, reward_id: int):
        """Redeem a reward against the lifetime points balance."""
        return await self.rewards.redeem_reward(reward_id, self.ledger.total, self.clock())


@asynccontextmanager
async def open_services(
    config_service: ConfigService | None = None,
) -> AsyncIterator[AppServices]:
    """Open the configured vault and yield loaded services."""
    config_service = config_service or get_config_service()
    store = SqliteDocumentStore(config_service.db_path)
    try:
        yield await AppServices(store, LoggingNotificationScheduler()).load()
    finally:
        store.close()
