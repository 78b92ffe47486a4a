"""Reward service - self-defined rewards bought with earned points."""

from __future__ import annotations

import logging
from datetime import datetime

from pathly_cli.models import Reward, RewardCreate, RewardUpdate
from pathly_cli.models.exceptions import InsufficientPointsError, RewardNotFoundError
from pathly_cli.repositories import DocumentStore
from pathly_cli.services.storage_service import RewardsStorage
from pathly_cli.utils.id_utils import generate_id

logger = logging.getLogger(__name__)


def spent_points(rewards: list[Reward]) -> int:
    """Total cost of redeemed rewards."""
    return sum(reward.points_cost for reward in rewards if reward.is_redeemed)


def available_points(lifetime_points: int, rewards: list[Reward]) -> int:
    """Points left to spend, never below zero."""
    return max(0, lifetime_points - spent_points(rewards))


class RewardService:
    """Service for reward business logic.

    Like goals, the reward list is replaced wholesale on every change and
    persisted before the new list becomes current.
    """

    def __init__(self, store: DocumentStore):
        """Initialize the reward service.

        Args:
            store: DocumentStore holding the reward list
        """
        self.storage = RewardsStorage(store)
        self.rewards: list[Reward] = []

    async def load(self) -> list[Reward]:
        self.rewards = await self.storage.load()
        return self.rewards

    async def _commit(self, rewards: list[Reward]) -> list[Reward]:
        await self.storage.save(rewards)
        self.rewards = rewards
        return rewards

    def get_reward(self, reward_id: int) -> Reward:
        for reward in self.rewards:
            if reward.id == reward_id:
                return reward
        raise RewardNotFoundError(reward_id)

    def list_rewards(self) -> list[Reward]:
        return list(self.rewards)

    def available_rewards(self) -> list[Reward]:
        return [reward for reward in self.rewards if not reward.is_redeemed]

    def redeemed_rewards(self) -> list[Reward]:
        return [reward for reward in self.rewards if reward.is_redeemed]

    def spent_points(self) -> int:
        return spent_points(self.rewards)

    def available_points(self, lifetime_points: int) -> int:
        return available_points(lifetime_points, self.rewards)

    async def add_reward(self, data: RewardCreate, now: datetime | None = None) -> Reward:
        """Create a new reward.

        Args:
            data: Validated reward fields
            now: Creation instant

        Returns:
            Created Reward
        """
        now = now or datetime.now()
        reward = Reward(
            id=generate_id({r.id for r in self.rewards}, now),
            title=data.title.strip(),
            description=data.description.strip(),
            points_cost=data.points_cost,
            icon=data.icon,
            created_at=now,
        )
        await self._commit([*self.rewards, reward])
        return reward

    async def edit_reward(self, reward_id: int, updates: RewardUpdate) -> Reward:
        reward = self.get_reward(reward_id)
        changes = updates.model_dump(exclude_none=True)
        if "title" in changes:
            changes["title"] = changes["title"].strip()
        edited = reward.model_copy(update=changes)
        await self._commit([edited if r.id == reward_id else r for r in self.rewards])
        return edited

    async def remove_reward(self, reward_id: int) -> bool:
        """Delete a reward. Returns False if it did not exist."""
        remaining = [r for r in self.rewards if r.id != reward_id]
        if len(remaining) == len(self.rewards):
            return False
        await self._commit(remaining)
        return True

    async def redeem_reward(
        self,
        reward_id: int,
        lifetime_points: int,
        now: datetime | None = None,
    ) -> Reward:
        """Redeem a reward by hand, spending available points.

        Redeeming an already redeemed reward returns it unchanged.

        Raises:
            RewardNotFoundError: If the reward does not exist
            InsufficientPointsError: If the balance does not cover the cost
        """
        reward = self.get_reward(reward_id)
        if reward.is_redeemed:
            return reward
        balance = self.available_points(lifetime_points)
        if reward.points_cost > balance:
            raise InsufficientPointsError(reward.points_cost, balance)
        return await self._mark_redeemed(reward, now)

    async def auto_redeem(self, reward_id: int, now: datetime | None = None) -> Reward | None:
        """Redeem the reward linked to a goal that was just completed.

        Idempotent and balance-agnostic. A missing reward is logged and
        yields None rather than failing the completion.
        """
        try:
            reward = self.get_reward(reward_id)
        except RewardNotFoundError:
            logger.warning("linked reward %s no longer exists", reward_id)
            return None
        if reward.is_redeemed:
            return reward
        return await self._mark_redeemed(reward, now)

    async def _mark_redeemed(self, reward: Reward, now: datetime | None) -> Reward:
        redeemed = reward.model_copy(
            update={"is_redeemed": True, "redeemed_at": now or datetime.now()}
        )
        await self._commit([redeemed if r.id == reward.id else r for r in self.rewards])
        logger.info("redeemed reward %s (%d points)", reward.id, reward.points_cost)
        return redeemed

    async def replace_all(self, rewards: list[Reward]) -> list[Reward]:
        """Swap in an imported reward list."""
        return await self._commit(list(rewards))
