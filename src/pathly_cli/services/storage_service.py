"""Typed gateways between the engine and the DocumentStore.

Reads never fail: a missing, unreadable or malformed document loads as an
empty collection (logged). Writes raise ``PersistenceError`` so callers know
the stored state may now differ from memory.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pathly_cli.models import Goal, GoalCollection, Reward
from pathly_cli.models.exceptions import PersistenceError
from pathly_cli.repositories import DocumentStore

logger = logging.getLogger(__name__)

GOALS_KEY = "@pathly:goals"
LIFETIME_POINTS_KEY = "@pathly:lifetime_points"
REWARDS_KEY = "@pathly_rewards"


async def _read_list(store: DocumentStore, key: str) -> list[Any]:
    try:
        data = await store.get(key)
    except Exception as e:
        logger.error("failed to read %s: %s", key, e)
        return []
    if data is None:
        return []
    if not isinstance(data, list):
        logger.warning("invalid data under %s (expected a list), ignoring", key)
        return []
    return data


async def _write(store: DocumentStore, key: str, value: Any) -> None:
    try:
        await store.set(key, value)
    except Exception as e:
        logger.error("failed to write %s: %s", key, e)
        raise PersistenceError(f"Failed to save {key}: {e}") from e


def parse_goals(records: list[Any]) -> list[Goal]:
    """Validate raw goal records, skipping (and logging) the malformed ones."""
    goals: list[Goal] = []
    for record in records:
        try:
            goals.append(Goal.model_validate(record))
        except ValidationError as e:
            logger.warning("skipping malformed goal record: %s", e.errors()[:1])
    return goals


def parse_rewards(records: list[Any]) -> list[Reward]:
    """Validate raw reward records, skipping (and logging) the malformed ones."""
    rewards: list[Reward] = []
    for record in records:
        try:
            rewards.append(Reward.model_validate(record))
        except ValidationError as e:
            logger.warning("skipping malformed reward record: %s", e.errors()[:1])
    return rewards


class GoalsStorage:
    """Loads and saves the goal collection."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def load(self) -> GoalCollection:
        return GoalCollection(parse_goals(await _read_list(self.store, GOALS_KEY)))

    async def save(self, goals: GoalCollection) -> None:
        await _write(self.store, GOALS_KEY, [goal.to_record() for goal in goals])

    async def clear(self) -> None:
        await self.store.delete(GOALS_KEY)


class RewardsStorage:
    """Loads and saves the reward list."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def load(self) -> list[Reward]:
        return parse_rewards(await _read_list(self.store, REWARDS_KEY))

    async def save(self, rewards: list[Reward]) -> None:
        await _write(self.store, REWARDS_KEY, [reward.to_record() for reward in rewards])


class PointsStorage:
    """Loads and saves the lifetime points counter."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def load(self) -> int:
        try:
            value = await self.store.get(LIFETIME_POINTS_KEY)
        except Exception as e:
            logger.error("failed to read lifetime points: %s", e)
            return 0
        if value is None:
            return 0
        try:
            return max(0, int(value))
        except (TypeError, ValueError):
            logger.warning("invalid lifetime points value %r, using 0", value)
            return 0

    async def save(self, total: int) -> None:
        await _write(self.store, LIFETIME_POINTS_KEY, total)
