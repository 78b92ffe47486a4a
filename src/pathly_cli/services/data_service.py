"""Data service - JSON backup export and import.

The export document carries every goal and reward record plus the lifetime
points total. Importing validates records one by one, so a partially broken
backup still restores everything that is well-formed.
"""

from __future__ import annotations

import csv
import io
import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from pathly_cli.models import Goal, GoalCollection, Reward
from pathly_cli.services.goal_service import GoalService
from pathly_cli.services.points_service import PointsLedger
from pathly_cli.services.reward_service import RewardService
from pathly_cli.utils import hierarchy

logger = logging.getLogger(__name__)


class ImportResult(BaseModel):
    """Outcome of parsing an export document."""

    goals: list[Goal] = Field(default_factory=list)
    rewards: list[Reward] = Field(default_factory=list)
    lifetime_points: int | None = None
    errors: list[str] = Field(default_factory=list)

    @property
    def message(self) -> str:
        return f"Parsed {len(self.goals)} goals and {len(self.rewards)} rewards"


class InvalidImportError(ValueError):
    """Raised when an import document is structurally unusable."""


def build_export(
    goals: GoalCollection,
    rewards: list[Reward],
    lifetime_points: int,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Build the export document."""
    now = now or datetime.now()
    return {
        "exportDate": now.isoformat(),
        "exportTimestamp": int(now.timestamp() * 1000),
        "goals": [goal.to_record() for goal in goals],
        "rewards": [reward.to_record() for reward in rewards],
        "lifetimePointsEarned": lifetime_points,
    }


def parse_import(payload: Any) -> ImportResult:
    """Validate an export document.

    Raises:
        InvalidImportError: If the document has no goal or reward arrays
    """
    if not isinstance(payload, dict):
        raise InvalidImportError("Invalid format: expected a JSON object")
    if not isinstance(payload.get("goals"), list):
        raise InvalidImportError("Invalid format: goals array not found")
    if not isinstance(payload.get("rewards", []), list):
        raise InvalidImportError("Invalid format: rewards array not found")

    result = ImportResult()
    for index, record in enumerate(payload["goals"], start=1):
        try:
            result.goals.append(Goal.model_validate(record))
        except ValidationError as e:
            result.errors.append(f"Goal {index}: {_first_error(e)}")
    for index, record in enumerate(payload.get("rewards", []), start=1):
        try:
            result.rewards.append(Reward.model_validate(record))
        except ValidationError as e:
            result.errors.append(f"Reward {index}: {_first_error(e)}")

    points = payload.get("lifetimePointsEarned", payload.get("lifetimePoints"))
    if isinstance(points, (int, float)) and not isinstance(points, bool) and points >= 0:
        result.lifetime_points = int(points)
    return result


def _first_error(error: ValidationError) -> str:
    detail = error.errors()[0]
    location = ".".join(str(part) for part in detail["loc"]) or "record"
    return f"{location}: {detail['msg']}"


class DataService:
    """Moves data between the services and export documents."""

    def __init__(
        self,
        goal_service: GoalService,
        reward_service: RewardService,
        ledger: PointsLedger,
    ):
        self.goal_service = goal_service
        self.reward_service = reward_service
        self.ledger = ledger

    def export_data(self, now: datetime | None = None) -> dict[str, Any]:
        return build_export(
            self.goal_service.goals,
            self.reward_service.rewards,
            self.ledger.total,
            now,
        )

    async def import_data(self, payload: Any, *, replace: bool = False) -> ImportResult:
        """Import an export document.

        By default imported records are merged in, replacing existing records
        with the same ID. With ``replace`` the current goals and rewards are
        discarded first. The lifetime points total is raised to the imported
        one but never lowered.

        Raises:
            InvalidImportError: If the document is structurally unusable
        """
        result = parse_import(payload)
        for error in result.errors:
            logger.warning("import: %s", error)

        base = GoalCollection() if replace else self.goal_service.goals
        goals = base.replace(*result.goals)
        for goal in result.goals:
            goals = hierarchy.recalculate(goal.id, goals)
        await self.goal_service.replace_all(goals)

        rewards = {} if replace else {r.id: r for r in self.reward_service.rewards}
        rewards.update({r.id: r for r in result.rewards})
        await self.reward_service.replace_all(list(rewards.values()))

        if result.lifetime_points is not None:
            await self.ledger.raise_to(result.lifetime_points)

        logger.info("imported %s (replace=%s)", result.message, replace)
        return result


CSV_COLUMNS = [
    ("ID", "id"),
    ("Title", "title"),
    ("Description", "description"),
    ("Target", "target"),
    ("Current", "current"),
    ("Unit", "unit"),
    ("Progress %", "progress"),
    ("Direction", "direction"),
    ("Points", "points"),
    ("Period", "period"),
    ("Is Complete", "isComplete"),
    ("Created At", "createdAt"),
    ("Completed At", "completedAt"),
    ("Is Ultimate", "isUltimate"),
    ("Is Recurring", "isRecurring"),
    ("Is Paused", "isPaused"),
    ("Is Archived", "isArchived"),
    ("Category", "category"),
    ("Icon", "icon"),
]


def goals_to_csv(goals: GoalCollection) -> str:
    """Spreadsheet-friendly goal listing (one row per goal, export only)."""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow([header for header, _ in CSV_COLUMNS])
    for goal in goals:
        record = goal.to_record()
        writer.writerow([record.get(key, "") for _, key in CSV_COLUMNS])
    return buffer.getvalue()
