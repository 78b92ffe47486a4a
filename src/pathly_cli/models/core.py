"""Goal and reward data models."""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

_TIME_OF_DAY = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class GoalDirection(str, Enum):
    INCREASE = "increase"
    DECREASE = "decrease"


class TimePeriod(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"
    ONGOING = "ongoing"


class GoalCategory(str, Enum):
    HEALTH = "health"
    FITNESS = "fitness"
    LEARNING = "learning"
    WORK = "work"
    FINANCE = "finance"
    PERSONAL = "personal"
    SOCIAL = "social"
    HOBBY = "hobby"
    OTHER = "other"


def to_local_datetime(value: Any) -> Any:
    """Normalize an instant to a naive local datetime.

    Accepts epoch milliseconds (legacy exports), ISO strings and datetimes.
    Anything else is handed back to pydantic for regular validation.
    """
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000)
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class RecordModel(BaseModel):
    """Base for persisted records: camelCase on the wire, snake_case in code."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )

    def to_record(self) -> dict[str, Any]:
        """Dump to a JSON-serializable dict using wire (camelCase) names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Goal(RecordModel):
    """A measurable goal.

    ``progress`` is stored, not derived: callers recompute it through
    ``utils.progress`` (or ``utils.hierarchy`` for aggregate goals) whenever
    ``current``, ``target``, ``direction`` or ``initial_value`` change.
    """

    id: int
    title: str
    description: str | None = None
    icon: str | None = None
    category: GoalCategory | None = None
    created_at: datetime = Field(default_factory=datetime.now)

    target: float
    current: float = 0
    initial_value: float = 0
    unit: str = ""
    direction: GoalDirection = GoalDirection.INCREASE
    progress: float = Field(default=0, ge=0, le=100)

    period: TimePeriod = TimePeriod.ONGOING
    custom_period_days: int | None = Field(default=None, ge=1)
    period_start_date: datetime | None = None

    is_recurring: bool = False
    completion_history: list[datetime] = Field(default_factory=list)
    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)

    is_complete: bool = False
    completed_at: datetime | None = None
    points_awarded: bool = False

    parent_id: int | None = None
    sub_goals: list[int] = Field(default_factory=list)
    is_ultimate: bool = False
    subgoals_award_points: bool | None = None

    depends_on: list[int] = Field(default_factory=list)

    points: int = Field(default=0, ge=0)
    linked_reward_id: int | None = None

    is_paused: bool = False
    is_archived: bool = False
    sort_order: int | None = None

    notification_time: str | None = None
    notification_days: list[int] = Field(default_factory=list)
    notification_ids: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def migrate_legacy_fields(cls, data: Any) -> Any:
        """Fill fields that records written by older versions lack."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.get("initialValue") is None and data.get("initial_value") is None:
            data["initialValue"] = data.get("current", 0)
        if not data.get("period"):
            data["period"] = TimePeriod.ONGOING.value
        for key, snake in (
            ("subGoals", "sub_goals"),
            ("dependsOn", "depends_on"),
            ("completionHistory", "completion_history"),
        ):
            if data.get(key) is None and data.get(snake) is None:
                data[key] = []
        if data.get("periodStartDate") is None and data.get("period_start_date") is None:
            created = data.get("createdAt", data.get("created_at"))
            if created is not None:
                data["periodStartDate"] = created
        # Complete goals saved before the award guard existed were already paid
        if "pointsAwarded" not in data and "points_awarded" not in data:
            data["pointsAwarded"] = bool(data.get("isComplete", data.get("is_complete", False)))
        return data

    @field_validator("created_at", "period_start_date", "completed_at", mode="before")
    @classmethod
    def _normalize_instant(cls, value: Any) -> Any:
        return to_local_datetime(value)

    @field_validator("completion_history", mode="before")
    @classmethod
    def _normalize_history(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [to_local_datetime(item) for item in value]
        return value

    @field_validator("progress", mode="before")
    @classmethod
    def _clamp_progress(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return max(0.0, min(100.0, float(value)))
        return value

    @field_validator("notification_time")
    @classmethod
    def _check_time_of_day(cls, value: str | None) -> str | None:
        if value is not None and not _TIME_OF_DAY.match(value):
            raise ValueError("notification time must be HH:MM (24h)")
        return value

    @field_validator("notification_days")
    @classmethod
    def _check_days(cls, value: list[int]) -> list[int]:
        if any(day < 0 or day > 6 for day in value):
            raise ValueError("notification days must be between 0 (Mon) and 6 (Sun)")
        return sorted(set(value))

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


class GoalCreate(BaseModel):
    """Model for creating a new goal.

    Attributes:
        title: Goal title (required, 1-100 characters)
        target: Value to reach
        current: Starting value, becomes the goal's initial value
        unit: Free-text unit of measurement
        direction: Whether the value should go up or down
        points: Points awarded on completion
        period: Time period kind
        custom_period_days: Period length in days (required for custom periods)
        parent_id: Parent goal ID when creating a subgoal
        is_ultimate: Whether progress aggregates over subgoals
        is_recurring: Whether the goal resets at the end of each period
        subgoals_award_points: Award policy for this goal's subgoals
        depends_on: Prerequisite goal IDs
        linked_reward_id: Reward auto-redeemed on first completion
    """

    title: str = Field(min_length=1, max_length=100)
    target: float = Field(ge=0.01, le=1_000_000)
    current: float = Field(default=0, ge=0, le=1_000_000)
    unit: str = Field(default="", max_length=20)
    direction: GoalDirection = GoalDirection.INCREASE
    points: int = Field(default=0, ge=0, le=100_000)
    period: TimePeriod = TimePeriod.ONGOING
    custom_period_days: int | None = Field(default=None, ge=1)
    description: str | None = None
    icon: str | None = None
    category: GoalCategory | None = None
    parent_id: int | None = None
    is_ultimate: bool = False
    is_recurring: bool = False
    subgoals_award_points: bool | None = None
    depends_on: list[int] = Field(default_factory=list)
    linked_reward_id: int | None = None

    @field_validator("title", "unit")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()

    @model_validator(mode="after")
    def _custom_needs_days(self) -> GoalCreate:
        if self.period == TimePeriod.CUSTOM and not self.custom_period_days:
            raise ValueError("custom periods require custom_period_days")
        if not self.title:
            raise ValueError("title must not be blank")
        return self


class GoalUpdate(BaseModel):
    """Model for editing an existing goal.

    All fields are optional - only provided fields will be updated.
    """

    title: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None
    icon: str | None = None
    category: GoalCategory | None = None
    target: float | None = Field(default=None, ge=0.01, le=1_000_000)
    current: float | None = Field(default=None, ge=0, le=1_000_000)
    unit: str | None = Field(default=None, max_length=20)
    direction: GoalDirection | None = None
    points: int | None = Field(default=None, ge=0, le=100_000)
    period: TimePeriod | None = None
    custom_period_days: int | None = Field(default=None, ge=1)
    is_ultimate: bool | None = None
    is_recurring: bool | None = None
    subgoals_award_points: bool | None = None


class Reward(RecordModel):
    """A self-defined reward bought with earned points."""

    id: int
    title: str
    description: str = ""
    points_cost: int = Field(ge=0)
    icon: str = ""
    created_at: datetime = Field(default_factory=datetime.now)
    is_redeemed: bool = False
    redeemed_at: datetime | None = None

    @field_validator("created_at", "redeemed_at", mode="before")
    @classmethod
    def _normalize_instant(cls, value: Any) -> Any:
        return to_local_datetime(value)


class RewardCreate(BaseModel):
    """Model for creating a new reward."""

    title: str = Field(min_length=1, max_length=100)
    description: str = ""
    points_cost: int = Field(ge=0, le=1_000_000)
    icon: str = ""


class RewardUpdate(BaseModel):
    """Model for editing a reward. Only provided fields are updated."""

    title: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None
    points_cost: int | None = Field(default=None, ge=0, le=1_000_000)
    icon: str | None = None
