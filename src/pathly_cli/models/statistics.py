"""Statistics and review result models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from .core import Goal


class Statistics(BaseModel):
    """Aggregate view of the goal collection.

    Attributes:
        total_goals: Root goals that are neither paused nor archived
        completed_goals: Completed goals among ``total_goals``
        completion_rate: ``completed_goals / total_goals`` as a percentage
        total_points: Points represented by completed root goals, counting
            every recurring completion
        lifetime_points: Ledger total, never decreases
        spent_points: Cost of redeemed rewards
        available_points: ``lifetime_points - spent_points``, floored at 0
        current_streak: Consecutive active days ending today (or yesterday)
        longest_streak: Longest run of consecutive active days
        last_activity_date: Most recent completion instant
        ultimate_goals: Root ultimate goals (not archived)
        perfect_week: Each of the last 7 days has a completion
        achievements_unlocked: IDs of achievements whose rule holds
    """

    total_goals: int = 0
    completed_goals: int = 0
    completion_rate: float = 0
    total_points: int = 0
    lifetime_points: int = 0
    spent_points: int = 0
    available_points: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    last_activity_date: datetime | None = None
    ultimate_goals: int = 0
    perfect_week: bool = False
    achievements_unlocked: list[str] = Field(default_factory=list)


class ReviewPeriod(BaseModel):
    """Inclusive time window used by the weekly/monthly review."""

    start_date: datetime
    end_date: datetime
    label: str


class ReviewStatistics(BaseModel):
    """Outcome of a review period."""

    goals_completed: int = 0
    total_goals: int = 0
    completion_rate: float = 0
    points_earned: int = 0
    completed_goals: list[Goal] = Field(default_factory=list)
