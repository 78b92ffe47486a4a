"""Recurring goal rollover.

A recurring goal is Open while ``now`` is inside its current period and
Expired once ``now`` reaches the period end. Expired goals are rolled over
lazily (on load/refresh): the outgoing completion, if any, is archived into
``completion_history`` and the goal is reset to a fresh Open period. However
many periods were missed, a single reset happens.
"""

from __future__ import annotations

import logging
from datetime import datetime

from pathly_cli.models.collection import GoalCollection
from pathly_cli.models.core import Goal, TimePeriod
from pathly_cli.utils.periods import period_end

logger = logging.getLogger(__name__)

# Human-friendly period names used by the CLI
PERIOD_LABELS: dict[TimePeriod, str] = {
    TimePeriod.DAILY: "every day",
    TimePeriod.WEEKLY: "every week",
    TimePeriod.MONTHLY: "every month",
    TimePeriod.YEARLY: "every year",
    TimePeriod.CUSTOM: "every {days} days",
    TimePeriod.ONGOING: "no deadline",
}


def describe_period(period: TimePeriod, custom_period_days: int | None = None) -> str:
    """Convert a period back to a human-readable description."""
    label = PERIOD_LABELS[TimePeriod(period)]
    if "{days}" in label:
        return label.format(days=custom_period_days or "?")
    return label


def should_reset(goal: Goal, now: datetime | None = None) -> bool:
    """Whether a recurring goal's current period has elapsed.

    Completion is irrelevant: an incomplete goal whose period lapsed is a
    missed period and resets too. Zero-length periods (``ongoing``, or a
    custom period without a length) never expire.
    """
    if not goal.is_recurring or goal.period_start_date is None:
        return False

    end = period_end(goal.period_start_date, goal.period, goal.custom_period_days)
    if end <= goal.period_start_date:
        if goal.period == TimePeriod.CUSTOM:
            logger.warning(
                "recurring goal %s has a custom period without a length; not resetting",
                goal.id,
            )
        return False

    now = now or datetime.now()
    return now >= end


def record_completion(goal: Goal) -> Goal:
    """Archive the open period's completion into the history.

    No-op unless the goal is complete with a completion instant.
    """
    if not goal.is_complete or goal.completed_at is None:
        return goal
    return goal.model_copy(
        update={"completion_history": [*goal.completion_history, goal.completed_at]}
    )


def reset_goal(goal: Goal, now: datetime | None = None) -> Goal:
    """Start a fresh period. History and streak counters are preserved."""
    return goal.model_copy(
        update={
            "current": goal.initial_value,
            "progress": 0.0,
            "is_complete": False,
            "completed_at": None,
            "points_awarded": False,
            "period_start_date": now or datetime.now(),
        }
    )


def process_recurring_goals(
    goals: GoalCollection, now: datetime | None = None
) -> GoalCollection:
    """Roll over every expired recurring goal.

    Recurring goals with no ``period_start_date`` (created before recurrence
    tracking existed) get one set to ``now`` instead. Goals are processed
    independently of each other.
    """
    now = now or datetime.now()
    changed: list[Goal] = []

    for goal in goals:
        if not goal.is_recurring:
            continue
        if goal.period_start_date is None:
            changed.append(goal.model_copy(update={"period_start_date": now}))
        elif should_reset(goal, now):
            logger.info("rolling over recurring goal %s", goal.id)
            changed.append(reset_goal(record_completion(goal), now))

    if not changed:
        return goals
    return goals.replace(*changed)


def completion_count(goal: Goal) -> int:
    """Number of times a goal has been completed, including the open period."""
    current = 1 if goal.is_complete else 0
    if not goal.is_recurring:
        return current
    return len(goal.completion_history) + current


def total_points_earned(goal: Goal) -> int:
    """Points represented by all completions of a goal."""
    return completion_count(goal) * goal.points
