"""Per-goal streaks of consecutive completed periods."""

from __future__ import annotations

from datetime import datetime
from typing import NamedTuple

from pathly_cli.models.core import Goal
from pathly_cli.utils.periods import period_length

# Gap between two completions that still counts as "next period".
CONSECUTIVE_MIN_FACTOR = 0.9
CONSECUTIVE_MAX_FACTOR = 2.1
# Without a completion for this many periods the current streak is broken.
BROKEN_FACTOR = 1.5


class Streak(NamedTuple):
    """Current and longest run of consecutive completed periods."""

    current: int
    longest: int


def completion_instants(goal: Goal) -> list[datetime]:
    """History plus the open period's completion, sorted ascending."""
    instants = set(goal.completion_history)
    if goal.is_complete and goal.completed_at is not None:
        instants.add(goal.completed_at)
    return sorted(instants)


def calculate_streak(goal: Goal, now: datetime | None = None) -> Streak:
    """Derive the streak of a recurring goal from its completions.

    Monthly and yearly periods use 30/365-day lengths here, so streak
    boundaries can differ from calendar rollover near month ends.
    """
    if not goal.is_recurring:
        return Streak(0, 0)

    length = period_length(goal.period, goal.custom_period_days)
    if length is None:
        return Streak(0, 0)

    instants = completion_instants(goal)
    if not instants:
        return Streak(0, 0)
    if len(instants) == 1 and not goal.completion_history:
        return Streak(1, 1)

    low = length * CONSECUTIVE_MIN_FACTOR
    high = length * CONSECUTIVE_MAX_FACTOR

    run = 1
    longest = 1
    for previous, following in zip(instants, instants[1:]):
        if low <= following - previous <= high:
            run += 1
        else:
            run = 1
        longest = max(longest, run)

    current = run
    now = now or datetime.now()
    if not goal.is_complete and now - instants[-1] > length * BROKEN_FACTOR:
        current = 0

    return Streak(current, longest)


def update_goal_streaks(goal: Goal, now: datetime | None = None) -> Goal:
    """Store the derived streak on the goal.

    ``longest_streak`` is a high-water mark and never decreases.
    """
    streak = calculate_streak(goal, now)
    longest = max(goal.longest_streak, streak.longest)
    if goal.current_streak == streak.current and goal.longest_streak == longest:
        return goal
    return goal.model_copy(
        update={"current_streak": streak.current, "longest_streak": longest}
    )
