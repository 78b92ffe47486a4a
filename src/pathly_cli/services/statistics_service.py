"""Statistics, achievements and periodic reviews.

Everything here is advisory display data: the functions never raise on odd
input, they degrade to zero/False instead.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime, time, timedelta
from typing import Any

from pathly_cli.models import Goal, Reward, ReviewPeriod, ReviewStatistics, Statistics
from pathly_cli.models.achievements import (
    ACHIEVEMENTS,
    GOALS_COMPLETED,
    PERFECT_WEEK,
    POINTS_EARNED,
    STREAK_DAYS,
    ULTIMATE_GOALS,
    Achievement,
    get_achievement,
)
from pathly_cli.services.reward_service import available_points, spent_points
from pathly_cli.services.storage_service import parse_goals, parse_rewards
from pathly_cli.utils import periods
from pathly_cli.utils.recurrence import completion_count, total_points_earned

logger = logging.getLogger(__name__)

PERFECT_WEEK_DAYS = 7

__all__ = [
    "calculate_statistics",
    "evaluate_achievements",
    "get_newly_unlocked_achievements",
    "get_achievement_progress",
    "this_week",
    "last_week",
    "this_month",
    "last_month",
    "calculate_review_statistics",
    "motivational_message",
    "format_streak",
    "time_remaining",
    "completion_count",
    "total_points_earned",
]


def _coerce_goals(goals: Iterable[Any]) -> list[Goal]:
    items = list(goals or [])
    if all(isinstance(item, Goal) for item in items):
        return items
    return [item for item in items if isinstance(item, Goal)] + parse_goals(
        [item for item in items if isinstance(item, dict)]
    )


def _coerce_rewards(rewards: Iterable[Any]) -> list[Reward]:
    items = list(rewards or [])
    return [item for item in items if isinstance(item, Reward)] + parse_rewards(
        [item for item in items if isinstance(item, dict)]
    )


def completion_instants(goals: Iterable[Goal]) -> list[datetime]:
    """Every completion across all goals, past periods included."""
    instants: list[datetime] = []
    for goal in goals:
        instants.extend(goal.completion_history)
        if goal.completed_at is not None:
            instants.append(goal.completed_at)
    return sorted(instants)


def _day_streaks(active_days: set[date], today: date) -> tuple[int, int]:
    """Current and longest runs of consecutive active days.

    The current run ends today, or yesterday when nothing is done yet today.
    """
    current = 0
    day = today if today in active_days else today - timedelta(days=1)
    while day in active_days:
        current += 1
        day -= timedelta(days=1)

    longest = 0
    run = 0
    previous: date | None = None
    for day in sorted(active_days):
        run = run + 1 if previous is not None and day - previous == timedelta(days=1) else 1
        longest = max(longest, run)
        previous = day
    return current, max(longest, current)


def _perfect_week(active_days: set[date], today: date) -> bool:
    return all(today - timedelta(days=offset) in active_days for offset in range(PERFECT_WEEK_DAYS))


def calculate_statistics(
    goals: Iterable[Goal | dict],
    rewards: Iterable[Reward | dict] = (),
    lifetime_points: int = 0,
    now: datetime | None = None,
) -> Statistics:
    """Aggregate the goal collection into display statistics.

    Goal counts cover root goals only, excluding paused and archived ones.
    The day streak spans all goals: a day is active when any goal was
    completed on it.

    Args:
        goals: Goals, or raw goal records
        rewards: Rewards, or raw reward records
        lifetime_points: Ledger total
        now: Reference time (defaults to now)

    Returns:
        Statistics, all zero when nothing can be computed
    """
    try:
        goal_list = _coerce_goals(goals)
        reward_list = _coerce_rewards(rewards)
        lifetime = max(0, int(lifetime_points or 0))
    except (TypeError, ValueError) as e:
        logger.warning("cannot compute statistics: %s", e)
        return Statistics()

    today = (now or datetime.now()).date()

    counted = [g for g in goal_list if g.is_root and not g.is_paused and not g.is_archived]
    completed = [g for g in counted if g.is_complete]
    total_points = sum(
        total_points_earned(g) if g.is_recurring else (g.points if g.is_complete else 0)
        for g in goal_list
        if g.is_root
    )

    instants = completion_instants(goal_list)
    active_days = {instant.date() for instant in instants}
    current_streak, longest_streak = _day_streaks(active_days, today)

    spent = spent_points(reward_list)
    stats = Statistics(
        total_goals=len(counted),
        completed_goals=len(completed),
        completion_rate=len(completed) / len(counted) * 100 if counted else 0,
        total_points=total_points,
        lifetime_points=lifetime,
        spent_points=spent,
        available_points=available_points(lifetime, reward_list),
        current_streak=current_streak,
        longest_streak=longest_streak,
        last_activity_date=instants[-1] if instants else None,
        ultimate_goals=sum(1 for g in goal_list if g.is_ultimate and g.is_root and not g.is_archived),
        perfect_week=_perfect_week(active_days, today),
    )
    return stats.model_copy(update={"achievements_unlocked": evaluate_achievements(stats)})


def _requirement_value(achievement: Achievement, stats: Statistics) -> float:
    """The statistic an achievement's rule is measured against."""
    kind = achievement.requirement.get("type")
    if kind == GOALS_COMPLETED:
        return stats.completed_goals
    if kind == POINTS_EARNED:
        return max(stats.total_points, stats.lifetime_points)
    if kind == STREAK_DAYS:
        return stats.current_streak
    if kind == ULTIMATE_GOALS:
        return stats.ultimate_goals
    if kind == PERFECT_WEEK:
        return 1 if stats.perfect_week else 0
    return 0


def is_unlocked(achievement: Achievement, stats: Statistics) -> bool:
    threshold = achievement.requirement.get("value", 0)
    return threshold > 0 and _requirement_value(achievement, stats) >= threshold


def evaluate_achievements(stats: Statistics) -> list[str]:
    """IDs of every achievement whose rule holds for ``stats``."""
    return [a.id for a in ACHIEVEMENTS if is_unlocked(a, stats)]


def get_newly_unlocked_achievements(old: Statistics, new: Statistics) -> list[str]:
    return [aid for aid in new.achievements_unlocked if aid not in old.achievements_unlocked]


def get_achievement_progress(achievement_id: str, stats: Statistics) -> float:
    """Percentage (0-100) towards unlocking an achievement; 0 if unknown."""
    achievement = get_achievement(achievement_id)
    if achievement is None:
        return 0.0
    threshold = achievement.requirement.get("value", 0)
    if threshold <= 0:
        return 0.0
    return min(100.0, _requirement_value(achievement, stats) / threshold * 100)


# Review periods. Weeks start on Sunday.


def _day_start(day: date) -> datetime:
    return datetime.combine(day, time.min)


def _day_end(day: date) -> datetime:
    return datetime.combine(day, time(23, 59, 59, 999000))


def this_week(now: datetime | None = None) -> ReviewPeriod:
    today = (now or datetime.now()).date()
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    return ReviewPeriod(
        start_date=_day_start(start),
        end_date=_day_end(start + timedelta(days=6)),
        label="This Week",
    )


def last_week(now: datetime | None = None) -> ReviewPeriod:
    current = this_week(now)
    start = current.start_date - timedelta(days=7)
    return ReviewPeriod(
        start_date=start,
        end_date=_day_end(start.date() + timedelta(days=6)),
        label="Last Week",
    )


def this_month(now: datetime | None = None) -> ReviewPeriod:
    today = (now or datetime.now()).date()
    start = today.replace(day=1)
    end = periods.add_months(_day_start(start), 1).date() - timedelta(days=1)
    return ReviewPeriod(start_date=_day_start(start), end_date=_day_end(end), label="This Month")


def last_month(now: datetime | None = None) -> ReviewPeriod:
    first_of_this = (now or datetime.now()).date().replace(day=1)
    end = first_of_this - timedelta(days=1)
    return ReviewPeriod(
        start_date=_day_start(end.replace(day=1)),
        end_date=_day_end(end),
        label="Last Month",
    )


def calculate_review_statistics(
    goals: Iterable[Goal | dict], period: ReviewPeriod
) -> ReviewStatistics:
    """Summarize what was achieved within ``period``.

    A goal counts as completed in the period if any of its completions
    (including archived recurring periods) falls inside it; points are
    credited per completion.
    """
    goal_list = _coerce_goals(goals)

    completed: list[Goal] = []
    points = 0
    for goal in goal_list:
        instants = list(goal.completion_history)
        if goal.completed_at is not None:
            instants.append(goal.completed_at)
        hits = sum(1 for i in instants if period.start_date <= i <= period.end_date)
        if hits:
            completed.append(goal)
            points += hits * goal.points

    active = [g for g in goal_list if g.created_at <= period.end_date and not g.is_archived]
    return ReviewStatistics(
        goals_completed=len(completed),
        total_goals=len(active),
        completion_rate=len(completed) / len(active) * 100 if active else 0,
        points_earned=points,
        completed_goals=completed,
    )


def motivational_message(completion_rate: float) -> str:
    if completion_rate >= 100:
        return "Excellent work! You completed everything."
    if completion_rate >= 50:
        return "Good progress, keep it up!"
    if completion_rate > 0:
        return "Keep going, every step counts."
    return "Time to start working on your goals."


def format_streak(days: int) -> str:
    if days <= 0:
        return "No streak"
    if days == 1:
        return "1 day streak"
    return f"{days} days streak"


def time_remaining(goal: Goal, now: datetime | None = None) -> str:
    """Time left in the goal's current period ("" when unbounded)."""
    return periods.time_remaining(
        goal.period_start_date, goal.period, goal.custom_period_days, now
    )
