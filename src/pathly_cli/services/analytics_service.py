"""Completion analytics: where, when and how fast goals get done.

Like the statistics module these are pure functions over the goal
collection. Only root goals are analyzed; subgoals roll into their parents.
Time-based views (time of day, weekday, hour, daily trend) count every
completion instant, so each finished period of a recurring goal counts.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime, timedelta

from pathly_cli.models import (
    AnalyticsInsights,
    CategoryAnalytics,
    CompletionTrendPoint,
    Goal,
    GoalCategory,
    PeriodAnalytics,
    TimeOfDayAnalytics,
    TimePeriod,
)

TREND_DAYS = 30
SECONDS_PER_DAY = 86_400

__all__ = [
    "analyze_category_performance",
    "analyze_period_performance",
    "analyze_time_of_day",
    "analyze_completion_trend",
    "find_best_completion_day",
    "find_most_productive_hour",
    "calculate_average_completion_days",
    "generate_analytics_insights",
    "insights_summary",
]


def _completions(goal: Goal) -> list[datetime]:
    instants = list(goal.completion_history)
    if goal.completed_at is not None:
        instants.append(goal.completed_at)
    return instants


def _all_completions(goals: Iterable[Goal]) -> list[datetime]:
    return sorted(instant for goal in goals for instant in _completions(goal))


def _rate(part: int, whole: int) -> float:
    return part / whole * 100 if whole else 0


def _completion_days(goal: Goal) -> float | None:
    if not goal.is_complete or goal.completed_at is None or goal.period_start_date is None:
        return None
    elapsed = (goal.completed_at - goal.period_start_date).total_seconds()
    return max(0.0, elapsed / SECONDS_PER_DAY)


def analyze_category_performance(goals: Iterable[Goal]) -> list[CategoryAnalytics]:
    """Per-category counts for root goals, best completion rate first.

    Categories without goals (and goals without a category) are left out.
    """
    roots = [goal for goal in goals if goal.is_root]
    results = []
    for category in GoalCategory:
        members = [goal for goal in roots if goal.category == category]
        if not members:
            continue
        completed = [goal for goal in members if goal.is_complete]
        results.append(
            CategoryAnalytics(
                category=category,
                total_goals=len(members),
                completed_goals=len(completed),
                completion_rate=_rate(len(completed), len(members)),
                total_points=sum(goal.points for goal in completed),
                average_progress=sum(goal.progress for goal in members) / len(members),
            )
        )
    return sorted(results, key=lambda item: item.completion_rate, reverse=True)


def analyze_period_performance(goals: Iterable[Goal]) -> list[PeriodAnalytics]:
    """Per-period-kind counts for root goals, best completion rate first."""
    roots = [goal for goal in goals if goal.is_root]
    results = []
    for period in TimePeriod:
        members = [goal for goal in roots if goal.period == period]
        if not members:
            continue
        completed = [goal for goal in members if goal.is_complete]
        durations = [d for d in map(_completion_days, completed) if d is not None]
        results.append(
            PeriodAnalytics(
                period=period,
                total_goals=len(members),
                completed_goals=len(completed),
                completion_rate=_rate(len(completed), len(members)),
                average_completion_days=sum(durations) / len(durations) if durations else None,
            )
        )
    return sorted(results, key=lambda item: item.completion_rate, reverse=True)


def _part_of_day(hour: int) -> str:
    if 6 <= hour < 12:
        return "morning"
    if 12 <= hour < 18:
        return "afternoon"
    if 18 <= hour < 24:
        return "evening"
    return "night"


def _tally(keys: Iterable) -> dict:
    counts = defaultdict(int)
    for key in keys:
        counts[key] += 1
    return counts


def _most_common(counts: dict):
    if not counts:
        return None
    return max(counts.items(), key=lambda item: item[1])[0]


def analyze_time_of_day(goals: Iterable[Goal]) -> TimeOfDayAnalytics:
    counts = _tally(_part_of_day(instant.hour) for instant in _all_completions(goals))
    return TimeOfDayAnalytics(**counts)


def analyze_completion_trend(
    goals: Iterable[Goal],
    now: datetime | None = None,
    days: int = TREND_DAYS,
) -> list[CompletionTrendPoint]:
    """Completions and points per calendar day, oldest first, ending today."""
    today = (now or datetime.now()).date()
    first = today - timedelta(days=days - 1)
    trend = {
        first + timedelta(days=offset): CompletionTrendPoint(day=first + timedelta(days=offset))
        for offset in range(days)
    }
    for goal in goals:
        for instant in _completions(goal):
            point = trend.get(instant.date())
            if point is not None:
                point.count += 1
                point.points += goal.points
    return list(trend.values())


def find_best_completion_day(goals: Iterable[Goal]) -> str | None:
    """Weekday name with the most completions (earliest wins ties)."""
    return _most_common(_tally(f"{instant:%A}" for instant in _all_completions(goals)))


def _format_hour(hour: int) -> str:
    suffix = "PM" if hour >= 12 else "AM"
    display = 12 if hour % 12 == 0 else hour % 12
    return f"{display}:00 {suffix}"


def find_most_productive_hour(goals: Iterable[Goal]) -> str | None:
    hour = _most_common(_tally(instant.hour for instant in _all_completions(goals)))
    return None if hour is None else _format_hour(hour)


def calculate_average_completion_days(goals: Iterable[Goal]) -> float:
    """Mean days from period start to completion over completed root goals."""
    durations = [
        d for d in (_completion_days(goal) for goal in goals if goal.is_root) if d is not None
    ]
    return sum(durations) / len(durations) if durations else 0


def generate_analytics_insights(
    goals: Iterable[Goal],
    now: datetime | None = None,
) -> AnalyticsInsights:
    """Run every analysis over the root goals that are not archived."""
    main = [goal for goal in goals if goal.is_root and not goal.is_archived]
    completed = [goal for goal in main if goal.is_complete]
    categories = analyze_category_performance(main)

    return AnalyticsInsights(
        total_goals_analyzed=len(main),
        completed_goals_analyzed=len(completed),
        overall_completion_rate=_rate(len(completed), len(main)),
        category_performance=categories,
        period_performance=analyze_period_performance(main),
        completions_by_time_of_day=analyze_time_of_day(main),
        completion_trend=analyze_completion_trend(main, now),
        best_performing_category=categories[0].category if categories else None,
        worst_performing_category=categories[-1].category if categories else None,
        best_completion_day=find_best_completion_day(main),
        average_completion_days=calculate_average_completion_days(main),
        most_productive_hour=find_most_productive_hour(main),
    )


_TIME_OF_DAY_MESSAGES = {
    "morning": "🌅 You're most productive in the morning!",
    "afternoon": "☀️ Afternoons are your peak productivity time!",
    "evening": "🌆 You work best in the evening!",
    "night": "🌙 Night owl! You complete most goals at night.",
}


def insights_summary(insights: AnalyticsInsights) -> list[str]:
    """Short human-readable highlights of ``insights``."""
    if insights.completed_goals_analyzed == 0:
        return ["Start completing goals to see insights!"]

    rate = insights.overall_completion_rate
    if rate >= 80:
        summary = [f"🏆 Excellent! {rate:.0f}% completion rate!"]
    elif rate >= 50:
        summary = [f"💪 Good progress! {rate:.0f}% completion rate."]
    else:
        summary = [f"🎯 {rate:.0f}% completion rate. Keep pushing!"]

    best = next(
        (c for c in insights.category_performance if c.category == insights.best_performing_category),
        None,
    )
    if best is not None and best.completion_rate > 0:
        summary.append(f"⭐ Best category: {best.category.value} ({best.completion_rate:.0f}%)")

    by_time = insights.completions_by_time_of_day.model_dump()
    peak = max(by_time, key=by_time.get)
    if by_time[peak] > 0:
        summary.append(_TIME_OF_DAY_MESSAGES[peak])

    if insights.best_completion_day:
        summary.append(f"📅 {insights.best_completion_day} is your most productive day!")

    days = round(insights.average_completion_days)
    if insights.average_completion_days > 0:
        summary.append(f"⏱️ Average completion time: {days} day{'' if days == 1 else 's'}")
    return summary
