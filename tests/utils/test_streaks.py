"""Unit tests for per-goal streaks."""

from __future__ import annotations

from datetime import timedelta

from conftest import NOW

from pathly_cli.models import TimePeriod
from pathly_cli.utils.streaks import Streak, calculate_streak, update_goal_streaks

WEEK = timedelta(days=7)


def weekly(goal_factory, **overrides):
    fields = {"is_recurring": True, "period": TimePeriod.WEEKLY}
    fields.update(overrides)
    return goal_factory(**fields)


def test_non_recurring_has_no_streak(goal_factory):
    goal = goal_factory(is_complete=True, completed_at=NOW)
    assert calculate_streak(goal, NOW) == Streak(0, 0)


def test_ongoing_has_no_streak(goal_factory):
    goal = goal_factory(
        is_recurring=True,
        period=TimePeriod.ONGOING,
        completion_history=[NOW - WEEK],
        is_complete=True,
        completed_at=NOW,
    )
    assert calculate_streak(goal, NOW) == Streak(0, 0)


def test_no_completions(goal_factory):
    assert calculate_streak(weekly(goal_factory), NOW) == Streak(0, 0)


def test_first_completion(goal_factory):
    goal = weekly(goal_factory, is_complete=True, completed_at=NOW)
    assert calculate_streak(goal, NOW) == Streak(1, 1)


def test_consecutive_weeks(goal_factory):
    history = [NOW - 3 * WEEK, NOW - 2 * WEEK, NOW - WEEK]
    goal = weekly(goal_factory, completion_history=history, is_complete=True, completed_at=NOW)
    assert calculate_streak(goal, NOW) == Streak(4, 4)


def test_gap_restarts_run(goal_factory):
    history = [NOW - 10 * WEEK, NOW - 9 * WEEK, NOW - 8 * WEEK, NOW - WEEK]
    goal = weekly(goal_factory, completion_history=history, is_complete=True, completed_at=NOW)
    assert calculate_streak(goal, NOW) == Streak(2, 3)


def test_stale_streak_is_broken(goal_factory):
    history = [NOW - 4 * WEEK, NOW - 3 * WEEK, NOW - 2 * WEEK]
    goal = weekly(goal_factory, completion_history=history)
    assert calculate_streak(goal, NOW) == Streak(0, 3)


def test_recent_history_keeps_streak_while_open(goal_factory):
    history = [NOW - 2 * WEEK, NOW - WEEK]
    goal = weekly(goal_factory, completion_history=history)
    assert calculate_streak(goal, NOW) == Streak(2, 2)


def test_longest_streak_never_decreases(goal_factory):
    goal = weekly(goal_factory, completion_history=[NOW - WEEK], longest_streak=9)

    updated = update_goal_streaks(goal, NOW)

    assert updated.longest_streak == 9
    assert updated.current_streak == 1


def test_update_returns_same_goal_when_unchanged(goal_factory):
    goal = weekly(goal_factory)
    assert update_goal_streaks(goal, NOW) is goal
