"""Unit tests for statistics, achievements and reviews."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from pathly_cli.models import Reward, Statistics, TimePeriod
from pathly_cli.services.statistics_service import (
    calculate_review_statistics,
    calculate_statistics,
    evaluate_achievements,
    format_streak,
    get_achievement_progress,
    get_newly_unlocked_achievements,
    last_month,
    last_week,
    motivational_message,
    this_month,
    this_week,
    time_remaining,
)

DAY = timedelta(days=1)


def done(goal_factory, at, **fields):
    return goal_factory(is_complete=True, completed_at=at, progress=100, **fields)


class TestCalculateStatistics:
    def test_counts_root_goals_only(self, goal_factory, now):
        parent = done(goal_factory, now, points=10)
        goals = [
            parent,
            goal_factory(),
            done(goal_factory, now, parent_id=parent.id, points=99),
            goal_factory(is_paused=True),
            goal_factory(is_archived=True),
        ]

        stats = calculate_statistics(goals, now=now)

        assert stats.total_goals == 2
        assert stats.completed_goals == 1
        assert stats.completion_rate == 50
        assert stats.total_points == 10

    def test_recurring_points_count_every_completion(self, goal_factory, now):
        goal = done(
            goal_factory,
            now,
            points=5,
            is_recurring=True,
            period=TimePeriod.DAILY,
            completion_history=[now - 2 * DAY, now - DAY],
        )
        assert calculate_statistics([goal], now=now).total_points == 15

    def test_points_balance(self, goal_factory, now):
        rewards = [
            Reward(id=1, title="a", points_cost=30, is_redeemed=True, created_at=now),
            Reward(id=2, title="b", points_cost=500, created_at=now),
        ]
        stats = calculate_statistics([], rewards, lifetime_points=100, now=now)
        assert stats.lifetime_points == 100
        assert stats.spent_points == 30
        assert stats.available_points == 70

    def test_day_streak_across_goals(self, goal_factory, now):
        goals = [
            done(goal_factory, now),
            goal_factory(completion_history=[now - DAY, now - 5 * DAY]),
            done(goal_factory, now - 2 * DAY),
        ]
        stats = calculate_statistics(goals, now=now)
        assert stats.current_streak == 3
        assert stats.longest_streak == 3
        assert stats.last_activity_date == now

    def test_streak_survives_until_end_of_today(self, goal_factory, now):
        goals = [done(goal_factory, now - DAY), done(goal_factory, now - 2 * DAY)]
        assert calculate_statistics(goals, now=now).current_streak == 2

    def test_streak_broken_after_missed_day(self, goal_factory, now):
        goals = [done(goal_factory, now - 2 * DAY), done(goal_factory, now - 3 * DAY)]
        stats = calculate_statistics(goals, now=now)
        assert stats.current_streak == 0
        assert stats.longest_streak == 2

    def test_perfect_week(self, goal_factory, now):
        history = [now - offset * DAY for offset in range(1, 7)]
        goal = done(goal_factory, now, completion_history=history)

        stats = calculate_statistics([goal], now=now)

        assert stats.perfect_week
        assert "perfectionist" in stats.achievements_unlocked
        assert "week_warrior" in stats.achievements_unlocked

    def test_accepts_raw_records(self, now):
        records = [
            {"id": 1, "title": "x", "target": 1, "isComplete": True, "completedAt": now.isoformat()},
            {"broken": True},
        ]
        stats = calculate_statistics(records, [{"id": 2, "title": "r", "pointsCost": 1}], now=now)
        assert stats.completed_goals == 1

    def test_bad_input_degrades_to_zero(self, now):
        assert calculate_statistics([], lifetime_points="lots", now=now) == Statistics()

    def test_empty(self, now):
        stats = calculate_statistics([], now=now)
        assert stats.completion_rate == 0
        assert stats.achievements_unlocked == []


class TestAchievements:
    def test_points_use_larger_of_ledger_and_goals(self):
        stats = Statistics(total_points=10, lifetime_points=1000)
        assert "point_collector" in evaluate_achievements(stats)

    def test_thresholds(self):
        unlocked = evaluate_achievements(Statistics(completed_goals=10, ultimate_goals=5))
        assert {"first_goal", "goal_master", "ultimate_creator"} <= set(unlocked)
        assert "century_club" not in unlocked

    def test_newly_unlocked(self):
        old = Statistics(achievements_unlocked=["first_goal"])
        new = Statistics(achievements_unlocked=["first_goal", "goal_master"])
        assert get_newly_unlocked_achievements(old, new) == ["goal_master"]

    @pytest.mark.parametrize(
        ("achievement_id", "stats", "expected"),
        [
            ("goal_master", Statistics(completed_goals=5), 50),
            ("goal_master", Statistics(completed_goals=50), 100),
            ("month_champion", Statistics(current_streak=3), 10),
            ("does_not_exist", Statistics(completed_goals=5), 0),
        ],
    )
    def test_progress(self, achievement_id, stats, expected):
        assert get_achievement_progress(achievement_id, stats) == pytest.approx(expected)


class TestReviewPeriods:
    def test_weeks_start_on_sunday(self, now):
        week = this_week(now)
        assert week.start_date == datetime(2024, 6, 9)
        assert week.end_date.date() == datetime(2024, 6, 15).date()

        previous = last_week(now)
        assert previous.start_date == datetime(2024, 6, 2)
        assert previous.end_date.date() == datetime(2024, 6, 8).date()

    def test_sunday_belongs_to_its_own_week(self):
        sunday = datetime(2024, 6, 16, 9, 0)
        assert this_week(sunday).start_date == datetime(2024, 6, 16)

    def test_months(self, now):
        month = this_month(now)
        assert month.start_date == datetime(2024, 6, 1)
        assert month.end_date.date() == datetime(2024, 6, 30).date()

        previous = last_month(now)
        assert previous.start_date == datetime(2024, 5, 1)
        assert previous.end_date.date() == datetime(2024, 5, 31).date()

    def test_last_month_in_january(self):
        previous = last_month(datetime(2025, 1, 10))
        assert previous.start_date == datetime(2024, 12, 1)
        assert previous.label == "Last Month"


class TestReviewStatistics:
    def test_counts_completions_in_window(self, goal_factory, now):
        recurring = goal_factory(
            is_recurring=True,
            period=TimePeriod.DAILY,
            points=5,
            completion_history=[now - 2 * DAY, now - DAY, now - 10 * DAY],
        )
        finished = done(goal_factory, now, points=20)
        old = done(goal_factory, now - 30 * DAY, points=100)
        future = goal_factory(created_at=now + 30 * DAY)

        review = calculate_review_statistics([recurring, finished, old, future], this_week(now))

        assert review.goals_completed == 2
        assert review.points_earned == 30
        assert review.total_goals == 3
        assert review.completion_rate == pytest.approx(200 / 3)
        assert {g.id for g in review.completed_goals} == {recurring.id, finished.id}


@pytest.mark.parametrize(
    ("rate", "fragment"),
    [(100, "Excellent"), (75, "Good progress"), (10, "Keep going"), (0, "Time to start")],
)
def test_motivational_message(rate, fragment):
    assert fragment in motivational_message(rate)


def test_format_streak():
    assert format_streak(0) == "No streak"
    assert format_streak(1) == "1 day streak"
    assert format_streak(12) == "12 days streak"


def test_time_remaining_for_goal(goal_factory, now):
    goal = goal_factory(period=TimePeriod.WEEKLY, period_start_date=now - DAY)
    assert time_remaining(goal, now) == "6d 0h remaining"
    assert time_remaining(goal_factory(), now) == ""
