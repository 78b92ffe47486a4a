"""Achievement badges unlocked from goal statistics."""

from __future__ import annotations

from typing import Any


class Achievement:
    """Represents an achievement badge."""

    def __init__(
        self,
        id: str,
        name: str,
        description: str,
        icon: str,
        requirement: dict[str, Any],
    ):
        self.id = id
        self.name = name
        self.description = description
        self.icon = icon
        self.requirement = requirement

    def __repr__(self) -> str:
        return f"Achievement({self.id!r})"


# Requirement types understood by the evaluator
GOALS_COMPLETED = "goals_completed"
POINTS_EARNED = "points_earned"
STREAK_DAYS = "streak_days"
ULTIMATE_GOALS = "ultimate_goals"
PERFECT_WEEK = "perfect_week"

ACHIEVEMENTS = [
    # Completion milestones
    Achievement(
        "first_goal",
        "First Step",
        "Complete your first goal",
        "🎯",
        {"type": GOALS_COMPLETED, "value": 1},
    ),
    Achievement(
        "goal_master",
        "Goal Master",
        "Complete 10 goals",
        "🏆",
        {"type": GOALS_COMPLETED, "value": 10},
    ),
    Achievement(
        "century_club",
        "Century Club",
        "Complete 100 goals",
        "💯",
        {"type": GOALS_COMPLETED, "value": 100},
    ),
    # Points
    Achievement(
        "point_collector",
        "Point Collector",
        "Earn 1,000 points",
        "⭐",
        {"type": POINTS_EARNED, "value": 1000},
    ),
    Achievement(
        "point_legend",
        "Point Legend",
        "Earn 10,000 points",
        "🌟",
        {"type": POINTS_EARNED, "value": 10000},
    ),
    # Streaks
    Achievement(
        "week_warrior",
        "Week Warrior",
        "Complete goals 7 days in a row",
        "🔥",
        {"type": STREAK_DAYS, "value": 7},
    ),
    Achievement(
        "month_champion",
        "Month Champion",
        "Complete goals 30 days in a row",
        "💪",
        {"type": STREAK_DAYS, "value": 30},
    ),
    Achievement(
        "unstoppable",
        "Unstoppable",
        "Complete goals 100 days in a row",
        "🚀",
        {"type": STREAK_DAYS, "value": 100},
    ),
    # Special
    Achievement(
        "ultimate_creator",
        "Ultimate Creator",
        "Create 5 ultimate goals",
        "⭐",
        {"type": ULTIMATE_GOALS, "value": 5},
    ),
    Achievement(
        "perfectionist",
        "Perfectionist",
        "Complete at least one goal every day for a week",
        "✨",
        {"type": PERFECT_WEEK, "value": 1},
    ),
]


def get_achievement(achievement_id: str) -> Achievement | None:
    """Look up an achievement by ID."""
    for achievement in ACHIEVEMENTS:
        if achievement.id == achievement_id:
            return achievement
    return None
