"""Completion analytics result models."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from .core import GoalCategory, TimePeriod


class CategoryAnalytics(BaseModel):
    """Performance of the root goals in one category."""

    category: GoalCategory
    total_goals: int = 0
    completed_goals: int = 0
    completion_rate: float = 0
    total_points: int = 0
    average_progress: float = 0


class PeriodAnalytics(BaseModel):
    """Performance of the root goals sharing one period kind.

    ``average_completion_days`` is None when no goal of this kind is complete.
    """

    period: TimePeriod
    total_goals: int = 0
    completed_goals: int = 0
    completion_rate: float = 0
    average_completion_days: float | None = None


class TimeOfDayAnalytics(BaseModel):
    """Completions by part of the day (local hours)."""

    morning: int = 0  # 06-12
    afternoon: int = 0  # 12-18
    evening: int = 0  # 18-24
    night: int = 0  # 00-06


class CompletionTrendPoint(BaseModel):
    day: date
    count: int = 0
    points: int = 0


class AnalyticsInsights(BaseModel):
    """Completion patterns over root, non-archived goals.

    Attributes:
        total_goals_analyzed: Root goals that are not archived
        completed_goals_analyzed: Completed goals among them
        overall_completion_rate: Completed share as a percentage
        category_performance: Categories in use, best completion rate first
        period_performance: Period kinds in use, best completion rate first
        completions_by_time_of_day: Completion instants by part of the day
        completion_trend: One entry per day, oldest first, ending today
        best_performing_category: First entry of ``category_performance``
        worst_performing_category: Last entry of ``category_performance``
        best_completion_day: Weekday name with the most completions
        average_completion_days: Mean days from period start to completion
        most_productive_hour: Hour with the most completions, e.g. "7:00 AM"
    """

    total_goals_analyzed: int = 0
    completed_goals_analyzed: int = 0
    overall_completion_rate: float = 0
    category_performance: list[CategoryAnalytics] = Field(default_factory=list)
    period_performance: list[PeriodAnalytics] = Field(default_factory=list)
    completions_by_time_of_day: TimeOfDayAnalytics = Field(default_factory=TimeOfDayAnalytics)
    completion_trend: list[CompletionTrendPoint] = Field(default_factory=list)
    best_performing_category: GoalCategory | None = None
    worst_performing_category: GoalCategory | None = None
    best_completion_day: str | None = None
    average_completion_days: float = 0
    most_productive_hour: str | None = None
