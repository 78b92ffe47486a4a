"""Pathly domain models.

This package contains Pydantic models that represent the goal engine's
entities, plus the copy-on-write goal index and the achievement table.
"""

from .analytics import (
    AnalyticsInsights,
    CategoryAnalytics,
    CompletionTrendPoint,
    PeriodAnalytics,
    TimeOfDayAnalytics,
)
from .collection import GoalCollection
from .config_models import AppConfig
from .core import (
    Goal,
    GoalCategory,
    GoalCreate,
    GoalDirection,
    GoalUpdate,
    Reward,
    RewardCreate,
    RewardUpdate,
    TimePeriod,
)
from .statistics import ReviewPeriod, ReviewStatistics, Statistics

__all__ = [
    # Goal models
    "Goal",
    "GoalCreate",
    "GoalUpdate",
    "GoalCollection",
    "GoalCategory",
    "GoalDirection",
    "TimePeriod",
    # Reward models
    "Reward",
    "RewardCreate",
    "RewardUpdate",
    # Statistics
    "Statistics",
    "ReviewPeriod",
    "ReviewStatistics",
    # Analytics
    "AnalyticsInsights",
    "CategoryAnalytics",
    "CompletionTrendPoint",
    "PeriodAnalytics",
    "TimeOfDayAnalytics",
    # Config
    "AppConfig",
]
