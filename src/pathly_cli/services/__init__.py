"""Services module for Pathly CLI - Business logic layer."""

from .app_services import AppServices, open_services
from .config_service import ConfigService, get_config_service
from .data_service import DataService, ImportResult
from .goal_service import GoalService
from .points_service import PointsLedger
from .reward_service import RewardService
from .storage_service import GoalsStorage, PointsStorage, RewardsStorage

__all__ = [
    "AppServices",
    "open_services",
    "ConfigService",
    "get_config_service",
    "DataService",
    "ImportResult",
    "GoalService",
    "PointsLedger",
    "RewardService",
    "GoalsStorage",
    "RewardsStorage",
    "PointsStorage",
]
