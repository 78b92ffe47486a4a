"""Exceptions raised by the goal engine and its services."""


class PathlyError(Exception):
    """Base class for all engine errors."""


class GoalNotFoundError(PathlyError):
    """Raised when a goal ID does not resolve to a goal."""

    def __init__(self, goal_id: int):
        super().__init__(f"Goal not found: {goal_id}")
        self.goal_id = goal_id


class RewardNotFoundError(PathlyError):
    """Raised when a reward ID does not resolve to a reward."""

    def __init__(self, reward_id: int):
        super().__init__(f"Reward not found: {reward_id}")
        self.reward_id = reward_id


class InvalidGoalOperationError(PathlyError):
    """Raised when an operation does not apply to the goal's current state."""


class GoalPausedError(InvalidGoalOperationError):
    """Raised when recording progress on a paused goal."""


class GoalBlockedError(InvalidGoalOperationError):
    """Raised when recording progress on a goal with unmet dependencies."""

    def __init__(self, goal_id: int, blocking: list[int]):
        ids = ", ".join(str(b) for b in blocking)
        super().__init__(f"Goal {goal_id} is blocked by: {ids}")
        self.goal_id = goal_id
        self.blocking = blocking


class InvalidDependencyError(PathlyError):
    """Raised when a dependency edge violates the hierarchy policy."""


class InsufficientPointsError(PathlyError):
    """Raised when a manual redemption costs more than the available points."""

    def __init__(self, cost: int, available: int):
        super().__init__(f"Reward costs {cost} points but only {available} available")
        self.cost = cost
        self.available = available


class PersistenceError(PathlyError):
    """Raised when the document store rejects a write.

    In-memory state is not rolled back; callers should reload.
    """
