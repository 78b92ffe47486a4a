"""Progress percentage calculation for goals."""

from __future__ import annotations

import math

from pathly_cli.models.core import GoalDirection


def target_reached(current: float, target: float, direction: GoalDirection) -> bool:
    """Whether ``current`` has reached or passed ``target`` in ``direction``."""
    if GoalDirection(direction) == GoalDirection.INCREASE:
        return current >= target
    return current <= target


def calculate_progress(
    current: float,
    target: float,
    direction: GoalDirection,
    initial_value: float,
) -> float:
    """Calculate progress as a percentage in [0, 100].

    Progress is measured from ``initial_value`` towards ``target``:

    - increase: ``(current - initial) / (target - initial) * 100``
    - decrease: ``(initial - current) / (initial - target) * 100``

    The result is 100 exactly when the target has been reached or passed.
    When the target lies on the wrong side of (or equals) the initial value
    there is no distance to cover, so the result is 100 if reached, else 0.

    Args:
        current: Current value
        target: Target value
        direction: Whether the value should increase or decrease
        initial_value: Baseline value at creation or last reset

    Returns:
        Progress percentage
    """
    values = (current, target, initial_value)
    if any(not math.isfinite(v) for v in values):
        return 0.0

    if target_reached(current, target, direction):
        return 100.0

    if GoalDirection(direction) == GoalDirection.INCREASE:
        distance = target - initial_value
        covered = current - initial_value
    else:
        distance = initial_value - target
        covered = initial_value - current

    if distance <= 0:
        return 0.0

    return max(0.0, min(100.0, covered / distance * 100))


def is_goal_completed(progress: float) -> bool:
    return progress >= 100


def format_progress_text(current: float, target: float, unit: str) -> str:
    """Format progress like ``"5 / 20 km"``."""
    text = f"{format_number(current)} / {format_number(target)}"
    return f"{text} {unit}" if unit else text


def format_number(value: float) -> str:
    """Render whole numbers without a trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"
