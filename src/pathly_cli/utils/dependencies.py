"""Dependency (prerequisite) resolution between goals.

``depends_on`` holds weak references by ID. A reference that does not
resolve counts as incomplete, so missing prerequisites block instead of
silently unblocking. Cycles are not prevented; every goal on a cycle stays
blocked until one of them is completed some other way.
"""

from __future__ import annotations

from pathly_cli.models.collection import GoalCollection


def blocking_goals(goal_id: int, goals: GoalCollection) -> list[int]:
    """Prerequisite IDs of ``goal_id`` that are missing or not complete."""
    goal = goals.get(goal_id)
    if goal is None:
        return []
    blocking: list[int] = []
    for dep_id in goal.depends_on:
        dependency = goals.get(dep_id)
        if dependency is None or not dependency.is_complete:
            blocking.append(dep_id)
    return blocking


def is_unblocked(goal_id: int, goals: GoalCollection) -> bool:
    """True when every prerequisite of ``goal_id`` is complete.

    An unknown ``goal_id`` is reported as blocked.
    """
    if goal_id not in goals:
        return False
    return not blocking_goals(goal_id, goals)


def find_dependency_cycle(goal_id: int, goals: GoalCollection) -> list[int] | None:
    """Return a dependency cycle through ``goal_id`` if one exists.

    The path starts and ends with ``goal_id`` (``[a, b, a]``).
    """
    stack: list[tuple[int, list[int]]] = [(goal_id, [goal_id])]
    visited: set[int] = set()
    while stack:
        node, path = stack.pop()
        goal = goals.get(node)
        if goal is None:
            continue
        for dep_id in goal.depends_on:
            if dep_id == goal_id:
                return [*path, goal_id]
            if dep_id not in visited:
                visited.add(dep_id)
                stack.append((dep_id, [*path, dep_id]))
    return None


def dependents_of(goal_id: int, goals: GoalCollection) -> list[int]:
    """IDs of goals that list ``goal_id`` as a prerequisite."""
    return [goal.id for goal in goals if goal_id in goal.depends_on]
