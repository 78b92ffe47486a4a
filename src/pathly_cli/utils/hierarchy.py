"""Progress aggregation through the parent/subgoal hierarchy."""

from __future__ import annotations

import logging

from pathly_cli.models.collection import GoalCollection
from pathly_cli.models.core import Goal
from pathly_cli.utils.progress import calculate_progress

logger = logging.getLogger(__name__)

# Upper bound on hierarchy depth walked in either direction
MAX_DEPTH = 32


def derives_from_subgoals(goal: Goal) -> bool:
    """Ultimate goals and goals with subgoals take their progress from children."""
    return goal.is_ultimate or bool(goal.sub_goals)


def own_progress(goal: Goal) -> float:
    return calculate_progress(
        goal.current, goal.target, goal.direction, goal.initial_value
    )


def aggregate_progress(
    goal: Goal,
    goals: GoalCollection,
    _seen: frozenset[int] = frozenset(),
) -> float:
    """Progress of ``goal`` taking subgoals into account.

    Aggregate goals report the mean progress of their non-archived subgoals
    (0 when none resolve); other goals report their own current/target
    progress. A completed goal always reports 100.
    """
    if goal.is_complete:
        return 100.0
    if not derives_from_subgoals(goal):
        return own_progress(goal)

    seen = _seen | {goal.id}
    if len(seen) > MAX_DEPTH:
        logger.warning("hierarchy under goal %s exceeds depth %d", goal.id, MAX_DEPTH)
        return goal.progress

    children = [
        child
        for child in goals.subgoals_of(goal.id)
        if not child.is_archived and child.id not in seen
    ]
    if not children:
        return 0.0

    total = sum(aggregate_progress(child, goals, seen) for child in children)
    return total / len(children)


def recalculate(goal_id: int, goals: GoalCollection) -> GoalCollection:
    """Recompute ``goal_id``'s progress, then walk up through its parents.

    Returns a new collection; the input is not modified. Unknown IDs and
    dangling parent references end the walk (logged, treated as a root).
    """
    updated = goals
    visited: set[int] = set()
    current_id: int | None = goal_id

    while current_id is not None:
        if current_id in visited or len(visited) >= MAX_DEPTH:
            logger.warning("stopping hierarchy walk at goal %s (cycle or depth)", current_id)
            break
        visited.add(current_id)

        goal = updated.get(current_id)
        if goal is None:
            if current_id != goal_id:
                logger.warning("dangling parent reference %s; treating child as root", current_id)
            break

        progress = aggregate_progress(goal, updated)
        if progress != goal.progress:
            updated = updated.replace(goal.model_copy(update={"progress": progress}))
        current_id = goal.parent_id

    return updated


def subgoal_awards_points(goal: Goal, goals: GoalCollection) -> bool:
    """Whether completing ``goal`` should pay into the points ledger.

    Root goals always award. A subgoal awards only if its parent's
    ``subgoals_award_points`` allows it; when unset, ultimate parents keep
    the points for their own completion and ordinary parents let subgoals
    award. A subgoal whose parent is missing is treated as a root.
    """
    if goal.parent_id is None:
        return True
    parent = goals.get(goal.parent_id)
    if parent is None:
        logger.warning("goal %s has dangling parent %s", goal.id, goal.parent_id)
        return True
    if parent.subgoals_award_points is not None:
        return parent.subgoals_award_points
    return not parent.is_ultimate
