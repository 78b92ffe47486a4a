"""Copy-on-write index of goals keyed by ID."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .core import Goal


class GoalCollection:
    """Immutable snapshot of the goal set.

    Lookups are O(1) by ID. Every mutating helper returns a new collection
    and leaves the original untouched, so a caller can always compare the
    before and after snapshots when deciding what to persist.
    """

    __slots__ = ("_goals",)

    def __init__(self, goals: Iterable[Goal] = ()):
        self._goals: dict[int, Goal] = {goal.id: goal for goal in goals}

    @classmethod
    def _from_dict(cls, goals: dict[int, Goal]) -> GoalCollection:
        collection = cls.__new__(cls)
        collection._goals = goals
        return collection

    def __iter__(self) -> Iterator[Goal]:
        return iter(self._goals.values())

    def __len__(self) -> int:
        return len(self._goals)

    def __contains__(self, goal_id: object) -> bool:
        return goal_id in self._goals

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GoalCollection):
            return NotImplemented
        return self._goals == other._goals

    def __repr__(self) -> str:
        return f"GoalCollection({len(self._goals)} goals)"

    def get(self, goal_id: int | None) -> Goal | None:
        if goal_id is None:
            return None
        return self._goals.get(goal_id)

    def ids(self) -> list[int]:
        return list(self._goals)

    def to_list(self) -> list[Goal]:
        return list(self._goals.values())

    def replace(self, *goals: Goal) -> GoalCollection:
        """Return a copy with the given goals inserted or replaced by ID."""
        updated = dict(self._goals)
        for goal in goals:
            updated[goal.id] = goal
        return self._from_dict(updated)

    def remove(self, goal_ids: Iterable[int]) -> GoalCollection:
        """Return a copy without the given IDs (unknown IDs are ignored)."""
        drop = set(goal_ids)
        return self._from_dict(
            {gid: goal for gid, goal in self._goals.items() if gid not in drop}
        )

    def subgoals_of(self, goal_id: int) -> list[Goal]:
        """Resolve a goal's ``sub_goals`` list, skipping dangling IDs."""
        parent = self._goals.get(goal_id)
        if parent is None:
            return []
        return [self._goals[sid] for sid in parent.sub_goals if sid in self._goals]

    def descendants_of(self, goal_id: int) -> list[int]:
        """All IDs below ``goal_id`` in the hierarchy, depth-first."""
        found: list[int] = []
        seen = {goal_id}
        stack = [goal_id]
        while stack:
            current = self._goals.get(stack.pop())
            if current is None:
                continue
            for sid in current.sub_goals:
                if sid in seen:
                    continue
                seen.add(sid)
                found.append(sid)
                stack.append(sid)
        return found

    def ancestors_of(self, goal_id: int) -> list[int]:
        """Parent chain of ``goal_id``, nearest first, stopping on cycles."""
        chain: list[int] = []
        seen = {goal_id}
        goal = self._goals.get(goal_id)
        while goal is not None and goal.parent_id is not None:
            if goal.parent_id in seen:
                break
            seen.add(goal.parent_id)
            chain.append(goal.parent_id)
            goal = self._goals.get(goal.parent_id)
        return chain
