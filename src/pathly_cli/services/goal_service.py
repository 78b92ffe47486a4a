"""Goal service - Business logic for the goal lifecycle.

This service layer sits between commands and the document store. It owns
the in-memory goal collection: every operation builds a new collection,
persists it, and only then makes it current.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from datetime import datetime

from pathly_cli.models import Goal, GoalCollection, GoalCreate, GoalUpdate, TimePeriod
from pathly_cli.models.exceptions import (
    GoalBlockedError,
    GoalNotFoundError,
    GoalPausedError,
    InvalidDependencyError,
    InvalidGoalOperationError,
)
from pathly_cli.repositories import DocumentStore, NotificationScheduler
from pathly_cli.services.points_service import PointsLedger
from pathly_cli.services.reward_service import RewardService
from pathly_cli.services.storage_service import GoalsStorage
from pathly_cli.utils import dependencies, hierarchy
from pathly_cli.utils.id_utils import generate_id
from pathly_cli.utils.progress import calculate_progress, is_goal_completed, target_reached
from pathly_cli.utils.recurrence import process_recurring_goals
from pathly_cli.utils.streaks import update_goal_streaks

logger = logging.getLogger(__name__)

MAX_VALUE = 1_000_000

# Optional fields an edit may reset to None
CLEARABLE_FIELDS = frozenset({"description", "icon", "category", "subgoals_award_points"})


def _sort_key(goal: Goal) -> tuple:
    return (goal.sort_order is None, goal.sort_order or 0, goal.created_at)


class GoalService:
    """Service for goal business logic.

    The lifetime points ledger and the reward service are shared with the
    rest of the application; this service only ever adds to the ledger.
    """

    def __init__(
        self,
        store: DocumentStore,
        ledger: PointsLedger,
        reward_service: RewardService | None = None,
        scheduler: NotificationScheduler | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize the goal service.

        Args:
            store: DocumentStore holding the goal collection
            ledger: Lifetime points ledger credited on completion
            reward_service: Rewards to auto-redeem when linked goals complete
            scheduler: Reminder scheduler (reminders are stored but not
                scheduled when omitted)
            clock: Source of the current time
        """
        self.storage = GoalsStorage(store)
        self.ledger = ledger
        self.reward_service = reward_service
        self.scheduler = scheduler
        self.clock = clock or datetime.now
        self.goals = GoalCollection()

    async def _commit(self, goals: GoalCollection) -> GoalCollection:
        await self.storage.save(goals)
        self.goals = goals
        return goals

    def _require(self, goal_id: int) -> Goal:
        goal = self.goals.get(goal_id)
        if goal is None:
            raise GoalNotFoundError(goal_id)
        return goal

    def _recalculate_parent(self, goals: GoalCollection, goal: Goal) -> GoalCollection:
        if goal.parent_id is None:
            return goals
        return hierarchy.recalculate(goal.parent_id, goals)

    # Loading

    async def load(self) -> GoalCollection:
        """Load goals, roll over expired recurring goals and refresh streaks.

        The collection is only written back if something changed.

        Returns:
            The current goal collection
        """
        loaded = await self.storage.load()
        now = self.clock()
        processed = process_recurring_goals(loaded, now)

        refreshed = []
        for goal in processed:
            if goal.is_recurring:
                updated = update_goal_streaks(goal, now)
                if updated is not goal:
                    refreshed.append(updated)
        if refreshed:
            processed = processed.replace(*refreshed)

        if processed == loaded:
            self.goals = loaded
        else:
            logger.debug("recurring rollover changed goals, saving")
            await self._commit(processed)
        return self.goals

    async def refresh(self) -> GoalCollection:
        return await self.load()

    # Queries

    def get_goal(self, goal_id: int) -> Goal:
        """Get a goal by ID.

        Raises:
            GoalNotFoundError: If no goal has this ID
        """
        return self._require(goal_id)

    def list_goals(
        self,
        *,
        include_archived: bool = False,
        parent_id: int | None = None,
        roots_only: bool = False,
    ) -> list[Goal]:
        """List goals ordered by manual sort order, then creation time.

        Args:
            include_archived: Include archived goals
            parent_id: Only goals directly under this parent
            roots_only: Only goals without a parent

        Returns:
            List of Goal objects
        """
        goals = [
            goal
            for goal in self.goals
            if (include_archived or not goal.is_archived)
            and (parent_id is None or goal.parent_id == parent_id)
            and (not roots_only or goal.parent_id is None)
        ]
        return sorted(goals, key=_sort_key)

    def get_subgoals(self, parent_id: int) -> list[Goal]:
        return self.list_goals(include_archived=True, parent_id=parent_id)

    def is_unblocked(self, goal_id: int) -> bool:
        return dependencies.is_unblocked(goal_id, self.goals)

    def blocking_goals(self, goal_id: int) -> list[int]:
        return dependencies.blocking_goals(goal_id, self.goals)

    def blocked_goal_ids(self) -> set[int]:
        return {goal.id for goal in self.goals if goal.depends_on and not self.is_unblocked(goal.id)}

    def dependency_cycle(self, goal_id: int) -> list[int] | None:
        return dependencies.find_dependency_cycle(goal_id, self.goals)

    # Creation

    async def add_goal(self, data: GoalCreate) -> Goal:
        """Create a new goal, linking it under its parent when one is given.

        Args:
            data: Validated goal fields

        Returns:
            Created Goal

        Raises:
            GoalNotFoundError: If ``data.parent_id`` does not exist
            InvalidDependencyError: If a prerequisite is unknown or an ancestor
        """
        now = self.clock()
        parent = self._require(data.parent_id) if data.parent_id is not None else None
        if data.linked_reward_id is not None and self.reward_service is not None:
            self.reward_service.get_reward(data.linked_reward_id)

        goal = Goal(
            id=generate_id(self.goals.ids(), now),
            title=data.title,
            description=data.description,
            icon=data.icon,
            category=data.category,
            created_at=now,
            target=data.target,
            current=data.current,
            initial_value=data.current,
            unit=data.unit,
            direction=data.direction,
            period=data.period,
            custom_period_days=data.custom_period_days,
            period_start_date=now,
            is_recurring=data.is_recurring,
            parent_id=data.parent_id,
            is_ultimate=data.is_ultimate,
            subgoals_award_points=data.subgoals_award_points,
            points=data.points,
            linked_reward_id=data.linked_reward_id,
        )

        forbidden = {goal.id}
        if parent is not None:
            forbidden.add(parent.id)
            forbidden.update(self.goals.ancestors_of(parent.id))
        for dep_id in data.depends_on:
            if dep_id in forbidden:
                raise InvalidDependencyError(f"Goal cannot depend on its own parent chain ({dep_id})")
            if dep_id not in self.goals:
                raise InvalidDependencyError(f"Unknown prerequisite goal: {dep_id}")

        goal = goal.model_copy(
            update={
                "depends_on": list(dict.fromkeys(data.depends_on)),
                "progress": hierarchy.aggregate_progress(goal, self.goals),
            }
        )
        goals = self.goals.replace(goal)
        if parent is not None:
            goals = goals.replace(
                parent.model_copy(update={"sub_goals": [*parent.sub_goals, goal.id]})
            )
            goals = hierarchy.recalculate(parent.id, goals)

        await self._commit(goals)
        logger.info("added goal %s%s", goal.id, f" under {parent.id}" if parent else "")
        return goal

    async def add_subgoal(self, parent_id: int, data: GoalCreate) -> Goal:
        """Create a goal under ``parent_id``.

        Raises:
            GoalNotFoundError: If the parent does not exist
        """
        self._require(parent_id)
        return await self.add_goal(data.model_copy(update={"parent_id": parent_id}))

    # Progress and completion

    async def update_progress(self, goal_id: int, current: float) -> Goal:
        """Record a new current value for a goal.

        Reaching the target completes the goal. Falling back below it reopens
        a completed goal; points already earned are kept.

        Raises:
            GoalNotFoundError: If the goal does not exist
            GoalPausedError: If the goal is paused
            GoalBlockedError: If a prerequisite is not complete
            InvalidGoalOperationError: If the goal is archived, aggregates its
                subgoals, or ``current`` is out of range
        """
        goal = self._require(goal_id)
        self._check_actionable(goal)
        if hierarchy.derives_from_subgoals(goal):
            raise InvalidGoalOperationError(
                f"Goal {goal_id} takes its progress from its subgoals"
            )
        if not math.isfinite(current) or not 0 <= current <= MAX_VALUE:
            raise InvalidGoalOperationError(f"Value must be between 0 and {MAX_VALUE}")

        progress = calculate_progress(current, goal.target, goal.direction, goal.initial_value)
        updated = goal.model_copy(update={"current": current, "progress": progress})

        if is_goal_completed(progress) and not goal.is_complete:
            return await self._complete(updated)

        if goal.is_complete and not is_goal_completed(progress):
            logger.info("reopening goal %s", goal_id)
            updated = updated.model_copy(update={"is_complete": False, "completed_at": None})
            if updated.is_recurring:
                updated = update_goal_streaks(updated, self.clock())

        goals = self._recalculate_parent(self.goals.replace(updated), updated)
        await self._commit(goals)
        return updated

    async def finish_goal(self, goal_id: int) -> Goal:
        """Mark a goal complete at its target value.

        Finishing an already complete goal returns it unchanged.
        """
        goal = self._require(goal_id)
        if goal.is_complete:
            return goal
        self._check_actionable(goal)
        return await self._complete(goal.model_copy(update={"current": goal.target}))

    def _check_actionable(self, goal: Goal) -> None:
        if goal.is_archived:
            raise InvalidGoalOperationError(f"Goal {goal.id} is archived")
        if goal.is_paused:
            raise GoalPausedError(f"Goal {goal.id} is paused")
        blocking = dependencies.blocking_goals(goal.id, self.goals)
        if blocking:
            raise GoalBlockedError(goal.id, blocking)

    async def _complete(self, goal: Goal) -> Goal:
        """Apply the completion event to ``goal`` and persist it.

        The first completion of a goal (or of each period, for recurring
        goals) pays ``points`` into the ledger unless the parent keeps
        subgoal points, and auto-redeems the linked reward.
        """
        now = self.clock()
        first_completion = not goal.points_awarded
        completed = goal.model_copy(
            update={
                "progress": 100.0,
                "is_complete": True,
                "completed_at": now,
                "points_awarded": True,
            }
        )
        if completed.is_recurring:
            completed = update_goal_streaks(completed, now)

        goals = self._recalculate_parent(self.goals.replace(completed), completed)
        await self._commit(goals)
        logger.info("completed goal %s", goal.id)

        if first_completion:
            if hierarchy.subgoal_awards_points(completed, goals):
                await self.ledger.award(completed.points)
            else:
                logger.debug("parent of goal %s keeps subgoal points", goal.id)
            if completed.linked_reward_id is not None and self.reward_service is not None:
                await self.reward_service.auto_redeem(completed.linked_reward_id, now)
        return completed

    # Editing

    async def edit_goal(self, goal_id: int, updates: GoalUpdate) -> Goal:
        """Update goal fields. Only provided fields are changed.

        Progress is recomputed against the goal's initial value. Edits never
        complete a goal or award points, but they reopen a complete goal whose
        new target is no longer reached.
        """
        goal = self._require(goal_id)
        changes = {
            key: value
            for key, value in updates.model_dump(exclude_unset=True).items()
            if value is not None or key in CLEARABLE_FIELDS
        }
        for key in ("title", "unit"):
            if changes.get(key) is not None:
                changes[key] = changes[key].strip()
        if changes.get("is_recurring") and not goal.is_recurring:
            changes["period_start_date"] = self.clock()

        edited = goal.model_copy(update=changes)
        if edited.period == TimePeriod.CUSTOM and not edited.custom_period_days:
            raise InvalidGoalOperationError("Custom periods require a number of days")

        if (
            edited.is_complete
            and not hierarchy.derives_from_subgoals(edited)
            and not target_reached(edited.current, edited.target, edited.direction)
        ):
            logger.info("edit reopens goal %s", goal_id)
            edited = edited.model_copy(update={"is_complete": False, "completed_at": None})

        goals = hierarchy.recalculate(goal_id, self.goals.replace(edited))
        await self._commit(goals)
        return goals.get(goal_id)

    async def pause_goal(self, goal_id: int) -> Goal:
        return await self._set_flag(goal_id, is_paused=True)

    async def resume_goal(self, goal_id: int) -> Goal:
        return await self._set_flag(goal_id, is_paused=False)

    async def _set_flag(self, goal_id: int, **flags: bool) -> Goal:
        goal = self._require(goal_id).model_copy(update=flags)
        await self._commit(self.goals.replace(goal))
        return goal

    async def archive_goal(self, goal_id: int) -> list[int]:
        """Archive a goal and its whole subgoal subtree.

        Returns:
            IDs that were archived
        """
        return await self._set_archived(goal_id, True)

    async def unarchive_goal(self, goal_id: int) -> list[int]:
        return await self._set_archived(goal_id, False)

    async def _set_archived(self, goal_id: int, archived: bool) -> list[int]:
        goal = self._require(goal_id)
        ids = [goal_id, *self.goals.descendants_of(goal_id)]
        goals = self.goals.replace(
            *(
                self.goals.get(gid).model_copy(update={"is_archived": archived})
                for gid in ids
                if gid in self.goals
            )
        )
        goals = self._recalculate_parent(goals, goal)
        await self._commit(goals)
        logger.info("%s goals %s", "archived" if archived else "unarchived", ids)
        return ids

    async def remove_goal(self, goal_id: int) -> list[int]:
        """Permanently delete a goal and its subgoal subtree.

        The lifetime points ledger is left untouched. Goals that depended on a
        removed goal stay blocked until the dependency is removed.

        Returns:
            IDs that were removed
        """
        goal = self._require(goal_id)
        ids = [goal_id, *self.goals.descendants_of(goal_id)]
        handles = [
            handle
            for gid in ids
            if gid in self.goals
            for handle in self.goals.get(gid).notification_ids
        ]

        goals = self.goals.remove(ids)
        parent = goals.get(goal.parent_id)
        if parent is not None:
            goals = goals.replace(
                parent.model_copy(
                    update={"sub_goals": [sid for sid in parent.sub_goals if sid != goal_id]}
                )
            )
            goals = hierarchy.recalculate(parent.id, goals)

        await self._commit(goals)
        if handles and self.scheduler is not None:
            await self.scheduler.cancel(handles)

        orphaned = {dep for gid in ids for dep in dependencies.dependents_of(gid, goals)}
        if orphaned:
            logger.warning("goals %s now depend on removed goals", sorted(orphaned))
        logger.info("removed goals %s", ids)
        return ids

    async def reorder_goals(self, goal_ids: list[int]) -> list[Goal]:
        """Assign ``sort_order`` by position in ``goal_ids``."""
        reordered = [
            self._require(gid).model_copy(update={"sort_order": index})
            for index, gid in enumerate(goal_ids)
        ]
        await self._commit(self.goals.replace(*reordered))
        return reordered

    async def recalculate_progress(self, goal_id: int) -> Goal:
        """Recompute a goal's progress and propagate it to its parents."""
        self._require(goal_id)
        goals = hierarchy.recalculate(goal_id, self.goals)
        if goals != self.goals:
            await self._commit(goals)
        return self.goals.get(goal_id)

    # Dependencies

    async def add_dependency(self, goal_id: int, depends_on_id: int) -> Goal:
        """Make ``goal_id`` wait for ``depends_on_id`` to complete.

        A goal cannot depend on itself, its ancestors, or its subgoals.
        Dependencies that close a cycle are accepted but logged.

        Raises:
            GoalNotFoundError: If ``goal_id`` does not exist
            InvalidDependencyError: If the prerequisite is not allowed
        """
        goal = self._require(goal_id)
        if depends_on_id == goal_id:
            raise InvalidDependencyError("A goal cannot depend on itself")
        if depends_on_id not in self.goals:
            raise InvalidDependencyError(f"Unknown prerequisite goal: {depends_on_id}")
        if depends_on_id in self.goals.ancestors_of(goal_id):
            raise InvalidDependencyError(f"Goal {goal_id} cannot depend on its parent {depends_on_id}")
        if depends_on_id in self.goals.descendants_of(goal_id):
            raise InvalidDependencyError(f"Goal {goal_id} cannot depend on its subgoal {depends_on_id}")
        if depends_on_id in goal.depends_on:
            return goal

        updated = goal.model_copy(update={"depends_on": [*goal.depends_on, depends_on_id]})
        goals = await self._commit(self.goals.replace(updated))

        cycle = dependencies.find_dependency_cycle(goal_id, goals)
        if cycle:
            logger.warning(
                "dependency cycle %s: these goals stay blocked until one is finished",
                " -> ".join(str(gid) for gid in cycle),
            )
        return updated

    async def remove_dependency(self, goal_id: int, depends_on_id: int) -> Goal:
        goal = self._require(goal_id)
        if depends_on_id not in goal.depends_on:
            return goal
        updated = goal.model_copy(
            update={"depends_on": [d for d in goal.depends_on if d != depends_on_id]}
        )
        await self._commit(self.goals.replace(updated))
        return updated

    # Reminders and rewards

    async def set_reminder(self, goal_id: int, time_of_day: str, days: list[int]) -> Goal:
        """Schedule a reminder, replacing any existing one.

        Args:
            goal_id: Goal to remind about
            time_of_day: ``HH:MM`` (24h)
            days: Weekdays, 0 = Monday; empty means every day

        Raises:
            pydantic.ValidationError: If the time or days are malformed
        """
        goal = self._require(goal_id)
        validated = Goal.model_validate(
            {**goal.model_dump(), "notification_time": time_of_day, "notification_days": days}
        )
        if self.scheduler is not None:
            if goal.notification_ids:
                await self.scheduler.cancel(goal.notification_ids)
            handles = await self.scheduler.schedule(
                goal.id, goal.title, validated.notification_time, validated.notification_days
            )
        else:
            handles = []

        updated = goal.model_copy(
            update={
                "notification_time": validated.notification_time,
                "notification_days": validated.notification_days,
                "notification_ids": handles,
            }
        )
        await self._commit(self.goals.replace(updated))
        return updated

    async def clear_reminder(self, goal_id: int) -> Goal:
        goal = self._require(goal_id)
        if goal.notification_ids and self.scheduler is not None:
            await self.scheduler.cancel(goal.notification_ids)
        updated = goal.model_copy(
            update={"notification_time": None, "notification_days": [], "notification_ids": []}
        )
        await self._commit(self.goals.replace(updated))
        return updated

    async def link_reward(self, goal_id: int, reward_id: int | None) -> Goal:
        """Link a reward to auto-redeem on completion, or unlink with None.

        Raises:
            RewardNotFoundError: If ``reward_id`` does not exist
        """
        goal = self._require(goal_id)
        if reward_id is not None and self.reward_service is not None:
            self.reward_service.get_reward(reward_id)
        updated = goal.model_copy(update={"linked_reward_id": reward_id})
        await self._commit(self.goals.replace(updated))
        return updated

    async def replace_all(self, goals: GoalCollection) -> GoalCollection:
        """Swap in an imported goal collection."""
        return await self._commit(goals)
