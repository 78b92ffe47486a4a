"""Tests for the copy-on-write goal collection."""

from __future__ import annotations

from pathly_cli.models import GoalCollection


def test_replace_returns_new_collection(goal_factory):
    goal = goal_factory(id=1, title="Before")
    original = GoalCollection([goal])

    updated = original.replace(goal.model_copy(update={"title": "After"}), goal_factory(id=2))

    assert original.get(1).title == "Before"
    assert 2 not in original
    assert updated.get(1).title == "After"
    assert len(updated) == 2


def test_remove_ignores_unknown_ids(goal_factory):
    goals = GoalCollection([goal_factory(id=1), goal_factory(id=2)])
    remaining = goals.remove([2, 99])
    assert remaining.ids() == [1]
    assert len(goals) == 2


def test_get_none_and_missing(goal_factory):
    goals = GoalCollection([goal_factory(id=1)])
    assert goals.get(None) is None
    assert goals.get(5) is None


def test_subgoals_skip_dangling_ids(goal_factory):
    parent = goal_factory(id=1, sub_goals=[2, 3])
    child = goal_factory(id=2, parent_id=1)
    goals = GoalCollection([parent, child])
    assert goals.subgoals_of(1) == [child]
    assert goals.subgoals_of(42) == []


def test_descendants_and_ancestors(goal_factory):
    goals = GoalCollection(
        [
            goal_factory(id=1, sub_goals=[2]),
            goal_factory(id=2, parent_id=1, sub_goals=[3]),
            goal_factory(id=3, parent_id=2),
        ]
    )
    assert goals.descendants_of(1) == [2, 3]
    assert goals.ancestors_of(3) == [2, 1]
    assert goals.ancestors_of(1) == []


def test_hierarchy_walks_stop_on_cycles(goal_factory):
    goals = GoalCollection(
        [
            goal_factory(id=1, parent_id=2, sub_goals=[2]),
            goal_factory(id=2, parent_id=1, sub_goals=[1]),
        ]
    )
    assert goals.descendants_of(1) == [2]
    assert goals.ancestors_of(1) == [2]


def test_equality(goal_factory):
    goal = goal_factory(id=1)
    assert GoalCollection([goal]) == GoalCollection([goal])
    assert GoalCollection([goal]) != GoalCollection()
