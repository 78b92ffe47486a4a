"""Unit tests for progress percentage calculation."""

from __future__ import annotations

import math

import pytest

from pathly_cli.models import GoalDirection
from pathly_cli.utils.progress import (
    calculate_progress,
    format_number,
    format_progress_text,
    is_goal_completed,
    target_reached,
)

INC = GoalDirection.INCREASE
DEC = GoalDirection.DECREASE


class TestIncrease:
    def test_halfway(self):
        assert calculate_progress(50, 100, INC, 0) == 50

    def test_measured_from_initial_value(self):
        assert calculate_progress(15, 20, INC, 10) == 50

    def test_overshoot_is_clamped(self):
        assert calculate_progress(150, 100, INC, 0) == 100

    def test_below_initial_is_zero(self):
        assert calculate_progress(5, 20, INC, 10) == 0


class TestDecrease:
    def test_weight_loss(self):
        assert calculate_progress(85, 80, DEC, 90) == 50

    def test_reached(self):
        assert calculate_progress(79, 80, DEC, 90) == 100

    def test_gained_instead_is_zero(self):
        assert calculate_progress(95, 80, DEC, 90) == 0


class TestDegenerate:
    def test_target_equals_initial_and_reached(self):
        assert calculate_progress(10, 10, INC, 10) == 100

    def test_target_equals_initial_not_reached_decrease(self):
        assert calculate_progress(11, 10, DEC, 10) == 0

    def test_target_behind_initial_not_reached(self):
        # increase goal whose target is below the starting value
        assert calculate_progress(-5, 0, INC, 10) == 0

    def test_non_finite_inputs(self):
        assert calculate_progress(math.nan, 10, INC, 0) == 0
        assert calculate_progress(5, math.inf, INC, 0) == 0


@pytest.mark.parametrize("direction", [INC, DEC])
@pytest.mark.parametrize("initial", [0, 5, 50, 100])
@pytest.mark.parametrize("target", [1, 10, 50, 99.5])
@pytest.mark.parametrize("current", [-10, 0, 7, 50, 1000])
def test_progress_always_within_bounds(current, target, initial, direction):
    progress = calculate_progress(current, target, direction, initial)
    assert 0 <= progress <= 100
    assert (progress == 100) == target_reached(current, target, direction)


def test_is_goal_completed():
    assert is_goal_completed(100)
    assert not is_goal_completed(99.99)


def test_format_progress_text():
    assert format_progress_text(5, 20, "km") == "5 / 20 km"
    assert format_progress_text(2.5, 10, "") == "2.5 / 10"


def test_format_number():
    assert format_number(3.0) == "3"
    assert format_number(0.25) == "0.25"
