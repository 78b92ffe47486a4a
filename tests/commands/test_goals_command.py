"""CLI tests for the goals sub-commands, run against a vault in tmp_path."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from pathly_cli.main import app

runner = CliRunner()


def invoke(*args, **kwargs):
    return runner.invoke(app, list(args), **kwargs)


def add(title: str, *options: str) -> dict:
    result = invoke("goals", "add", title, *options, "-o", "json")
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


def show(goal_id: int) -> dict:
    result = invoke("goals", "show", str(goal_id), "-o", "json")
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


def test_add_uses_configured_defaults():
    invoke("config", "set", "goals.default_points", "25")

    goal = add("Read", "--target", "12", "--unit", "books")

    assert goal["title"] == "Read"
    assert goal["points"] == 25
    assert goal["period"] == "ongoing"
    assert goal["unit"] == "books"


def test_add_rejects_invalid_input():
    result = invoke("goals", "add", "Bad", "--target", "0")
    assert result.exit_code == 2
    assert "Invalid input" in result.output


def test_add_custom_period_needs_days():
    result = invoke("goals", "add", "Bad", "--target", "3", "--period", "custom")
    assert result.exit_code == 2


def test_progress_to_completion_awards_points():
    goal = add("Run", "--target", "10", "--points", "15")

    result = invoke("goals", "progress", str(goal["id"]), "12")

    assert result.exit_code == 0, result.output
    assert "Goal complete" in result.output
    assert "+15 points" in result.output
    assert "First Step" in result.output
    assert show(goal["id"])["progress"] == 100


def test_finish_twice_awards_once():
    goal = add("Swim", "--target", "1", "--points", "5")

    invoke("goals", "finish", str(goal["id"]))
    result = invoke("goals", "finish", str(goal["id"]))

    assert result.exit_code == 0
    assert "+5 points" not in result.output


def test_show_unknown_goal():
    result = invoke("goals", "show", "42")
    assert result.exit_code == 5
    assert "Goal not found: 42" in result.output


def test_show_pretty():
    goal = add("Write", "--target", "3", "--period", "weekly")
    result = invoke("goals", "show", str(goal["id"]))
    assert result.exit_code == 0
    assert "Write" in result.output
    assert "every week" in result.output


def test_paused_goal_rejects_progress():
    goal = add("Walk", "--target", "10")
    invoke("goals", "pause", str(goal["id"]))

    result = invoke("goals", "progress", str(goal["id"]), "3")
    assert result.exit_code == 8
    assert "paused" in result.output

    invoke("goals", "resume", str(goal["id"]))
    assert invoke("goals", "progress", str(goal["id"]), "3").exit_code == 0


def test_subgoals_drive_parent_progress():
    parent = add("Marathon", "--target", "1", "--ultimate")
    first = add("Base", "--target", "100", "--parent", str(parent["id"]))
    second = add("Speed", "--target", "100", "--parent", str(parent["id"]))

    invoke("goals", "progress", str(first["id"]), "40")
    invoke("goals", "progress", str(second["id"]), "60")

    assert show(parent["id"])["progress"] == 50


def test_dependencies():
    first = add("Learn", "--target", "1")
    second = add("Teach", "--target", "1")

    result = invoke("goals", "depend", str(second["id"]), str(first["id"]))
    assert result.exit_code == 0

    blocked = invoke("goals", "finish", str(second["id"]))
    assert blocked.exit_code == 8
    assert "blocked" in blocked.output

    invoke("goals", "finish", str(first["id"]))
    assert invoke("goals", "finish", str(second["id"])).exit_code == 0


def test_dependency_cycle_warns():
    first = add("A", "--target", "1")
    second = add("B", "--target", "1", "--depends-on", str(first["id"]))

    result = invoke("goals", "depend", str(first["id"]), str(second["id"]))

    assert result.exit_code == 0
    assert "Dependency cycle" in result.output


def test_self_dependency_is_invalid():
    goal = add("Solo", "--target", "1")
    result = invoke("goals", "depend", str(goal["id"]), str(goal["id"]))
    assert result.exit_code == 2


def test_edit_and_list():
    goal = add("Old title", "--target", "10")

    result = invoke("goals", "edit", str(goal["id"]), "--title", "New title", "--target", "20")
    assert result.exit_code == 0

    listed = json.loads(invoke("goals", "list", "-o", "json").stdout)
    assert [g["title"] for g in listed] == ["New title"]
    assert listed[0]["target"] == 20


def test_archive_hides_from_list():
    goal = add("Hidden", "--target", "1")
    invoke("goals", "archive", str(goal["id"]))

    assert json.loads(invoke("goals", "list", "-o", "json").stdout) == []
    assert len(json.loads(invoke("goals", "list", "--all", "-o", "json").stdout)) == 1

    invoke("goals", "unarchive", str(goal["id"]))
    assert len(json.loads(invoke("goals", "list", "-o", "json").stdout)) == 1


def test_remove_asks_for_confirmation():
    goal = add("Keep me", "--target", "1")

    result = invoke("goals", "remove", str(goal["id"]), input="n\n")
    assert "Cancelled" in result.output
    assert show(goal["id"])["title"] == "Keep me"

    result = invoke("goals", "remove", str(goal["id"]), "--yes")
    assert result.exit_code == 0
    assert invoke("goals", "show", str(goal["id"])).exit_code == 5


def test_reminders():
    goal = add("Meditate", "--target", "1")

    result = invoke("goals", "remind", str(goal["id"]), "07:30", "--day", "0", "--day", "2")
    assert result.exit_code == 0
    record = show(goal["id"])
    assert record["notificationTime"] == "07:30"
    assert record["notificationDays"] == [0, 2]
    assert len(record["notificationIds"]) == 2

    assert invoke("goals", "remind", str(goal["id"]), "7pm").exit_code == 2

    invoke("goals", "unremind", str(goal["id"]))
    assert "notificationTime" not in show(goal["id"])


def test_reorder():
    first = add("First", "--target", "1")
    second = add("Second", "--target", "1")

    invoke("goals", "reorder", str(second["id"]), str(first["id"]))

    listed = json.loads(invoke("goals", "list", "-o", "json").stdout)
    assert [g["id"] for g in listed] == [second["id"], first["id"]]


def test_link_reward_and_auto_redeem():
    invoke("rewards", "add", "Cake", "--cost", "1000")
    rewards = json.loads(invoke("rewards", "list", "-o", "json").stdout)
    goal = add("Bake", "--target", "1", "--points", "0")

    assert invoke("goals", "link-reward", str(goal["id"]), str(rewards[0]["id"])).exit_code == 0
    invoke("goals", "finish", str(goal["id"]))

    redeemed = json.loads(invoke("rewards", "list", "--redeemed", "-o", "json").stdout)
    assert [r["title"] for r in redeemed] == ["Cake"]


def test_link_unknown_reward():
    goal = add("Bake", "--target", "1")
    assert invoke("goals", "link-reward", str(goal["id"]), "99").exit_code == 5


def test_recalculate_and_refresh():
    goal = add("Count", "--target", "4")
    assert invoke("goals", "recalculate", str(goal["id"])).exit_code == 0
    result = invoke("goals", "refresh")
    assert result.exit_code == 0
    assert "1 goals up to date" in result.output
