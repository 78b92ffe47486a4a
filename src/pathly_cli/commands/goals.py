"""Goal commands: create, track, complete and organize goals."""

from typing import Annotated

import typer

from pathly_cli.models import GoalCategory, GoalCreate, GoalDirection, GoalUpdate, TimePeriod
from pathly_cli.models.achievements import get_achievement
from pathly_cli.services.app_services import AppServices, open_services
from pathly_cli.services.config_service import get_config_service
from pathly_cli.services.statistics_service import get_newly_unlocked_achievements, time_remaining
from pathly_cli.utils.typer_helpers import SuggestingGroup
from pathly_cli.utils.ui.console import get_console
from pathly_cli.utils.ui.formatters import (
    format_goal_detail,
    format_goals_table,
    format_info,
    format_output,
    format_success,
    format_warning,
)

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Goal management commands")
console = get_console()

OutputOption = Annotated[
    str | None, typer.Option("--output", "-o", help="Output format: pretty, json, yaml")
]


def resolve_output(output: str | None) -> str:
    return output or get_config_service().config.output.format


def announce_completion(services: AppServices, before_points: int, before_stats) -> None:
    """Print points and achievements earned by the last operation."""
    earned = services.ledger.total - before_points
    if earned > 0:
        format_success(f"+{earned} points (lifetime {services.ledger.total})")
    for achievement_id in get_newly_unlocked_achievements(before_stats, services.statistics()):
        achievement = get_achievement(achievement_id)
        if achievement:
            console.print(
                f"[bold magenta]{achievement.icon} Achievement unlocked:[/bold magenta] "
                f"{achievement.name} - {achievement.description}"
            )


@app.command("list")
@command_wrapper
async def list_goals(
    all_goals: Annotated[
        bool, typer.Option("--all", "-a", help="Include archived goals")
    ] = False,
    output: OutputOption = None,
) -> None:
    """List goals with their progress."""
    async with open_services() as services:
        goals = services.goals.list_goals(include_archived=all_goals)
        output = resolve_output(output)
        if output == "pretty":
            format_goals_table(goals, services.goals.blocked_goal_ids(), title="Goals")
        else:
            format_output([goal.to_record() for goal in goals], output)


@app.command("show")
@command_wrapper
async def show_goal(
    goal_id: Annotated[int, typer.Argument(help="Goal ID")],
    output: OutputOption = None,
) -> None:
    """Show a goal in detail."""
    async with open_services() as services:
        goal = services.goals.get_goal(goal_id)
        output = resolve_output(output)
        if output == "pretty":
            format_goal_detail(
                goal,
                services.goals.blocking_goals(goal_id),
                time_remaining(goal, services.clock()),
            )
            subgoals = services.goals.get_subgoals(goal_id)
            if subgoals:
                format_goals_table(subgoals, services.goals.blocked_goal_ids(), title="Subgoals")
        else:
            format_output(goal.to_record(), output)


@app.command("add")
@command_wrapper
async def add_goal(
    title: Annotated[str, typer.Argument(help="Goal title")],
    target: Annotated[float, typer.Option("--target", "-t", help="Target value")],
    current: Annotated[float, typer.Option("--current", "-c", help="Starting value")] = 0,
    unit: Annotated[str, typer.Option("--unit", "-u", help="Unit of measurement")] = "",
    direction: Annotated[
        GoalDirection, typer.Option("--direction", "-d", help="increase or decrease")
    ] = GoalDirection.INCREASE,
    points: Annotated[
        int | None, typer.Option("--points", "-p", help="Points awarded on completion")
    ] = None,
    period: Annotated[
        TimePeriod | None, typer.Option("--period", help="Time period")
    ] = None,
    days: Annotated[
        int | None, typer.Option("--days", help="Length of a custom period in days")
    ] = None,
    recurring: Annotated[
        bool, typer.Option("--recurring", "-r", help="Reset at the end of every period")
    ] = False,
    parent: Annotated[
        int | None, typer.Option("--parent", help="Create as a subgoal of this goal")
    ] = None,
    ultimate: Annotated[
        bool, typer.Option("--ultimate", help="Track progress through subgoals")
    ] = False,
    subgoals_award_points: Annotated[
        bool | None,
        typer.Option(
            "--subgoal-points/--no-subgoal-points",
            help="Whether subgoals earn their own points",
        ),
    ] = None,
    depends_on: Annotated[
        list[int] | None, typer.Option("--depends-on", help="Prerequisite goal ID")
    ] = None,
    reward: Annotated[
        int | None, typer.Option("--reward", help="Reward redeemed on completion")
    ] = None,
    description: Annotated[str | None, typer.Option("--description")] = None,
    icon: Annotated[str | None, typer.Option("--icon")] = None,
    category: Annotated[GoalCategory | None, typer.Option("--category")] = None,
    output: OutputOption = None,
) -> None:
    """Create a new goal."""
    defaults = get_config_service().config.goals
    data = GoalCreate(
        title=title,
        target=target,
        current=current,
        unit=unit,
        direction=direction,
        points=defaults.default_points if points is None else points,
        period=period or defaults.default_period,
        custom_period_days=days,
        is_recurring=recurring,
        parent_id=parent,
        is_ultimate=ultimate,
        subgoals_award_points=subgoals_award_points,
        depends_on=depends_on or [],
        linked_reward_id=reward,
        description=description,
        icon=icon,
        category=category,
    )
    async with open_services() as services:
        goal = await services.goals.add_goal(data)
        output = resolve_output(output)
        if output == "pretty":
            format_success(f"Created goal #{goal.id}: {goal.title}")
        else:
            format_output(goal.to_record(), output)


@app.command("progress")
@command_wrapper
async def update_progress(
    goal_id: Annotated[int, typer.Argument(help="Goal ID")],
    value: Annotated[float, typer.Argument(help="New current value")],
) -> None:
    """Record a goal's current value."""
    async with open_services() as services:
        before_points, before_stats = services.ledger.total, services.statistics()
        goal = await services.goals.update_progress(goal_id, value)
        format_success(f"{goal.title}: {goal.progress:.1f}%")
        if goal.is_complete:
            format_success(f"🎉 Goal complete: {goal.title}")
        announce_completion(services, before_points, before_stats)


@app.command("finish")
@command_wrapper
async def finish_goal(
    goal_id: Annotated[int, typer.Argument(help="Goal ID")],
) -> None:
    """Mark a goal as complete."""
    async with open_services() as services:
        before_points, before_stats = services.ledger.total, services.statistics()
        goal = await services.goals.finish_goal(goal_id)
        format_success(f"🎉 Goal complete: {goal.title}")
        announce_completion(services, before_points, before_stats)


@app.command("edit")
@command_wrapper
async def edit_goal(
    goal_id: Annotated[int, typer.Argument(help="Goal ID")],
    title: Annotated[str | None, typer.Option("--title")] = None,
    target: Annotated[float | None, typer.Option("--target", "-t")] = None,
    current: Annotated[float | None, typer.Option("--current", "-c")] = None,
    unit: Annotated[str | None, typer.Option("--unit", "-u")] = None,
    direction: Annotated[GoalDirection | None, typer.Option("--direction", "-d")] = None,
    points: Annotated[int | None, typer.Option("--points", "-p")] = None,
    period: Annotated[TimePeriod | None, typer.Option("--period")] = None,
    days: Annotated[int | None, typer.Option("--days")] = None,
    recurring: Annotated[bool | None, typer.Option("--recurring/--one-time")] = None,
    ultimate: Annotated[bool | None, typer.Option("--ultimate/--no-ultimate")] = None,
    description: Annotated[str | None, typer.Option("--description")] = None,
    icon: Annotated[str | None, typer.Option("--icon")] = None,
    category: Annotated[GoalCategory | None, typer.Option("--category")] = None,
) -> None:
    """Edit a goal's fields. Earned points are never changed."""
    fields = {
        "title": title,
        "target": target,
        "current": current,
        "unit": unit,
        "direction": direction,
        "points": points,
        "period": period,
        "custom_period_days": days,
        "is_recurring": recurring,
        "is_ultimate": ultimate,
        "description": description,
        "icon": icon,
        "category": category,
    }
    updates = GoalUpdate(**{key: value for key, value in fields.items() if value is not None})
    async with open_services() as services:
        goal = await services.goals.edit_goal(goal_id, updates)
        format_success(f"Updated goal #{goal.id}: {goal.title}")


@app.command("pause")
@command_wrapper
async def pause_goal(goal_id: Annotated[int, typer.Argument(help="Goal ID")]) -> None:
    """Pause a goal."""
    async with open_services() as services:
        goal = await services.goals.pause_goal(goal_id)
        format_success(f"Paused: {goal.title}")


@app.command("resume")
@command_wrapper
async def resume_goal(goal_id: Annotated[int, typer.Argument(help="Goal ID")]) -> None:
    """Resume a paused goal."""
    async with open_services() as services:
        goal = await services.goals.resume_goal(goal_id)
        format_success(f"Resumed: {goal.title}")


@app.command("archive")
@command_wrapper
async def archive_goal(goal_id: Annotated[int, typer.Argument(help="Goal ID")]) -> None:
    """Archive a goal and its subgoals."""
    async with open_services() as services:
        ids = await services.goals.archive_goal(goal_id)
        format_success(f"Archived {len(ids)} goal(s)")


@app.command("unarchive")
@command_wrapper
async def unarchive_goal(goal_id: Annotated[int, typer.Argument(help="Goal ID")]) -> None:
    """Restore an archived goal and its subgoals."""
    async with open_services() as services:
        ids = await services.goals.unarchive_goal(goal_id)
        format_success(f"Restored {len(ids)} goal(s)")


@app.command("remove")
@command_wrapper
async def remove_goal(
    goal_id: Annotated[int, typer.Argument(help="Goal ID")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Permanently delete a goal and its subgoals. Earned points are kept."""
    async with open_services() as services:
        goal = services.goals.get_goal(goal_id)
        if not yes and not typer.confirm(f"Delete '{goal.title}' and its subgoals?"):
            format_info("Cancelled")
            return
        ids = await services.goals.remove_goal(goal_id)
        format_success(f"Deleted {len(ids)} goal(s)")


@app.command("depend")
@command_wrapper
async def add_dependency(
    goal_id: Annotated[int, typer.Argument(help="Goal ID")],
    depends_on_id: Annotated[int, typer.Argument(help="Prerequisite goal ID")],
) -> None:
    """Make a goal wait for another goal to be completed."""
    async with open_services() as services:
        await services.goals.add_dependency(goal_id, depends_on_id)
        format_success(f"Goal #{goal_id} now depends on #{depends_on_id}")
        cycle = services.goals.dependency_cycle(goal_id)
        if cycle:
            format_warning(
                "Dependency cycle: "
                + " -> ".join(f"#{gid}" for gid in cycle)
                + ". These goals stay blocked until one of them is finished."
            )


@app.command("undepend")
@command_wrapper
async def remove_dependency(
    goal_id: Annotated[int, typer.Argument(help="Goal ID")],
    depends_on_id: Annotated[int, typer.Argument(help="Prerequisite goal ID")],
) -> None:
    """Remove a prerequisite from a goal."""
    async with open_services() as services:
        await services.goals.remove_dependency(goal_id, depends_on_id)
        format_success(f"Goal #{goal_id} no longer depends on #{depends_on_id}")


@app.command("reorder")
@command_wrapper
async def reorder_goals(
    goal_ids: Annotated[list[int], typer.Argument(help="Goal IDs in the desired order")],
) -> None:
    """Set the manual display order of goals."""
    async with open_services() as services:
        await services.goals.reorder_goals(goal_ids)
        format_success(f"Reordered {len(goal_ids)} goal(s)")


@app.command("remind")
@command_wrapper
async def set_reminder(
    goal_id: Annotated[int, typer.Argument(help="Goal ID")],
    time_of_day: Annotated[str, typer.Argument(help="Time of day, HH:MM")],
    day: Annotated[
        list[int] | None,
        typer.Option("--day", help="Weekday (0=Mon .. 6=Sun); repeat for several"),
    ] = None,
) -> None:
    """Set a reminder for a goal."""
    async with open_services() as services:
        goal = await services.goals.set_reminder(goal_id, time_of_day, day or [])
        format_success(f"Reminder set for {goal.title} at {goal.notification_time}")


@app.command("unremind")
@command_wrapper
async def clear_reminder(goal_id: Annotated[int, typer.Argument(help="Goal ID")]) -> None:
    """Remove a goal's reminder."""
    async with open_services() as services:
        goal = await services.goals.clear_reminder(goal_id)
        format_success(f"Reminder cleared for {goal.title}")


@app.command("link-reward")
@command_wrapper
async def link_reward(
    goal_id: Annotated[int, typer.Argument(help="Goal ID")],
    reward_id: Annotated[
        int | None, typer.Argument(help="Reward ID (omit to unlink)")
    ] = None,
) -> None:
    """Link a reward that is redeemed when the goal is completed."""
    async with open_services() as services:
        await services.goals.link_reward(goal_id, reward_id)
        if reward_id is None:
            format_success(f"Unlinked reward from goal #{goal_id}")
        else:
            format_success(f"Reward #{reward_id} will be redeemed when goal #{goal_id} is done")


@app.command("recalculate")
@command_wrapper
async def recalculate_progress(goal_id: Annotated[int, typer.Argument(help="Goal ID")]) -> None:
    """Recompute a goal's progress from its subgoals."""
    async with open_services() as services:
        goal = await services.goals.recalculate_progress(goal_id)
        format_success(f"{goal.title}: {goal.progress:.1f}%")


@app.command("refresh")
@command_wrapper
async def refresh_goals() -> None:
    """Roll over recurring goals whose period has ended."""
    async with open_services() as services:
        format_success(f"{len(services.goals.goals)} goals up to date")
