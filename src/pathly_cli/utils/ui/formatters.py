"""Output formatters for different formats."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

import yaml
from rich.table import Table

from pathly_cli.models import Goal, Reward
from pathly_cli.utils.progress import format_number, format_progress_text
from pathly_cli.utils.recurrence import describe_period
from pathly_cli.utils.ui.console import get_console

console = get_console()


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))
    else:
        format_pretty(data)


def format_pretty(data: Any) -> None:
    """Fallback rendering for plain dicts and lists."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return
    if isinstance(data, list):
        for item in data:
            if isinstance(item, dict):
                format_single_item(item)
            else:
                console.print(item)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        formatted_key = key.replace("_", " ").title()
        table.add_row(formatted_key, _format_value(value))

    console.print(table)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value) or "-"
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M")
    if value is None:
        return "-"
    return str(value)


def render_progress_bar(percent: float, width: int = 12) -> str:
    """Render a progress bar using block characters."""
    ratio = max(0.0, min(percent / 100, 1.0))
    filled = int(ratio * width)
    return "█" * filled + "░" * (width - filled)


def goal_status(goal: Goal, blocked: bool = False) -> str:
    if goal.is_archived:
        return "[dim]archived[/dim]"
    if goal.is_paused:
        return "[yellow]paused[/yellow]"
    if goal.is_complete:
        return "[green]✓ done[/green]"
    if blocked:
        return "[red]blocked[/red]"
    return "active"


def format_goals_table(
    goals: list[Goal],
    blocked_ids: set[int] | None = None,
    title: str | None = None,
) -> None:
    """Render goals as a table, subgoals indented under their parent."""
    if not goals:
        console.print("[yellow]No goals found[/yellow]")
        return

    blocked_ids = blocked_ids or set()
    table = Table(show_header=True, header_style="bold magenta", title=title)
    table.add_column("ID", style="dim")
    table.add_column("Goal")
    table.add_column("Progress")
    table.add_column("Value", justify="right")
    table.add_column("Period")
    table.add_column("Pts", justify="right")
    table.add_column("Status")

    by_parent: dict[int | None, list[Goal]] = {}
    ids = {goal.id for goal in goals}
    for goal in goals:
        parent = goal.parent_id if goal.parent_id in ids else None
        by_parent.setdefault(parent, []).append(goal)

    def add_rows(parent_id: int | None, depth: int) -> None:
        for goal in by_parent.get(parent_id, []):
            name = ("  " * depth) + ("↳ " if depth else "") + (goal.icon + " " if goal.icon else "") + goal.title
            if goal.is_ultimate:
                name = f"[bold]{name}[/bold]"
            value = "-" if goal.is_ultimate else format_progress_text(goal.current, goal.target, goal.unit)
            period = describe_period(goal.period, goal.custom_period_days)
            if goal.is_recurring and goal.current_streak:
                period += f" 🔥{goal.current_streak}"
            table.add_row(
                str(goal.id),
                name,
                f"{render_progress_bar(goal.progress)} {goal.progress:.0f}%",
                value,
                period,
                str(goal.points),
                goal_status(goal, goal.id in blocked_ids),
            )
            if depth < 8:
                add_rows(goal.id, depth + 1)

    add_rows(None, 0)
    console.print(table)


def format_goal_detail(
    goal: Goal,
    blocking: list[int],
    time_left: str = "",
) -> None:
    """Render a single goal with its recurrence and dependency details."""
    header = f"{goal.icon} {goal.title}" if goal.icon else goal.title
    console.print(f"\n[bold cyan]{header}[/bold cyan]  [dim]#{goal.id}[/dim]")
    if goal.description:
        console.print(f"[dim]{goal.description}[/dim]")
    console.print()
    console.print(f"  Progress:   {render_progress_bar(goal.progress, 20)} {goal.progress:.1f}%")
    if not goal.is_ultimate:
        console.print(
            f"  Value:      {format_progress_text(goal.current, goal.target, goal.unit)}"
            f" ({goal.direction.value} from {format_number(goal.initial_value)})"
        )
    console.print(f"  Period:     {describe_period(goal.period, goal.custom_period_days)}")
    if time_left:
        console.print(f"  Remaining:  {time_left}")
    console.print(f"  Points:     {goal.points}")
    console.print(f"  Status:     {goal_status(goal, bool(blocking))}")
    if goal.is_recurring:
        console.print(
            f"  Streak:     {goal.current_streak} (best {goal.longest_streak}),"
            f" {len(goal.completion_history)} past completions"
        )
    if goal.sub_goals:
        console.print(f"  Subgoals:   {', '.join(str(s) for s in goal.sub_goals)}")
    if goal.depends_on:
        console.print(f"  Depends on: {', '.join(str(d) for d in goal.depends_on)}")
    if blocking:
        console.print(f"  [red]Blocked by: {', '.join(str(b) for b in blocking)}[/red]")
    if goal.notification_time:
        console.print(f"  Reminder:   {goal.notification_time} on days {goal.notification_days or 'all'}")
    console.print()


def format_rewards_table(rewards: list[Reward], available_points: int) -> None:
    """Render rewards with affordability against the available balance."""
    if not rewards:
        console.print("[yellow]No rewards found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim")
    table.add_column("Reward")
    table.add_column("Cost", justify="right")
    table.add_column("Status")

    for reward in rewards:
        if reward.is_redeemed:
            status = f"[dim]redeemed {_format_value(reward.redeemed_at)}[/dim]"
        elif reward.points_cost <= available_points:
            status = "[green]available[/green]"
        else:
            status = f"[yellow]{reward.points_cost - available_points} pts to go[/yellow]"
        name = f"{reward.icon} {reward.title}" if reward.icon else reward.title
        table.add_row(str(reward.id), name, str(reward.points_cost), status)

    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")
