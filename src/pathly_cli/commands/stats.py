"""Statistics, achievements and review commands."""

from enum import Enum
from typing import Annotated

import typer
from rich.table import Table

from pathly_cli.models.achievements import ACHIEVEMENTS
from pathly_cli.services import analytics_service, statistics_service
from pathly_cli.services.app_services import open_services
from pathly_cli.utils.typer_helpers import SuggestingGroup
from pathly_cli.utils.ui.console import get_console
from pathly_cli.utils.ui.formatters import format_output, render_progress_bar

from .decorators import command_wrapper
from .goals import OutputOption, resolve_output

console = get_console()
app = typer.Typer(cls=SuggestingGroup, help="Statistics and achievements")


class ReviewWindow(str, Enum):
    THIS_WEEK = "this-week"
    LAST_WEEK = "last-week"
    THIS_MONTH = "this-month"
    LAST_MONTH = "last-month"


_WINDOWS = {
    ReviewWindow.THIS_WEEK: statistics_service.this_week,
    ReviewWindow.LAST_WEEK: statistics_service.last_week,
    ReviewWindow.THIS_MONTH: statistics_service.this_month,
    ReviewWindow.LAST_MONTH: statistics_service.last_month,
}


@app.command("summary")
@command_wrapper
async def show_summary(output: OutputOption = None) -> None:
    """Show overall statistics."""
    async with open_services() as services:
        stats = services.statistics()

    output = resolve_output(output)
    if output != "pretty":
        format_output(stats.model_dump(mode="json"), output)
        return

    console.print("\n[bold cyan]📊 Your Progress[/bold cyan]\n")
    console.print(
        f"Goals Completed: [bold]{stats.completed_goals}[/bold]/{stats.total_goals} "
        f"({stats.completion_rate:.0f}%)"
    )
    console.print(
        f"Points: [bold]{stats.available_points}[/bold] available "
        f"[dim]({stats.lifetime_points} earned, {stats.spent_points} spent)[/dim]"
    )
    console.print(
        f"Streak: [bold]{statistics_service.format_streak(stats.current_streak)}[/bold] "
        f"[dim](best {stats.longest_streak})[/dim]"
    )
    if stats.last_activity_date:
        console.print(f"Last Activity: {stats.last_activity_date:%Y-%m-%d %H:%M}")
    if stats.perfect_week:
        console.print("[green]✨ Perfect week![/green]")
    console.print(
        f"Achievements: [bold]{len(stats.achievements_unlocked)}[/bold]/{len(ACHIEVEMENTS)}"
    )
    console.print()


@app.command("achievements")
@command_wrapper
async def show_achievements(output: OutputOption = None) -> None:
    """Show achievements and progress towards them."""
    async with open_services() as services:
        stats = services.statistics()

    rows = [
        {
            "id": achievement.id,
            "name": achievement.name,
            "description": achievement.description,
            "unlocked": achievement.id in stats.achievements_unlocked,
            "progress": round(statistics_service.get_achievement_progress(achievement.id, stats), 1),
        }
        for achievement in ACHIEVEMENTS
    ]
    output = resolve_output(output)
    if output != "pretty":
        format_output(rows, output)
        return

    table = Table(show_header=True, header_style="bold magenta", title="Achievements")
    table.add_column("")
    table.add_column("Achievement")
    table.add_column("Progress")
    for achievement, row in zip(ACHIEVEMENTS, rows):
        name = f"[bold]{achievement.name}[/bold]\n[dim]{achievement.description}[/dim]"
        if row["unlocked"]:
            progress = "[green]✓ unlocked[/green]"
        else:
            progress = f"{render_progress_bar(row['progress'], 10)} {row['progress']:.0f}%"
        table.add_row(achievement.icon if row["unlocked"] else "🔒", name, progress)
    console.print(table)


@app.command("review")
@command_wrapper
async def show_review(
    window: Annotated[
        ReviewWindow, typer.Argument(help="Review window")
    ] = ReviewWindow.THIS_WEEK,
    output: OutputOption = None,
) -> None:
    """Review what was achieved in a week or month."""
    async with open_services() as services:
        period = _WINDOWS[window](services.clock())
        review = statistics_service.calculate_review_statistics(services.goals.goals, period)

    output = resolve_output(output)
    if output != "pretty":
        data = review.model_dump(mode="json", exclude={"completed_goals"})
        data["completedGoals"] = [goal.to_record() for goal in review.completed_goals]
        data["period"] = period.model_dump(mode="json")
        format_output(data, output)
        return

    console.print(
        f"\n[bold cyan]🗓  {period.label}[/bold cyan] "
        f"[dim]{period.start_date:%b %d} - {period.end_date:%b %d, %Y}[/dim]\n"
    )
    console.print(
        f"Completed: [bold]{review.goals_completed}[/bold]/{review.total_goals} "
        f"({review.completion_rate:.0f}%)"
    )
    console.print(f"Points Earned: [bold]{review.points_earned}[/bold]")
    for goal in review.completed_goals:
        console.print(f"  [green]✓[/green] {goal.title}")
    console.print(f"\n[italic]{statistics_service.motivational_message(review.completion_rate)}[/italic]\n")


_SPARKS = "▁▂▃▄▅▆▇█"


def _sparkline(counts: list[int]) -> str:
    peak = max(counts, default=0)
    if peak == 0:
        return _SPARKS[0] * len(counts)
    return "".join(_SPARKS[round(count / peak * (len(_SPARKS) - 1))] for count in counts)


@app.command("analytics")
@command_wrapper
async def show_analytics(output: OutputOption = None) -> None:
    """Show completion patterns by category, period and time of day."""
    async with open_services() as services:
        insights = analytics_service.generate_analytics_insights(
            services.goals.goals, services.clock()
        )

    output = resolve_output(output)
    if output != "pretty":
        data = insights.model_dump(mode="json")
        data["summary"] = analytics_service.insights_summary(insights)
        format_output(data, output)
        return

    console.print("\n[bold cyan]📈 Analytics[/bold cyan]\n")
    for line in analytics_service.insights_summary(insights):
        console.print(f"  {line}")

    if insights.category_performance:
        table = Table(show_header=True, header_style="bold magenta", title="By category")
        table.add_column("Category")
        table.add_column("Done", justify="right")
        table.add_column("Rate", justify="right")
        table.add_column("Avg progress", justify="right")
        table.add_column("Points", justify="right")
        for row in insights.category_performance:
            table.add_row(
                row.category.value,
                f"{row.completed_goals}/{row.total_goals}",
                f"{row.completion_rate:.0f}%",
                f"{row.average_progress:.0f}%",
                str(row.total_points),
            )
        console.print(table)

    if insights.period_performance:
        table = Table(show_header=True, header_style="bold magenta", title="By period")
        table.add_column("Period")
        table.add_column("Done", justify="right")
        table.add_column("Rate", justify="right")
        table.add_column("Avg days", justify="right")
        for row in insights.period_performance:
            days = row.average_completion_days
            table.add_row(
                row.period.value,
                f"{row.completed_goals}/{row.total_goals}",
                f"{row.completion_rate:.0f}%",
                "-" if days is None else f"{days:.1f}",
            )
        console.print(table)

    by_time = insights.completions_by_time_of_day
    console.print(
        f"\nMorning {by_time.morning} · Afternoon {by_time.afternoon} · "
        f"Evening {by_time.evening} · Night {by_time.night}"
    )
    if insights.most_productive_hour:
        console.print(f"Most productive hour: [bold]{insights.most_productive_hour}[/bold]")
    trend = insights.completion_trend
    console.print(
        f"Last {len(trend)} days: {_sparkline([point.count for point in trend])} "
        f"[dim]({sum(point.count for point in trend)} completions, "
        f"{sum(point.points for point in trend)} points)[/dim]\n"
    )
