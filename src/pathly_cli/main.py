"""Main entry point for Pathly CLI."""

import logging

import typer

from pathly_cli import __version__
from pathly_cli.commands import config, data, goals, rewards, stats
from pathly_cli.commands.decorators import command_wrapper
from pathly_cli.services.app_services import open_services
from pathly_cli.services.config_service import get_config_service
from pathly_cli.utils.logger import get_logger
from pathly_cli.utils.typer_helpers import SuggestingGroup
from pathly_cli.utils.ui.console import get_console
from pathly_cli.utils.ui.formatters import format_goals_table

# Create main app with custom group class
app = typer.Typer(
    name="pathly",
    cls=SuggestingGroup,
    help="Track measurable goals, keep streaks and earn rewards",
    no_args_is_help=True,
)

console = get_console()


# Add subcommands
app.add_typer(goals.app, name="goals", help="Goal management commands")
app.add_typer(rewards.app, name="rewards", help="Rewards and points")
app.add_typer(stats.app, name="stats", help="Statistics, achievements, reviews and analytics")
app.add_typer(data.app, name="data", help="Data management (import, export)")
app.add_typer(config.app, name="config", help="Configuration management")


@app.callback()
def setup(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug messages"),
) -> None:
    """Configure logging before any command runs."""
    level = "DEBUG" if verbose else get_config_service().config.logging.level
    get_logger().setLevel(getattr(logging, level, logging.INFO))


# Add top-level commands
@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Pathly CLI[/bold] version [cyan]{__version__}[/cyan]")


@app.command()
@command_wrapper
async def today() -> None:
    """Show active goals that can be worked on now."""
    async with open_services() as services:
        blocked = services.goals.blocked_goal_ids()
        actionable = [
            goal
            for goal in services.goals.list_goals()
            if not goal.is_complete and not goal.is_paused and goal.id not in blocked
        ]
        format_goals_table(actionable, blocked, title="Up next")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
