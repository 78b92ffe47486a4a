"""Reward commands: define rewards and spend earned points."""

from typing import Annotated

import typer

from pathly_cli.models import RewardCreate, RewardUpdate
from pathly_cli.services.app_services import open_services
from pathly_cli.utils.typer_helpers import SuggestingGroup
from pathly_cli.utils.ui.console import get_console
from pathly_cli.utils.ui.formatters import (
    format_info,
    format_output,
    format_rewards_table,
    format_success,
)

from .decorators import command_wrapper
from .goals import OutputOption, resolve_output

app = typer.Typer(cls=SuggestingGroup, help="Reward management commands")
console = get_console()


@app.command("list")
@command_wrapper
async def list_rewards(
    redeemed: Annotated[
        bool | None,
        typer.Option("--redeemed/--available", help="Only redeemed or only available rewards"),
    ] = None,
    output: OutputOption = None,
) -> None:
    """List rewards and the points balance."""
    async with open_services() as services:
        if redeemed is None:
            rewards = services.rewards.list_rewards()
        elif redeemed:
            rewards = services.rewards.redeemed_rewards()
        else:
            rewards = services.rewards.available_rewards()

        balance = services.rewards.available_points(services.ledger.total)
        output = resolve_output(output)
        if output == "pretty":
            format_rewards_table(rewards, balance)
            console.print(
                f"\n[bold]Points:[/bold] {balance} available "
                f"[dim]({services.ledger.total} earned, {services.rewards.spent_points()} spent)[/dim]"
            )
        else:
            format_output([reward.to_record() for reward in rewards], output)


@app.command("add")
@command_wrapper
async def add_reward(
    title: Annotated[str, typer.Argument(help="Reward title")],
    cost: Annotated[int, typer.Option("--cost", "-c", help="Points cost")],
    description: Annotated[str, typer.Option("--description")] = "",
    icon: Annotated[str, typer.Option("--icon")] = "",
) -> None:
    """Create a new reward."""
    data = RewardCreate(title=title, points_cost=cost, description=description, icon=icon)
    async with open_services() as services:
        reward = await services.rewards.add_reward(data, services.clock())
        format_success(f"Created reward #{reward.id}: {reward.title} ({reward.points_cost} pts)")


@app.command("edit")
@command_wrapper
async def edit_reward(
    reward_id: Annotated[int, typer.Argument(help="Reward ID")],
    title: Annotated[str | None, typer.Option("--title")] = None,
    cost: Annotated[int | None, typer.Option("--cost", "-c")] = None,
    description: Annotated[str | None, typer.Option("--description")] = None,
    icon: Annotated[str | None, typer.Option("--icon")] = None,
) -> None:
    """Edit a reward."""
    updates = RewardUpdate(title=title, points_cost=cost, description=description, icon=icon)
    async with open_services() as services:
        reward = await services.rewards.edit_reward(reward_id, updates)
        format_success(f"Updated reward #{reward.id}: {reward.title}")


@app.command("remove")
@command_wrapper
async def remove_reward(
    reward_id: Annotated[int, typer.Argument(help="Reward ID")],
) -> None:
    """Delete a reward."""
    async with open_services() as services:
        if await services.rewards.remove_reward(reward_id):
            format_success(f"Deleted reward #{reward_id}")
        else:
            format_info(f"No reward #{reward_id}")


@app.command("redeem")
@command_wrapper
async def redeem_reward(
    reward_id: Annotated[int, typer.Argument(help="Reward ID")],
) -> None:
    """Spend points on a reward."""
    async with open_services() as services:
        reward = await services.redeem_reward(reward_id)
        balance = services.rewards.available_points(services.ledger.total)
        format_success(f"🎁 Enjoy: {reward.title} ({balance} points left)")
