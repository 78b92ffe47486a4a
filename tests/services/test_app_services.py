"""Tests for the service wiring shared by every command."""

from __future__ import annotations

from datetime import timedelta

import pytest

from pathly_cli.models import GoalCreate, RewardCreate
from pathly_cli.models.exceptions import InsufficientPointsError
from pathly_cli.services.app_services import AppServices, open_services
from pathly_cli.services.config_service import ConfigService


@pytest.mark.asyncio
async def test_services_share_one_ledger(store, clock):
    services = await AppServices(store, clock=clock).load()

    goal = await services.goals.add_goal(GoalCreate(title="Run", target=1, points=40))
    await services.goals.finish_goal(goal.id)

    assert services.ledger.total == 40
    assert services.goals.ledger is services.ledger
    assert services.data.ledger is services.ledger


@pytest.mark.asyncio
async def test_redeem_uses_ledger_balance(store, clock, now):
    services = await AppServices(store, clock=clock).load()
    reward = await services.rewards.add_reward(RewardCreate(title="Tea", points_cost=30), now)

    with pytest.raises(InsufficientPointsError):
        await services.redeem_reward(reward.id)

    await services.ledger.award(30)
    redeemed = await services.redeem_reward(reward.id)

    assert redeemed.redeemed_at == now
    assert services.statistics().available_points == 0


@pytest.mark.asyncio
async def test_load_restores_everything(store, clock, now):
    first = await AppServices(store, clock=clock).load()
    goal = await first.goals.add_goal(
        GoalCreate(title="Daily", target=1, points=5, period="daily", is_recurring=True)
    )
    await first.goals.finish_goal(goal.id)

    clock.now = now + timedelta(days=1)
    second = await AppServices(store, clock=clock).load()

    assert second.ledger.total == 5
    restored = second.goals.get_goal(goal.id)
    assert len(restored.completion_history) == 1
    assert not restored.is_complete
    assert second.statistics().total_points == 5


@pytest.mark.asyncio
async def test_open_services_uses_configured_vault(tmp_path):
    config = ConfigService(config_dir=tmp_path, data_dir=tmp_path / "data")

    async with open_services(config) as services:
        await services.goals.add_goal(GoalCreate(title="Persisted", target=1))

    assert (tmp_path / "data" / "vault.db").exists()
    async with open_services(config) as services:
        assert [g.title for g in services.goals.list_goals()] == ["Persisted"]
