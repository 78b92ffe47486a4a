"""Tests for the logging reminder scheduler."""

from __future__ import annotations

import logging

import pytest

from pathly_cli.adapters import LoggingNotificationScheduler


@pytest.mark.asyncio
async def test_one_handle_per_weekday(caplog):
    scheduler = LoggingNotificationScheduler()

    with caplog.at_level(logging.INFO):
        handles = await scheduler.schedule(7, "Stretch", "07:00", [0, 6])

    assert len(handles) == 2
    assert {entry[3] for entry in scheduler.scheduled.values()} == {0, 6}
    assert "(Mon)" in caplog.text
    assert "(Sun)" in caplog.text


@pytest.mark.asyncio
async def test_no_days_means_daily():
    scheduler = LoggingNotificationScheduler()
    handles = await scheduler.schedule(7, "Stretch", "07:00", [])
    assert scheduler.scheduled[handles[0]] == (7, "Stretch", "07:00", None)


@pytest.mark.asyncio
async def test_cancel_ignores_unknown_handles():
    scheduler = LoggingNotificationScheduler()
    handles = await scheduler.schedule(1, "x", "09:00", [2])

    await scheduler.cancel([*handles, "not-a-handle"])

    assert scheduler.scheduled == {}
