"""Reminder scheduling for the command-line front end.

A terminal session cannot deliver push notifications, so the scheduler
records reminders in the application log and hands back handles the goal
keeps for later cancellation. Desktop front ends plug in their own
``NotificationScheduler``.
"""

from __future__ import annotations

import logging
import uuid

from pathly_cli.repositories import NotificationScheduler

logger = logging.getLogger(__name__)

_DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


class LoggingNotificationScheduler(NotificationScheduler):
    """Scheduler that logs reminders instead of delivering them."""

    def __init__(self):
        self.scheduled: dict[str, tuple[int, str, str, int | None]] = {}

    async def schedule(
        self,
        goal_id: int,
        title: str,
        time_of_day: str,
        days: list[int],
    ) -> list[str]:
        handles: list[str] = []
        for day in days or [None]:
            handle = str(uuid.uuid4())
            self.scheduled[handle] = (goal_id, title, time_of_day, day)
            handles.append(handle)
            logger.info(
                "scheduled reminder %s for goal %s at %s (%s)",
                handle,
                goal_id,
                time_of_day,
                _DAY_NAMES[day] if day is not None else "daily",
            )
        return handles

    async def cancel(self, handles: list[str]) -> None:
        for handle in handles:
            if self.scheduled.pop(handle, None) is not None:
                logger.info("cancelled reminder %s", handle)
