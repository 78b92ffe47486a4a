"""Period boundary arithmetic for goals."""

from __future__ import annotations

import calendar
from datetime import datetime, time, timedelta

from pathly_cli.models.core import TimePeriod

# Period lengths used where a fixed duration is needed (streak tolerance).
# Rollover itself always goes through period_end(), which is calendar-exact.
APPROX_PERIOD_DAYS: dict[TimePeriod, int] = {
    TimePeriod.DAILY: 1,
    TimePeriod.WEEKLY: 7,
    TimePeriod.MONTHLY: 30,
    TimePeriod.YEARLY: 365,
}


def add_months(start: datetime, months: int) -> datetime:
    """Shift ``start`` by whole calendar months.

    The day of month is kept where it exists and clamped to the last day
    otherwise (Jan 31 + 1 month -> Feb 28/29).
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return start.replace(year=year, month=month, day=day)


def period_end(
    start: datetime,
    period: TimePeriod,
    custom_period_days: int | None = None,
) -> datetime:
    """Compute the instant at which the period starting at ``start`` ends.

    Args:
        start: Start of the period
        period: Period kind
        custom_period_days: Period length for ``TimePeriod.CUSTOM``

    Returns:
        End instant. ``ongoing`` periods, and custom periods without a
        length, return ``start`` unchanged (zero-length, never rolls over).
    """
    period = TimePeriod(period)
    if period == TimePeriod.DAILY:
        return datetime.combine(start.date(), time(23, 59, 59, 999000))
    if period == TimePeriod.WEEKLY:
        return start + timedelta(days=7)
    if period == TimePeriod.MONTHLY:
        return add_months(start, 1)
    if period == TimePeriod.YEARLY:
        return add_months(start, 12)
    if period == TimePeriod.CUSTOM:
        if not custom_period_days:
            return start
        return start + timedelta(days=custom_period_days)
    return start


def period_length(
    period: TimePeriod, custom_period_days: int | None = None
) -> timedelta | None:
    """Approximate length of one period, or None when it has no fixed length."""
    period = TimePeriod(period)
    if period == TimePeriod.CUSTOM:
        return timedelta(days=custom_period_days) if custom_period_days else None
    days = APPROX_PERIOD_DAYS.get(period)
    return timedelta(days=days) if days else None


def time_remaining(
    start: datetime | None,
    period: TimePeriod,
    custom_period_days: int | None = None,
    now: datetime | None = None,
) -> str:
    """Human readable time left in the current period."""
    if start is None:
        return ""
    end = period_end(start, period, custom_period_days)
    if end <= start:
        return ""

    now = now or datetime.now()
    remaining = end - now
    if remaining <= timedelta(0):
        return "Period ended"

    days = remaining.days
    hours, rest = divmod(remaining.seconds, 3600)
    minutes = rest // 60
    if days > 0:
        return f"{days}d {hours}h remaining"
    if hours > 0:
        return f"{hours}h {minutes}m remaining"
    return f"{minutes}m remaining"
