"""Unit tests for period boundary arithmetic."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from pathly_cli.models import TimePeriod
from pathly_cli.utils.periods import add_months, period_end, period_length, time_remaining

START = datetime(2024, 6, 12, 10, 30)


class TestPeriodEnd:
    def test_daily_ends_at_end_of_same_day(self):
        assert period_end(START, TimePeriod.DAILY) == datetime(2024, 6, 12, 23, 59, 59, 999000)

    def test_weekly_is_seven_days(self):
        assert period_end(START, TimePeriod.WEEKLY) == START + timedelta(days=7)

    def test_monthly_uses_calendar_months(self):
        assert period_end(START, TimePeriod.MONTHLY) == datetime(2024, 7, 12, 10, 30)

    def test_monthly_clamps_to_month_end(self):
        assert period_end(datetime(2024, 1, 31), TimePeriod.MONTHLY) == datetime(2024, 2, 29)
        assert period_end(datetime(2023, 1, 31), TimePeriod.MONTHLY) == datetime(2023, 2, 28)

    def test_monthly_crosses_year(self):
        assert period_end(datetime(2024, 12, 15), TimePeriod.MONTHLY) == datetime(2025, 1, 15)

    def test_yearly_same_date_next_year(self):
        assert period_end(START, TimePeriod.YEARLY) == datetime(2025, 6, 12, 10, 30)

    def test_yearly_from_leap_day(self):
        assert period_end(datetime(2024, 2, 29), TimePeriod.YEARLY) == datetime(2025, 2, 28)

    def test_custom_adds_days(self):
        assert period_end(START, TimePeriod.CUSTOM, 3) == START + timedelta(days=3)

    def test_custom_without_days_is_zero_length(self):
        assert period_end(START, TimePeriod.CUSTOM) == START

    def test_ongoing_never_ends(self):
        assert period_end(START, TimePeriod.ONGOING) == START

    def test_accepts_string_period(self):
        assert period_end(START, "weekly") == START + timedelta(days=7)


def test_add_months_keeps_time_of_day():
    assert add_months(datetime(2024, 3, 31, 8, 15), 1) == datetime(2024, 4, 30, 8, 15)


@pytest.mark.parametrize(
    ("period", "days", "expected"),
    [
        (TimePeriod.DAILY, None, timedelta(days=1)),
        (TimePeriod.WEEKLY, None, timedelta(days=7)),
        (TimePeriod.MONTHLY, None, timedelta(days=30)),
        (TimePeriod.YEARLY, None, timedelta(days=365)),
        (TimePeriod.CUSTOM, 10, timedelta(days=10)),
        (TimePeriod.CUSTOM, None, None),
        (TimePeriod.ONGOING, None, None),
    ],
)
def test_period_length(period, days, expected):
    assert period_length(period, days) == expected


class TestTimeRemaining:
    def test_days_and_hours(self):
        now = START + timedelta(days=2)
        assert time_remaining(START, TimePeriod.WEEKLY, now=now) == "5d 0h remaining"

    def test_hours_and_minutes(self):
        now = datetime(2024, 6, 12, 21, 0)
        assert time_remaining(START, TimePeriod.DAILY, now=now) == "2h 59m remaining"

    def test_minutes_only(self):
        now = datetime(2024, 6, 12, 23, 30)
        assert time_remaining(START, TimePeriod.DAILY, now=now) == "29m remaining"

    def test_period_ended(self):
        now = START + timedelta(days=8)
        assert time_remaining(START, TimePeriod.WEEKLY, now=now) == "Period ended"

    def test_unbounded_period_is_empty(self):
        assert time_remaining(START, TimePeriod.ONGOING, now=START) == ""

    def test_missing_start_is_empty(self):
        assert time_remaining(None, TimePeriod.WEEKLY, now=START) == ""
