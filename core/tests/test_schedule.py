"""Tests for next-reminder calculation."""

import random
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from core.enums import Cadence
from core.schedule import describe_next_due, next_due


FROM = datetime(2024, 3, 10, 15, 30, 12, 345, tzinfo=timezone.utc)


class TestNextDue:
    @pytest.mark.parametrize("cadence", list(Cadence))
    def test_lands_inside_reminder_window(self, cadence):
        rng = random.Random(1)
        for _ in range(200):
            result = next_due(cadence, FROM, rng)

            assert result > FROM
            assert 8 <= result.hour < 20
            assert 0 <= result.minute < 60
            assert result.second == 0
            assert result.microsecond == 0

    @pytest.mark.parametrize("cadence", list(Cadence))
    def test_after_late_evening_start(self, cadence):
        late = datetime(2024, 12, 31, 23, 59, tzinfo=timezone.utc)
        assert next_due(cadence, late, random.Random(3)) > late

    def test_daily_is_next_calendar_day(self):
        rng = random.Random(5)
        for _ in range(50):
            result = next_due(Cadence.daily, FROM, rng)
            assert result.date() == FROM.date() + timedelta(days=1)

    def test_twice_weekly_offset_is_three_or_four_days(self):
        rng = random.Random(11)
        offsets = {
            (next_due(Cadence.twice_weekly, FROM, rng).date() - FROM.date()).days
            for _ in range(200)
        }
        assert offsets == {3, 4}

    def test_weekly_and_biweekly(self):
        rng = random.Random(2)
        weekly = next_due(Cadence.weekly, FROM, rng)
        biweekly = next_due(Cadence.biweekly, FROM, rng)

        assert weekly.date() == FROM.date() + timedelta(days=7)
        assert biweekly.date() == FROM.date() + timedelta(days=14)

    def test_monthly_keeps_day_of_month(self):
        result = next_due(Cadence.monthly, FROM, random.Random(4))
        assert (result.year, result.month, result.day) == (2024, 4, 10)

    def test_monthly_clamps_to_end_of_shorter_month(self):
        jan_31 = datetime(2025, 1, 31, 9, 0, tzinfo=timezone.utc)
        result = next_due(Cadence.monthly, jan_31, random.Random(4))
        assert result.date() == datetime(2025, 2, 28).date()

    def test_monthly_clamps_to_leap_day(self):
        jan_31 = datetime(2024, 1, 31, 9, 0, tzinfo=timezone.utc)
        result = next_due(Cadence.monthly, jan_31, random.Random(4))
        assert result.date() == datetime(2024, 2, 29).date()

    def test_same_seed_gives_same_instant(self):
        first = next_due(Cadence.twice_weekly, FROM, random.Random(99))
        second = next_due(Cadence.twice_weekly, FROM, random.Random(99))
        assert first == second

    def test_window_applies_in_callers_timezone(self):
        amsterdam = ZoneInfo("Europe/Amsterdam")
        start = datetime(2024, 6, 1, 22, 0, tzinfo=amsterdam)

        result = next_due(Cadence.daily, start, random.Random(8))

        assert result.tzinfo is amsterdam
        assert 8 <= result.hour < 20
        assert result.date() == datetime(2024, 6, 2).date()

    def test_accepts_cadence_value_string(self):
        result = next_due("daily", FROM, random.Random(1))
        assert result.date() == FROM.date() + timedelta(days=1)

    def test_rejects_unknown_cadence(self):
        with pytest.raises(ValueError):
            next_due("hourly", FROM)

    def test_defaults_to_module_random(self):
        result = next_due(Cadence.weekly, FROM)
        assert 8 <= result.hour < 20


class TestDescribeNextDue:
    @pytest.mark.parametrize(
        "delta,expected",
        [
            (timedelta(hours=-1), "later today"),
            (timedelta(0), "later today"),
            (timedelta(hours=5), "tomorrow"),
            (timedelta(days=1), "tomorrow"),
            (timedelta(days=3, hours=2), "in 4 days"),
            (timedelta(days=6), "in 6 days"),
            (timedelta(days=7), "next week"),
            (timedelta(days=13), "next week"),
            (timedelta(days=14), "in 2 weeks"),
            (timedelta(days=20), "in 3 weeks"),
            (timedelta(days=29), "in 5 weeks"),
            (timedelta(days=30), "next month"),
            (timedelta(days=45), "next month"),
        ],
    )
    def test_descriptions(self, delta, expected):
        assert describe_next_due(FROM + delta, FROM) == expected
