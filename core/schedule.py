"""
Next-reminder calculation.

Every reminder lands on a calendar day chosen by the user's cadence, at a
random time between 08:00 and 20:00 so that users on the same cadence are
not all messaged in the same minute.
"""

import math
import random
from datetime import datetime, timedelta

from dateutil.relativedelta import relativedelta

from .enums import Cadence

WINDOW_START_HOUR = 8
WINDOW_END_HOUR = 20  # exclusive

_FIXED_OFFSETS = {
    Cadence.daily: timedelta(days=1),
    Cadence.weekly: timedelta(days=7),
    Cadence.biweekly: timedelta(days=14),
}


def _day_offset(cadence: Cadence, rng) -> timedelta | relativedelta:
    if cadence in _FIXED_OFFSETS:
        return _FIXED_OFFSETS[cadence]
    if cadence == Cadence.twice_weekly:
        # 3 or 4 days averages out to roughly twice a week
        return timedelta(days=rng.choice((3, 4)))
    if cadence == Cadence.monthly:
        # Clamps to the last day of a shorter month (Jan 31 -> Feb 28/29)
        return relativedelta(months=1)
    raise ValueError(f"Unknown cadence: {cadence!r}")


def next_due(
    cadence: Cadence,
    from_: datetime,
    rng: random.Random | None = None,
) -> datetime:
    """
    Calculate when the next reminder should fire.

    The calendar day is deterministic given `from_` and the cadence; the time
    of day is drawn uniformly from [08:00, 20:00) in `from_`'s timezone with
    seconds zeroed.

    Args:
        cadence: The user's reminder cadence
        from_: Instant to count from (usually now, or the last delivery)
        rng: Random source, defaults to the process-wide generator

    Returns:
        An instant strictly after `from_`
    """
    rng = rng or random
    cadence = Cadence(cadence)

    hour = rng.randrange(WINDOW_START_HOUR, WINDOW_END_HOUR)
    minute = rng.randrange(60)

    next_day = from_ + _day_offset(cadence, rng)
    return next_day.replace(hour=hour, minute=minute, second=0, microsecond=0)


def describe_next_due(next_due_at: datetime, now: datetime) -> str:
    """Human-readable description of when the next reminder will arrive."""
    diff_days = math.ceil((next_due_at - now).total_seconds() / 86400)

    if diff_days <= 0:
        return "later today"
    if diff_days == 1:
        return "tomorrow"
    if diff_days < 7:
        return f"in {diff_days} days"
    if diff_days < 14:
        return "next week"
    if diff_days < 30:
        return f"in {math.ceil(diff_days / 7)} weeks"
    return "next month"
