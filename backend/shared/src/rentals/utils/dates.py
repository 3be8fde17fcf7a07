"""Calendar date helpers.

Periods are half-open ranges ``[start, end)`` of calendar days: the end
date is the check-out day and is not a night of the stay. Time-of-day is
always stripped before comparing, after converting aware datetimes into
the calendar timezone, so a check-in stored as midnight in one offset
does not shift to the previous day in another.
"""

import datetime as dt
import math
import os
from zoneinfo import ZoneInfo

DEFAULT_CALENDAR_TIMEZONE = "Europe/Sofia"


def calendar_timezone() -> ZoneInfo:
    """Timezone calendar days are interpreted in (CALENDAR_TIMEZONE)."""
    return ZoneInfo(os.getenv("CALENDAR_TIMEZONE", DEFAULT_CALENDAR_TIMEZONE))


def to_calendar_day(
    value: dt.date | dt.datetime | str,
    tz: dt.tzinfo | None = None,
) -> dt.date:
    """Normalize a date-like value to a calendar day.

    Args:
        value: A date, a datetime or an ISO-8601 string
        tz: Timezone for aware datetimes (defaults to the calendar timezone)

    Returns:
        The calendar day in the calendar timezone

    Raises:
        ValueError: If a string is not valid ISO-8601
    """
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return dt.date.fromisoformat(text)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        value = dt.datetime.fromisoformat(text)

    if isinstance(value, dt.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz or calendar_timezone())
        return value.date()

    return value


def today(tz: dt.tzinfo | None = None) -> dt.date:
    """Current calendar day in the calendar timezone."""
    return dt.datetime.now(tz or calendar_timezone()).date()


def nights_between(start: dt.date | dt.datetime, end: dt.date | dt.datetime) -> int:
    """Number of nights between two dates, rounded up.

    Returns 0 only when ``start == end``; callers reject such ranges first.
    """
    delta = end - start
    if isinstance(start, dt.datetime) and isinstance(end, dt.datetime):
        return math.ceil(delta.total_seconds() / 86400)
    return delta.days


def ranges_overlap(
    a_start: dt.date,
    a_end: dt.date,
    b_start: dt.date,
    b_end: dt.date,
) -> bool:
    """Check whether two half-open ranges intersect.

    A range ending on the day another starts does not overlap it.
    """
    return a_start < b_end and b_start < a_end


def date_range(start: dt.date, end: dt.date) -> list[dt.date]:
    """Generate list of nights in range (end exclusive)."""
    return [start + dt.timedelta(days=i) for i in range((end - start).days)]
