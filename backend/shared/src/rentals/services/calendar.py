"""Public availability calendar.

Turns a unit's periods into one status per night. Guests only ever see
whether a night is free, so booked and blocked periods are reported by
kind alone.
"""

import calendar
import datetime as dt
from collections import Counter
from typing import Iterable

from rentals.models import BookingKind, BookingPeriod, CalendarDay, DayStatus, RentalUnit
from rentals.utils.dates import date_range

from .availability import AvailabilityWindowValidator


def month_bounds(year: int, month: int) -> tuple[dt.date, dt.date]:
    """First day of a month and first day of the next one."""
    days = calendar.monthrange(year, month)[1]
    first = dt.date(year, month, 1)
    return first, first + dt.timedelta(days=days)


def build_calendar(
    unit: RentalUnit,
    periods: Iterable[BookingPeriod],
    start: dt.date,
    end: dt.date,
    availability: AvailabilityWindowValidator | None = None,
) -> list[CalendarDay]:
    """Build per-night statuses for ``[start, end)``.

    A night covered by a period takes that period's kind even outside
    the availability window.

    Args:
        unit: The unit being displayed
        periods: The unit's periods
        start: First night shown
        end: Day after the last night shown
        availability: Validator used for the window check

    Returns:
        One CalendarDay per night, in date order
    """
    availability = availability or AvailabilityWindowValidator()

    taken: dict[dt.date, DayStatus] = {}
    for period in periods:
        if period.end <= start or period.start >= end:
            continue
        status = (
            DayStatus.BOOKED if period.kind == BookingKind.BOOKED else DayStatus.BLOCKED
        )
        for night in date_range(max(period.start, start), min(period.end, end)):
            taken[night] = status

    days = []
    for night in date_range(start, end):
        if night in taken:
            status = taken[night]
        elif not availability.is_night_within_window(unit, night):
            status = DayStatus.UNAVAILABLE
        else:
            status = DayStatus.AVAILABLE
        days.append(CalendarDay(date=night, status=status))
    return days


def count_statuses(days: Iterable[CalendarDay]) -> dict[DayStatus, int]:
    """Number of nights per status, including zero counts."""
    counts = Counter(day.status for day in days)
    return {status: counts.get(status, 0) for status in DayStatus}
