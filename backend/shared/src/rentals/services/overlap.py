"""Overlap checking for booking periods.

Booked and blocked periods take part equally: a unit cannot be booked
over a maintenance block.
"""

import datetime as dt
from typing import Iterable

from rentals.models import BookingPeriod, OverlappingBookingError
from rentals.utils.dates import ranges_overlap


class OverlapChecker:
    """Detects conflicts between a candidate range and existing periods."""

    def find_conflicts(
        self,
        periods: Iterable[BookingPeriod],
        start: dt.date,
        end: dt.date,
        exclude_id: str | None = None,
    ) -> list[BookingPeriod]:
        """Return every period intersecting ``[start, end)``, ordered by start.

        Args:
            periods: Existing periods of the unit
            start: Candidate first night
            end: Candidate check-out day
            exclude_id: Period being updated (compared against itself)
        """
        conflicts = [
            p
            for p in periods
            if p.period_id != exclude_id and ranges_overlap(start, end, p.start, p.end)
        ]
        return sorted(conflicts, key=lambda p: (p.start, p.period_id))

    def check(
        self,
        periods: Iterable[BookingPeriod],
        start: dt.date,
        end: dt.date,
        exclude_id: str | None = None,
    ) -> None:
        """Reject a candidate range that overlaps any other period.

        Raises:
            OverlappingBookingError: Naming the earliest conflicting period
        """
        conflicts = self.find_conflicts(periods, start, end, exclude_id=exclude_id)
        if conflicts:
            first = conflicts[0]
            raise OverlappingBookingError(
                conflicting_id=first.period_id,
                details={
                    "conflicting_start": first.start.isoformat(),
                    "conflicting_end": first.end.isoformat(),
                },
            )
