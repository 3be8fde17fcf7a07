"""Availability window validation.

A unit may declare when it can be booked at all. Both bounds are
optional; the end bound is the last allowed check-out day.
"""

import datetime as dt

from rentals.models import OutsideAvailabilityWindowError, RentalUnit


class AvailabilityWindowValidator:
    """Checks candidate ranges against a unit's availability window."""

    def validate(self, unit: RentalUnit, start: dt.date, end: dt.date) -> None:
        """Reject ranges outside the unit's availability window.

        Args:
            unit: Unit with optional availability bounds
            start: First night
            end: Check-out day

        Raises:
            OutsideAvailabilityWindowError: If the range leaves the window
        """
        if unit.availability_start and start < unit.availability_start:
            raise OutsideAvailabilityWindowError(
                details={
                    "bound": "start",
                    "availability_start": unit.availability_start.isoformat(),
                    "start": start.isoformat(),
                }
            )

        if unit.availability_end and end > unit.availability_end:
            raise OutsideAvailabilityWindowError(
                details={
                    "bound": "end",
                    "availability_end": unit.availability_end.isoformat(),
                    "end": end.isoformat(),
                }
            )

    def is_night_within_window(self, unit: RentalUnit, night: dt.date) -> bool:
        """Whether a single night can be part of a stay."""
        if unit.availability_start and night < unit.availability_start:
            return False
        # The night before the last check-out day is the last bookable night
        if unit.availability_end and night >= unit.availability_end:
            return False
        return True
