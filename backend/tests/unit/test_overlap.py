"""Unit tests for the overlap checker."""

import datetime as dt

import pytest

from rentals.models import BookingKind, BookingPeriod, OverlappingBookingError
from rentals.services.overlap import OverlapChecker

NOW = dt.datetime(2025, 5, 1, 9, 0, tzinfo=dt.UTC)


def _period(
    period_id: str, start: dt.date, end: dt.date, kind: BookingKind = BookingKind.BOOKED
) -> BookingPeriod:
    return BookingPeriod(
        period_id=period_id,
        unit_id="apt-1",
        start=start,
        end=end,
        kind=kind,
        visitor_name="Guest" if kind == BookingKind.BOOKED else None,
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def checker() -> OverlapChecker:
    return OverlapChecker()


@pytest.fixture
def existing() -> list[BookingPeriod]:
    return [
        _period("BP-A", dt.date(2025, 7, 10), dt.date(2025, 7, 17)),
        _period("BP-B", dt.date(2025, 7, 20), dt.date(2025, 7, 25), BookingKind.BLOCKED),
    ]


class TestCheck:
    def test_overlap_names_conflicting_period(
        self, checker: OverlapChecker, existing: list[BookingPeriod]
    ) -> None:
        with pytest.raises(OverlappingBookingError) as exc_info:
            checker.check(existing, dt.date(2025, 7, 15), dt.date(2025, 7, 20))
        assert exc_info.value.conflicting_id == "BP-A"
        assert exc_info.value.details["conflicting_id"] == "BP-A"

    def test_back_to_back_allowed(
        self, checker: OverlapChecker, existing: list[BookingPeriod]
    ) -> None:
        checker.check(existing, dt.date(2025, 7, 17), dt.date(2025, 7, 20))
        checker.check(existing, dt.date(2025, 7, 5), dt.date(2025, 7, 10))

    def test_blocked_periods_participate(
        self, checker: OverlapChecker, existing: list[BookingPeriod]
    ) -> None:
        with pytest.raises(OverlappingBookingError) as exc_info:
            checker.check(existing, dt.date(2025, 7, 24), dt.date(2025, 7, 26))
        assert exc_info.value.conflicting_id == "BP-B"

    def test_excluded_period_ignored(
        self, checker: OverlapChecker, existing: list[BookingPeriod]
    ) -> None:
        checker.check(existing, dt.date(2025, 7, 11), dt.date(2025, 7, 18), exclude_id="BP-A")

    def test_empty_calendar(self, checker: OverlapChecker) -> None:
        checker.check([], dt.date(2025, 7, 1), dt.date(2025, 8, 1))

    def test_names_earliest_conflict_regardless_of_order(
        self, checker: OverlapChecker, existing: list[BookingPeriod]
    ) -> None:
        with pytest.raises(OverlappingBookingError) as exc_info:
            checker.check(list(reversed(existing)), dt.date(2025, 7, 15), dt.date(2025, 7, 22))
        assert exc_info.value.conflicting_id == "BP-A"
        assert exc_info.value.details["conflicting_start"] == "2025-07-10"

    def test_accepts_one_shot_iterable(
        self, checker: OverlapChecker, existing: list[BookingPeriod]
    ) -> None:
        with pytest.raises(OverlappingBookingError) as exc_info:
            checker.check(iter(existing), dt.date(2025, 7, 21), dt.date(2025, 7, 22))
        assert exc_info.value.conflicting_id == "BP-B"


class TestFindConflicts:
    def test_all_conflicts_ordered_by_start(
        self, checker: OverlapChecker, existing: list[BookingPeriod]
    ) -> None:
        conflicts = checker.find_conflicts(
            list(reversed(existing)), dt.date(2025, 7, 1), dt.date(2025, 8, 1)
        )
        assert [p.period_id for p in conflicts] == ["BP-A", "BP-B"]

    def test_no_conflicts(self, checker: OverlapChecker, existing: list[BookingPeriod]) -> None:
        assert checker.find_conflicts(existing, dt.date(2025, 7, 17), dt.date(2025, 7, 20)) == []
