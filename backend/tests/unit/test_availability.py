"""Unit tests for the availability window validator."""

import datetime as dt
from typing import Callable

import pytest

from rentals.models import OutsideAvailabilityWindowError, RentalUnit
from rentals.services.availability import AvailabilityWindowValidator


@pytest.fixture
def validator() -> AvailabilityWindowValidator:
    return AvailabilityWindowValidator()


class TestValidate:
    def test_start_before_window(
        self, validator: AvailabilityWindowValidator, sample_unit: RentalUnit
    ) -> None:
        with pytest.raises(OutsideAvailabilityWindowError) as exc_info:
            validator.validate(sample_unit, dt.date(2025, 5, 30), dt.date(2025, 6, 5))
        assert exc_info.value.details["bound"] == "start"

    def test_end_after_window(
        self, validator: AvailabilityWindowValidator, sample_unit: RentalUnit
    ) -> None:
        with pytest.raises(OutsideAvailabilityWindowError) as exc_info:
            validator.validate(sample_unit, dt.date(2025, 8, 28), dt.date(2025, 9, 2))
        assert exc_info.value.details["bound"] == "end"

    def test_exact_window_allowed(
        self, validator: AvailabilityWindowValidator, sample_unit: RentalUnit
    ) -> None:
        validator.validate(sample_unit, dt.date(2025, 6, 1), dt.date(2025, 8, 31))

    def test_no_bounds_always_allowed(
        self, validator: AvailabilityWindowValidator, make_unit: Callable[..., RentalUnit]
    ) -> None:
        unit = make_unit(availability_start=None, availability_end=None)
        validator.validate(unit, dt.date(2020, 1, 1), dt.date(2030, 1, 1))

    def test_only_start_bound(
        self, validator: AvailabilityWindowValidator, make_unit: Callable[..., RentalUnit]
    ) -> None:
        unit = make_unit(availability_end=None)
        validator.validate(unit, dt.date(2025, 6, 1), dt.date(2026, 6, 1))
        with pytest.raises(OutsideAvailabilityWindowError):
            validator.validate(unit, dt.date(2025, 5, 31), dt.date(2025, 6, 2))


class TestIsNightWithinWindow:
    def test_first_and_last_nights(
        self, validator: AvailabilityWindowValidator, sample_unit: RentalUnit
    ) -> None:
        assert validator.is_night_within_window(sample_unit, dt.date(2025, 6, 1))
        assert validator.is_night_within_window(sample_unit, dt.date(2025, 8, 30))

    def test_end_day_is_not_a_night(
        self, validator: AvailabilityWindowValidator, sample_unit: RentalUnit
    ) -> None:
        assert not validator.is_night_within_window(sample_unit, dt.date(2025, 8, 31))

    def test_before_window(
        self, validator: AvailabilityWindowValidator, sample_unit: RentalUnit
    ) -> None:
        assert not validator.is_night_within_window(sample_unit, dt.date(2025, 5, 31))
