"""Unit tests for booking error codes and responses."""

import pytest

from rentals.models import (
    ERROR_MESSAGES,
    ERROR_RECOVERY,
    BookingError,
    CalendarConflictError,
    DepositExceedsTotalError,
    ErrorCode,
    ErrorResponse,
    InvalidPriceError,
    InvalidRangeError,
    MissingVisitorNameError,
    OfferNotFoundError,
    OutsideAvailabilityWindowError,
    OverlappingBookingError,
    RecordNotFoundError,
    UnitNotFoundError,
)


def test_every_code_has_message_and_recovery() -> None:
    for code in ErrorCode:
        assert ERROR_MESSAGES[code]
        assert ERROR_RECOVERY[code]


@pytest.mark.parametrize(
    ("error_class", "code"),
    [
        (InvalidRangeError, "ERR_001"),
        (MissingVisitorNameError, "ERR_002"),
        (OutsideAvailabilityWindowError, "ERR_003"),
        (OfferNotFoundError, "ERR_005"),
        (InvalidPriceError, "ERR_006"),
        (RecordNotFoundError, "ERR_007"),
        (DepositExceedsTotalError, "ERR_008"),
        (CalendarConflictError, "ERR_009"),
        (UnitNotFoundError, "ERR_010"),
    ],
)
def test_error_classes_carry_their_code(error_class: type[BookingError], code: str) -> None:
    error = error_class()
    assert error.code.value == code
    assert str(error) == ERROR_MESSAGES[error.code]


def test_overlapping_booking_names_conflict() -> None:
    error = OverlappingBookingError("BP-2025-EXISTING", details={"conflicting_start": "2025-07-10"})
    assert error.code == ErrorCode.OVERLAPPING_BOOKING
    assert error.conflicting_id == "BP-2025-EXISTING"
    assert error.details == {
        "conflicting_id": "BP-2025-EXISTING",
        "conflicting_start": "2025-07-10",
    }


def test_generic_error_with_code() -> None:
    error = BookingError(code=ErrorCode.NOT_UNIT_OWNER, details={"unit_id": "apt-1"})
    response = error.to_response()
    assert isinstance(response, ErrorResponse)
    assert response.success is False
    assert response.error_code == ErrorCode.NOT_UNIT_OWNER
    assert response.details == {"unit_id": "apt-1"}
    assert response.recovery == ERROR_RECOVERY[ErrorCode.NOT_UNIT_OWNER]


def test_response_serializes_code_as_string() -> None:
    body = InvalidPriceError(details={"reason": "missing"}).to_response().model_dump(mode="json")
    assert body["error_code"] == "ERR_006"
    assert body["details"] == {"reason": "missing"}
