"""Standard error codes for booking calendar operations.

Every validation failure has its own code and exception class so the
admin console can render a specific message and keep the form intact.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """Standard error codes."""

    # Booking period error codes (ERR_001-ERR_010)
    INVALID_RANGE = "ERR_001"
    MISSING_VISITOR_NAME = "ERR_002"
    OUTSIDE_AVAILABILITY_WINDOW = "ERR_003"
    OVERLAPPING_BOOKING = "ERR_004"
    OFFER_NOT_FOUND = "ERR_005"
    INVALID_PRICE = "ERR_006"
    RECORD_NOT_FOUND = "ERR_007"
    DEPOSIT_EXCEEDS_TOTAL = "ERR_008"
    CALENDAR_CONFLICT = "ERR_009"
    UNIT_NOT_FOUND = "ERR_010"

    # Authentication error codes
    AUTH_REQUIRED = "ERR_AUTH_001"
    NOT_UNIT_OWNER = "ERR_AUTH_002"


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_RANGE: "The end date must be after the start date",
    ErrorCode.MISSING_VISITOR_NAME: "A booked period needs the visitor's name",
    ErrorCode.OUTSIDE_AVAILABILITY_WINDOW: "The dates are outside the apartment availability period",
    ErrorCode.OVERLAPPING_BOOKING: "This booking overlaps with an existing booking",
    ErrorCode.OFFER_NOT_FOUND: "The selected pricing offer does not exist for this apartment",
    ErrorCode.INVALID_PRICE: "Please enter a valid price",
    ErrorCode.RECORD_NOT_FOUND: "Booking period not found",
    ErrorCode.DEPOSIT_EXCEEDS_TOTAL: "The deposit cannot be larger than the total price",
    ErrorCode.CALENDAR_CONFLICT: "The calendar was changed by someone else while saving",
    ErrorCode.UNIT_NOT_FOUND: "Apartment not found",
    ErrorCode.AUTH_REQUIRED: "Authentication required to perform this action",
    ErrorCode.NOT_UNIT_OWNER: "You can only manage your own apartments",
}

# Recovery suggestions shown next to the message
ERROR_RECOVERY: dict[ErrorCode, str] = {
    ErrorCode.INVALID_RANGE: "Pick an end date at least one night after the start date",
    ErrorCode.MISSING_VISITOR_NAME: "Enter the guest name or mark the period as blocked",
    ErrorCode.OUTSIDE_AVAILABILITY_WINDOW: "Choose dates inside the availability period or extend it",
    ErrorCode.OVERLAPPING_BOOKING: "Move or shorten the period, or edit the conflicting booking",
    ErrorCode.OFFER_NOT_FOUND: "Reload the apartment and pick one of its current offers",
    ErrorCode.INVALID_PRICE: "Select a pricing offer or enter a custom total above zero",
    ErrorCode.RECORD_NOT_FOUND: "Reload the calendar; the period may have been deleted",
    ErrorCode.DEPOSIT_EXCEEDS_TOTAL: "Lower the deposit or correct the total price",
    ErrorCode.CALENDAR_CONFLICT: "Reload the calendar and try again",
    ErrorCode.UNIT_NOT_FOUND: "Check the apartment identifier",
    ErrorCode.AUTH_REQUIRED: "Log in to the admin console",
    ErrorCode.NOT_UNIT_OWNER: "Switch to an account that owns this apartment",
}


class ErrorResponse(BaseModel):
    """Standard error response body for failed operations."""

    model_config = ConfigDict(strict=True)

    success: bool = False
    error_code: ErrorCode
    message: str
    recovery: str
    details: Optional[dict[str, str]] = None

    @classmethod
    def from_code(
        cls,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ) -> "ErrorResponse":
        """Create an ErrorResponse from an error code.

        Args:
            code: The error code
            details: Optional additional context about the error

        Returns:
            An ErrorResponse with the message and recovery hint for the code.
        """
        return cls(
            error_code=code,
            message=ERROR_MESSAGES[code],
            recovery=ERROR_RECOVERY[code],
            details=details,
        )


class BookingError(Exception):
    """Base exception raised by booking calendar operations.

    Can be caught and converted to an ErrorResponse.
    """

    code: ErrorCode = ErrorCode.INVALID_RANGE

    def __init__(
        self,
        code: Optional[ErrorCode] = None,
        details: Optional[dict[str, str]] = None,
    ):
        if code is not None:
            self.code = code
        self.message = ERROR_MESSAGES[self.code]
        self.recovery = ERROR_RECOVERY[self.code]
        self.details = details
        super().__init__(self.message)

    def to_response(self) -> ErrorResponse:
        """Convert this exception to an ErrorResponse."""
        return ErrorResponse.from_code(self.code, self.details)


class InvalidRangeError(BookingError):
    code = ErrorCode.INVALID_RANGE


class MissingVisitorNameError(BookingError):
    code = ErrorCode.MISSING_VISITOR_NAME


class OutsideAvailabilityWindowError(BookingError):
    code = ErrorCode.OUTSIDE_AVAILABILITY_WINDOW


class OverlappingBookingError(BookingError):
    """Raised when a candidate range intersects an existing period."""

    code = ErrorCode.OVERLAPPING_BOOKING

    def __init__(self, conflicting_id: str, details: Optional[dict[str, str]] = None):
        self.conflicting_id = conflicting_id
        super().__init__(details={"conflicting_id": conflicting_id, **(details or {})})


class OfferNotFoundError(BookingError):
    code = ErrorCode.OFFER_NOT_FOUND


class InvalidPriceError(BookingError):
    code = ErrorCode.INVALID_PRICE


class RecordNotFoundError(BookingError):
    code = ErrorCode.RECORD_NOT_FOUND


class DepositExceedsTotalError(BookingError):
    code = ErrorCode.DEPOSIT_EXCEEDS_TOTAL


class CalendarConflictError(BookingError):
    code = ErrorCode.CALENDAR_CONFLICT


class UnitNotFoundError(BookingError):
    code = ErrorCode.UNIT_NOT_FOUND
