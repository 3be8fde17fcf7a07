"""Pydantic models for the apartment booking calendar."""

from .booking_period import (
    BookingPeriod,
    BookingPeriodInput,
    BookingTotals,
    CustomPricing,
    OfferPricing,
    PriceQuote,
    PricingSelection,
)
from .calendar import CalendarDay
from .enums import BookingKind, DayStatus, PaymentStatus, SurveyLanguage
from .errors import (
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
from .rental_unit import PricingOffer, RentalUnit

__all__ = [
    # Enums
    "BookingKind",
    "DayStatus",
    "PaymentStatus",
    "SurveyLanguage",
    # Units
    "PricingOffer",
    "RentalUnit",
    # Booking periods
    "BookingPeriod",
    "BookingPeriodInput",
    "BookingTotals",
    "CustomPricing",
    "OfferPricing",
    "PriceQuote",
    "PricingSelection",
    # Calendar
    "CalendarDay",
    # Errors
    "BookingError",
    "CalendarConflictError",
    "DepositExceedsTotalError",
    "ErrorCode",
    "ErrorResponse",
    "ERROR_MESSAGES",
    "ERROR_RECOVERY",
    "InvalidPriceError",
    "InvalidRangeError",
    "MissingVisitorNameError",
    "OfferNotFoundError",
    "OutsideAvailabilityWindowError",
    "OverlappingBookingError",
    "RecordNotFoundError",
    "UnitNotFoundError",
]
