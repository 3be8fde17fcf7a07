"""Enumeration types for booking calendar data models."""

from enum import Enum


class BookingKind(str, Enum):
    """Kind of calendar period."""

    BOOKED = "booked"
    BLOCKED = "blocked"


class PaymentStatus(str, Enum):
    """Payment progress of a booked period.

    Ordered: booked < deposit_paid < fully_paid.
    """

    BOOKED = "booked"
    DEPOSIT_PAID = "deposit_paid"
    FULLY_PAID = "fully_paid"

    @property
    def rank(self) -> int:
        """Position in the payment progression (used for sorting)."""
        return _PAYMENT_STATUS_ORDER[self]


_PAYMENT_STATUS_ORDER = {
    PaymentStatus.BOOKED: 1,
    PaymentStatus.DEPOSIT_PAID: 2,
    PaymentStatus.FULLY_PAID: 3,
}


class SurveyLanguage(str, Enum):
    """Language the guest survey is sent in."""

    MULTILINGUAL = "multilingual"
    BULGARIAN = "bulgarian"
    ENGLISH = "english"


class DayStatus(str, Enum):
    """Status of a single night on the public calendar."""

    AVAILABLE = "available"
    BOOKED = "booked"
    BLOCKED = "blocked"
    UNAVAILABLE = "unavailable"
