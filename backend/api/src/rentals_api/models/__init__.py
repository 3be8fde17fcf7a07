"""API-specific request/response models.

Domain models (BookingPeriod, RentalUnit, etc.) are in rentals.models
and are reused here where appropriate.

Modules:
- common: Success and error response wrappers
- booking_periods: Booking period requests, responses and summaries
- calendar: Public calendar and price quote responses
"""

__all__: list[str] = []
