"""API routes package.

Routers are organized by domain:

- health: Health check endpoint
- calendar: Public monthly calendar
- pricing: Price preview for the booking form
- booking_periods: Booking period management (admin)

All routers are registered in main.py with /api prefix.
"""

from rentals_api.routes.booking_periods import router as booking_periods_router
from rentals_api.routes.calendar import router as calendar_router
from rentals_api.routes.health import router as health_router
from rentals_api.routes.pricing import router as pricing_router

__all__ = [
    "booking_periods_router",
    "calendar_router",
    "health_router",
    "pricing_router",
]
