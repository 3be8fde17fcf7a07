"""Booking period endpoints for the admin console.

Provides REST endpoints for:
- Listing a unit's booked and blocked periods (filter, sort)
- Creating, reading, replacing and deleting periods
- Revenue totals for the bookings table footer
- Backfilling guest survey links

All endpoints require the x-user-sub header set by API Gateway and, for
units with an owner, that the caller owns the unit. Amounts are EUR
decimals serialized as strings rounded to cents.
"""

from typing import Literal

from fastapi import APIRouter, Depends, Query
from starlette.status import HTTP_200_OK, HTTP_201_CREATED

from rentals.models import BookingKind, RentalUnit
from rentals.services.booking_periods import BookingPeriodManager
from rentals.utils.dates import today
from rentals_api.dependencies import get_booking_period_manager
from rentals_api.models.booking_periods import (
    BookingPeriodListResponse,
    BookingPeriodRequest,
    BookingPeriodResponse,
    BookingSummaryResponse,
    SurveyLinksResponse,
)
from rentals_api.models.common import SuccessMessage
from rentals_api.security import require_unit_owner

router = APIRouter(tags=["booking-periods"])

SortField = Literal[
    "start",
    "end",
    "visitor_name",
    "total_price",
    "deposit",
    "remaining_amount",
    "status",
]


@router.get(
    "/units/{unit_id}/booking-periods",
    summary="List booking periods",
    description="""
List the booked and blocked periods of a unit.

**Requires authentication.**

**Notes:**
- `kind` filters to booked or blocked periods
- `sort_by` accepts start, end, visitor_name, total_price, deposit,
  remaining_amount or status (payment progress)
- Periods without a value for the sort field are listed last
""",
    response_description="Periods in the requested order",
    response_model=BookingPeriodListResponse,
    responses={
        401: {"description": "Authentication required"},
        403: {"description": "Caller does not own the unit"},
        404: {"description": "Unit not found"},
    },
)
async def list_booking_periods(
    unit_id: str,
    kind: BookingKind | None = Query(default=None, description="Filter by kind"),
    sort_by: SortField = Query(default="start", description="Sort field"),
    descending: bool = Query(default=False, description="Reverse the order"),
    unit: RentalUnit = Depends(require_unit_owner),
    manager: BookingPeriodManager = Depends(get_booking_period_manager),
) -> BookingPeriodListResponse:
    """List a unit's periods."""
    periods = manager.list_periods(unit_id, kind=kind, sort_by=sort_by, descending=descending)
    current_day = today()
    return BookingPeriodListResponse(
        unit_id=unit_id,
        periods=[
            BookingPeriodResponse.from_period(p, unit, manager, current_day)
            for p in periods
        ],
        count=len(periods),
    )


@router.post(
    "/units/{unit_id}/booking-periods",
    summary="Create booking period",
    description="""
Create a booked or blocked period.

**Requires authentication.**

Booked periods need a visitor name and a pricing selection (an offer of
the unit or a custom total). The total is computed server-side and a
guest survey link is attached.

**Notes:**
- `end` is the check-out day and is not a night of the stay
- Dates must lie inside the unit's availability period
- Periods of any kind may not overlap
- The deposit may not exceed the total
""",
    response_description="Created period",
    response_model=BookingPeriodResponse,
    status_code=HTTP_201_CREATED,
    responses={
        201: {"description": "Period created"},
        400: {"description": "Invalid dates, name, price or deposit"},
        401: {"description": "Authentication required"},
        403: {"description": "Caller does not own the unit"},
        404: {"description": "Unit not found"},
        409: {"description": "Overlapping period or concurrent change"},
    },
)
async def create_booking_period(
    unit_id: str,
    body: BookingPeriodRequest,
    unit: RentalUnit = Depends(require_unit_owner),
    manager: BookingPeriodManager = Depends(get_booking_period_manager),
) -> BookingPeriodResponse:
    """Create a booking period."""
    period = manager.create(unit_id, body.to_input())
    return BookingPeriodResponse.from_period(period, unit, manager, today())


@router.get(
    "/units/{unit_id}/booking-periods/summary",
    summary="Get revenue summary",
    description="""
Totals across the unit's booked periods: revenue, money received and
money still outstanding, plus counts of booked and blocked periods.

**Requires authentication.**
""",
    response_description="Revenue totals",
    response_model=BookingSummaryResponse,
    responses={
        401: {"description": "Authentication required"},
        403: {"description": "Caller does not own the unit"},
        404: {"description": "Unit not found"},
    },
)
async def get_booking_summary(
    unit_id: str,
    unit: RentalUnit = Depends(require_unit_owner),
    manager: BookingPeriodManager = Depends(get_booking_period_manager),
) -> BookingSummaryResponse:
    """Summarize a unit's periods."""
    totals = manager.summarize(manager.list_periods(unit_id))
    return BookingSummaryResponse.from_totals(unit_id, totals)


@router.post(
    "/units/{unit_id}/booking-periods/survey-links",
    summary="Backfill survey links",
    description="""
Attach a guest survey link to every booked period that has none.

**Requires authentication.**

Existing links are never replaced. Returns the periods that received a
link.
""",
    response_description="Periods that received a survey link",
    response_model=SurveyLinksResponse,
    status_code=HTTP_200_OK,
    responses={
        401: {"description": "Authentication required"},
        403: {"description": "Caller does not own the unit"},
        404: {"description": "Unit not found"},
    },
)
async def backfill_survey_links(
    unit_id: str,
    unit: RentalUnit = Depends(require_unit_owner),
    manager: BookingPeriodManager = Depends(get_booking_period_manager),
) -> SurveyLinksResponse:
    """Backfill missing survey links."""
    assigned = manager.ensure_survey_links(unit_id)
    current_day = today()
    return SurveyLinksResponse(
        unit_id=unit_id,
        assigned=[
            BookingPeriodResponse.from_period(p, unit, manager, current_day)
            for p in assigned
        ],
        count=len(assigned),
    )


@router.get(
    "/units/{unit_id}/booking-periods/{period_id}",
    summary="Get booking period",
    response_description="Period details",
    response_model=BookingPeriodResponse,
    responses={
        401: {"description": "Authentication required"},
        403: {"description": "Caller does not own the unit"},
        404: {"description": "Unit or period not found"},
    },
)
async def get_booking_period(
    unit_id: str,
    period_id: str,
    unit: RentalUnit = Depends(require_unit_owner),
    manager: BookingPeriodManager = Depends(get_booking_period_manager),
) -> BookingPeriodResponse:
    """Get a single period."""
    period = manager.get(unit_id, period_id)
    return BookingPeriodResponse.from_period(period, unit, manager, today())


@router.put(
    "/units/{unit_id}/booking-periods/{period_id}",
    summary="Replace booking period",
    description="""
Replace every editable field of a period.

**Requires authentication.**

The same rules as creation apply; the period is not compared against
itself for overlaps. The survey link and creation time are kept.
""",
    response_description="Updated period",
    response_model=BookingPeriodResponse,
    responses={
        400: {"description": "Invalid dates, name, price or deposit"},
        401: {"description": "Authentication required"},
        403: {"description": "Caller does not own the unit"},
        404: {"description": "Unit or period not found"},
        409: {"description": "Overlapping period or concurrent change"},
    },
)
async def update_booking_period(
    unit_id: str,
    period_id: str,
    body: BookingPeriodRequest,
    unit: RentalUnit = Depends(require_unit_owner),
    manager: BookingPeriodManager = Depends(get_booking_period_manager),
) -> BookingPeriodResponse:
    """Replace a period."""
    period = manager.update(unit_id, period_id, body.to_input())
    return BookingPeriodResponse.from_period(period, unit, manager, today())


@router.delete(
    "/units/{unit_id}/booking-periods/{period_id}",
    summary="Delete booking period",
    description="""
Permanently delete a period, freeing its nights.

**Requires authentication.**
""",
    response_description="Deletion confirmation",
    response_model=SuccessMessage,
    responses={
        401: {"description": "Authentication required"},
        403: {"description": "Caller does not own the unit"},
        404: {"description": "Unit or period not found"},
    },
)
async def delete_booking_period(
    unit_id: str,
    period_id: str,
    unit: RentalUnit = Depends(require_unit_owner),
    manager: BookingPeriodManager = Depends(get_booking_period_manager),
) -> SuccessMessage:
    """Delete a period."""
    manager.delete(unit_id, period_id)
    return SuccessMessage(message=f"Booking period {period_id} deleted")
