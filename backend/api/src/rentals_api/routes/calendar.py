"""Public calendar endpoint.

Shows guests which nights of a unit are free for a month. Booked and
blocked nights are reported by status only; no guest data is exposed.
"""

import re

from fastapi import APIRouter, Depends, HTTPException
from starlette.status import HTTP_400_BAD_REQUEST

from rentals.models import DayStatus
from rentals.services.booking_periods import BookingPeriodManager
from rentals.services.calendar import build_calendar, count_statuses, month_bounds
from rentals_api.dependencies import get_booking_period_manager
from rentals_api.models.calendar import CalendarResponse

router = APIRouter(tags=["calendar"])


@router.get(
    "/units/{unit_id}/calendar/{month}",
    summary="Get monthly calendar",
    description="""
Get the availability calendar of a unit for one month.

**Public endpoint** - no authentication required.

**Notes:**
- Month format: YYYY-MM (e.g., 2025-07)
- One entry per night, in chronological order
- `unavailable` marks nights outside the unit's availability period
""",
    response_description="Calendar with nightly status",
    response_model=CalendarResponse,
    responses={
        400: {"description": "Invalid month format (expected YYYY-MM)"},
        404: {"description": "Unit not found"},
    },
)
async def get_calendar(
    unit_id: str,
    month: str,
    manager: BookingPeriodManager = Depends(get_booking_period_manager),
) -> CalendarResponse:
    """Get monthly calendar view."""
    if not re.match(r"^\d{4}-\d{2}$", month):
        raise HTTPException(
            status_code=HTTP_400_BAD_REQUEST,
            detail="Invalid month format. Expected YYYY-MM (e.g., 2025-07)",
        )

    year, month_num = map(int, month.split("-"))
    if month_num < 1 or month_num > 12:
        raise HTTPException(
            status_code=HTTP_400_BAD_REQUEST,
            detail="Invalid month: must be between 01 and 12",
        )

    unit = manager.get_unit(unit_id)
    start, end = month_bounds(year, month_num)
    days = build_calendar(
        unit,
        manager.periods.list_for_unit(unit_id),
        start,
        end,
        availability=manager.availability,
    )
    counts = count_statuses(days)

    return CalendarResponse(
        unit_id=unit_id,
        month=month,
        days=days,
        available_count=counts[DayStatus.AVAILABLE],
        booked_count=counts[DayStatus.BOOKED],
        blocked_count=counts[DayStatus.BLOCKED],
        unavailable_count=counts[DayStatus.UNAVAILABLE],
    )
