"""API models for the public calendar and price quotes."""

from pydantic import BaseModel, ConfigDict, Field

from rentals.models import CalendarDay, PriceQuote


class CalendarResponse(BaseModel):
    """Monthly calendar view response.

    Returns every night of a month with its status and summary counts.
    No guest information is included.
    """

    model_config = ConfigDict(
        strict=True,
        json_schema_extra={
            "examples": [
                {
                    "unit_id": "apt-sunny-beach-12",
                    "month": "2025-07",
                    "days": [
                        {"date": "2025-07-01", "status": "available"},
                        {"date": "2025-07-02", "status": "booked"},
                    ],
                    "available_count": 20,
                    "booked_count": 8,
                    "blocked_count": 3,
                    "unavailable_count": 0,
                }
            ]
        },
    )

    unit_id: str
    month: str = Field(
        ...,
        pattern=r"^\d{4}-\d{2}$",
        description="Month in YYYY-MM format",
    )
    days: list[CalendarDay]
    available_count: int = Field(..., ge=0)
    booked_count: int = Field(..., ge=0)
    blocked_count: int = Field(..., ge=0)
    unavailable_count: int = Field(..., ge=0)


class PriceQuoteResponse(PriceQuote):
    """Price preview with the unit's minimum-stay hint."""

    unit_id: str
    below_minimum_nights: bool = False
