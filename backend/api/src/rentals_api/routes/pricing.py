"""Price preview endpoint.

Lets the booking form show the total before saving. The same resolver
prices the period when it is created, so the preview always matches.
"""

import datetime as dt
from decimal import Decimal

from fastapi import APIRouter, Depends, Query

from rentals.models import (
    CustomPricing,
    InvalidRangeError,
    OfferPricing,
    PricingSelection,
    RentalUnit,
)
from rentals.services.pricing import PricingResolver
from rentals_api.dependencies import get_pricing_resolver
from rentals_api.models.booking_periods import AMOUNT_DECIMAL_PLACES, AMOUNT_MAX_DIGITS
from rentals_api.models.calendar import PriceQuoteResponse
from rentals_api.security import require_unit_owner

router = APIRouter(tags=["pricing"])


@router.get(
    "/units/{unit_id}/price-quote",
    summary="Preview booking price",
    description="""
Calculate the total for a stay without saving anything.

**Requires authentication.**

Pass either `offer_id` (nightly rate x nights) or `custom_total_eur`.

**Notes:**
- `end` is the check-out day
- `total_eur` keeps full precision; `display_total_eur` is rounded to cents
""",
    response_description="Price breakdown",
    response_model=PriceQuoteResponse,
    responses={
        200: {
            "description": "Quote calculated",
            "content": {
                "application/json": {
                    "example": {
                        "unit_id": "apt-sunny-beach-12",
                        "start": "2025-07-10",
                        "end": "2025-07-17",
                        "nights": 7,
                        "offer_id": "weekly",
                        "nightly_rate_eur": "67",
                        "total_eur": "469",
                        "display_total_eur": "469.00",
                        "below_minimum_nights": False,
                    }
                }
            },
        },
        400: {"description": "Invalid range, unknown offer or invalid price"},
        401: {"description": "Authentication required"},
        404: {"description": "Unit not found"},
    },
)
async def get_price_quote(
    unit_id: str,
    start: dt.date = Query(..., description="First night (YYYY-MM-DD)", examples=["2025-07-10"]),
    end: dt.date = Query(..., description="Check-out day (YYYY-MM-DD)", examples=["2025-07-17"]),
    offer_id: str | None = Query(default=None, description="Pricing offer ID"),
    custom_total_eur: Decimal | None = Query(
        default=None,
        description="Custom total",
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
    ),
    unit: RentalUnit = Depends(require_unit_owner),
    resolver: PricingResolver = Depends(get_pricing_resolver),
) -> PriceQuoteResponse:
    """Quote a stay."""
    if start >= end:
        raise InvalidRangeError(details={"start": start.isoformat(), "end": end.isoformat()})

    selection: PricingSelection | None = None
    if offer_id:
        selection = OfferPricing(offer_id=offer_id)
    elif custom_total_eur is not None:
        selection = CustomPricing(custom_total_eur=custom_total_eur)

    quote = resolver.quote(unit.pricing_offers, start, end, selection)
    return PriceQuoteResponse(
        **quote.model_dump(),
        unit_id=unit_id,
        below_minimum_nights=(
            unit.minimum_nights is not None and quote.nights < unit.minimum_nights
        ),
    )
