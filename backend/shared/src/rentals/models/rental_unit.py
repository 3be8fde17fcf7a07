"""Rental unit (apartment) models.

Units are owned by the apartments admin; the booking calendar only reads
their availability window, pricing offers and minimum stay.
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class PricingOffer(BaseModel):
    """A per-night rate that applies from a minimum number of nights."""

    model_config = ConfigDict(strict=True)

    offer_id: str = Field(..., min_length=1, description="Offer ID, unique within a unit")
    name: str | None = Field(default=None, description="Display name, e.g. 'Weekly'")
    days: int = Field(..., ge=1, description="Minimum nights to qualify for this rate")
    price_per_night_eur: Decimal = Field(..., gt=0, description="Nightly rate in EUR")
    description: str | None = None


class RentalUnit(BaseModel):
    """An apartment whose calendar is managed by the booking period manager."""

    model_config = ConfigDict(strict=True)

    unit_id: str = Field(..., min_length=1, description="Unique unit ID")
    name: str | None = None
    owner_sub: str | None = Field(
        default=None,
        description="Identity of the owning admin; None for legacy units",
    )
    availability_start: dt.date | None = Field(
        default=None, description="First date the unit may be booked"
    )
    availability_end: dt.date | None = Field(
        default=None, description="Last date a stay may end on"
    )
    pricing_offers: list[PricingOffer] = Field(default_factory=list)
    minimum_nights: int | None = Field(default=None, ge=1)
    calendar_version: int = Field(
        default=0,
        ge=0,
        description="Write counter for optimistic concurrency on the calendar",
    )

    def find_offer(self, offer_id: str) -> PricingOffer | None:
        """Look up a pricing offer by ID."""
        for offer in self.pricing_offers:
            if offer.offer_id == offer_id:
                return offer
        return None
