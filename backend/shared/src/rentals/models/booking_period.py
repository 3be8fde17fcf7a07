"""Booking period models.

A booking period is a half-open date range ``[start, end)`` on a unit's
calendar. ``booked`` periods carry guest, pricing and payment data;
``blocked`` periods (maintenance, owner use) carry none of it.

All amounts are EUR decimals kept at full precision.
"""

import datetime as dt
from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .enums import BookingKind, PaymentStatus, SurveyLanguage


class OfferPricing(BaseModel):
    """Price taken from one of the unit's pricing offers (rate x nights)."""

    model_config = ConfigDict(strict=True)

    mode: Literal["offer"] = "offer"
    offer_id: str = Field(..., min_length=1)


class CustomPricing(BaseModel):
    """Operator-entered absolute total for the whole stay."""

    model_config = ConfigDict(strict=True)

    mode: Literal["custom"] = "custom"
    custom_total_eur: Decimal


PricingSelection = Annotated[
    Union[OfferPricing, CustomPricing],
    Field(discriminator="mode"),
]


class BookingPeriodInput(BaseModel):
    """Full desired state of a period as submitted by an operator.

    Used for both create and update: updates replace every field.
    """

    model_config = ConfigDict(strict=True)

    start: dt.date
    end: dt.date
    kind: BookingKind
    visitor_name: str | None = None
    pricing: PricingSelection | None = None
    deposit_eur: Decimal | None = Field(default=None, ge=0)
    payment_status: PaymentStatus = PaymentStatus.BOOKED
    guest_email: str | None = None
    guest_phone: str | None = None
    notes: str | None = None
    survey_language: SurveyLanguage = SurveyLanguage.MULTILINGUAL


class BookingPeriod(BaseModel):
    """A stored booking or blocking period."""

    model_config = ConfigDict(strict=True)

    period_id: str = Field(..., description="Unique period ID")
    unit_id: str = Field(..., description="Owning rental unit")
    start: dt.date = Field(..., description="First night")
    end: dt.date = Field(..., description="Check-out day (exclusive)")
    kind: BookingKind
    visitor_name: str | None = None
    pricing: PricingSelection | None = None
    total_price_eur: Decimal | None = Field(
        default=None, description="Derived from pricing and the night count"
    )
    deposit_eur: Decimal | None = Field(default=None, ge=0)
    payment_status: PaymentStatus | None = None
    guest_email: str | None = None
    guest_phone: str | None = None
    notes: str | None = None
    survey_language: SurveyLanguage | None = None
    survey_token: str | None = None
    survey_url: str | None = None
    created_at: dt.datetime
    updated_at: dt.datetime

    @property
    def nights(self) -> int:
        """Number of nights in the period."""
        return (self.end - self.start).days

    @property
    def is_booked(self) -> bool:
        return self.kind == BookingKind.BOOKED


class BookingTotals(BaseModel):
    """Revenue summary across a set of periods."""

    model_config = ConfigDict(strict=True)

    total_revenue_eur: Decimal = Field(..., description="Sum of booked totals")
    received_eur: Decimal = Field(..., description="Money already received")
    remaining_eur: Decimal = Field(..., description="Money still outstanding")
    booked_count: int = Field(..., ge=0)
    blocked_count: int = Field(..., ge=0)


class PriceQuote(BaseModel):
    """Price preview for a candidate stay."""

    model_config = ConfigDict(strict=True)

    start: dt.date
    end: dt.date
    nights: int = Field(..., ge=0)
    offer_id: str | None = None
    nightly_rate_eur: Decimal | None = None
    total_eur: Decimal = Field(..., description="Full-precision total")
    display_total_eur: Decimal = Field(..., description="Total rounded to cents")
