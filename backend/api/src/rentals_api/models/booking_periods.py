"""API models for booking period endpoints.

Request models are lax so ISO strings and JSON numbers coerce into dates
and decimals; they convert into the domain's strict BookingPeriodInput.
Response models carry the stored period plus derived, rounded amounts.
"""

import datetime as dt
from decimal import Decimal
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rentals.models import (
    BookingKind,
    BookingPeriod,
    BookingPeriodInput,
    BookingTotals,
    CustomPricing,
    OfferPricing,
    PaymentStatus,
    PricingSelection,
    RentalUnit,
    SurveyLanguage,
)
from rentals.services.booking_periods import BookingPeriodManager
from rentals.services.pricing import round_eur
from rentals.utils.dates import to_calendar_day

# Amounts must fit a DynamoDB number; up to 99,999,999.9999 EUR
AMOUNT_MAX_DIGITS = 12
AMOUNT_DECIMAL_PLACES = 4


class OfferPricingRequest(BaseModel):
    """Price the stay with one of the unit's offers."""

    model_config = ConfigDict(strict=False)

    mode: Literal["offer"] = "offer"
    offer_id: str = Field(..., min_length=1, examples=["weekly"])


class CustomPricingRequest(BaseModel):
    """Price the stay with an absolute total."""

    model_config = ConfigDict(strict=False)

    mode: Literal["custom"] = "custom"
    custom_total_eur: Decimal = Field(
        ...,
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
        examples=["450.00"],
    )


PricingRequest = Annotated[
    Union[OfferPricingRequest, CustomPricingRequest],
    Field(discriminator="mode"),
]


class BookingPeriodRequest(BaseModel):
    """Full desired state of a booking period.

    Used by both create (POST) and update (PUT). Guest, pricing and
    payment fields are ignored for blocked periods.
    """

    model_config = ConfigDict(
        # Note: strict=False allows string-to-date coercion from JSON
        strict=False,
        json_schema_extra={
            "examples": [
                {
                    "start": "2025-07-10",
                    "end": "2025-07-17",
                    "kind": "booked",
                    "visitor_name": "Maria Ivanova",
                    "pricing": {"mode": "offer", "offer_id": "weekly"},
                    "deposit_eur": "100.00",
                    "payment_status": "deposit_paid",
                    "survey_language": "bulgarian",
                },
                {
                    "start": "2025-09-01",
                    "end": "2025-09-05",
                    "kind": "blocked",
                    "notes": "Bathroom renovation",
                },
            ]
        },
    )

    start: dt.date = Field(..., description="First night (YYYY-MM-DD or ISO datetime)")
    end: dt.date = Field(..., description="Check-out day (YYYY-MM-DD or ISO datetime)")
    kind: BookingKind = BookingKind.BOOKED
    visitor_name: str | None = Field(default=None, max_length=200)
    pricing: PricingRequest | None = None
    deposit_eur: Decimal | None = Field(
        default=None,
        ge=0,
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
    )
    payment_status: PaymentStatus = PaymentStatus.BOOKED
    guest_email: str | None = Field(default=None, max_length=320)
    guest_phone: str | None = Field(default=None, max_length=50)
    notes: str | None = Field(default=None, max_length=2000)
    survey_language: SurveyLanguage = SurveyLanguage.MULTILINGUAL

    @field_validator("start", "end", mode="before")
    @classmethod
    def normalize_day(cls, value: Any) -> Any:
        """Strip time-of-day in the calendar timezone."""
        if isinstance(value, (str, dt.date)):
            return to_calendar_day(value)
        return value

    def to_input(self) -> BookingPeriodInput:
        """Convert to the domain input model."""
        pricing: PricingSelection | None = None
        if isinstance(self.pricing, OfferPricingRequest):
            pricing = OfferPricing(offer_id=self.pricing.offer_id)
        elif isinstance(self.pricing, CustomPricingRequest):
            pricing = CustomPricing(custom_total_eur=self.pricing.custom_total_eur)

        return BookingPeriodInput(
            start=self.start,
            end=self.end,
            kind=self.kind,
            visitor_name=self.visitor_name,
            pricing=pricing,
            deposit_eur=self.deposit_eur,
            payment_status=self.payment_status,
            guest_email=self.guest_email,
            guest_phone=self.guest_phone,
            notes=self.notes,
            survey_language=self.survey_language,
        )


def _rounded(value: Decimal | None) -> Decimal | None:
    return round_eur(value) if value is not None else None


class BookingPeriodResponse(BaseModel):
    """A booking period with derived amounts for the admin console."""

    model_config = ConfigDict(strict=True)

    period_id: str
    unit_id: str
    start: dt.date
    end: dt.date
    nights: int
    kind: BookingKind
    visitor_name: str | None = None
    pricing: PricingSelection | None = None
    total_price_eur: Decimal | None = None
    deposit_eur: Decimal | None = None
    payment_status: PaymentStatus | None = None
    remaining_balance_eur: Decimal
    received_amount_eur: Decimal
    guest_email: str | None = None
    guest_phone: str | None = None
    notes: str | None = None
    survey_language: SurveyLanguage | None = None
    survey_token: str | None = None
    survey_url: str | None = None
    is_active: bool = Field(..., description="Today falls within start..end")
    below_minimum_nights: bool = Field(
        ..., description="Stay is shorter than the unit's minimum nights"
    )
    created_at: dt.datetime
    updated_at: dt.datetime

    @classmethod
    def from_period(
        cls,
        period: BookingPeriod,
        unit: RentalUnit,
        manager: BookingPeriodManager,
        today: dt.date,
    ) -> "BookingPeriodResponse":
        """Build a response from a stored period."""
        return cls(
            period_id=period.period_id,
            unit_id=period.unit_id,
            start=period.start,
            end=period.end,
            nights=period.nights,
            kind=period.kind,
            visitor_name=period.visitor_name,
            pricing=period.pricing,
            total_price_eur=_rounded(period.total_price_eur),
            deposit_eur=_rounded(period.deposit_eur),
            payment_status=period.payment_status,
            remaining_balance_eur=round_eur(manager.remaining_balance(period)),
            received_amount_eur=round_eur(manager.received_amount(period)),
            guest_email=period.guest_email,
            guest_phone=period.guest_phone,
            notes=period.notes,
            survey_language=period.survey_language,
            survey_token=period.survey_token,
            survey_url=period.survey_url,
            is_active=period.start <= today <= period.end,
            below_minimum_nights=(
                period.is_booked
                and unit.minimum_nights is not None
                and period.nights < unit.minimum_nights
            ),
            created_at=period.created_at,
            updated_at=period.updated_at,
        )


class BookingPeriodListResponse(BaseModel):
    """Periods of a unit in the requested order."""

    model_config = ConfigDict(strict=True)

    unit_id: str
    periods: list[BookingPeriodResponse]
    count: int = Field(..., ge=0)


class BookingSummaryResponse(BaseModel):
    """Revenue totals for a unit (admin table footer)."""

    model_config = ConfigDict(strict=True)

    unit_id: str
    total_revenue_eur: Decimal
    received_eur: Decimal
    remaining_eur: Decimal
    booked_count: int = Field(..., ge=0)
    blocked_count: int = Field(..., ge=0)

    @classmethod
    def from_totals(cls, unit_id: str, totals: BookingTotals) -> "BookingSummaryResponse":
        return cls(
            unit_id=unit_id,
            total_revenue_eur=round_eur(totals.total_revenue_eur),
            received_eur=round_eur(totals.received_eur),
            remaining_eur=round_eur(totals.remaining_eur),
            booked_count=totals.booked_count,
            blocked_count=totals.blocked_count,
        )


class SurveyLinksResponse(BaseModel):
    """Periods that received a survey link in a backfill."""

    model_config = ConfigDict(strict=True)

    unit_id: str
    assigned: list[BookingPeriodResponse]
    count: int = Field(..., ge=0)
