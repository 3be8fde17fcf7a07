"""Booking period manager.

Creates, updates and deletes booked and blocked periods on a unit's
calendar. Every write validates against a fresh read of the unit and its
periods, then commits conditioned on the calendar version that read
returned. A stale version re-runs the whole pipeline.
"""

import datetime as dt
from decimal import Decimal
from typing import Any, Callable

from rentals.models import (
    BookingError,
    BookingKind,
    BookingPeriod,
    BookingPeriodInput,
    BookingTotals,
    CalendarConflictError,
    DepositExceedsTotalError,
    InvalidRangeError,
    MissingVisitorNameError,
    PaymentStatus,
    RecordNotFoundError,
    RentalUnit,
    UnitNotFoundError,
)
from rentals.utils.logging import get_logger, log_booking_operation

from .availability import AvailabilityWindowValidator
from .overlap import OverlapChecker
from .pricing import PricingResolver
from .stores import BookingPeriodStore, RentalUnitStore
from .survey_links import SurveyLinkGenerator

logger = get_logger(__name__)

MAX_WRITE_ATTEMPTS = 3

SORT_FIELDS = (
    "start",
    "end",
    "visitor_name",
    "total_price",
    "deposit",
    "remaining_amount",
    "status",
)

ZERO = Decimal("0")


class BookingPeriodManager:
    """Service for managing booking periods on a unit's calendar."""

    def __init__(
        self,
        units: RentalUnitStore,
        periods: BookingPeriodStore,
        pricing: PricingResolver | None = None,
        availability: AvailabilityWindowValidator | None = None,
        overlap: OverlapChecker | None = None,
        survey_links: SurveyLinkGenerator | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            units: Rental unit store
            periods: Booking period store
            pricing: Pricing resolver
            availability: Availability window validator
            overlap: Overlap checker
            survey_links: Survey link generator
        """
        self.units = units
        self.periods = periods
        self.pricing = pricing or PricingResolver()
        self.availability = availability or AvailabilityWindowValidator()
        self.overlap = overlap or OverlapChecker()
        self.survey_links = survey_links or SurveyLinkGenerator()

    # Reads

    def get_unit(self, unit_id: str) -> RentalUnit:
        """Get a unit or raise UnitNotFoundError."""
        unit = self.units.get(unit_id)
        if unit is None:
            raise UnitNotFoundError(details={"unit_id": unit_id})
        return unit

    def get(self, unit_id: str, period_id: str) -> BookingPeriod:
        """Get a single period or raise RecordNotFoundError."""
        period = self.periods.get(unit_id, period_id)
        if period is None:
            raise RecordNotFoundError(details={"period_id": period_id})
        return period

    def list_periods(
        self,
        unit_id: str,
        kind: BookingKind | None = None,
        sort_by: str = "start",
        descending: bool = False,
    ) -> list[BookingPeriod]:
        """List a unit's periods.

        Periods without a value for the sort field (e.g. blocked periods
        when sorting by price) always come last.

        Args:
            unit_id: Unit ID
            kind: Only return periods of this kind
            sort_by: One of SORT_FIELDS
            descending: Reverse the order

        Returns:
            Sorted list of periods

        Raises:
            UnitNotFoundError: If the unit does not exist
            ValueError: If sort_by is not a known field
        """
        if sort_by not in SORT_FIELDS:
            raise ValueError(f"Unknown sort field: {sort_by}")

        self.get_unit(unit_id)
        periods = self.periods.list_for_unit(unit_id)
        if kind is not None:
            periods = [p for p in periods if p.kind == kind]

        key = self._sort_value(sort_by)
        with_value = [p for p in periods if key(p) is not None]
        without_value = [p for p in periods if key(p) is None]
        with_value.sort(key=lambda p: (key(p), p.start, p.period_id), reverse=descending)
        return with_value + without_value

    def _sort_value(self, sort_by: str) -> Callable[[BookingPeriod], Any]:
        if sort_by == "visitor_name":
            return lambda p: p.visitor_name.casefold() if p.visitor_name else None
        if sort_by == "total_price":
            return lambda p: p.total_price_eur
        if sort_by == "deposit":
            return lambda p: p.deposit_eur
        if sort_by == "remaining_amount":
            return lambda p: self.remaining_balance(p) if p.is_booked else None
        if sort_by == "status":
            return lambda p: p.payment_status.rank if p.payment_status else None
        return lambda p: getattr(p, sort_by)

    # Writes

    def create(self, unit_id: str, data: BookingPeriodInput) -> BookingPeriod:
        """Create a booked or blocked period.

        Args:
            unit_id: Unit to book
            data: Desired period state

        Returns:
            The stored period, with total and survey link for bookings

        Raises:
            UnitNotFoundError: If the unit does not exist
            InvalidRangeError: If start is not before end
            MissingVisitorNameError: If a booking has no visitor name
            OutsideAvailabilityWindowError: If the range leaves the window
            OverlappingBookingError: If another period intersects the range
            OfferNotFoundError: If the pricing offer is not on the unit
            InvalidPriceError: If the price is missing or not positive
            DepositExceedsTotalError: If the deposit is above the total
            CalendarConflictError: If concurrent writes kept winning
        """
        period_id = self.periods.allocate_id()
        now = dt.datetime.now(dt.UTC)

        def build(unit: RentalUnit, existing: list[BookingPeriod]) -> BookingPeriod:
            period = self._build_period(unit, existing, period_id, data, now, previous=None)
            if period.is_booked:
                token = self.survey_links.generate_token()
                period = period.model_copy(
                    update={
                        "survey_token": token,
                        "survey_url": self.survey_links.build_url(
                            period_id, token, period.survey_language
                        ),
                    }
                )
            return period

        try:
            period = self._commit(unit_id, build, self.periods.insert)
        except BookingError as e:
            self._log_failure("create", unit_id, period_id, data.kind, e)
            raise

        log_booking_operation(
            logger,
            "create",
            unit_id=unit_id,
            period_id=period.period_id,
            kind=period.kind.value,
            total_eur=period.total_price_eur,
        )
        return period

    def update(
        self, unit_id: str, period_id: str, data: BookingPeriodInput
    ) -> BookingPeriod:
        """Replace every editable field of an existing period.

        The survey token, survey URL and creation time are kept.

        Raises:
            RecordNotFoundError: If the period does not exist
            Plus everything ``create`` raises
        """
        now = dt.datetime.now(dt.UTC)

        def build(unit: RentalUnit, existing: list[BookingPeriod]) -> BookingPeriod:
            previous = next((p for p in existing if p.period_id == period_id), None)
            if previous is None:
                raise RecordNotFoundError(details={"period_id": period_id})
            return self._build_period(unit, existing, period_id, data, now, previous)

        try:
            period = self._commit(unit_id, build, self.periods.replace)
        except BookingError as e:
            self._log_failure("update", unit_id, period_id, data.kind, e)
            raise

        log_booking_operation(
            logger,
            "update",
            unit_id=unit_id,
            period_id=period_id,
            kind=period.kind.value,
            total_eur=period.total_price_eur,
            payment_status=period.payment_status.value if period.payment_status else None,
        )
        return period

    def delete(self, unit_id: str, period_id: str) -> None:
        """Permanently delete a period.

        Raises:
            RecordNotFoundError: If the period does not exist
        """
        if not self.periods.delete(unit_id, period_id):
            error = RecordNotFoundError(details={"period_id": period_id})
            self._log_failure("delete", unit_id, period_id, None, error)
            raise error
        log_booking_operation(logger, "delete", unit_id=unit_id, period_id=period_id)

    def ensure_survey_links(self, unit_id: str) -> list[BookingPeriod]:
        """Give every booked period without a survey link a new one.

        Existing tokens are never replaced.

        Returns:
            The periods that received a link
        """
        self.get_unit(unit_id)
        assigned: list[BookingPeriod] = []
        for period in self.periods.list_for_unit(unit_id):
            if not period.is_booked or period.survey_token:
                continue
            token = self.survey_links.generate_token()
            url = self.survey_links.build_url(
                period.period_id, token, period.survey_language
            )
            # Lost races (deleted, or linked by someone else) are skipped
            if self.periods.set_survey_link(unit_id, period.period_id, token, url):
                assigned.append(
                    period.model_copy(update={"survey_token": token, "survey_url": url})
                )

        if assigned:
            log_booking_operation(
                logger, "survey_links", unit_id=unit_id, assigned=len(assigned)
            )
        return assigned

    # Money

    def remaining_balance(self, period: BookingPeriod) -> Decimal:
        """Amount still to be collected for a period."""
        if not period.is_booked or period.total_price_eur is None:
            return ZERO
        if period.payment_status == PaymentStatus.FULLY_PAID:
            return ZERO
        return max(ZERO, period.total_price_eur - (period.deposit_eur or ZERO))

    def received_amount(self, period: BookingPeriod) -> Decimal:
        """Amount already received for a period."""
        if not period.is_booked or period.total_price_eur is None:
            return ZERO
        if period.payment_status == PaymentStatus.FULLY_PAID:
            return period.total_price_eur
        if period.payment_status == PaymentStatus.DEPOSIT_PAID:
            return period.deposit_eur or ZERO
        return ZERO

    def summarize(self, periods: list[BookingPeriod]) -> BookingTotals:
        """Revenue totals across a set of periods."""
        booked = [p for p in periods if p.is_booked]
        return BookingTotals(
            total_revenue_eur=sum((p.total_price_eur or ZERO for p in booked), ZERO),
            received_eur=sum((self.received_amount(p) for p in booked), ZERO),
            remaining_eur=sum((self.remaining_balance(p) for p in booked), ZERO),
            booked_count=len(booked),
            blocked_count=len(periods) - len(booked),
        )

    # Internals

    def _commit(
        self,
        unit_id: str,
        build: Callable[[RentalUnit, list[BookingPeriod]], BookingPeriod],
        write: Callable[[BookingPeriod, int], bool],
    ) -> BookingPeriod:
        for attempt in range(1, MAX_WRITE_ATTEMPTS + 1):
            unit = self.get_unit(unit_id)
            existing = self.periods.list_for_unit(unit_id)
            period = build(unit, existing)
            if write(period, unit.calendar_version):
                return period
            logger.info(
                "Stale calendar version %s for unit %s (attempt %s/%s)",
                unit.calendar_version,
                unit_id,
                attempt,
                MAX_WRITE_ATTEMPTS,
            )
        raise CalendarConflictError(
            details={"unit_id": unit_id, "attempts": str(MAX_WRITE_ATTEMPTS)}
        )

    def _build_period(
        self,
        unit: RentalUnit,
        existing: list[BookingPeriod],
        period_id: str,
        data: BookingPeriodInput,
        now: dt.datetime,
        previous: BookingPeriod | None,
    ) -> BookingPeriod:
        if data.start >= data.end:
            raise InvalidRangeError(
                details={"start": data.start.isoformat(), "end": data.end.isoformat()}
            )

        booked = data.kind == BookingKind.BOOKED
        visitor_name = (data.visitor_name or "").strip()
        if booked and not visitor_name:
            raise MissingVisitorNameError()

        self.availability.validate(unit, data.start, data.end)
        self.overlap.check(existing, data.start, data.end, exclude_id=period_id)

        fields: dict[str, Any] = {
            "period_id": period_id,
            "unit_id": unit.unit_id,
            "start": data.start,
            "end": data.end,
            "kind": data.kind,
            "notes": data.notes,
            "created_at": previous.created_at if previous else now,
            "updated_at": now,
            "survey_token": previous.survey_token if previous else None,
            "survey_url": previous.survey_url if previous else None,
        }

        if booked:
            total = self.pricing.resolve_total(
                unit.pricing_offers, data.start, data.end, data.pricing
            )
            if data.deposit_eur is not None and data.deposit_eur > total:
                raise DepositExceedsTotalError(
                    details={
                        "deposit_eur": str(data.deposit_eur),
                        "total_price_eur": str(total),
                    }
                )
            fields.update(
                visitor_name=visitor_name,
                pricing=data.pricing,
                total_price_eur=total,
                deposit_eur=data.deposit_eur,
                payment_status=data.payment_status,
                guest_email=data.guest_email,
                guest_phone=data.guest_phone,
                survey_language=data.survey_language,
            )

        return BookingPeriod(**fields)

    def _log_failure(
        self,
        operation: str,
        unit_id: str,
        period_id: str,
        kind: BookingKind | None,
        error: BookingError,
    ) -> None:
        log_booking_operation(
            logger,
            operation,
            unit_id=unit_id,
            period_id=period_id,
            kind=kind.value if kind else None,
            error=error.code.value,
            rejected=not isinstance(error, CalendarConflictError),
        )
