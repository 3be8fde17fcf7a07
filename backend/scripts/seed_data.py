#!/usr/bin/env python3
"""Seed a development calendar with a sample apartment and bookings.

Writes one rental unit with pricing offers and an availability period,
then books a few stays and a maintenance block through the booking
period manager, so the same validation rules apply as in the API.

Usage:
    python scripts/seed_data.py --env dev
    python scripts/seed_data.py --env dev --year 2026
    python scripts/seed_data.py --env dev --clear-first
    python scripts/seed_data.py --env dev --unit-only
"""

import argparse
import datetime as dt
import os
import sys
from decimal import Decimal

from rentals.models import (
    BookingError,
    BookingKind,
    BookingPeriodInput,
    CustomPricing,
    OfferPricing,
    PaymentStatus,
    PricingOffer,
    RentalUnit,
    SurveyLanguage,
)
from rentals.services.booking_periods import BookingPeriodManager
from rentals.services.dynamodb import get_dynamodb_service
from rentals.services.stores import DynamoDBBookingPeriodStore, DynamoDBRentalUnitStore

SAMPLE_UNIT_ID = "apt-sunny-beach-12"


def build_sample_unit(year: int, owner_sub: str | None) -> RentalUnit:
    """Seaside apartment open for the summer season of ``year``."""
    return RentalUnit(
        unit_id=SAMPLE_UNIT_ID,
        name="Sunny Beach Apartment 12",
        owner_sub=owner_sub,
        availability_start=dt.date(year, 6, 1),
        availability_end=dt.date(year, 9, 30),
        pricing_offers=[
            PricingOffer(
                offer_id="nightly",
                name="Nightly",
                days=1,
                price_per_night_eur=Decimal("75"),
            ),
            PricingOffer(
                offer_id="weekly",
                name="Weekly",
                days=7,
                price_per_night_eur=Decimal("67"),
                description="Seven nights or more",
            ),
        ],
        minimum_nights=3,
    )


def build_sample_periods(year: int) -> list[BookingPeriodInput]:
    """A week-long stay, a custom-priced weekend, a short stay and a block."""
    return [
        BookingPeriodInput(
            start=dt.date(year, 7, 10),
            end=dt.date(year, 7, 17),
            kind=BookingKind.BOOKED,
            visitor_name="Maria Ivanova",
            pricing=OfferPricing(offer_id="weekly"),
            deposit_eur=Decimal("100"),
            payment_status=PaymentStatus.DEPOSIT_PAID,
            guest_email="maria@example.com",
            survey_language=SurveyLanguage.BULGARIAN,
        ),
        BookingPeriodInput(
            start=dt.date(year, 7, 17),
            end=dt.date(year, 7, 20),
            kind=BookingKind.BOOKED,
            visitor_name="John Smith",
            pricing=CustomPricing(custom_total_eur=Decimal("210")),
            payment_status=PaymentStatus.FULLY_PAID,
            survey_language=SurveyLanguage.ENGLISH,
        ),
        BookingPeriodInput(
            start=dt.date(year, 8, 2),
            end=dt.date(year, 8, 4),
            kind=BookingKind.BOOKED,
            visitor_name="Georgi Petrov",
            pricing=OfferPricing(offer_id="nightly"),
        ),
        BookingPeriodInput(
            start=dt.date(year, 9, 1),
            end=dt.date(year, 9, 5),
            kind=BookingKind.BLOCKED,
            notes="Bathroom renovation",
        ),
    ]


def main() -> int:
    """Run the seed script."""
    parser = argparse.ArgumentParser(description="Seed development calendar with test data")
    parser.add_argument(
        "--env",
        choices=["dev", "staging", "prod"],
        default="dev",
        help="Target environment (default: dev)",
    )
    parser.add_argument(
        "--region",
        default=os.environ.get("AWS_DEFAULT_REGION", "eu-west-1"),
        help="AWS region (default: eu-west-1 or AWS_DEFAULT_REGION env var)",
    )
    parser.add_argument(
        "--year",
        type=int,
        default=dt.date.today().year,
        help="Season year (default: current year)",
    )
    parser.add_argument(
        "--owner-sub",
        default=None,
        help="Admin subject that owns the sample unit (default: no owner)",
    )
    parser.add_argument(
        "--clear-first",
        action="store_true",
        help="Delete the sample unit's existing periods before seeding",
    )
    parser.add_argument(
        "--unit-only",
        action="store_true",
        help="Only write the rental unit",
    )

    args = parser.parse_args()

    # Safety check for production
    if args.env == "prod":
        confirm = input("⚠️  WARNING: You are about to modify PRODUCTION data. Type 'yes' to continue: ")
        if confirm.lower() != "yes":
            print("Aborted.")
            return 1

    os.environ["AWS_DEFAULT_REGION"] = args.region
    db = get_dynamodb_service(args.env)
    units = DynamoDBRentalUnitStore(db)
    periods = DynamoDBBookingPeriodStore(db)
    manager = BookingPeriodManager(units=units, periods=periods)

    print(f"\n🌱 Seeding {args.env} environment (region: {args.region})\n")

    existing = units.get(SAMPLE_UNIT_ID)
    unit = build_sample_unit(args.year, args.owner_sub)
    if existing:
        # Keep the counter so in-flight writers see a consistent history
        unit = unit.model_copy(update={"calendar_version": existing.calendar_version})
    units.put(unit)
    print(f"  ✓ Unit {unit.unit_id} ({len(unit.pricing_offers)} offers)")

    if args.unit_only:
        print("\n✅ Unit seeded successfully!")
        return 0

    if args.clear_first:
        removed = periods.list_for_unit(SAMPLE_UNIT_ID)
        for period in removed:
            manager.delete(SAMPLE_UNIT_ID, period.period_id)
        print(f"  Cleared {len(removed)} periods")

    failures = 0
    for data in build_sample_periods(args.year):
        try:
            period = manager.create(SAMPLE_UNIT_ID, data)
        except BookingError as e:
            failures += 1
            print(f"  ❌ {data.start} → {data.end}: {e.code.value} {e.message}")
            continue
        label = period.visitor_name or period.notes or period.kind.value
        total = f" €{period.total_price_eur}" if period.total_price_eur is not None else ""
        print(f"  ✓ {period.start} → {period.end} {label}{total}")

    if failures:
        print(f"\n⚠️  Seed completed with {failures} rejected periods (run with --clear-first)")
        return 1

    print("\n✅ Seed completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
