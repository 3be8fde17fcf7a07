"""Pytest configuration and fixtures for booking calendar backend tests.

This module provides reusable fixtures for testing:
- DynamoDB mocking with moto (rental-units and booking-periods tables)
- DynamoDB-backed stores and a BookingPeriodManager wired to them
- Sample units and booking inputs
"""

import datetime as dt
import os
from decimal import Decimal
from typing import Any, Callable, Generator

import boto3
import pytest
from moto import mock_aws

# === Environment Setup ===

# Set environment variables for testing before imports
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-1")
os.environ.setdefault("DYNAMODB_TABLE_PREFIX", "test-rentals")
os.environ.setdefault("SURVEY_BASE_URL", "https://rentals.example.com")
os.environ.setdefault("CALENDAR_TIMEZONE", "Europe/Sofia")

if not os.environ.get("AWS_PROFILE") and not os.environ.get("AWS_ACCESS_KEY_ID"):
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

from rentals.models import (  # noqa: E402
    BookingKind,
    BookingPeriodInput,
    OfferPricing,
    PricingOffer,
    RentalUnit,
)
from rentals.services.booking_periods import BookingPeriodManager  # noqa: E402
from rentals.services.dynamodb import DynamoDBService, get_dynamodb_service  # noqa: E402
from rentals.services.stores import (  # noqa: E402
    DynamoDBBookingPeriodStore,
    DynamoDBRentalUnitStore,
)
from rentals.services.survey_links import SurveyLinkGenerator  # noqa: E402

TABLE_PREFIX = os.environ["DYNAMODB_TABLE_PREFIX"]
SAMPLE_UNIT_ID = "apt-sunny-beach-12"
OWNER_SUB = "admin-sub-owner"


# === DynamoDB Fixtures ===


@pytest.fixture(autouse=True)
def reset_singletons() -> Generator[None, None, None]:
    """Reset the DynamoDB singleton and cached API services around each test.

    Tests using mock_aws need a fresh service created inside the mock
    context rather than one left over from a previous test.
    """
    from rentals_api.dependencies import reset_services

    reset_services()
    yield
    reset_services()


@pytest.fixture
def aws_credentials() -> None:
    """Mocked AWS Credentials for moto."""
    if not os.environ.get("AWS_PROFILE"):
        os.environ["AWS_ACCESS_KEY_ID"] = "testing"
        os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
        os.environ["AWS_SECURITY_TOKEN"] = "testing"
        os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "eu-west-1"


def create_tables(client: Any) -> None:
    """Create the calendar tables in a (mocked) DynamoDB."""
    client.create_table(
        TableName=f"{TABLE_PREFIX}-rental-units",
        KeySchema=[{"AttributeName": "unit_id", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "unit_id", "AttributeType": "S"}],
        BillingMode="PAY_PER_REQUEST",
    )
    client.create_table(
        TableName=f"{TABLE_PREFIX}-booking-periods",
        KeySchema=[
            {"AttributeName": "unit_id", "KeyType": "HASH"},
            {"AttributeName": "period_id", "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": "unit_id", "AttributeType": "S"},
            {"AttributeName": "period_id", "AttributeType": "S"},
        ],
        BillingMode="PAY_PER_REQUEST",
    )


@pytest.fixture
def dynamodb(aws_credentials: None) -> Generator[DynamoDBService, None, None]:
    """DynamoDBService backed by moto with the calendar tables created."""
    with mock_aws():
        create_tables(boto3.client("dynamodb", region_name="eu-west-1"))
        yield get_dynamodb_service()


@pytest.fixture
def unit_store(dynamodb: DynamoDBService) -> DynamoDBRentalUnitStore:
    return DynamoDBRentalUnitStore(dynamodb)


@pytest.fixture
def period_store(dynamodb: DynamoDBService) -> DynamoDBBookingPeriodStore:
    return DynamoDBBookingPeriodStore(dynamodb)


# === Sample Data Fixtures ===


def build_unit(**overrides: Any) -> RentalUnit:
    """Summer-season unit with a weekly offer at 67 EUR/night."""
    fields: dict[str, Any] = {
        "unit_id": SAMPLE_UNIT_ID,
        "name": "Sunny Beach Apartment 12",
        "owner_sub": OWNER_SUB,
        "availability_start": dt.date(2025, 6, 1),
        "availability_end": dt.date(2025, 8, 31),
        "pricing_offers": [
            PricingOffer(
                offer_id="weekly",
                name="Weekly",
                days=7,
                price_per_night_eur=Decimal("67"),
            ),
            PricingOffer(
                offer_id="nightly",
                name="Nightly",
                days=1,
                price_per_night_eur=Decimal("80.50"),
            ),
        ],
        "minimum_nights": 3,
    }
    fields.update(overrides)
    return RentalUnit(**fields)


@pytest.fixture
def sample_unit() -> RentalUnit:
    return build_unit()


@pytest.fixture
def make_unit() -> Callable[..., RentalUnit]:
    """Factory for sample-unit variants, e.g. ``make_unit(owner_sub=None)``."""
    return build_unit


@pytest.fixture
def stored_unit(
    unit_store: DynamoDBRentalUnitStore, sample_unit: RentalUnit
) -> RentalUnit:
    """The sample unit, persisted."""
    unit_store.put(sample_unit)
    return sample_unit


@pytest.fixture
def manager(
    unit_store: DynamoDBRentalUnitStore,
    period_store: DynamoDBBookingPeriodStore,
    stored_unit: RentalUnit,
) -> BookingPeriodManager:
    """Manager over the moto-backed stores with the sample unit stored."""
    return BookingPeriodManager(
        units=unit_store,
        periods=period_store,
        survey_links=SurveyLinkGenerator("https://rentals.example.com"),
    )


@pytest.fixture
def make_booking() -> Callable[..., BookingPeriodInput]:
    """Factory for booked-period inputs priced with the weekly offer."""

    def _make(start: dt.date, end: dt.date, **overrides: Any) -> BookingPeriodInput:
        fields: dict[str, Any] = {
            "start": start,
            "end": end,
            "kind": BookingKind.BOOKED,
            "visitor_name": "Maria Ivanova",
            "pricing": OfferPricing(offer_id="weekly"),
        }
        fields.update(overrides)
        return BookingPeriodInput(**fields)

    return _make


@pytest.fixture
def make_block() -> Callable[..., BookingPeriodInput]:
    """Factory for blocked-period inputs."""

    def _make(start: dt.date, end: dt.date, **overrides: Any) -> BookingPeriodInput:
        fields: dict[str, Any] = {
            "start": start,
            "end": end,
            "kind": BookingKind.BLOCKED,
            "notes": "Maintenance",
        }
        fields.update(overrides)
        return BookingPeriodInput(**fields)

    return _make
