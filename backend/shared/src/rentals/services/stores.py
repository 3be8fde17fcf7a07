"""Persistence for rental units and booking periods.

Two DynamoDB tables back the calendar:

- ``rental-units`` (PK ``unit_id``) holds the unit's availability window,
  pricing offers and a ``calendar_version`` write counter.
- ``booking-periods`` (PK ``unit_id``, SK ``period_id``) holds one item
  per booked or blocked period.

Every insert or replace of a period bumps the unit's calendar_version in
the same transaction, conditioned on the version the caller validated
against. Two writers racing on the same unit cannot both commit.
"""

import datetime as dt
import uuid
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Protocol

from rentals.models import (
    BookingKind,
    BookingPeriod,
    CustomPricing,
    OfferPricing,
    PaymentStatus,
    PricingOffer,
    PricingSelection,
    RentalUnit,
    SurveyLanguage,
)

from .dynamodb import serialize_item, serialize_value

if TYPE_CHECKING:
    from .dynamodb import DynamoDBService


def generate_period_id() -> str:
    """Generate a booking period ID like 'BP-2026-1A2B3C4D'."""
    year = dt.datetime.now(dt.UTC).year
    return f"BP-{year}-{uuid.uuid4().hex[:8].upper()}"


class RentalUnitStore(Protocol):
    """Read/write access to rental units."""

    def get(self, unit_id: str) -> RentalUnit | None: ...

    def put(self, unit: RentalUnit) -> None: ...


class BookingPeriodStore(Protocol):
    """Read/write access to a unit's booking periods."""

    def allocate_id(self) -> str: ...

    def list_for_unit(self, unit_id: str) -> list[BookingPeriod]: ...

    def get(self, unit_id: str, period_id: str) -> BookingPeriod | None: ...

    def insert(self, period: BookingPeriod, expected_version: int) -> bool: ...

    def replace(self, period: BookingPeriod, expected_version: int) -> bool: ...

    def delete(self, unit_id: str, period_id: str) -> bool: ...

    def set_survey_link(
        self, unit_id: str, period_id: str, token: str, url: str
    ) -> bool: ...


class DynamoDBRentalUnitStore:
    """Rental units stored in DynamoDB."""

    TABLE = "rental-units"

    def __init__(self, db: "DynamoDBService") -> None:
        self.db = db

    def get(self, unit_id: str) -> RentalUnit | None:
        """Get a unit by ID.

        Args:
            unit_id: Unit ID

        Returns:
            RentalUnit or None if not found
        """
        item = self.db.get_item(self.TABLE, {"unit_id": unit_id})
        if not item:
            return None
        return self._item_to_unit(item)

    def put(self, unit: RentalUnit) -> None:
        """Create or overwrite a unit."""
        self.db.put_item(self.TABLE, self._unit_to_item(unit))

    def _unit_to_item(self, unit: RentalUnit) -> dict[str, Any]:
        item: dict[str, Any] = {
            "unit_id": unit.unit_id,
            "calendar_version": unit.calendar_version,
            "pricing_offers": [
                {
                    k: v
                    for k, v in {
                        "offer_id": offer.offer_id,
                        "name": offer.name,
                        "days": offer.days,
                        "price_per_night_eur": offer.price_per_night_eur,
                        "description": offer.description,
                    }.items()
                    if v is not None
                }
                for offer in unit.pricing_offers
            ],
        }
        if unit.name:
            item["name"] = unit.name
        if unit.owner_sub:
            item["owner_sub"] = unit.owner_sub
        if unit.availability_start:
            item["availability_start"] = unit.availability_start.isoformat()
        if unit.availability_end:
            item["availability_end"] = unit.availability_end.isoformat()
        if unit.minimum_nights is not None:
            item["minimum_nights"] = unit.minimum_nights
        return item

    def _item_to_unit(self, item: dict[str, Any]) -> RentalUnit:
        """Convert DynamoDB item to RentalUnit model."""
        return RentalUnit(
            unit_id=item["unit_id"],
            name=item.get("name"),
            owner_sub=item.get("owner_sub"),
            availability_start=(
                dt.date.fromisoformat(item["availability_start"])
                if item.get("availability_start")
                else None
            ),
            availability_end=(
                dt.date.fromisoformat(item["availability_end"])
                if item.get("availability_end")
                else None
            ),
            pricing_offers=[
                PricingOffer(
                    offer_id=offer["offer_id"],
                    name=offer.get("name"),
                    days=int(offer["days"]),
                    price_per_night_eur=Decimal(str(offer["price_per_night_eur"])),
                    description=offer.get("description"),
                )
                for offer in item.get("pricing_offers", [])
            ],
            minimum_nights=(
                int(item["minimum_nights"])
                if item.get("minimum_nights") is not None
                else None
            ),
            calendar_version=int(item.get("calendar_version", 0)),
        )


class DynamoDBBookingPeriodStore:
    """Booking periods stored in DynamoDB, versioned through the unit item."""

    TABLE = "booking-periods"
    UNITS_TABLE = "rental-units"

    def __init__(self, db: "DynamoDBService") -> None:
        self.db = db

    def allocate_id(self) -> str:
        """Reserve an ID for a period that has not been written yet."""
        return generate_period_id()

    def list_for_unit(self, unit_id: str) -> list[BookingPeriod]:
        """Get every period of a unit, ordered by start date."""
        items = self.db.query_by_partition(self.TABLE, "unit_id", unit_id)
        periods = [self._item_to_period(item) for item in items]
        return sorted(periods, key=lambda p: (p.start, p.period_id))

    def get(self, unit_id: str, period_id: str) -> BookingPeriod | None:
        """Get a single period.

        Args:
            unit_id: Owning unit ID
            period_id: Period ID

        Returns:
            BookingPeriod or None if not found
        """
        item = self.db.get_item(
            self.TABLE, {"unit_id": unit_id, "period_id": period_id}
        )
        if not item:
            return None
        return self._item_to_period(item)

    def insert(self, period: BookingPeriod, expected_version: int) -> bool:
        """Write a new period if the unit's calendar is still at ``expected_version``.

        Returns:
            True if written, False if the period ID exists or the version moved
        """
        return self.db.transact_write(
            [
                self._put_period(period, "attribute_not_exists(period_id)"),
                self._bump_version(period.unit_id, expected_version),
            ]
        )

    def replace(self, period: BookingPeriod, expected_version: int) -> bool:
        """Overwrite an existing period if the calendar is still at ``expected_version``.

        Returns:
            True if written, False if the period is gone or the version moved
        """
        return self.db.transact_write(
            [
                self._put_period(period, "attribute_exists(period_id)"),
                self._bump_version(period.unit_id, expected_version),
            ]
        )

    def delete(self, unit_id: str, period_id: str) -> bool:
        """Delete a period.

        Returns:
            True if deleted, False if it did not exist
        """
        return self.db.delete_item(
            self.TABLE,
            {"unit_id": unit_id, "period_id": period_id},
            condition_expression="attribute_exists(period_id)",
        )

    def set_survey_link(
        self, unit_id: str, period_id: str, token: str, url: str
    ) -> bool:
        """Attach a survey link to a period that does not have one yet.

        Returns:
            True if set, False if the period is gone or already has a token
        """
        attrs = self.db.update_item(
            self.TABLE,
            {"unit_id": unit_id, "period_id": period_id},
            update_expression="SET survey_token = :token, survey_url = :url",
            expression_attribute_values={":token": token, ":url": url},
            condition_expression=(
                "attribute_exists(period_id) AND attribute_not_exists(survey_token)"
            ),
        )
        return attrs is not None

    def _put_period(self, period: BookingPeriod, condition: str) -> dict[str, Any]:
        return {
            "Put": {
                "TableName": self.db.table_name(self.TABLE),
                "Item": serialize_item(self._period_to_item(period)),
                "ConditionExpression": condition,
            }
        }

    def _bump_version(self, unit_id: str, expected_version: int) -> dict[str, Any]:
        if expected_version == 0:
            # Units written before versioning have no counter yet
            condition = (
                "attribute_exists(unit_id) AND "
                "(attribute_not_exists(calendar_version) OR calendar_version = :expected)"
            )
        else:
            condition = "attribute_exists(unit_id) AND calendar_version = :expected"
        return {
            "Update": {
                "TableName": self.db.table_name(self.UNITS_TABLE),
                "Key": serialize_item({"unit_id": unit_id}),
                "UpdateExpression": "SET calendar_version = :next",
                "ConditionExpression": condition,
                "ExpressionAttributeValues": {
                    ":expected": serialize_value(expected_version),
                    ":next": serialize_value(expected_version + 1),
                },
            }
        }

    def _period_to_item(self, period: BookingPeriod) -> dict[str, Any]:
        item: dict[str, Any] = {
            "unit_id": period.unit_id,
            "period_id": period.period_id,
            "start": period.start.isoformat(),
            "end": period.end.isoformat(),
            "kind": period.kind.value,
            "created_at": period.created_at.isoformat(),
            "updated_at": period.updated_at.isoformat(),
        }
        if period.pricing is not None:
            item["pricing"] = self._pricing_to_map(period.pricing)
        if period.total_price_eur is not None:
            item["total_price_eur"] = period.total_price_eur
        if period.deposit_eur is not None:
            item["deposit_eur"] = period.deposit_eur
        if period.payment_status:
            item["payment_status"] = period.payment_status.value
        if period.survey_language:
            item["survey_language"] = period.survey_language.value
        for field in (
            "visitor_name",
            "guest_email",
            "guest_phone",
            "notes",
            "survey_token",
            "survey_url",
        ):
            value = getattr(period, field)
            if value:
                item[field] = value
        return item

    def _pricing_to_map(self, pricing: PricingSelection) -> dict[str, Any]:
        if isinstance(pricing, OfferPricing):
            return {"mode": "offer", "offer_id": pricing.offer_id}
        return {"mode": "custom", "custom_total_eur": pricing.custom_total_eur}

    def _map_to_pricing(self, data: dict[str, Any]) -> PricingSelection:
        if data.get("mode") == "custom":
            return CustomPricing(custom_total_eur=Decimal(str(data["custom_total_eur"])))
        return OfferPricing(offer_id=data["offer_id"])

    def _item_to_period(self, item: dict[str, Any]) -> BookingPeriod:
        """Convert DynamoDB item to BookingPeriod model."""
        return BookingPeriod(
            period_id=item["period_id"],
            unit_id=item["unit_id"],
            start=dt.date.fromisoformat(item["start"]),
            end=dt.date.fromisoformat(item["end"]),
            kind=BookingKind(item["kind"]),
            visitor_name=item.get("visitor_name"),
            pricing=(
                self._map_to_pricing(item["pricing"]) if item.get("pricing") else None
            ),
            total_price_eur=(
                Decimal(str(item["total_price_eur"]))
                if item.get("total_price_eur") is not None
                else None
            ),
            deposit_eur=(
                Decimal(str(item["deposit_eur"]))
                if item.get("deposit_eur") is not None
                else None
            ),
            payment_status=(
                PaymentStatus(item["payment_status"])
                if item.get("payment_status")
                else None
            ),
            guest_email=item.get("guest_email"),
            guest_phone=item.get("guest_phone"),
            notes=item.get("notes"),
            survey_language=(
                SurveyLanguage(item["survey_language"])
                if item.get("survey_language")
                else None
            ),
            survey_token=item.get("survey_token"),
            survey_url=item.get("survey_url"),
            created_at=dt.datetime.fromisoformat(item["created_at"]),
            updated_at=dt.datetime.fromisoformat(item["updated_at"]),
        )
