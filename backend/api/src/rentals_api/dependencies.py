"""FastAPI dependency injection providers for calendar services.

Services are lazily instantiated and cached with @lru_cache.

Usage in routes:
    from rentals_api.dependencies import get_booking_period_manager

    @router.get("/units/{unit_id}/booking-periods")
    async def list_periods(
        unit_id: str,
        manager: BookingPeriodManager = Depends(get_booking_period_manager),
    ):
        ...

Service Dependency Graph:
    DynamoDBService (singleton via get_dynamodb_service)
        ├── DynamoDBRentalUnitStore
        └── DynamoDBBookingPeriodStore
                └── BookingPeriodManager (+ PricingResolver, SurveyLinkGenerator)

Testing:
    Use reset_services() to clear cached instances between tests, or
    app.dependency_overrides to swap the manager.
"""

from functools import lru_cache

from rentals.services.booking_periods import BookingPeriodManager
from rentals.services.dynamodb import get_dynamodb_service
from rentals.services.pricing import PricingResolver
from rentals.services.stores import DynamoDBBookingPeriodStore, DynamoDBRentalUnitStore
from rentals.services.survey_links import SurveyLinkGenerator


@lru_cache
def get_unit_store() -> DynamoDBRentalUnitStore:
    """Get cached rental unit store."""
    return DynamoDBRentalUnitStore(db=get_dynamodb_service())


@lru_cache
def get_period_store() -> DynamoDBBookingPeriodStore:
    """Get cached booking period store."""
    return DynamoDBBookingPeriodStore(db=get_dynamodb_service())


@lru_cache
def get_pricing_resolver() -> PricingResolver:
    return PricingResolver()


@lru_cache
def get_survey_link_generator() -> SurveyLinkGenerator:
    """Get cached survey link generator (reads SURVEY_BASE_URL once)."""
    return SurveyLinkGenerator()


@lru_cache
def get_booking_period_manager() -> BookingPeriodManager:
    """Get cached BookingPeriodManager instance.

    Returns:
        BookingPeriodManager configured with the DynamoDB stores.
    """
    return BookingPeriodManager(
        units=get_unit_store(),
        periods=get_period_store(),
        pricing=get_pricing_resolver(),
        survey_links=get_survey_link_generator(),
    )


def reset_services() -> None:
    """Clear all cached service instances.

    Also resets the underlying DynamoDB singleton.
    """
    from rentals.services.dynamodb import reset_dynamodb_service

    get_unit_store.cache_clear()
    get_period_store.cache_clear()
    get_pricing_resolver.cache_clear()
    get_survey_link_generator.cache_clear()
    get_booking_period_manager.cache_clear()

    reset_dynamodb_service()
