"""Services for the apartment booking calendar."""

from .availability import AvailabilityWindowValidator
from .booking_periods import MAX_WRITE_ATTEMPTS, SORT_FIELDS, BookingPeriodManager
from .calendar import build_calendar, count_statuses, month_bounds
from .dynamodb import DynamoDBService, get_dynamodb_service, reset_dynamodb_service
from .overlap import OverlapChecker
from .pricing import PricingResolver, round_eur
from .stores import (
    BookingPeriodStore,
    DynamoDBBookingPeriodStore,
    DynamoDBRentalUnitStore,
    RentalUnitStore,
)
from .survey_links import SurveyLinkGenerator

__all__ = [
    "AvailabilityWindowValidator",
    "BookingPeriodManager",
    "BookingPeriodStore",
    "DynamoDBBookingPeriodStore",
    "DynamoDBRentalUnitStore",
    "DynamoDBService",
    "MAX_WRITE_ATTEMPTS",
    "OverlapChecker",
    "PricingResolver",
    "RentalUnitStore",
    "SORT_FIELDS",
    "SurveyLinkGenerator",
    "build_calendar",
    "count_statuses",
    "get_dynamodb_service",
    "month_bounds",
    "reset_dynamodb_service",
    "round_eur",
]
