"""Caller identity and unit ownership checks.

API Gateway validates the admin's JWT and passes the subject claim via
the x-user-sub header. Routes that change or reveal booking data depend
on ``require_unit_owner``.
"""

from fastapi import Depends, Request

from rentals.models import BookingError, ErrorCode, RentalUnit
from rentals.services.booking_periods import BookingPeriodManager
from rentals.utils.logging import get_logger
from rentals_api.dependencies import get_booking_period_manager

logger = get_logger(__name__)

USER_SUB_HEADER = "x-user-sub"


def get_user_sub(request: Request) -> str:
    """Extract the caller's subject from the gateway header.

    Raises:
        BookingError: AUTH_REQUIRED if the header is missing or blank
    """
    user_sub = (request.headers.get(USER_SUB_HEADER) or "").strip()
    if not user_sub:
        raise BookingError(code=ErrorCode.AUTH_REQUIRED)
    return user_sub


def require_unit_owner(
    unit_id: str,
    request: Request,
    manager: BookingPeriodManager = Depends(get_booking_period_manager),
) -> RentalUnit:
    """Resolve the unit and check the caller may manage it.

    Units without an owner can be managed by any authenticated admin.

    Returns:
        The unit from the path

    Raises:
        BookingError: AUTH_REQUIRED or NOT_UNIT_OWNER
        UnitNotFoundError: If the unit does not exist
    """
    user_sub = get_user_sub(request)
    unit = manager.get_unit(unit_id)
    if unit.owner_sub and unit.owner_sub != user_sub:
        logger.warning("User %s denied access to unit %s", user_sub, unit_id)
        raise BookingError(code=ErrorCode.NOT_UNIT_OWNER, details={"unit_id": unit_id})
    return unit
