"""FastAPI exception handlers for converting BookingError to HTTP responses.

The ErrorCode-to-HTTP status mapping follows REST conventions:
- 400 Bad Request: Validation/business rule violations
- 401 Unauthorized: Authentication required
- 403 Forbidden: Caller does not own the unit
- 404 Not Found: Unit or period not found
- 409 Conflict: Overlapping period or concurrent calendar change

Usage:
    from rentals_api.exceptions import register_exception_handlers
    register_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
)

from rentals.models import BookingError, ErrorCode

# Map ErrorCode to HTTP status codes
ERROR_CODE_TO_HTTP_STATUS: dict[ErrorCode, int] = {
    # Business validation errors -> 400 Bad Request
    ErrorCode.INVALID_RANGE: HTTP_400_BAD_REQUEST,
    ErrorCode.MISSING_VISITOR_NAME: HTTP_400_BAD_REQUEST,
    ErrorCode.OUTSIDE_AVAILABILITY_WINDOW: HTTP_400_BAD_REQUEST,
    ErrorCode.OFFER_NOT_FOUND: HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PRICE: HTTP_400_BAD_REQUEST,
    ErrorCode.DEPOSIT_EXCEEDS_TOTAL: HTTP_400_BAD_REQUEST,
    # Calendar conflicts -> 409 Conflict
    ErrorCode.OVERLAPPING_BOOKING: HTTP_409_CONFLICT,
    ErrorCode.CALENDAR_CONFLICT: HTTP_409_CONFLICT,
    # Not found errors -> 404 Not Found
    ErrorCode.RECORD_NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorCode.UNIT_NOT_FOUND: HTTP_404_NOT_FOUND,
    # Authentication errors -> 401 Unauthorized
    ErrorCode.AUTH_REQUIRED: HTTP_401_UNAUTHORIZED,
    # Authorization errors -> 403 Forbidden
    ErrorCode.NOT_UNIT_OWNER: HTTP_403_FORBIDDEN,
}


def get_http_status_for_error(code: ErrorCode) -> int:
    """Get HTTP status code for an ErrorCode.

    Args:
        code: The ErrorCode to map

    Returns:
        HTTP status code, defaults to 400 if not explicitly mapped.
    """
    return ERROR_CODE_TO_HTTP_STATUS.get(code, HTTP_400_BAD_REQUEST)


async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
    """Convert a BookingError to a JSON ErrorResponse with its status code.

    Args:
        request: The incoming request (unused but required by FastAPI)
        exc: The BookingError exception

    Returns:
        JSONResponse with error details and appropriate status code.
    """
    return JSONResponse(
        status_code=get_http_status_for_error(exc.code),
        content=exc.to_response().model_dump(mode="json"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app.

    Args:
        app: The FastAPI application instance.
    """
    app.add_exception_handler(BookingError, booking_error_handler)  # type: ignore[arg-type]
