"""Shared API request/response models.

Domain models (BookingPeriod, RentalUnit, etc.) are in rentals.models.
This module holds HTTP layer concerns only.
"""

from pydantic import BaseModel, ConfigDict, Field

from rentals.models import ErrorCode, ErrorResponse

__all__ = [
    "ErrorCode",
    "ErrorResponse",
    "SuccessMessage",
]


class SuccessMessage(BaseModel):
    """Generic success response for operations without data payload.

    Used for endpoints that just need to acknowledge success,
    like DELETE operations.
    """

    model_config = ConfigDict(strict=True)

    success: bool = True
    message: str = Field(
        default="Operation completed successfully",
        description="Human-readable success message",
    )
