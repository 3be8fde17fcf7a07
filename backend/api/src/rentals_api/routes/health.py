"""Health check endpoint."""

import datetime as dt
from typing import Any

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health", summary="Health check")
async def health() -> dict[str, Any]:
    """Liveness probe for API Gateway and local runs."""
    return {
        "status": "healthy",
        "timestamp": dt.datetime.now(dt.UTC).isoformat(),
        "service": "rentals-api",
    }
