"""Fixtures for API route tests.

Routes get the moto-backed manager through dependency overrides, so
requests exercise the real stores and exception handlers.
"""

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from rentals.models import RentalUnit
from rentals.services.booking_periods import BookingPeriodManager
from rentals_api.dependencies import get_booking_period_manager
from rentals_api.main import app
from rentals_api.security import USER_SUB_HEADER


@pytest.fixture
def client(manager: BookingPeriodManager) -> Generator[TestClient, None, None]:
    """Test client wired to the moto-backed manager."""
    app.dependency_overrides[get_booking_period_manager] = lambda: manager
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def owner_headers(stored_unit: RentalUnit) -> dict[str, str]:
    """Headers API Gateway sets for the unit's owner."""
    assert stored_unit.owner_sub
    return {USER_SUB_HEADER: stored_unit.owner_sub}
