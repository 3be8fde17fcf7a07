"""Unit tests for correlation-ID logging utilities."""

import logging
from typing import Generator

import pytest

from rentals.utils.logging import (
    NO_CORRELATION_ID,
    StructuredFormatter,
    clear_correlation_id,
    get_correlation_id,
    get_logger,
    log_booking_operation,
    set_correlation_id,
)


@pytest.fixture(autouse=True)
def clean_correlation_id() -> Generator[None, None, None]:
    clear_correlation_id()
    yield
    clear_correlation_id()


class TestCorrelationId:
    def test_set_uses_given_id(self) -> None:
        assert set_correlation_id("req-123") == "req-123"
        assert get_correlation_id() == "req-123"

    def test_set_generates_when_missing(self) -> None:
        cid = set_correlation_id()
        assert cid
        assert get_correlation_id() == cid

    def test_clear(self) -> None:
        set_correlation_id("req-123")
        clear_correlation_id()
        assert get_correlation_id() is None


class TestStructuredFormatter:
    def test_prefixes_correlation_id(self) -> None:
        set_correlation_id("req-abc")
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "hello", None, None)
        assert StructuredFormatter("%(message)s").format(record) == "[req-abc] hello"

    def test_placeholder_without_id(self) -> None:
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "hello", None, None)
        formatted = StructuredFormatter("%(message)s").format(record)
        assert formatted == f"[{NO_CORRELATION_ID}] hello"


class TestLogBookingOperation:
    def test_success_logged_at_info(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("test.booking.info")
        set_correlation_id("req-1")
        with caplog.at_level(logging.INFO, logger="test.booking.info"):
            log_booking_operation(
                logger, "create", unit_id="apt-1", period_id="BP-1", kind="booked", total_eur="469"
            )

        record = caplog.records[-1]
        assert record.levelno == logging.INFO
        assert "unit_id=apt-1" in record.getMessage()
        assert record.period_id == "BP-1"
        assert record.total_eur == "469"
        assert record.correlation_id == "req-1"

    def test_rejection_logged_at_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("test.booking.warning")
        with caplog.at_level(logging.INFO, logger="test.booking.warning"):
            log_booking_operation(
                logger, "create", unit_id="apt-1", error="ERR_004", rejected=True
            )
        assert caplog.records[-1].levelno == logging.WARNING
        assert caplog.records[-1].error == "ERR_004"

    def test_error_logged_at_error(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("test.booking.error")
        with caplog.at_level(logging.INFO, logger="test.booking.error"):
            log_booking_operation(logger, "update", unit_id="apt-1", error="ERR_009")
        assert caplog.records[-1].levelno == logging.ERROR
