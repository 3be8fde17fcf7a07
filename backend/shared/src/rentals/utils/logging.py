"""Structured logging utilities with correlation ID support.

Provides:
- Correlation ID context management for request tracing
- A formatter that prefixes every line with the correlation ID
- ``log_booking_operation`` for calendar write events

Usage:
    from rentals.utils.logging import get_logger, set_correlation_id

    # In middleware:
    set_correlation_id(request.headers.get("X-Correlation-ID"))

    # In service code:
    logger = get_logger(__name__)
    logger.info("Booking period created", extra={"period_id": "BP-123"})
"""

import logging
import os
import uuid
from contextvars import ContextVar
from typing import Any

NO_CORRELATION_ID = "no-correlation-id"
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Thread-safe and async-safe
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def generate_correlation_id() -> str:
    """Generate a new UUID-based correlation ID."""
    return str(uuid.uuid4())


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set the correlation ID for the current request context.

    Args:
        correlation_id: Optional existing correlation ID. If None, generates new one.

    Returns:
        The correlation ID that was set
    """
    cid = correlation_id or generate_correlation_id()
    _correlation_id.set(cid)
    return cid


def get_correlation_id() -> str | None:
    """Get the current correlation ID, if any."""
    return _correlation_id.get()


def clear_correlation_id() -> None:
    """Clear the correlation ID context."""
    _correlation_id.set(None)


class CorrelationIdFilter(logging.Filter):
    """Logging filter that adds correlation_id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or NO_CORRELATION_ID
        return True


class StructuredFormatter(logging.Formatter):
    """Formatter that prefixes log lines with the correlation ID."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = get_correlation_id() or NO_CORRELATION_ID

        base = super().format(record)

        # Prefix for easy grep/filtering
        return f"[{record.correlation_id}] {base}"


def get_logger(name: str) -> logging.Logger:
    """Get a logger with correlation ID support.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not any(isinstance(f, CorrelationIdFilter) for f in logger.filters):
        logger.addFilter(CorrelationIdFilter())

    return logger


def configure_logging(level: str | None = None) -> None:
    """Install the structured formatter on the root logger.

    Args:
        level: Log level name. Defaults to LOG_LEVEL env var or INFO.
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    root = logging.getLogger()
    root.setLevel(level_name)

    if not root.handlers:
        root.addHandler(logging.StreamHandler())

    for handler in root.handlers:
        handler.setFormatter(StructuredFormatter(DEFAULT_LOG_FORMAT))


def log_booking_operation(
    logger: logging.Logger,
    operation: str,
    *,
    unit_id: str,
    period_id: str | None = None,
    kind: str | None = None,
    total_eur: Any | None = None,
    error: str | None = None,
    rejected: bool = False,
    **extra: Any,
) -> None:
    """Log a booking calendar operation with structured context.

    Rejections (expected, user-correctable validation failures) are logged
    at WARNING; errors at ERROR; everything else at INFO.

    Args:
        logger: Logger instance
        operation: Operation name (e.g., "create", "update", "delete")
        unit_id: Unit whose calendar was touched
        period_id: Booking period ID if known
        kind: Period kind (booked/blocked)
        total_eur: Total price if relevant
        error: Error code or message if the operation failed
        rejected: True when the failure is a validation rejection
        **extra: Additional context fields
    """
    context: dict[str, Any] = {"operation": operation, "unit_id": unit_id}

    if period_id:
        context["period_id"] = period_id
    if kind:
        context["kind"] = kind
    if total_eur is not None:
        context["total_eur"] = str(total_eur)
    if error:
        context["error"] = error

    context.update(extra)

    msg_parts = [f"Booking period {operation}"]
    for key, value in context.items():
        if key != "operation":
            msg_parts.append(f"{key}={value}")

    message = " | ".join(msg_parts)

    if error and not rejected:
        logger.error(message, extra=context)
    elif rejected:
        logger.warning(message, extra=context)
    else:
        logger.info(message, extra=context)
