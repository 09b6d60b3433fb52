"""Structured logging utilities with correlation ID support.

Provides:
- Correlation ID context management for tracing one booking workflow
- Structured logging formatter for consistent log output
- Helper for booking operation logging

Usage:
    from campsite_booking.utils.logging import get_logger, set_correlation_id

    # At the start of a booking workflow:
    set_correlation_id(request_id)

    # In service code:
    logger = get_logger(__name__)
    log_booking_operation(logger, "check_availability", campsite_id="site-1")
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any

# Context variable for correlation ID - thread-safe and async-safe
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def generate_correlation_id() -> str:
    """Generate a new correlation ID.

    Returns:
        UUID-based correlation ID string
    """
    return str(uuid.uuid4())


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set the correlation ID for the current context.

    Args:
        correlation_id: Optional existing correlation ID. If None, generates new one.

    Returns:
        The correlation ID that was set
    """
    cid = correlation_id or generate_correlation_id()
    _correlation_id.set(cid)
    return cid


def get_correlation_id() -> str | None:
    """Get the current correlation ID."""
    return _correlation_id.get()


def clear_correlation_id() -> None:
    """Clear the correlation ID context."""
    _correlation_id.set(None)


class CorrelationIdFilter(logging.Filter):
    """Logging filter that adds correlation_id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "no-correlation-id"
        return True


class StructuredFormatter(logging.Formatter):
    """Formatter for structured log output with correlation ID."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with structured fields.

        Args:
            record: Log record to format

        Returns:
            Formatted log string
        """
        if not hasattr(record, "correlation_id"):
            record.correlation_id = get_correlation_id() or "no-correlation-id"

        base = super().format(record)

        # Correlation ID prefix for easy grep/filtering
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


def configure_logging(level: str | int | None = None) -> None:
    """Install a structured stream handler on the package logger.

    Safe to call more than once; the handler is only added the first time.

    Args:
        level: Logging level. Defaults to the LOG_LEVEL setting.
    """
    if level is None:
        from campsite_booking.config import get_settings

        level = get_settings().log_level

    package_logger = logging.getLogger("campsite_booking")
    package_logger.setLevel(level)

    for handler in package_logger.handlers:
        if isinstance(handler.formatter, StructuredFormatter):
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(StructuredFormatter(DEFAULT_FORMAT))
    handler.addFilter(CorrelationIdFilter())
    package_logger.addHandler(handler)


def log_booking_operation(
    logger: logging.Logger,
    operation: str,
    *,
    campsite_id: str | None = None,
    booking_id: str | None = None,
    amount_cents: int | None = None,
    result: str | None = None,
    error: str | None = None,
    **extra: Any,
) -> None:
    """Log a booking engine operation with structured context.

    Args:
        logger: Logger instance
        operation: Operation name (e.g., "check_availability", "resolve_refund")
        campsite_id: Campsite ID if available
        booking_id: Booking ID if available
        amount_cents: Amount in cents if relevant
        result: Outcome of the operation (e.g., "available", "DATE_CONFLICT")
        error: Error code or message if the operation failed
        **extra: Additional context fields
    """
    context: dict[str, Any] = {"operation": operation}

    if campsite_id:
        context["campsite_id"] = campsite_id
    if booking_id:
        context["booking_id"] = booking_id
    if amount_cents is not None:
        context["amount_cents"] = amount_cents
    if result:
        context["result"] = result
    if error:
        context["error"] = error

    context.update(extra)

    msg_parts = [f"Booking operation: {operation}"]
    for key, value in context.items():
        if key != "operation":
            msg_parts.append(f"{key}={value}")

    message = " | ".join(msg_parts)

    # Rejections are expected business outcomes, not faults
    if error:
        logger.warning(message, extra=context)
    else:
        logger.info(message, extra=context)
