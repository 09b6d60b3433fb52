"""Utility helpers for the booking engine."""

from .logging import (
    clear_correlation_id,
    configure_logging,
    get_correlation_id,
    get_logger,
    log_booking_operation,
    set_correlation_id,
)
from .money import apply_rate, format_money, percentage_of, round_cents, to_cents

__all__ = [
    "clear_correlation_id",
    "configure_logging",
    "get_correlation_id",
    "get_logger",
    "log_booking_operation",
    "set_correlation_id",
    "apply_rate",
    "format_money",
    "percentage_of",
    "round_cents",
    "to_cents",
]
