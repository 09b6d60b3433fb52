"""Booking status lifecycle rules."""

import datetime as dt

from campsite_booking.models import (
    BookingError,
    BookingStatus,
    ErrorCode,
    TERMINAL_CANCELED_STATUSES,
)

ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELED}),
    BookingStatus.CONFIRMED: frozenset(
        {BookingStatus.CHECKED_IN, BookingStatus.CANCELED, BookingStatus.NO_SHOW}
    ),
    BookingStatus.CHECKED_IN: frozenset({BookingStatus.CHECKED_OUT}),
    BookingStatus.CHECKED_OUT: frozenset({BookingStatus.COMPLETED}),
    BookingStatus.CANCELED: frozenset({BookingStatus.REFUNDED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.NO_SHOW: frozenset(),
    BookingStatus.REFUNDED: frozenset(),
}


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def ensure_transition(current: BookingStatus, target: BookingStatus) -> None:
    """Raise BookingError if a booking may not move from current to target."""
    if current in TERMINAL_CANCELED_STATUSES and target is BookingStatus.CANCELED:
        raise BookingError(ErrorCode.ALREADY_CANCELED, details={"status": current.value})
    if not can_transition(current, target):
        raise BookingError(
            ErrorCode.INVALID_TRANSITION,
            details={"from": current.value, "to": target.value},
        )


def is_active(status: BookingStatus) -> bool:
    """Confirmed or currently on site."""
    return status in (BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN)


def is_past(status: BookingStatus) -> bool:
    return status in (BookingStatus.COMPLETED, BookingStatus.CHECKED_OUT)


def is_cancelable(status: BookingStatus, check_in: dt.date, now: dt.datetime) -> bool:
    """Whether a booking can still be cancelled.

    Only pending or confirmed bookings whose check-in (UTC midnight) is
    still ahead can be cancelled.
    """
    if not can_transition(status, BookingStatus.CANCELED):
        return False
    check_in_at = dt.datetime.combine(check_in, dt.time.min, tzinfo=dt.UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=dt.UTC)
    return now < check_in_at
