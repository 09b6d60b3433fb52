"""Enumeration types for campsite booking data models."""

from enum import Enum


class BookingStatus(str, Enum):
    """Status of a campsite booking."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    CANCELED = "canceled"
    COMPLETED = "completed"
    NO_SHOW = "no_show"
    REFUNDED = "refunded"


# Statuses that hold a campsite's dates against new reservations
BLOCKING_STATUSES: frozenset[BookingStatus] = frozenset(
    {
        BookingStatus.PENDING,
        BookingStatus.CONFIRMED,
        BookingStatus.CHECKED_IN,
    }
)

# A checked-out stay still occupies the exact range it was booked for
OCCUPYING_STATUSES: frozenset[BookingStatus] = BLOCKING_STATUSES | {
    BookingStatus.CHECKED_OUT
}

TERMINAL_CANCELED_STATUSES: frozenset[BookingStatus] = frozenset(
    {BookingStatus.CANCELED, BookingStatus.REFUNDED}
)


class CancellationPolicy(str, Enum):
    """Cancellation policy tier attached to a campsite."""

    FLEXIBLE = "flexible"  # Full refund up to 1 day before
    MODERATE = "moderate"  # Full refund up to 5 days before, 50% after
    STRICT = "strict"  # 50% refund up to 7 days before
    SUPER_STRICT = "super_strict"  # No refunds


class DiscountType(str, Enum):
    """Kind of discount offered on a stay."""

    EARLY_BIRD = "early_bird"
    LONG_STAY = "long_stay"
    LAST_MINUTE = "last_minute"
    SEASONAL = "seasonal"
    COUPON = "coupon"
    MEMBERSHIP = "membership"
