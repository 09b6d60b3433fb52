"""Pydantic models for campsite booking engine entities."""

from .availability import (
    AlternativeDateRange,
    AvailabilityResult,
    BlockedRange,
    ExistingBooking,
)
from .booking import Booking, BookingQuote
from .campsite import Campsite, StayRules
from .dates import DateRange, GuestCount, to_utc_date
from .enums import (
    BLOCKING_STATUSES,
    OCCUPYING_STATUSES,
    TERMINAL_CANCELED_STATUSES,
    BookingStatus,
    CancellationPolicy,
    DiscountType,
)
from .errors import (
    ERROR_MESSAGES,
    ERROR_RECOVERY,
    BookingError,
    BookingFailure,
    ErrorCode,
)
from .pricing import (
    AppliedDiscount,
    Discount,
    NightlyRate,
    PriceBreakdown,
    PricingRules,
    SeasonalRate,
)
from .refund import RefundResolution

__all__ = [
    # Enums
    "BookingStatus",
    "CancellationPolicy",
    "DiscountType",
    "BLOCKING_STATUSES",
    "OCCUPYING_STATUSES",
    "TERMINAL_CANCELED_STATUSES",
    # Dates
    "DateRange",
    "GuestCount",
    "to_utc_date",
    # Pricing
    "AppliedDiscount",
    "Discount",
    "NightlyRate",
    "PriceBreakdown",
    "PricingRules",
    "SeasonalRate",
    # Availability
    "AlternativeDateRange",
    "AvailabilityResult",
    "BlockedRange",
    "ExistingBooking",
    # Campsite
    "Campsite",
    "StayRules",
    # Booking
    "Booking",
    "BookingQuote",
    # Refund
    "RefundResolution",
    # Errors
    "BookingError",
    "BookingFailure",
    "ErrorCode",
    "ERROR_MESSAGES",
    "ERROR_RECOVERY",
]
