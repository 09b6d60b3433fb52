"""Standard error codes for the booking engine.

Every engine operation reports validation failures with one of these codes
instead of raising, so booking workflows can map them to user-facing
messages.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """Standard error codes returned by the booking engine."""

    # Date and guest validation
    INVALID_RANGE = "INVALID_RANGE"
    PAST_DATE = "PAST_DATE"
    OVER_CAPACITY = "OVER_CAPACITY"
    DATE_CONFLICT = "DATE_CONFLICT"
    ADULT_REQUIRED = "ADULT_REQUIRED"
    PETS_NOT_ALLOWED = "PETS_NOT_ALLOWED"
    MINIMUM_NIGHTS_NOT_MET = "MINIMUM_NIGHTS_NOT_MET"
    MAXIMUM_NIGHTS_EXCEEDED = "MAXIMUM_NIGHTS_EXCEEDED"

    # Cancellation and lifecycle
    ALREADY_CANCELED = "ALREADY_CANCELED"
    CANCELLATION_WINDOW_CLOSED = "CANCELLATION_WINDOW_CLOSED"
    INVALID_TRANSITION = "INVALID_TRANSITION"

    # Lookups against the persistence collaborator
    CAMPSITE_NOT_FOUND = "CAMPSITE_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_RANGE: "Check-out date must be after check-in date",
    ErrorCode.PAST_DATE: "Check-in date cannot be in the past",
    ErrorCode.OVER_CAPACITY: "Number of guests exceeds the campsite capacity",
    ErrorCode.DATE_CONFLICT: "The requested dates are not available",
    ErrorCode.ADULT_REQUIRED: "At least one adult is required for a booking",
    ErrorCode.PETS_NOT_ALLOWED: "Pets are not allowed at this campsite",
    ErrorCode.MINIMUM_NIGHTS_NOT_MET: "Minimum stay requirement not met",
    ErrorCode.MAXIMUM_NIGHTS_EXCEEDED: "Stay exceeds the maximum number of nights",
    ErrorCode.ALREADY_CANCELED: "Booking has already been canceled",
    ErrorCode.CANCELLATION_WINDOW_CLOSED: "Booking can no longer be canceled after check-in",
    ErrorCode.INVALID_TRANSITION: "Booking cannot move to the requested status",
    ErrorCode.CAMPSITE_NOT_FOUND: "Campsite not found",
    ErrorCode.BOOKING_NOT_FOUND: "Booking not found",
}

# Recovery suggestions for callers
ERROR_RECOVERY: dict[ErrorCode, str] = {
    ErrorCode.INVALID_RANGE: "Pick a check-out date after the check-in date",
    ErrorCode.PAST_DATE: "Pick a check-in date from today onwards",
    ErrorCode.OVER_CAPACITY: "Reduce the party size or choose a larger campsite",
    ErrorCode.DATE_CONFLICT: "Offer the suggested alternative dates",
    ErrorCode.ADULT_REQUIRED: "Add an adult to the booking",
    ErrorCode.PETS_NOT_ALLOWED: "Remove pets from the booking or choose another campsite",
    ErrorCode.MINIMUM_NIGHTS_NOT_MET: "Extend the stay to the minimum number of nights",
    ErrorCode.MAXIMUM_NIGHTS_EXCEEDED: "Shorten the stay or split it into several bookings",
    ErrorCode.ALREADY_CANCELED: "No further action is needed",
    ErrorCode.CANCELLATION_WINDOW_CLOSED: "Contact the campsite about an early departure",
    ErrorCode.INVALID_TRANSITION: "Check the booking's current status",
    ErrorCode.CAMPSITE_NOT_FOUND: "Verify the campsite ID",
    ErrorCode.BOOKING_NOT_FOUND: "Verify the booking ID",
}


class BookingFailure(BaseModel):
    """Failure variant returned by engine operations.

    Carries the error code together with a message and recovery hint so
    callers can render it without their own lookup tables.
    """

    model_config = ConfigDict(strict=True)

    success: bool = False
    error_code: ErrorCode
    message: str
    recovery: str
    details: Optional[dict[str, str]] = None

    @classmethod
    def from_code(
        cls,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ) -> "BookingFailure":
        """Create a BookingFailure from an error code.

        Args:
            code: The error code
            details: Optional additional context about the error

        Returns:
            A BookingFailure with the message and recovery hint for the code.
        """
        return cls(
            error_code=code,
            message=ERROR_MESSAGES[code],
            recovery=ERROR_RECOVERY[code],
            details=details,
        )


class BookingError(Exception):
    """Exception raised by engine internals.

    Public engine operations catch it and return a BookingFailure.
    """

    def __init__(
        self,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ):
        self.code = code
        self.message = ERROR_MESSAGES[code]
        self.recovery = ERROR_RECOVERY[code]
        self.details = details
        super().__init__(self.message)

    def to_failure(self) -> BookingFailure:
        """Convert this exception to a BookingFailure result."""
        return BookingFailure.from_code(self.code, self.details)
