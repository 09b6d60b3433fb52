"""Availability models: reservations, blocks and check results."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from .dates import DateRange
from .enums import OCCUPYING_STATUSES, BookingStatus
from .errors import ErrorCode
from .pricing import NightlyRate


class BlockedRange(BaseModel):
    """Owner- or system-imposed unavailability for a campsite.

    Immutable once created; removed only by an explicit unblock.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    block_id: str = Field(..., description="Unique block ID")
    campsite_id: str = Field(..., description="Reference to Campsite")
    range: DateRange = Field(..., description="Blocked nights")
    reason: str | None = Field(default=None, description="Reason for block")


class ExistingBooking(BaseModel):
    """Snapshot of a booking as seen by the availability checker."""

    model_config = ConfigDict(strict=True, frozen=True)

    booking_id: str = Field(..., description="Unique booking ID")
    campsite_id: str = Field(..., description="Reference to Campsite")
    range: DateRange = Field(..., description="Booked nights")
    status: BookingStatus = Field(..., description="Current booking status")

    @property
    def occupies_dates(self) -> bool:
        return self.status in OCCUPYING_STATUSES


class AlternativeDateRange(BaseModel):
    """Alternative date suggestion when requested dates are unavailable.

    Provides a nearby free range matching the requested stay length.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    check_in: dt.date = Field(..., description="Alternative check-in date")
    check_out: dt.date = Field(..., description="Alternative check-out date")
    nights: int = Field(..., ge=1, description="Number of nights (same as requested)")
    offset_days: int = Field(
        ...,
        description="Days shifted from original dates (negative=earlier, positive=later)",
    )
    direction: str = Field(
        ...,
        pattern="^(earlier|later)$",
        description="Direction of shift: 'earlier' or 'later'",
    )


class AvailabilityResult(BaseModel):
    """Result of checking a requested stay against a campsite's calendar.

    When ``available`` is False, ``reason`` holds the first rule that failed.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    available: bool
    reason: ErrorCode | None = None
    message: str | None = None
    campsite_id: str
    requested_range: DateRange
    nights: tuple[dt.date, ...] = Field(default=(), strict=False)
    nightly_rates: tuple[NightlyRate, ...] | None = Field(default=None, strict=False)
    conflicts: tuple[str, ...] = Field(
        default=(),
        strict=False,
        description="IDs of the bookings and blocks that overlap the request",
    )
    alternative_dates: tuple[AlternativeDateRange, ...] = Field(
        default=(), strict=False
    )
