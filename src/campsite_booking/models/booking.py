"""Booking record and quote models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .availability import AvailabilityResult, ExistingBooking
from .dates import DateRange, GuestCount
from .enums import BookingStatus, CancellationPolicy
from .pricing import PriceBreakdown


class Booking(BaseModel):
    """A booking as held by the persistence collaborator.

    Amounts are stored in cents.
    """

    model_config = ConfigDict(strict=True)

    booking_id: str = Field(..., description="Unique booking ID")
    campsite_id: str = Field(..., description="Reference to Campsite")
    range: DateRange = Field(..., description="Booked nights")
    guests: GuestCount = Field(default_factory=GuestCount)
    status: BookingStatus = Field(default=BookingStatus.PENDING)
    cancellation_policy: CancellationPolicy = Field(
        ..., description="Policy agreed at booking time"
    )
    total_amount: int = Field(..., ge=0, description="Total charged in cents")
    refunded_amount: int = Field(default=0, ge=0, description="Refunded in cents")
    created_at: datetime | None = Field(default=None, description="Creation timestamp")
    canceled_at: datetime | None = Field(default=None, description="Cancellation timestamp")

    def to_snapshot(self) -> ExistingBooking:
        """Reduce to the fields the availability checker needs."""
        return ExistingBooking(
            booking_id=self.booking_id,
            campsite_id=self.campsite_id,
            range=self.range,
            status=self.status,
        )


class BookingQuote(BaseModel):
    """Availability and price for a prospective stay."""

    model_config = ConfigDict(strict=True, frozen=True)

    success: bool = True
    campsite_id: str
    availability: AvailabilityResult
    price: PriceBreakdown
    cancellation_policy: CancellationPolicy
