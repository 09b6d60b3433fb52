"""Repository interfaces for campsite, booking and block data.

The engine never owns persistence. Workflows receive these repositories by
dependency injection; the in-memory implementations back tests and demos.
A production implementation must make "re-check availability, then save
booking" atomic (serializable transaction or conditional write).
"""

import threading
import uuid
from typing import Protocol

from campsite_booking.models import (
    BlockedRange,
    Booking,
    BookingError,
    BookingStatus,
    Campsite,
    DateRange,
    ErrorCode,
    ExistingBooking,
    TERMINAL_CANCELED_STATUSES,
)


class CampsiteRepository(Protocol):
    """Source of campsite pricing, capacity and rules."""

    def get(self, campsite_id: str) -> Campsite | None: ...


class BookingRepository(Protocol):
    """Store of bookings."""

    def get(self, booking_id: str) -> Booking | None: ...

    def list_for_campsite(self, campsite_id: str) -> list[ExistingBooking]: ...

    def save(self, booking: Booking) -> None: ...

    def update_status(
        self,
        booking_id: str,
        status: BookingStatus,
        *,
        expected_status: BookingStatus | None = None,
        **changes: object,
    ) -> Booking: ...


class BlockedRangeRepository(Protocol):
    """Store of blocked date ranges."""

    def list_for_campsite(self, campsite_id: str) -> list[BlockedRange]: ...

    def add(
        self, campsite_id: str, date_range: DateRange, reason: str | None = None
    ) -> BlockedRange: ...

    def remove(self, block_id: str) -> bool: ...


class InMemoryCampsiteRepository:
    """Dict-backed campsite repository."""

    def __init__(self, campsites: list[Campsite] | None = None) -> None:
        self._campsites = {c.campsite_id: c for c in campsites or []}

    def get(self, campsite_id: str) -> Campsite | None:
        return self._campsites.get(campsite_id)

    def put(self, campsite: Campsite) -> None:
        self._campsites[campsite.campsite_id] = campsite


class InMemoryBookingRepository:
    """Dict-backed booking repository.

    A lock serializes writes so that concurrent callers see consistent
    snapshots within a single process.
    """

    def __init__(self, bookings: list[Booking] | None = None) -> None:
        self._lock = threading.Lock()
        self._bookings = {b.booking_id: b for b in bookings or []}

    def get(self, booking_id: str) -> Booking | None:
        with self._lock:
            booking = self._bookings.get(booking_id)
            return booking.model_copy() if booking else None

    def list_for_campsite(self, campsite_id: str) -> list[ExistingBooking]:
        with self._lock:
            return [
                b.to_snapshot()
                for b in self._bookings.values()
                if b.campsite_id == campsite_id
            ]

    def save(self, booking: Booking) -> None:
        with self._lock:
            self._bookings[booking.booking_id] = booking.model_copy()

    def update_status(
        self,
        booking_id: str,
        status: BookingStatus,
        *,
        expected_status: BookingStatus | None = None,
        **changes: object,
    ) -> Booking:
        """Set a booking's status along with any other changed fields.

        With ``expected_status`` the write only happens if the stored status
        still matches it (compare-and-set).

        Raises:
            BookingError: BOOKING_NOT_FOUND if the booking does not exist;
                ALREADY_CANCELED or INVALID_TRANSITION if the stored status
                no longer matches ``expected_status``
        """
        with self._lock:
            booking = self._bookings.get(booking_id)
            if booking is None:
                raise BookingError(ErrorCode.BOOKING_NOT_FOUND, details={"booking_id": booking_id})
            if expected_status is not None and booking.status != expected_status:
                if (
                    status is BookingStatus.CANCELED
                    and booking.status in TERMINAL_CANCELED_STATUSES
                ):
                    code = ErrorCode.ALREADY_CANCELED
                else:
                    code = ErrorCode.INVALID_TRANSITION
                raise BookingError(
                    code,
                    details={
                        "expected": expected_status.value,
                        "actual": booking.status.value,
                    },
                )
            updated = booking.model_copy(update={**changes, "status": status})
            self._bookings[booking_id] = updated
            return updated.model_copy()


class InMemoryBlockedRangeRepository:
    """Dict-backed blocked range repository."""

    def __init__(self, blocks: list[BlockedRange] | None = None) -> None:
        self._lock = threading.Lock()
        self._blocks = {b.block_id: b for b in blocks or []}

    def list_for_campsite(self, campsite_id: str) -> list[BlockedRange]:
        with self._lock:
            return [b for b in self._blocks.values() if b.campsite_id == campsite_id]

    def add(
        self,
        campsite_id: str,
        date_range: DateRange,
        reason: str | None = None,
    ) -> BlockedRange:
        block = BlockedRange(
            block_id=f"BLK-{uuid.uuid4().hex[:12].upper()}",
            campsite_id=campsite_id,
            range=date_range,
            reason=reason,
        )
        with self._lock:
            self._blocks[block.block_id] = block
        return block

    def remove(self, block_id: str) -> bool:
        """Unblock a range. Returns False if the block was not found."""
        with self._lock:
            return self._blocks.pop(block_id, None) is not None
