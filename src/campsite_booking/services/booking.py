"""Booking workflow service tying availability, pricing and refunds together."""

import datetime as dt
import threading
import uuid
from collections.abc import Sequence
from typing import TYPE_CHECKING

from campsite_booking.config import EngineSettings, get_settings
from campsite_booking.models import (
    BlockedRange,
    Booking,
    BookingError,
    BookingFailure,
    BookingQuote,
    BookingStatus,
    Campsite,
    DateRange,
    Discount,
    ErrorCode,
    GuestCount,
    RefundResolution,
)
from campsite_booking.utils.logging import get_logger, log_booking_operation

from .availability import AvailabilityService
from .lifecycle import ensure_transition, is_cancelable
from .pricing import PricingService
from .refund_policy_service import RefundPolicyService

if TYPE_CHECKING:
    from campsite_booking.clock import Clock

    from .repositories import BlockedRangeRepository, BookingRepository, CampsiteRepository

logger = get_logger(__name__)


class BookingService:
    """Service for quoting, reserving and cancelling campsite stays.

    Service Dependency Graph:
        PricingService
            └── AvailabilityService
        RefundPolicyService
        CampsiteRepository, BookingRepository, BlockedRangeRepository
    """

    def __init__(
        self,
        campsites: "CampsiteRepository",
        bookings: "BookingRepository",
        blocks: "BlockedRangeRepository",
        clock: "Clock | None" = None,
        settings: EngineSettings | None = None,
    ) -> None:
        """Initialize booking service.

        Args:
            campsites: Campsite repository
            bookings: Booking repository
            blocks: Blocked range repository
            clock: Time source. Defaults to the system clock.
            settings: Engine settings. Defaults to environment settings.
        """
        if clock is None:
            from campsite_booking.clock import SystemClock

            clock = SystemClock()
        self.campsites = campsites
        self.bookings = bookings
        self.blocks = blocks
        self.clock = clock
        self.settings = settings or get_settings()
        self.pricing = PricingService(clock=clock)
        self.availability = AvailabilityService(
            pricing=self.pricing, clock=clock, settings=self.settings
        )
        self.refunds = RefundPolicyService()
        # Serializes check-then-write for reserve and cancel within this process
        self._write_lock = threading.Lock()

    def _generate_booking_id(self, prefix: str = "BKG") -> str:
        """Generate a unique booking ID like BKG-ABC123DEF456."""
        return f"{prefix}-{uuid.uuid4().hex[:12].upper()}"

    def _get_campsite(self, campsite_id: str) -> Campsite:
        campsite = self.campsites.get(campsite_id)
        if campsite is None:
            raise BookingError(ErrorCode.CAMPSITE_NOT_FOUND, details={"campsite_id": campsite_id})
        return campsite

    def quote(
        self,
        campsite_id: str,
        requested_range: DateRange,
        guests: GuestCount,
        discounts: Sequence[Discount] = (),
    ) -> BookingQuote | BookingFailure:
        """Check availability and price a prospective stay.

        Args:
            campsite_id: Campsite being requested
            requested_range: Check-in to check-out dates
            guests: Party composition
            discounts: Candidate discounts

        Returns:
            BookingQuote, or BookingFailure with the first failing rule
        """
        try:
            campsite = self._get_campsite(campsite_id)
        except BookingError as e:
            return e.to_failure()

        availability = self.availability.check_availability(
            campsite_id,
            requested_range,
            guests,
            self.bookings.list_for_campsite(campsite_id),
            self.blocks.list_for_campsite(campsite_id),
            campsite.max_guests,
            pricing=campsite.pricing,
            stay_rules=campsite.stay_rules,
        )
        if not availability.available:
            reason = availability.reason or ErrorCode.DATE_CONFLICT
            details = {}
            if availability.conflicts:
                details["conflicts"] = ",".join(availability.conflicts)
            if availability.alternative_dates:
                details["alternatives"] = ",".join(
                    f"{alt.check_in.isoformat()}/{alt.check_out.isoformat()}"
                    for alt in availability.alternative_dates
                )
            return BookingFailure.from_code(reason, details=details or None)

        price = self.pricing.calculate_price(campsite.pricing, requested_range, discounts)
        if isinstance(price, BookingFailure):
            return price

        return BookingQuote(
            campsite_id=campsite_id,
            availability=availability,
            price=price,
            cancellation_policy=campsite.cancellation_policy,
        )

    def reserve(
        self,
        campsite_id: str,
        requested_range: DateRange,
        guests: GuestCount,
        discounts: Sequence[Discount] = (),
    ) -> Booking | BookingFailure:
        """Create a PENDING booking if the stay is still available.

        Availability is re-checked and the booking saved while holding a
        lock, so two reservations in this process cannot take the same
        nights.
        """
        with self._write_lock:
            quote = self.quote(campsite_id, requested_range, guests, discounts)
            if isinstance(quote, BookingFailure):
                return quote

            booking = Booking(
                booking_id=self._generate_booking_id(),
                campsite_id=campsite_id,
                range=requested_range,
                guests=guests,
                status=BookingStatus.PENDING,
                cancellation_policy=quote.cancellation_policy,
                total_amount=quote.price.total,
                created_at=self.clock.now(),
            )
            self.bookings.save(booking)

        log_booking_operation(
            logger,
            "reserve",
            campsite_id=campsite_id,
            booking_id=booking.booking_id,
            amount_cents=booking.total_amount,
            result=booking.status.value,
        )
        return booking

    def cancel(
        self,
        booking_id: str,
        cancel_at: dt.datetime | None = None,
    ) -> RefundResolution | BookingFailure:
        """Cancel a booking and resolve its refund.

        The status is re-checked when it is written, so two concurrent
        cancellations of the same booking refund it only once.

        Args:
            booking_id: Booking to cancel
            cancel_at: When the cancellation happens. Defaults to now.

        Returns:
            RefundResolution, or BookingFailure (BOOKING_NOT_FOUND,
            ALREADY_CANCELED, INVALID_TRANSITION,
            CANCELLATION_WINDOW_CLOSED)
        """
        cancel_at = cancel_at or self.clock.now()
        with self._write_lock:
            booking = self.bookings.get(booking_id)
            if booking is None:
                return BookingFailure.from_code(
                    ErrorCode.BOOKING_NOT_FOUND, details={"booking_id": booking_id}
                )

            try:
                ensure_transition(booking.status, BookingStatus.CANCELED)
                if not is_cancelable(booking.status, booking.range.start, cancel_at):
                    raise BookingError(
                        ErrorCode.CANCELLATION_WINDOW_CLOSED,
                        details={"check_in": booking.range.start.isoformat()},
                    )
            except BookingError as e:
                log_booking_operation(
                    logger, "cancel", booking_id=booking_id, error=e.code.value
                )
                return e.to_failure()

            resolution = self.refunds.resolve_refund(
                booking.cancellation_policy,
                booking.total_amount,
                booking.range.start,
                cancel_at,
                status=booking.status,
            )
            if isinstance(resolution, BookingFailure):
                return resolution

            try:
                self.bookings.update_status(
                    booking_id,
                    BookingStatus.CANCELED,
                    expected_status=booking.status,
                    canceled_at=cancel_at,
                    refunded_amount=resolution.refund_amount,
                )
            except BookingError as e:
                log_booking_operation(
                    logger, "cancel", booking_id=booking_id, error=e.code.value
                )
                return e.to_failure()

        log_booking_operation(
            logger,
            "cancel",
            campsite_id=booking.campsite_id,
            booking_id=booking_id,
            amount_cents=resolution.refund_amount,
            result=resolution.policy_tier,
        )
        return resolution

    def block_dates(
        self,
        campsite_id: str,
        date_range: DateRange,
        reason: str | None = None,
    ) -> BlockedRange | BookingFailure:
        """Block a campsite's nights (maintenance, owner use, etc)."""
        if not date_range.is_valid:
            return BookingFailure.from_code(ErrorCode.INVALID_RANGE)
        try:
            self._get_campsite(campsite_id)
        except BookingError as e:
            return e.to_failure()

        block = self.blocks.add(campsite_id, date_range, reason)
        log_booking_operation(
            logger,
            "block_dates",
            campsite_id=campsite_id,
            result=block.block_id,
            reason=reason or "",
        )
        return block

    def unblock(self, block_id: str) -> bool:
        """Remove a block. Returns False if it did not exist."""
        removed = self.blocks.remove(block_id)
        log_booking_operation(
            logger, "unblock", result="removed" if removed else "not_found", block_id=block_id
        )
        return removed
