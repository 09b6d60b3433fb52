"""Integration tests for the complete booking flow.

Walks a stay through the engine the way a booking workflow would:
1. Quote the stay (availability + price)
2. Reserve it
3. Confirm, check in, check out
4. Cancel a second stay and resolve its refund

Uses the in-memory repositories and a fixed clock; nothing is mocked.
"""

import datetime as dt
from decimal import Decimal

import pytest

from campsite_booking.clock import FixedClock
from campsite_booking.config import EngineSettings
from campsite_booking.models import (
    Booking,
    BookingFailure,
    BookingQuote,
    BookingStatus,
    Campsite,
    CancellationPolicy,
    DateRange,
    Discount,
    DiscountType,
    ErrorCode,
    GuestCount,
    PricingRules,
    RefundResolution,
)
from campsite_booking.services import (
    BookingService,
    InMemoryBlockedRangeRepository,
    InMemoryBookingRepository,
    InMemoryCampsiteRepository,
    ensure_transition,
)
from campsite_booking.utils import clear_correlation_id, set_correlation_id

pytestmark = pytest.mark.integration

CAMPSITE_ID = "site-pine-ridge"


@pytest.fixture
def flow_clock() -> FixedClock:
    return FixedClock(dt.datetime(2026, 5, 1, 8, 0, tzinfo=dt.UTC))


@pytest.fixture
def bookings() -> InMemoryBookingRepository:
    return InMemoryBookingRepository()


@pytest.fixture
def service(flow_clock: FixedClock, bookings: InMemoryBookingRepository) -> BookingService:
    """Engine for a three-person site with a strict policy."""
    campsite = Campsite(
        campsite_id=CAMPSITE_ID,
        name="Pine Ridge",
        max_guests=3,
        pricing=PricingRules(
            price_per_night=10000,
            cleaning_fee=5000,
            service_fee_rate=Decimal("0.1"),
            tax_rate=Decimal("0.08"),
        ),
        cancellation_policy=CancellationPolicy.STRICT,
    )
    return BookingService(
        campsites=InMemoryCampsiteRepository([campsite]),
        bookings=bookings,
        blocks=InMemoryBlockedRangeRepository(),
        clock=flow_clock,
        settings=EngineSettings(),
    )


def advance_status(
    bookings: InMemoryBookingRepository, booking_id: str, target: BookingStatus
) -> Booking:
    """Move a stored booking to target if the lifecycle allows it."""
    current = bookings.get(booking_id)
    assert current is not None
    ensure_transition(current.status, target)
    return bookings.update_status(booking_id, target)


class TestBookingFlow:
    """End-to-end stay lifecycle."""

    def test_quote_reserve_and_stay(
        self,
        service: BookingService,
        bookings: InMemoryBookingRepository,
    ) -> None:
        """A stay goes from quote to completed."""
        set_correlation_id("flow-test")
        try:
            requested = DateRange(start=dt.date(2026, 6, 1), end=dt.date(2026, 6, 4))
            guests = GuestCount(adults=2, children=1)

            quote = service.quote(CAMPSITE_ID, requested, guests)
            assert isinstance(quote, BookingQuote)
            assert quote.price.total == 41040

            booking = service.reserve(CAMPSITE_ID, requested, guests)
            assert isinstance(booking, Booking)
            assert booking.total_amount == quote.price.total
            assert booking.cancellation_policy == CancellationPolicy.STRICT

            for status in (
                BookingStatus.CONFIRMED,
                BookingStatus.CHECKED_IN,
                BookingStatus.CHECKED_OUT,
            ):
                booking = advance_status(bookings, booking.booking_id, status)

            # A checked-out stay still holds its nights
            again = service.quote(CAMPSITE_ID, requested, GuestCount())
            assert isinstance(again, BookingFailure)
            assert again.error_code == ErrorCode.DATE_CONFLICT

            booking = advance_status(bookings, booking.booking_id, BookingStatus.COMPLETED)
            assert booking.status == BookingStatus.COMPLETED

            late = service.cancel(booking.booking_id)
            assert isinstance(late, BookingFailure)
            assert late.error_code == ErrorCode.INVALID_TRANSITION
        finally:
            clear_correlation_id()

    def test_reserve_with_discount_then_cancel(
        self,
        service: BookingService,
        bookings: InMemoryBookingRepository,
        flow_clock: FixedClock,
    ) -> None:
        """An early-bird stay cancelled 10 days out gets half back under STRICT."""
        requested = DateRange(start=dt.date(2026, 7, 15), end=dt.date(2026, 7, 18))
        early_bird = [
            Discount(
                discount_type=DiscountType.EARLY_BIRD,
                name="Early Bird",
                rate=Decimal("0.1"),
                min_lead_days=60,
            )
        ]

        booking = service.reserve(CAMPSITE_ID, requested, GuestCount(), early_bird)
        assert isinstance(booking, Booking)
        # 41040 less 10% of the 30000 subtotal
        assert booking.total_amount == 38040

        advance_status(bookings, booking.booking_id, BookingStatus.CONFIRMED)
        flow_clock.advance(days=65)

        refund = service.cancel(booking.booking_id)
        assert isinstance(refund, RefundResolution)
        assert refund.days_until_check_in == 10
        assert refund.refund_percentage == 50
        assert refund.refund_amount == 19020

        stored = bookings.get(booking.booking_id)
        assert stored is not None
        assert stored.status == BookingStatus.CANCELED

        # Dates are free again and the refund can be settled
        assert isinstance(service.quote(CAMPSITE_ID, requested, GuestCount()), BookingQuote)
        settled = advance_status(bookings, booking.booking_id, BookingStatus.REFUNDED)
        assert settled.status == BookingStatus.REFUNDED

        again = service.cancel(booking.booking_id)
        assert isinstance(again, BookingFailure)
        assert again.error_code == ErrorCode.ALREADY_CANCELED
