"""Pytest configuration and fixtures for campsite booking engine tests.

This module provides reusable fixtures for testing:
- A fixed UTC clock so "today" is deterministic
- Sample pricing rules, campsites and bookings
- In-memory repositories and a wired BookingService
"""

import datetime as dt
import os
from decimal import Decimal
from typing import Generator

import pytest

# === Environment Setup ===

# Pin settings before the engine reads them
os.environ.setdefault("BOOKING_CURRENCY", "USD")
os.environ.setdefault("BOOKING_ALTERNATIVE_WINDOW_DAYS", "14")
os.environ.setdefault("BOOKING_MAX_ALTERNATIVES", "3")

from campsite_booking.clock import FixedClock  # noqa: E402
from campsite_booking.config import EngineSettings, reset_settings  # noqa: E402
from campsite_booking.models import (  # noqa: E402
    Booking,
    BookingStatus,
    Campsite,
    CancellationPolicy,
    DateRange,
    GuestCount,
    PricingRules,
    SeasonalRate,
    StayRules,
)
from campsite_booking.services import (  # noqa: E402
    AvailabilityService,
    BookingService,
    InMemoryBlockedRangeRepository,
    InMemoryBookingRepository,
    InMemoryCampsiteRepository,
    PricingService,
    RefundPolicyService,
)

CAMPSITE_ID = "site-redwood-hollow"


def days(start: dt.date, end: dt.date) -> DateRange:
    """Shorthand for building a DateRange in tests."""
    return DateRange(start=start, end=end)


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset cached settings before and after each test.

    Tests that patch environment variables get a freshly read
    EngineSettings instead of a value cached by an earlier test.
    """
    reset_settings()
    yield
    reset_settings()


# === Engine Fixtures ===


@pytest.fixture
def clock() -> FixedClock:
    """Clock frozen at 09:00 UTC on Jan 1, 2026."""
    return FixedClock(dt.datetime(2026, 1, 1, 9, 0, tzinfo=dt.UTC))


@pytest.fixture
def settings() -> EngineSettings:
    """Explicit settings independent of the environment."""
    return EngineSettings(currency="USD", alternative_window_days=14, max_alternatives=3)


@pytest.fixture
def pricing_service(clock: FixedClock) -> PricingService:
    return PricingService(clock=clock)


@pytest.fixture
def availability_service(
    pricing_service: PricingService,
    clock: FixedClock,
    settings: EngineSettings,
) -> AvailabilityService:
    """Create AvailabilityService with a fixed clock."""
    return AvailabilityService(pricing=pricing_service, clock=clock, settings=settings)


@pytest.fixture
def refund_service() -> RefundPolicyService:
    return RefundPolicyService()


# === Sample Data Fixtures ===


@pytest.fixture
def base_rules() -> PricingRules:
    """$100/night, $50 cleaning, 10% service fee, 8% tax."""
    return PricingRules(
        price_per_night=10000,
        cleaning_fee=5000,
        service_fee_rate=Decimal("0.1"),
        tax_rate=Decimal("0.08"),
    )


@pytest.fixture
def seasonal_rules() -> PricingRules:
    """Base $100/night with a one-night $150 festival rate on Jan 11."""
    return PricingRules(
        price_per_night=10000,
        cleaning_fee=5000,
        service_fee_rate=Decimal("0.1"),
        tax_rate=Decimal("0.08"),
        seasonal_rates=(
            SeasonalRate(
                range=days(dt.date(2026, 1, 11), dt.date(2026, 1, 12)),
                price_per_night=15000,
                name="Lantern Festival",
            ),
            SeasonalRate(
                range=days(dt.date(2026, 7, 1), dt.date(2026, 9, 1)),
                price_per_night=12500,
                name="High Season",
                minimum_nights=3,
            ),
        ),
    )


@pytest.fixture
def sample_campsite(seasonal_rules: PricingRules) -> Campsite:
    """A four-person campsite with the moderate cancellation policy."""
    return Campsite(
        campsite_id=CAMPSITE_ID,
        name="Redwood Hollow Campground",
        max_guests=4,
        pricing=seasonal_rules,
        stay_rules=StayRules(minimum_nights=1, maximum_nights=14, pets_allowed=False),
        cancellation_policy=CancellationPolicy.MODERATE,
    )


@pytest.fixture
def sample_booking() -> Booking:
    """Confirmed booking for Jan 13-15, 2026."""
    return Booking(
        booking_id="BKG-EXISTING0001",
        campsite_id=CAMPSITE_ID,
        range=days(dt.date(2026, 1, 13), dt.date(2026, 1, 15)),
        guests=GuestCount(adults=2),
        status=BookingStatus.CONFIRMED,
        cancellation_policy=CancellationPolicy.MODERATE,
        total_amount=41040,
    )


@pytest.fixture
def booking_repo(sample_booking: Booking) -> InMemoryBookingRepository:
    return InMemoryBookingRepository([sample_booking])


@pytest.fixture
def block_repo() -> InMemoryBlockedRangeRepository:
    return InMemoryBlockedRangeRepository()


@pytest.fixture
def booking_service(
    sample_campsite: Campsite,
    booking_repo: InMemoryBookingRepository,
    block_repo: InMemoryBlockedRangeRepository,
    clock: FixedClock,
    settings: EngineSettings,
) -> BookingService:
    """BookingService wired to in-memory repositories."""
    return BookingService(
        campsites=InMemoryCampsiteRepository([sample_campsite]),
        bookings=booking_repo,
        blocks=block_repo,
        clock=clock,
        settings=settings,
    )
