"""Availability service for checking requested stays."""

import datetime as dt
from collections.abc import Iterable
from typing import TYPE_CHECKING

from campsite_booking.config import EngineSettings, get_settings
from campsite_booking.models import (
    ERROR_MESSAGES,
    AlternativeDateRange,
    AvailabilityResult,
    BlockedRange,
    BookingError,
    DateRange,
    ErrorCode,
    ExistingBooking,
    GuestCount,
    PricingRules,
    StayRules,
)
from campsite_booking.utils.logging import get_logger, log_booking_operation

from .pricing import PricingService

if TYPE_CHECKING:
    from campsite_booking.clock import Clock

logger = get_logger(__name__)


class AvailabilityService:
    """Service for availability checking against a calendar snapshot.

    Works only on the bookings and blocks passed in; it holds no ledger.
    The result is a pre-flight answer: whoever writes the reservation must
    re-check availability inside the same transaction as the write.
    """

    def __init__(
        self,
        pricing: PricingService | None = None,
        clock: "Clock | None" = None,
        settings: EngineSettings | None = None,
    ) -> None:
        """Initialize availability service.

        Args:
            pricing: Pricing service used for per-night rates
            clock: Time source for "today" (UTC). Defaults to system clock.
            settings: Engine settings. Defaults to environment settings.
        """
        if clock is None:
            from campsite_booking.clock import SystemClock

            clock = SystemClock()
        self.clock = clock
        self.pricing = pricing or PricingService(clock=clock)
        self.settings = settings or get_settings()

    def check_availability(
        self,
        campsite_id: str,
        requested_range: DateRange,
        guests: GuestCount,
        existing_bookings: Iterable[ExistingBooking],
        blocked_ranges: Iterable[BlockedRange],
        campsite_capacity: int,
        *,
        pricing: PricingRules | None = None,
        stay_rules: StayRules | None = None,
        suggest_alternatives: bool = True,
    ) -> AvailabilityResult:
        """Check whether a stay can be booked.

        Rules are checked in order and the first failure is reported:
        range, past date, adults, capacity, pets, stay length, conflicts.

        Args:
            campsite_id: Campsite being requested
            requested_range: Check-in to check-out dates
            guests: Party composition
            existing_bookings: Bookings snapshot (any campsite, any status)
            blocked_ranges: Blocked ranges snapshot (any campsite)
            campsite_capacity: Maximum adults + children
            pricing: Pricing rules; enables per-night prices and seasonal
                minimum stays
            stay_rules: Stay length and pet rules, if enforced
            suggest_alternatives: Suggest nearby free dates on conflict

        Returns:
            AvailabilityResult with nights (and prices) or a failure reason
        """
        occupied = self._occupied_ranges(campsite_id, existing_bookings, blocked_ranges)

        try:
            self._validate_request(
                requested_range, guests, campsite_capacity, pricing, stay_rules
            )
        except BookingError as e:
            return self._unavailable(campsite_id, requested_range, e)

        conflicts = [
            conflict_id
            for conflict_id, occupied_range in occupied
            if occupied_range.overlaps(requested_range)
        ]
        if conflicts:
            alternatives: list[AlternativeDateRange] = []
            if suggest_alternatives:
                alternatives = self.suggest_alternative_dates(
                    requested_range,
                    [r for _, r in occupied],
                    pricing=pricing,
                    stay_rules=stay_rules,
                )
            return self._unavailable(
                campsite_id,
                requested_range,
                BookingError(ErrorCode.DATE_CONFLICT, details={"conflicts": ",".join(conflicts)}),
                conflicts=conflicts,
                alternatives=alternatives,
            )

        nightly_rates = None
        if pricing is not None:
            nightly_rates = tuple(self.pricing.nightly_rates(pricing, requested_range))

        log_booking_operation(
            logger,
            "check_availability",
            campsite_id=campsite_id,
            result="available",
            nights=requested_range.nights,
        )
        return AvailabilityResult(
            available=True,
            campsite_id=campsite_id,
            requested_range=requested_range,
            nights=tuple(requested_range.dates()),
            nightly_rates=nightly_rates,
        )

    def _validate_request(
        self,
        requested_range: DateRange,
        guests: GuestCount,
        campsite_capacity: int,
        pricing: PricingRules | None,
        stay_rules: StayRules | None,
    ) -> None:
        """Raise BookingError for the first rule the request breaks."""
        if not requested_range.is_valid:
            raise BookingError(ErrorCode.INVALID_RANGE)

        today = self.clock.today()
        if requested_range.start < today:
            raise BookingError(
                ErrorCode.PAST_DATE, details={"today": today.isoformat()}
            )

        if guests.adults < 1:
            raise BookingError(ErrorCode.ADULT_REQUIRED)

        if guests.total_guests > campsite_capacity:
            raise BookingError(
                ErrorCode.OVER_CAPACITY,
                details={
                    "requested": str(guests.total_guests),
                    "capacity": str(campsite_capacity),
                },
            )

        if stay_rules is not None and guests.pets > 0 and not stay_rules.pets_allowed:
            raise BookingError(ErrorCode.PETS_NOT_ALLOWED)

        self._check_stay_length(requested_range, pricing, stay_rules)

    def _check_stay_length(
        self,
        requested_range: DateRange,
        pricing: PricingRules | None,
        stay_rules: StayRules | None,
    ) -> None:
        """Raise BookingError if the stay is shorter or longer than allowed.

        A seasonal minimum in effect on the check-in night replaces the
        campsite's own minimum.
        """
        minimum = stay_rules.minimum_nights if stay_rules else 1
        if pricing is not None:
            minimum = self.pricing.minimum_nights_for(pricing, requested_range.start, minimum)
        if requested_range.nights < minimum:
            raise BookingError(
                ErrorCode.MINIMUM_NIGHTS_NOT_MET,
                details={
                    "requested": str(requested_range.nights),
                    "minimum": str(minimum),
                },
            )

        if (
            stay_rules is not None
            and stay_rules.maximum_nights is not None
            and requested_range.nights > stay_rules.maximum_nights
        ):
            raise BookingError(
                ErrorCode.MAXIMUM_NIGHTS_EXCEEDED,
                details={
                    "requested": str(requested_range.nights),
                    "maximum": str(stay_rules.maximum_nights),
                },
            )

    def _unavailable(
        self,
        campsite_id: str,
        requested_range: DateRange,
        error: BookingError,
        conflicts: list[str] | None = None,
        alternatives: list[AlternativeDateRange] | None = None,
    ) -> AvailabilityResult:
        log_booking_operation(
            logger,
            "check_availability",
            campsite_id=campsite_id,
            error=error.code.value,
            start=requested_range.start.isoformat(),
            end=requested_range.end.isoformat(),
        )
        return AvailabilityResult(
            available=False,
            reason=error.code,
            message=ERROR_MESSAGES[error.code],
            campsite_id=campsite_id,
            requested_range=requested_range,
            conflicts=tuple(conflicts or ()),
            alternative_dates=tuple(alternatives or ()),
        )

    def _occupied_ranges(
        self,
        campsite_id: str,
        existing_bookings: Iterable[ExistingBooking],
        blocked_ranges: Iterable[BlockedRange],
    ) -> list[tuple[str, DateRange]]:
        """Collect (id, range) pairs that hold this campsite's nights."""
        occupied = [
            (booking.booking_id, booking.range)
            for booking in existing_bookings
            if booking.campsite_id == campsite_id and booking.occupies_dates
        ]
        occupied.extend(
            (block.block_id, block.range)
            for block in blocked_ranges
            if block.campsite_id == campsite_id
        )
        return occupied

    def suggest_alternative_dates(
        self,
        requested_range: DateRange,
        occupied: list[DateRange],
        search_window_days: int | None = None,
        max_suggestions: int | None = None,
        *,
        pricing: PricingRules | None = None,
        stay_rules: StayRules | None = None,
    ) -> list[AlternativeDateRange]:
        """Find free ranges of the same length near the requested dates.

        Tries one day earlier, one day later, two days earlier, and so on,
        never suggesting a check-in before today. With ``pricing`` or
        ``stay_rules``, candidates that break the stay-length rules for their
        own check-in night (such as a seasonal minimum) are skipped.

        Args:
            requested_range: Originally requested stay
            occupied: Ranges already taken on this campsite
            search_window_days: How many days before/after to search
            max_suggestions: Maximum number of alternatives to return
            pricing: Pricing rules whose seasonal minimums apply
            stay_rules: Campsite minimum and maximum stay

        Returns:
            Alternatives ordered by distance from the original request
        """
        window = (
            self.settings.alternative_window_days
            if search_window_days is None
            else search_window_days
        )
        limit = self.settings.max_alternatives if max_suggestions is None else max_suggestions
        nights = requested_range.nights
        today = self.clock.today()
        suggestions: list[AlternativeDateRange] = []

        if nights <= 0 or limit <= 0:
            return suggestions

        def is_free(candidate: DateRange) -> bool:
            return not any(candidate.overlaps(taken) for taken in occupied)

        def fits_stay_rules(candidate: DateRange) -> bool:
            try:
                self._check_stay_length(candidate, pricing, stay_rules)
            except BookingError:
                return False
            return True

        for offset in range(1, window + 1):
            for signed_offset, direction in ((-offset, "earlier"), (offset, "later")):
                if len(suggestions) >= limit:
                    return suggestions

                candidate = requested_range.shifted(signed_offset)
                if (
                    candidate.start < today
                    or not is_free(candidate)
                    or not fits_stay_rules(candidate)
                ):
                    continue

                suggestions.append(
                    AlternativeDateRange(
                        check_in=candidate.start,
                        check_out=candidate.end,
                        nights=nights,
                        offset_days=signed_offset,
                        direction=direction,
                    )
                )

        return suggestions
