"""Pricing service for stay price calculation."""

import datetime as dt
from collections.abc import Sequence
from typing import TYPE_CHECKING

from campsite_booking.models import (
    AppliedDiscount,
    BookingFailure,
    DateRange,
    Discount,
    ErrorCode,
    NightlyRate,
    PriceBreakdown,
    PricingRules,
)
from campsite_booking.utils.logging import get_logger, log_booking_operation
from campsite_booking.utils.money import apply_rate

if TYPE_CHECKING:
    from campsite_booking.clock import Clock

logger = get_logger(__name__)


class PricingService:
    """Service for nightly rates, fees, taxes and discounts.

    Money is integer cents throughout. Service fee, tax and percentage
    discounts are each rounded half-up to whole cents before summing.
    """

    def __init__(self, clock: "Clock | None" = None) -> None:
        """Initialize pricing service.

        Args:
            clock: Time source used for discount lead-time checks.
                Defaults to the system clock.
        """
        if clock is None:
            from campsite_booking.clock import SystemClock

            clock = SystemClock()
        self.clock = clock

    def nightly_rates(
        self,
        rules: PricingRules,
        requested_range: DateRange,
    ) -> list[NightlyRate]:
        """Get the price of each night in a range.

        A night inside a seasonal range uses that season's rate; any other
        night uses the base rate.

        Args:
            rules: Campsite pricing rules
            requested_range: Nights to price (end exclusive)

        Returns:
            One NightlyRate per night, in date order
        """
        rates = []
        for night in requested_range.dates():
            season = rules.season_for_night(night)
            rates.append(
                NightlyRate(
                    date=night,
                    price=season.price_per_night if season else rules.price_per_night,
                    season_name=season.name if season else None,
                )
            )
        return rates

    def calculate_price(
        self,
        rules: PricingRules,
        requested_range: DateRange,
        discounts: Sequence[Discount] = (),
    ) -> PriceBreakdown | BookingFailure:
        """Calculate the price breakdown for a stay.

        Args:
            rules: Campsite pricing rules
            requested_range: Check-in to check-out dates
            discounts: Candidate discounts; only eligible ones are applied

        Returns:
            PriceBreakdown, or BookingFailure(INVALID_RANGE) when the range
            has no nights
        """
        nights = requested_range.nights
        if nights <= 0:
            log_booking_operation(
                logger,
                "calculate_price",
                error=ErrorCode.INVALID_RANGE.value,
                nights=nights,
            )
            return BookingFailure.from_code(
                ErrorCode.INVALID_RANGE,
                details={
                    "start": requested_range.start.isoformat(),
                    "end": requested_range.end.isoformat(),
                },
            )

        nightly = self.nightly_rates(rules, requested_range)
        subtotal = sum(rate.price for rate in nightly)
        service_fee = apply_rate(subtotal, rules.service_fee_rate)
        tax_amount = apply_rate(subtotal + service_fee + rules.cleaning_fee, rules.tax_rate)
        pre_discount_total = subtotal + rules.cleaning_fee + service_fee + tax_amount

        applied = self._apply_discounts(discounts, requested_range, subtotal)
        # Discounts never push the total below zero
        discount_total = min(sum(d.amount for d in applied), pre_discount_total)
        total = pre_discount_total - discount_total

        breakdown = PriceBreakdown(
            nights=nights,
            nightly_rates=tuple(nightly),
            subtotal=subtotal,
            cleaning_fee=rules.cleaning_fee,
            service_fee=service_fee,
            tax_rate=rules.tax_rate,
            tax_amount=tax_amount,
            applied_discounts=tuple(applied),
            discount_total=discount_total,
            total=total,
            currency=rules.currency,
        )
        log_booking_operation(
            logger,
            "calculate_price",
            amount_cents=total,
            result="priced",
            nights=nights,
            discounts=len(applied),
        )
        return breakdown

    def is_discount_eligible(
        self,
        discount: Discount,
        requested_range: DateRange,
    ) -> bool:
        """Check a discount's conditions against a stay.

        Lead time is counted in whole days from today (UTC) to check-in.
        """
        if discount.min_nights is not None and requested_range.nights < discount.min_nights:
            return False

        lead_days = (requested_range.start - self.clock.today()).days
        if discount.min_lead_days is not None and lead_days < discount.min_lead_days:
            return False
        if discount.max_lead_days is not None and lead_days > discount.max_lead_days:
            return False

        return True

    def _apply_discounts(
        self,
        discounts: Sequence[Discount],
        requested_range: DateRange,
        subtotal: int,
    ) -> list[AppliedDiscount]:
        """Value each eligible discount in cents."""
        applied = []
        for discount in discounts:
            if not self.is_discount_eligible(discount, requested_range):
                logger.debug("Discount %s not eligible for %s", discount.name, requested_range)
                continue

            if discount.rate is not None:
                amount = apply_rate(subtotal, discount.rate)
            else:
                amount = discount.amount or 0

            applied.append(
                AppliedDiscount(
                    discount_type=discount.discount_type,
                    name=discount.name,
                    code=discount.code,
                    amount=amount,
                )
            )
        return applied

    def minimum_nights_for(
        self,
        rules: PricingRules,
        check_in: dt.date,
        default: int = 1,
    ) -> int:
        """Get the minimum stay for a check-in date.

        A seasonal minimum covering the check-in night overrides ``default``.
        """
        season = rules.season_for_night(check_in)
        if season and season.minimum_nights is not None:
            return season.minimum_nights
        return default
