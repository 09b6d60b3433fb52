"""Refund policy service for calculating refund amounts.

Each cancellation policy maps "days until check-in" to a refund percentage:
- FLEXIBLE: 1+ days before check-in = 100%, otherwise 0%
- MODERATE: 5+ days before check-in = 100%, otherwise 50%
- STRICT: 7+ days before check-in = 50%, otherwise 0%
- SUPER_STRICT: never refunded

Days until check-in are rounded up, so cancelling at 10:00 the day before a
check-in still counts as one day. Check-in is taken to start at UTC midnight.
All amounts are in cents to avoid floating-point issues.
"""

import datetime as dt
import math
from typing import NamedTuple

from campsite_booking.models import (
    TERMINAL_CANCELED_STATUSES,
    BookingFailure,
    BookingStatus,
    CancellationPolicy,
    ErrorCode,
    RefundResolution,
)
from campsite_booking.utils.logging import get_logger, log_booking_operation
from campsite_booking.utils.money import percentage_of

logger = get_logger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


class RefundTier(NamedTuple):
    """Refund rule for one cancellation policy."""

    threshold_days: int | None  # None = threshold can never be met
    refund_percent_met: int
    refund_percent_else: int


POLICY_TIERS: dict[CancellationPolicy, RefundTier] = {
    CancellationPolicy.FLEXIBLE: RefundTier(1, 100, 0),
    CancellationPolicy.MODERATE: RefundTier(5, 100, 50),
    CancellationPolicy.STRICT: RefundTier(7, 50, 0),
    CancellationPolicy.SUPER_STRICT: RefundTier(None, 0, 0),
}


def _as_utc_datetime(value: dt.date | dt.datetime) -> dt.datetime:
    if isinstance(value, dt.datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=dt.UTC)
        return value.astimezone(dt.UTC)
    return dt.datetime.combine(value, dt.time.min, tzinfo=dt.UTC)


def days_until_check_in(
    check_in: dt.date | dt.datetime,
    cancel_at: dt.date | dt.datetime,
) -> int:
    """Whole days from cancellation to check-in, rounded up and never negative."""
    delta = _as_utc_datetime(check_in) - _as_utc_datetime(cancel_at)
    days = math.ceil(delta.total_seconds() / SECONDS_PER_DAY)
    return max(days, 0)


class RefundPolicyService:
    """Service for resolving refunds from a cancellation policy.

    Pure lookup: holds no state and never touches a booking.
    """

    def resolve_refund(
        self,
        policy: CancellationPolicy,
        total: int,
        check_in: dt.date | dt.datetime,
        cancel_at: dt.date | dt.datetime,
        *,
        status: BookingStatus | None = None,
    ) -> RefundResolution | BookingFailure:
        """Calculate the refund for cancelling a booking.

        Args:
            policy: Cancellation policy agreed at booking time
            total: Original booking total in cents
            check_in: Check-in date
            cancel_at: When the cancellation is requested
            status: Current booking status, when known

        Returns:
            RefundResolution, or BookingFailure(ALREADY_CANCELED) when the
            booking is already canceled or refunded
        """
        if status in TERMINAL_CANCELED_STATUSES:
            log_booking_operation(
                logger,
                "resolve_refund",
                error=ErrorCode.ALREADY_CANCELED.value,
                status=status.value,
            )
            return BookingFailure.from_code(
                ErrorCode.ALREADY_CANCELED,
                details={"status": status.value},
            )

        days = days_until_check_in(check_in, cancel_at)
        percentage = self.refund_percentage(policy, days)
        refund_amount = percentage_of(total, percentage)

        if percentage == 100:
            tier = "full"
        elif percentage > 0:
            tier = "partial"
        else:
            tier = "none"

        resolution = RefundResolution(
            policy=policy,
            days_until_check_in=days,
            refund_percentage=percentage,
            refund_amount=refund_amount,
            original_total=total,
            policy_tier=tier,
            description=self._describe(policy, days, percentage),
        )
        log_booking_operation(
            logger,
            "resolve_refund",
            amount_cents=refund_amount,
            result=tier,
            policy=policy.value,
            days_until_check_in=days,
        )
        return resolution

    def refund_percentage(self, policy: CancellationPolicy, days_until: int) -> int:
        """Look up the refund percentage for a policy and lead time."""
        tier = POLICY_TIERS[policy]
        if tier.threshold_days is not None and days_until >= tier.threshold_days:
            return tier.refund_percent_met
        return tier.refund_percent_else

    def _describe(self, policy: CancellationPolicy, days: int, percentage: int) -> str:
        if policy is CancellationPolicy.SUPER_STRICT:
            return "No refund (0%): super strict policy does not allow refunds"
        tier = POLICY_TIERS[policy]
        day_word = "day" if days == 1 else "days"
        return (
            f"Refund {percentage}%: cancelled {days} {day_word} before check-in "
            f"(policy: {policy.value}, {tier.threshold_days}+ days = "
            f"{tier.refund_percent_met}%, otherwise {tier.refund_percent_else}%)"
        )

    def get_policy_description(self, policy: CancellationPolicy) -> str:
        """Get human-readable description of a cancellation policy.

        Returns:
            Policy description text
        """
        tier = POLICY_TIERS[policy]
        if tier.threshold_days is None:
            return f"Cancellation Policy ({policy.value}):\n• No refunds"
        threshold = tier.threshold_days
        day_word = "day" if threshold == 1 else "days"
        return (
            f"Cancellation Policy ({policy.value}):\n"
            f"• {threshold}+ {day_word} before check-in: {tier.refund_percent_met}% refund\n"
            f"• Less than {threshold} {day_word} before check-in: "
            f"{tier.refund_percent_else}% refund"
        )
