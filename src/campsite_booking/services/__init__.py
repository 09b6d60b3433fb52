"""Booking engine services."""

from .availability import AvailabilityService
from .booking import BookingService
from .lifecycle import can_transition, ensure_transition, is_active, is_cancelable, is_past
from .pricing import PricingService
from .refund_policy_service import POLICY_TIERS, RefundPolicyService, days_until_check_in
from .repositories import (
    BlockedRangeRepository,
    BookingRepository,
    CampsiteRepository,
    InMemoryBlockedRangeRepository,
    InMemoryBookingRepository,
    InMemoryCampsiteRepository,
)

__all__ = [
    "AvailabilityService",
    "BookingService",
    "PricingService",
    "RefundPolicyService",
    "POLICY_TIERS",
    "days_until_check_in",
    "can_transition",
    "ensure_transition",
    "is_active",
    "is_cancelable",
    "is_past",
    "BlockedRangeRepository",
    "BookingRepository",
    "CampsiteRepository",
    "InMemoryBlockedRangeRepository",
    "InMemoryBookingRepository",
    "InMemoryCampsiteRepository",
]
