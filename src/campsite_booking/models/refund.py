"""Refund resolution model."""

from pydantic import BaseModel, ConfigDict, Field

from .enums import CancellationPolicy


class RefundResolution(BaseModel):
    """Outcome of applying a cancellation policy to a booking total.

    Amounts are in cents of the booking's currency.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    success: bool = True
    policy: CancellationPolicy
    days_until_check_in: int = Field(..., ge=0)
    refund_percentage: int = Field(..., ge=0, le=100)
    refund_amount: int = Field(..., ge=0)
    original_total: int = Field(..., ge=0)
    policy_tier: str = Field(..., pattern="^(full|partial|none)$")
    description: str
