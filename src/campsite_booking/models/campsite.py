"""Campsite model: the canonical entity consumed by the booking engine."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import CancellationPolicy
from .pricing import PricingRules


class StayRules(BaseModel):
    """House rules that constrain a stay."""

    model_config = ConfigDict(strict=True, frozen=True)

    minimum_nights: int = Field(default=1, ge=1, le=365)
    maximum_nights: int | None = Field(default=None, ge=1, le=365)
    pets_allowed: bool = Field(default=True)

    @model_validator(mode="after")
    def _check_bounds(self) -> "StayRules":
        if self.maximum_nights is not None and self.maximum_nights < self.minimum_nights:
            raise ValueError("maximum_nights must not be below minimum_nights")
        return self


class Campsite(BaseModel):
    """A bookable campsite with its pricing, rules and cancellation policy."""

    model_config = ConfigDict(strict=True, frozen=True)

    campsite_id: str = Field(..., description="Unique campsite ID")
    name: str = Field(..., min_length=1, max_length=100)
    max_guests: int = Field(..., ge=1, le=100, description="Maximum adults + children")
    pricing: PricingRules
    stay_rules: StayRules = Field(default_factory=StayRules)
    cancellation_policy: CancellationPolicy = Field(default=CancellationPolicy.MODERATE)
