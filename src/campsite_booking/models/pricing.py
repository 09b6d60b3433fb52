"""Pricing models for nightly rates, discounts and price breakdowns."""

import datetime as dt
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .dates import DateRange
from .enums import DiscountType

# Rates accept Decimal or numeric strings
Rate = Annotated[Decimal, Field(ge=0, le=1, strict=False)]


class SeasonalRate(BaseModel):
    """Nightly price override for a date range.

    Covers every night ``range.start <= night < range.end``.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    range: DateRange = Field(..., description="Nights covered by this rate")
    price_per_night: int = Field(
        ...,
        ge=1000,
        le=1_000_000,
        description="Nightly rate in cents",
        examples=[12500],
    )
    name: str | None = Field(default=None, description="Season name")
    minimum_nights: int | None = Field(
        default=None,
        ge=1,
        le=30,
        description="Minimum stay for check-ins within this season",
    )

    @model_validator(mode="after")
    def _check_range(self) -> "SeasonalRate":
        if not self.range.is_valid:
            raise ValueError("Seasonal rate end date must be after start date")
        return self


class PricingRules(BaseModel):
    """Pricing configuration for a campsite.

    All money values are in cents of ``currency``.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    price_per_night: int = Field(
        ...,
        ge=1000,
        le=1_000_000,
        description="Base nightly rate in cents",
        examples=[10000],
    )
    cleaning_fee: int = Field(
        default=0,
        ge=0,
        le=50_000,
        description="One-off cleaning fee in cents",
        examples=[5000],
    )
    service_fee_rate: Rate = Field(
        default=Decimal("0.10"),
        description="Service fee as a fraction of the subtotal",
    )
    tax_rate: Rate = Field(
        default=Decimal("0"),
        description="Tax as a fraction of subtotal plus fees",
    )
    seasonal_rates: tuple[SeasonalRate, ...] = Field(
        default=(),
        strict=False,
        description="Non-overlapping seasonal overrides, ordered by start date",
    )
    currency: str = Field(default="USD", min_length=3, max_length=3)

    @field_validator("seasonal_rates")
    @classmethod
    def _order_seasons(
        cls, seasons: tuple[SeasonalRate, ...]
    ) -> tuple[SeasonalRate, ...]:
        ordered = tuple(sorted(seasons, key=lambda s: s.range.start))
        for previous, current in zip(ordered, ordered[1:]):
            if previous.range.overlaps(current.range):
                raise ValueError(
                    f"Seasonal rates overlap: {previous.range.start}..{previous.range.end} "
                    f"and {current.range.start}..{current.range.end}"
                )
        return ordered

    def season_for_night(self, night: dt.date) -> SeasonalRate | None:
        """Get the seasonal rate covering a night, if any."""
        for season in self.seasonal_rates:
            if season.range.contains(night):
                return season
        return None

    def rate_for_night(self, night: dt.date) -> int:
        season = self.season_for_night(night)
        return season.price_per_night if season else self.price_per_night


class NightlyRate(BaseModel):
    """Price applied to a single night of a stay."""

    model_config = ConfigDict(strict=True, frozen=True)

    date: dt.date
    price: int = Field(..., ge=0, description="Price in cents")
    season_name: str | None = None


class Discount(BaseModel):
    """A discount offered on a stay.

    Exactly one of ``amount`` (flat, cents) or ``rate`` (fraction of the
    subtotal) is set. Eligibility conditions that are left unset always pass.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    discount_type: DiscountType
    name: str = Field(..., min_length=1, max_length=100)
    code: str | None = Field(default=None, description="Coupon or promo code")
    amount: int | None = Field(default=None, ge=0, description="Flat amount in cents")
    rate: Rate | None = Field(default=None, description="Fraction of the subtotal")
    min_nights: int | None = Field(default=None, ge=1)
    min_lead_days: int | None = Field(
        default=None,
        ge=0,
        description="Booking must be made at least this many days before check-in",
    )
    max_lead_days: int | None = Field(
        default=None,
        ge=0,
        description="Booking must be made at most this many days before check-in",
    )

    @model_validator(mode="after")
    def _check_kind(self) -> "Discount":
        if (self.amount is None) == (self.rate is None):
            raise ValueError("Discount needs exactly one of amount or rate")
        return self


class AppliedDiscount(BaseModel):
    """A discount that was eligible and applied to a breakdown."""

    model_config = ConfigDict(strict=True, frozen=True)

    discount_type: DiscountType
    name: str
    code: str | None = None
    amount: int = Field(..., ge=0, description="Discount value in cents")


class PriceBreakdown(BaseModel):
    """Price of a stay.

    ``total = subtotal + cleaning_fee + service_fee + tax_amount - discount_total``
    and is never negative.
    """

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        json_schema_extra={
            "examples": [
                {
                    "nights": 3,
                    "subtotal": 30000,
                    "cleaning_fee": 5000,
                    "service_fee": 3000,
                    "tax_amount": 3040,
                    "discount_total": 0,
                    "total": 41040,
                    "currency": "USD",
                }
            ]
        },
    )

    success: bool = True
    nights: int = Field(..., ge=1)
    nightly_rates: tuple[NightlyRate, ...] = Field(default=(), strict=False)
    subtotal: int = Field(..., ge=0)
    cleaning_fee: int = Field(..., ge=0)
    service_fee: int = Field(..., ge=0)
    tax_rate: Rate = Decimal("0")
    tax_amount: int = Field(..., ge=0)
    applied_discounts: tuple[AppliedDiscount, ...] = Field(default=(), strict=False)
    discount_total: int = Field(default=0, ge=0)
    total: int = Field(..., ge=0)
    currency: str = "USD"

    @property
    def pre_discount_total(self) -> int:
        return self.subtotal + self.cleaning_fee + self.service_fee + self.tax_amount
