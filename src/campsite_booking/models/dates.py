"""Date range and guest count value objects."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


def to_utc_date(value: dt.date | dt.datetime) -> dt.date:
    """Normalize a date or datetime to a whole UTC day.

    Naive datetimes are taken to already be in UTC.
    """
    if isinstance(value, dt.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(dt.UTC)
        return value.date()
    return value


class DateRange(BaseModel):
    """A stay or block expressed as whole days.

    The range is half-open: ``start`` is the first night, ``end`` is the
    check-out day and is not itself occupied. A range whose end is not after
    its start can be constructed; engine operations report it as
    INVALID_RANGE.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    start: dt.date = Field(..., description="First night (check-in date)")
    end: dt.date = Field(..., description="Check-out date (exclusive)")

    @classmethod
    def from_datetimes(
        cls,
        start: dt.date | dt.datetime,
        end: dt.date | dt.datetime,
    ) -> "DateRange":
        """Build a range from dates or datetimes, stripping time of day."""
        return cls(start=to_utc_date(start), end=to_utc_date(end))

    @property
    def nights(self) -> int:
        """Number of nights between start and end (may be <= 0)."""
        return (self.end - self.start).days

    @property
    def is_valid(self) -> bool:
        return self.end > self.start

    def dates(self) -> list[dt.date]:
        """List of nights in the range (end exclusive)."""
        return [self.start + dt.timedelta(days=i) for i in range(max(self.nights, 0))]

    def contains(self, night: dt.date) -> bool:
        return self.start <= night < self.end

    def overlaps(self, other: "DateRange") -> bool:
        """Whether two ranges share at least one night.

        A check-out on day N and a check-in on day N do not overlap.
        """
        return self.start < other.end and other.start < self.end

    def shifted(self, days: int) -> "DateRange":
        delta = dt.timedelta(days=days)
        return DateRange(start=self.start + delta, end=self.end + delta)


class GuestCount(BaseModel):
    """Party composition for a booking request."""

    model_config = ConfigDict(strict=True, frozen=True)

    adults: int = Field(default=1, ge=0, le=50, description="Number of adults")
    children: int = Field(default=0, ge=0, le=50, description="Number of children")
    pets: int = Field(default=0, ge=0, le=10, description="Number of pets")

    @property
    def total_guests(self) -> int:
        """Guests counted against campsite capacity (pets excluded)."""
        return self.adults + self.children
