"""Clock abstraction so "now" can be injected.

All engine date comparisons use UTC: "today" is the current UTC calendar day
and nights start at UTC midnight.
"""

import datetime as dt
from typing import Protocol


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> dt.datetime:
        """Current time as a timezone-aware UTC datetime."""
        ...

    def today(self) -> dt.date:
        """Current UTC calendar day."""
        ...


class SystemClock:
    """Clock backed by the system time."""

    def now(self) -> dt.datetime:
        return dt.datetime.now(dt.UTC)

    def today(self) -> dt.date:
        return self.now().date()


class FixedClock:
    """Clock frozen at a given instant, for tests and replays."""

    def __init__(self, instant: dt.datetime | dt.date) -> None:
        if not isinstance(instant, dt.datetime):
            instant = dt.datetime.combine(instant, dt.time.min)
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=dt.UTC)
        self._instant = instant.astimezone(dt.UTC)

    def now(self) -> dt.datetime:
        return self._instant

    def today(self) -> dt.date:
        return self._instant.date()

    def advance(self, **kwargs: float) -> None:
        """Move the clock forward by ``dt.timedelta(**kwargs)``."""
        self._instant += dt.timedelta(**kwargs)
