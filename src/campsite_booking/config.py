"""Engine configuration loaded from environment variables."""

import os
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class EngineSettings(BaseModel):
    """Settings for the booking engine.

    Environment variables:
        BOOKING_CURRENCY: Default currency code (default: USD)
        BOOKING_ALTERNATIVE_WINDOW_DAYS: Days before/after a request searched
            for alternative dates (default: 14)
        BOOKING_MAX_ALTERNATIVES: Maximum alternative ranges suggested (default: 3)
        LOG_LEVEL: Logging level for the engine's logger (default: INFO)
    """

    model_config = ConfigDict(frozen=True)

    currency: str = Field(default="USD", min_length=3, max_length=3)
    alternative_window_days: int = Field(default=14, ge=0, le=365)
    max_alternatives: int = Field(default=3, ge=0, le=50)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Build settings from the process environment."""
        return cls(
            currency=os.getenv("BOOKING_CURRENCY", "USD").upper(),
            alternative_window_days=int(os.getenv("BOOKING_ALTERNATIVE_WINDOW_DAYS", "14")),
            max_alternatives=int(os.getenv("BOOKING_MAX_ALTERNATIVES", "3")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    """Get the shared settings instance (read once per process)."""
    return EngineSettings.from_env()


def reset_settings() -> None:
    """Forget cached settings (for testing only)."""
    get_settings.cache_clear()
