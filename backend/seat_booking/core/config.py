"""
Application configuration using pydantic-settings.
All config is loaded from environment variables with sensible defaults.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Seat Booking API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Arena layout
    SEAT_ROWS: int = 8
    SEATS_PER_ROW: int = 10
    MAX_SEATS_PER_BOOKING: int = 8

    # Pricing tiers (row bands are half-open: [0, PREMIUM_ROW_BOUND) is premium)
    PREMIUM_ROW_BOUND: int = 3
    STANDARD_ROW_BOUND: int = 6
    PREMIUM_PRICE: int = 1000
    STANDARD_PRICE: int = 750
    ECONOMY_PRICE: int = 500
    CURRENCY_SYMBOL: str = "₹"

    # Booked-seat record store: "redis", "memory" or "none"
    STORE_BACKEND: str = "redis"
    REDIS_URL: str = "redis://localhost:6379/0"
    BOOKED_SEATS_KEY: str = "bookedSeats"

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }

    @model_validator(mode="after")
    def check_layout(self) -> "Settings":
        if self.SEAT_ROWS <= 0 or self.SEATS_PER_ROW <= 0:
            raise ValueError("SEAT_ROWS and SEATS_PER_ROW must be positive")
        if self.MAX_SEATS_PER_BOOKING <= 0:
            raise ValueError("MAX_SEATS_PER_BOOKING must be positive")
        if not 0 <= self.PREMIUM_ROW_BOUND <= self.STANDARD_ROW_BOUND <= self.SEAT_ROWS:
            raise ValueError(
                "tier bounds must satisfy 0 <= PREMIUM_ROW_BOUND <= STANDARD_ROW_BOUND <= SEAT_ROWS"
            )
        if self.STORE_BACKEND not in ("redis", "memory", "none"):
            raise ValueError(f"unknown STORE_BACKEND: {self.STORE_BACKEND}")
        return self


@lru_cache()
def get_settings() -> Settings:
    return Settings()
