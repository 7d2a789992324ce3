# barberbook/config.py

import pytz
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Barberbook API"

    # Database
    DATABASE_URL: str = "sqlite:///./barber.db"
    DATABASE_ECHO: bool = False

    # Shop scheduling policy
    SHOP_TIMEZONE: str = "America/New_York"
    SLOT_MINUTES: int = 15
    LEAD_TIME_MINUTES: int = 0
    MAX_RANGE_DAYS: int = 62
    DEFAULT_SERVICE_MINUTES: int = 30
    TODAY_PREVIEW_SLOTS: int = 3
    SEED_SERVICES: bool = True

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    @field_validator("SHOP_TIMEZONE")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        if value not in pytz.all_timezones_set:
            raise ValueError(f"unknown timezone: {value}")
        return value

    @field_validator("SLOT_MINUTES", "MAX_RANGE_DAYS", "DEFAULT_SERVICE_MINUTES", "TODAY_PREVIEW_SLOTS")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value

    @field_validator("LEAD_TIME_MINUTES")
    @classmethod
    def _lead_time_in_day(cls, value: int) -> int:
        if not 0 <= value <= 24 * 60:
            raise ValueError("must be between 0 and 1440 minutes")
        return value

    @property
    def tz(self):
        return pytz.timezone(self.SHOP_TIMEZONE)


settings = Settings()


# Dependency: shop settings
def get_settings() -> Settings:
    return settings
