"""Application configuration management."""
from pathlib import Path
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.schedule import ScheduleConfig, UpdateStrategy


def _fallback(value: Any, default: Any, valid) -> Any:
    """Return ``value`` coerced to the default's type, or ``default`` if invalid."""
    if value is None or value == "":
        return default
    try:
        coerced = type(default)(value)
    except (TypeError, ValueError):
        return default
    return coerced if valid(coerced) else default


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Place-data provider API keys
    kakao_api_key: str = ""  # KAKAO_API_KEY
    google_places_api_key: str = ""  # GOOGLE_PLACES_API_KEY
    seoul_openapi_key: str = ""  # SEOUL_OPENAPI_KEY

    # Auto-update schedule
    auto_update_hour: int = 6
    auto_update_minute: int = 0
    auto_update_type: UpdateStrategy = UpdateStrategy.ENHANCED
    auto_update_enabled: bool = True
    auto_update_interval_days: int = 3

    # Search configuration
    provider_timeout: float = 10.0  # Per provider call, in seconds
    inter_query_delay: float = 0.5  # Minimum spacing between provider batches
    stale_after_days: int = 3

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # Storage Configuration
    gym_store_path: str = "./data/gyms.json"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Schedule values never fail startup; bad input falls back to the default.
    @field_validator("auto_update_hour", mode="before")
    @classmethod
    def _valid_hour(cls, v: Any) -> int:
        return _fallback(v, 6, lambda h: 0 <= h <= 23)

    @field_validator("auto_update_minute", mode="before")
    @classmethod
    def _valid_minute(cls, v: Any) -> int:
        return _fallback(v, 0, lambda m: 0 <= m <= 59)

    @field_validator("auto_update_interval_days", mode="before")
    @classmethod
    def _valid_interval(cls, v: Any) -> int:
        return _fallback(v, 3, lambda d: d >= 1)

    @field_validator("auto_update_type", mode="before")
    @classmethod
    def _valid_strategy(cls, v: Any) -> UpdateStrategy:
        try:
            return UpdateStrategy(v)
        except ValueError:
            return UpdateStrategy.ENHANCED

    @field_validator("auto_update_enabled", mode="before")
    @classmethod
    def _valid_enabled(cls, v: Any) -> bool:
        if isinstance(v, bool):
            return v
        return str(v).strip().lower() == "true"

    @property
    def store_path(self) -> Path:
        """Get the resolved gym store path."""
        return Path(self.gym_store_path).expanduser().resolve()

    def schedule_config(self) -> ScheduleConfig:
        """Build the scheduler configuration from the environment values."""
        return ScheduleConfig(
            trigger_hour=self.auto_update_hour,
            trigger_minute=self.auto_update_minute,
            strategy=self.auto_update_type,
            enabled=self.auto_update_enabled,
            interval_days=self.auto_update_interval_days,
        )


# Global settings instance
settings = Settings()

