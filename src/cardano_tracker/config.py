"""Application configuration loaded from environment variables and `.env`."""

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogFormat(str, Enum):
    """Log output format."""

    JSON = "json"
    TEXT = "text"


class VesprConfig(BaseSettings):
    """VESPR API client configuration.

    ``VESPR_API_KEY`` is required; it is sent as the ``x-digest`` header.
    """

    model_config = SettingsConfigDict(env_prefix="VESPR_", env_file=".env", extra="ignore")

    api_url: str = "https://api.vespr.xyz"
    api_key: str = Field(min_length=1)
    request_timeout_ms: int = Field(default=30000, gt=0)
    max_retries: int = Field(default=3, ge=0)
    retry_base_delay_ms: int = Field(default=1000, ge=0)
    rate_limit: int | None = Field(default=None, gt=0, description="Requests per minute, unset to disable")
    user_agent: str = "CardanoWalletTracker/1.0"


class CacheConfig(BaseSettings):
    """Spot price cache configuration."""

    model_config = SettingsConfigDict(env_prefix="CACHE_", env_file=".env", extra="ignore")

    ttl_prices: int = Field(default=600, gt=0, description="Seconds a spot price stays fresh")
    max_entries: int = Field(default=100, gt=0)


class AppConfig(BaseSettings):
    """Top-level application configuration."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    log_format: LogFormat = LogFormat.JSON

    vespr: VesprConfig = Field(default_factory=VesprConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)


_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get the process-wide configuration, loading it on first use.

    Raises ``pydantic.ValidationError`` when a setting is missing or invalid.
    """
    global _config
    if _config is None:
        _config = AppConfig()
    return _config


def reset_config() -> None:
    """Forget the loaded configuration so the next `get_config()` reloads it."""
    global _config
    _config = None
