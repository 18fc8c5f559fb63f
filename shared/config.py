"""
Shared configuration management for the read-through cache layer.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_TTL_SECONDS = 60 * 60


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="CACHE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")


class CacheSettings(BaseConfig):
    """Settings for building a cache gateway from the environment."""

    service_name: str = Field(default="cache")

    # Key-value store
    redis_url: str = Field(default="redis://localhost:6379/0")
    socket_timeout: float = Field(default=5.0, gt=0)
    socket_connect_timeout: float = Field(default=5.0, gt=0)
    health_check_interval: int = Field(default=30, ge=0)

    # Caching behaviour
    disabled: bool = Field(default=False)
    default_ttl: int = Field(default=DEFAULT_TTL_SECONDS, gt=0)

    # Observability
    enable_metrics: bool = Field(default=False)
    metrics_port: Optional[int] = Field(default=None, gt=0, lt=65536)


def get_settings(**overrides) -> CacheSettings:
    """Get cache settings, environment first, then explicit overrides."""
    return CacheSettings(**overrides)
