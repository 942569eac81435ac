"""Centralized configuration for lexsearch using Pydantic Settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    The Redis host is only required when the Redis backend is selected; the
    check happens when the store is built so that a settings object can be
    created (and inspected) before a target is known.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",  # Ignore extra env vars not defined in model
    )

    # Store settings
    store_backend: Literal["redis", "memory"] = Field(
        default="redis", description="Ordered-set backend holding the index entries"
    )
    redis_host: str = Field(default="", description="Redis host (required for the redis backend)")
    redis_port: int = Field(default=6379, ge=1, le=65535, description="Redis port")
    redis_db: int = Field(default=0, ge=0, description="Redis logical database number")
    redis_password: str | None = Field(default=None, description="Optional Redis password")

    # Index settings
    search_set_suffix: str = Field(
        default="-search", min_length=1, description="Suffix appended to a group name to form its ordered-set key"
    )
    default_search_limit: int = Field(
        default=10, ge=0, description="Maximum entries returned when a search omits its limit"
    )

    # Metrics
    metrics_group_label: bool = Field(
        default=True,
        description="Label index and search metrics with the group name; disable when group names are unbounded",
    )

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")
    service_name: str = Field(default="lexsearch", description="Service name reported in traces and metrics")

    def is_memory_backend(self) -> bool:
        """Check if entries are kept in process memory."""
        return self.store_backend == "memory"

    def redis_target(self) -> str:
        """Return ``host:port/db`` for log messages (never includes the password)."""
        return f"{self.redis_host}:{self.redis_port}/{self.redis_db}"
