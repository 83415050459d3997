"""Application settings using pydantic-settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the ExpBoard search pipeline."""

    model_config = SettingsConfigDict(env_prefix="EB_", env_file=".env")

    # --- Logging ---
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer: human-readable console or JSON lines",
    )

    # --- Tracing ---
    otel_exporter: Literal["none", "console", "otlp"] = Field(
        default="none",
        description="OpenTelemetry span exporter",
    )
    otel_endpoint: str = Field(
        default="http://localhost:4317",
        description="OTLP collector endpoint",
    )
    otel_service_name: str = Field(
        default="expboard-search",
        description="Service name attached to exported spans",
    )

    # --- HTTP ---
    http_timeout_seconds: float = Field(
        default=30.0,
        description="Request timeout for geocoding and semantic search calls",
    )

    # --- Geocoding ---
    geocoder_url: str = Field(
        default="https://nominatim.openstreetmap.org/search",
        description="Nominatim-compatible search endpoint",
    )
    geocoder_user_agent: str = Field(
        default="expboard-search/0.1",
        description="User-Agent sent to the geocoder (required by Nominatim policy)",
    )
    geocode_batch_size: int = Field(
        default=5,
        ge=1,
        description="Locations resolved concurrently per batch",
    )
    geocode_batch_delay_ms: int = Field(
        default=200,
        ge=0,
        description="Pause between geocoding batches in milliseconds",
    )
    geocode_cache_capacity: int = Field(
        default=1024,
        ge=1,
        description="Maximum entries held by the in-process geocode cache",
    )
    geocode_cache_backend: Literal["memory", "disk", "redis"] = Field(
        default="memory",
        description="Shared second-tier geocode cache; 'memory' disables it",
    )
    geocode_cache_ttl_hours: int = Field(
        default=24 * 30,
        description="TTL for geocode entries in the shared cache",
    )
    cache_dir: Path = Field(
        default=Path("./.cache/expboard"),
        description="Directory for the diskcache backend",
    )
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis URL for the redis backend",
    )

    # --- Semantic search ---
    semantic_provider: Literal["http", "llm", "none"] = Field(
        default="none",
        description="Semantic ranking oracle: remote HTTP function, local LLM, or disabled",
    )
    semantic_search_url: str | None = Field(
        default=None,
        description="URL of the semantic-job-search function (http provider)",
    )
    access_token: SecretStr | None = Field(
        default=None,
        description="Bearer token of the active user session",
    )
    anthropic_api_key: SecretStr | None = Field(
        default=None,
        description="Anthropic API key (llm provider)",
    )
    semantic_model: str = Field(
        default="claude-haiku-4-5-20251001",
        description="Model ID used by the llm provider",
    )

    # --- Database ---
    database_url: str = Field(
        default="sqlite+aiosqlite:///./expboard.db",
        description="SQLAlchemy database URL for the opportunity store",
    )

    # --- Paging ---
    default_page_size: int = Field(
        default=10,
        description="Results per page when none is chosen",
    )

    @model_validator(mode="after")
    def validate_semantic_config(self) -> Settings:
        """Check that the selected semantic provider is configured."""
        if self.semantic_provider == "llm" and not self.anthropic_api_key:
            msg = "anthropic_api_key required when semantic_provider=llm"
            raise ValueError(msg)
        if self.semantic_provider == "http" and not self.semantic_search_url:
            msg = "semantic_search_url required when semantic_provider=http"
            raise ValueError(msg)
        return self

    @model_validator(mode="after")
    def validate_page_size(self) -> Settings:
        """Reject page sizes that cannot hold a single result."""
        if self.default_page_size < 1:
            msg = f"default_page_size must be >= 1, got {self.default_page_size}"
            raise ValueError(msg)
        return self

    @property
    def is_sqlite(self) -> bool:
        """True when the database URL points at SQLite."""
        return self.database_url.startswith("sqlite")
