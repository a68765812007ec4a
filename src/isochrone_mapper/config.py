"""
Application settings.

Loaded from environment variables prefixed ``ISOCHRONE_`` (and a local
``.env`` file, if present)::

    ISOCHRONE_GOOGLE_MAPS_API_KEY=...
    ISOCHRONE_CHUNK_SIZE=25
    ISOCHRONE_WAVE_DELAY_SECONDS=0.2
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ISOCHRONE_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "isochrone-mapper"
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    google_maps_api_key: str = ""
    oracle_timeout_seconds: float = Field(default=10.0, gt=0)

    # Oracle batching and rate limiting
    chunk_size: int = Field(default=25, ge=1, le=25)
    max_concurrent_chunks: int = Field(default=3, ge=1)
    wave_delay_seconds: float = Field(default=0.2, ge=0)

    # Seed for sampling jitter; None draws fresh randomness per run
    random_seed: int | None = None


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings (cached)."""
    return Settings()
