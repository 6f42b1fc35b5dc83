"""Lightweight configuration for Frostwind Keep."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from ``FROSTWIND_*`` variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="FROSTWIND_", env_file=".env", env_file_encoding="utf-8"
    )

    seed: int | None = Field(
        default=None, description="Random seed for new games; unset draws from system entropy"
    )
    log_level: str = Field(default="INFO", description="Level for the frostwind loggers")
    debug_mode: bool = Field(
        default=False, description="Expose the debug override endpoints (gold, population, reset)"
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
