"""Application settings and lazy settings loader."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from model_router.models.routing_models import RoutingPreference


class Settings(BaseSettings):
    """Runtime configuration.

    `ROUTING_PREFERENCES` is read as JSON from the environment, e.g.
    `[{"task_type": "code_generation", "model": "gpt-4o"}]`.
    When `ROUTING_CONFIG_FILE` is set it takes precedence over the inline
    routing fields and is re-read on every routing call.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "env.example"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    LOG_LEVEL: str = "INFO"

    # Model used whenever routing resolves no preference.
    DEFAULT_MODEL: str = "qwen3-coder-plus"

    ROUTING_ENABLED: bool = False
    ROUTING_PREFERENCES: list[RoutingPreference] = Field(default_factory=list)
    ROUTING_CONFIG_FILE: Path | None = None

    # API security
    API_KEY: str | None = None
    API_KEY_HEADER: str = "X-API-Key"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance (lazy-loaded)."""
    return Settings()
