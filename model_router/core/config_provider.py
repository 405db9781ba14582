"""Settings-backed routing configuration and default-model provider."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from model_router.core.errors import RoutingConfigError
from model_router.core.settings import Settings, get_settings
from model_router.models.routing_models import RoutingConfig

log = structlog.get_logger(__name__)


def load_routing_config_file(path: Path) -> RoutingConfig | None:
    """Load a routing table from a JSON settings file.

    Accepts either the table itself (`{"enabled": ..., "preferences": [...]}`)
    or a settings document carrying it under a top-level `routing` key.
    A missing file means routing was never configured and yields None.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        log.debug("routing_config_file_missing", path=str(path))
        return None
    except OSError as e:
        raise RoutingConfigError(f"Cannot read routing config {path}: {e}") from e

    try:
        doc: Any = json.loads(raw)
    except json.JSONDecodeError as e:
        raise RoutingConfigError(f"Routing config {path} is not valid JSON: {e}") from e

    if isinstance(doc, dict) and "routing" in doc:
        doc = doc["routing"]
    if doc is None:
        return None

    try:
        return RoutingConfig.model_validate(doc)
    except ValidationError as e:
        raise RoutingConfigError(f"Routing config {path} is invalid: {e}") from e


class SettingsRoutingConfigProvider:
    """Serves routing config snapshots and the default model from `Settings`.

    Each call builds a fresh `RoutingConfig`, so a config file edited between
    calls is picked up by the next routing decision.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    def get_routing_config(self) -> RoutingConfig | None:
        settings = self.settings
        if settings.ROUTING_CONFIG_FILE is not None:
            return load_routing_config_file(settings.ROUTING_CONFIG_FILE)

        if not settings.ROUTING_ENABLED and not settings.ROUTING_PREFERENCES:
            return None
        return RoutingConfig(
            enabled=settings.ROUTING_ENABLED,
            preferences=tuple(settings.ROUTING_PREFERENCES),
        )

    def get_model(self) -> str:
        return self.settings.DEFAULT_MODEL
