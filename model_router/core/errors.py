"""Error types for the routing layer.

Classification and preference matching never fail; the only failures are
configuration problems surfaced by the environment.
"""

from __future__ import annotations


class RoutingError(RuntimeError):
    """Base error for routing failures."""

    stage: str = "unknown"


class RoutingConfigError(RoutingError):
    """Routing configuration exists but cannot be parsed or validated."""

    stage = "config"


class RoutingConfigUnavailableError(RoutingError):
    """The configuration provider failed while serving a single routing call."""

    stage = "config_provider"
