"""Structured logging for the routing layer (structlog JSON over stdlib)."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from model_router.models.routing_models import RoutingDecision

# Longest reason string kept in a log line; the full text stays on the decision.
_MAX_REASON_CHARS = 300


def configure_logging(level: str = "INFO", *, json_output: bool = True) -> None:
    """Configure routing logs.

    Decisions are logged at INFO and per-call classification at DEBUG, so
    `LOG_LEVEL=DEBUG` shows which rule fired for every request. Context bound
    with `structlog.contextvars.bind_contextvars` (e.g. a request id) is merged
    into each event.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    renderer: Any = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    structlog.configure_once(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def decision_fields(decision: RoutingDecision) -> dict[str, Any]:
    """Flatten a routing decision into log event fields."""
    reason = decision.reason
    if len(reason) > _MAX_REASON_CHARS:
        reason = reason[: _MAX_REASON_CHARS - 3] + "..."
    return {
        "model": decision.model,
        "routed": decision.model is not None,
        "task_type": decision.task_type,
        "confidence": decision.confidence,
        "is_explicit": decision.is_explicit,
        "reason": reason,
    }
