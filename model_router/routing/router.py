"""ModelRouter: orchestrates task classification and preference matching.

The router is the public entry point of the routing layer. It reads the
current routing table from a config provider, classifies the user input (or
takes an explicit task type) and returns an auditable `RoutingDecision`.

Collaborators are injected so tests can run without a configuration backend:
- `RoutingConfigProvider`: returns the current `RoutingConfig` (or None), sync or async
- `DefaultModelProvider`: returns the environment's default model name
"""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Protocol, runtime_checkable

import structlog

from model_router.core.errors import RoutingConfigUnavailableError
from model_router.core.logging import decision_fields
from model_router.core.settings import get_settings
from model_router.models.routing_models import (
    RoutingConfig,
    RoutingDecision,
    TaskClassification,
    TaskTypeMetadata,
)
from model_router.routing import taxonomy
from model_router.routing.classifier import TaskClassifier
from model_router.routing.preferences import RoutingPreferences

log = structlog.get_logger(__name__)

NOT_ENABLED_REASON = "Task-based routing is not enabled"
EXPLICIT_REASONING = "User explicitly selected this task type"


@runtime_checkable
class RoutingConfigProvider(Protocol):
    """Source of the current routing table."""

    def get_routing_config(self) -> RoutingConfig | None | Awaitable[RoutingConfig | None]:
        raise NotImplementedError


@runtime_checkable
class DefaultModelProvider(Protocol):
    """Source of the model used when routing resolves nothing."""

    def get_model(self) -> str:
        raise NotImplementedError


class ModelRouter:
    """Selects a model for a user request based on its task type.

    Each call reads its own config snapshot; nothing is cached between calls.
    """

    def __init__(
        self,
        config_provider: RoutingConfigProvider,
        model_provider: DefaultModelProvider,
        *,
        classifier: TaskClassifier | None = None,
        default_model: str | None = None,
    ) -> None:
        self._config_provider = config_provider
        self._model_provider = model_provider
        self._classifier = classifier or TaskClassifier()
        self._default_model = default_model

    async def _get_routing_config(self) -> RoutingConfig | None:
        """Fetch the current routing table.

        Provider failures fail the call: a broken config source must not look
        like "no preference configured". Cancellation is not an Exception and
        propagates untouched.
        """
        try:
            result: Any = self._config_provider.get_routing_config()
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            log.error("routing_config_unavailable", error=str(e), error_type=type(e).__name__)
            raise RoutingConfigUnavailableError(f"Routing config provider failed: {e}") from e
        return result

    async def route_request(self, user_input: str, explicit_task_type: str | None = None) -> RoutingDecision:
        """Route a user request to the best model for its task type.

        Args:
            user_input: The user's free-text request
            explicit_task_type: Task type chosen by the user; skips classification

        Returns:
            RoutingDecision. `model` is None when the caller should use its
            default model.

        Raises:
            RoutingConfigUnavailableError: the config provider failed
        """
        routing_config = await self._get_routing_config()

        # Short-circuit before classifying: there is nothing to match against.
        if routing_config is None or not routing_config.enabled:
            decision = RoutingDecision(
                model=None,
                task_type="unknown",
                confidence=0.0,
                reason=NOT_ENABLED_REASON,
                is_explicit=False,
            )
            log.debug("routing_not_enabled", configured=routing_config is not None)
            return decision

        preferences = RoutingPreferences(routing_config)

        if explicit_task_type:
            classification = TaskClassification(
                type=explicit_task_type,
                confidence=1.0,
                reasoning=EXPLICIT_REASONING,
            )
            decision = preferences.make_decision(classification, True)
        else:
            classification = self._classifier.classify(user_input)
            decision = preferences.make_decision(classification, False)

        log.info("routing_decision", **decision_fields(decision))
        return decision

    async def get_available_task_types(self) -> list[TaskTypeMetadata]:
        """Return predefined task types followed by operator-defined ones.

        Operator-defined types appear in configuration order; a type repeated
        in the table is repeated here too.
        """
        predefined = taxonomy.get_predefined_tasks()
        routing_config = await self._get_routing_config()
        if routing_config is None:
            return predefined

        custom = [
            taxonomy.custom_task_metadata(p.task_type)
            for p in routing_config.preferences
            if not taxonomy.is_predefined(p.task_type)
        ]
        return [*predefined, *custom]

    @staticmethod
    def is_model_available(model: Any) -> bool:
        """Basic validation only: any non-empty model name is accepted."""
        return isinstance(model, str) and len(model) > 0

    def get_fallback_model(self, preferred_model: str | None = None) -> str:
        """Return the environment's default model.

        `preferred_model` is accepted for interface symmetry and is currently
        ignored.
        """
        _ = preferred_model
        try:
            return self._model_provider.get_model()
        except Exception as e:
            fallback = self._default_model or get_settings().DEFAULT_MODEL
            log.warning("default_model_provider_failed", error=str(e), fallback=fallback)
            return fallback

    async def resolve_model(self, user_input: str, explicit_task_type: str | None = None) -> str:
        """Route `user_input` and return the model to call.

        Uses the routed model when one resolved and passes validation,
        otherwise the fallback model.
        """
        decision = await self.route_request(user_input, explicit_task_type)
        if decision.model is not None and self.is_model_available(decision.model):
            return decision.model
        return self.get_fallback_model(decision.model or "")
