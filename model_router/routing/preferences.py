"""RoutingPreferences: match a task classification against the routing table."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from model_router.models.routing_models import (
    RoutingConfig,
    RoutingDecision,
    RoutingPreference,
    TaskClassification,
)

DISABLED_REASON = "Task-based routing is disabled in settings"


def confidence_percent(confidence: float) -> int:
    """Render a 0-1 confidence as a whole percentage.

    Rounds the exact float product half up, so 0.575 gives 57 (the product is
    57.49999999999999) while 0.125 gives 13.
    """
    return int(Decimal(confidence * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class RoutingPreferences:
    """Matches task classifications to preferred models.

    Lookup is first-match-wins on exact (case-sensitive) task type equality.
    Duplicate task types are tolerated; only the first entry is ever used.
    All queries below share that rule so they never disagree with
    `make_decision()`.
    """

    def __init__(self, config: RoutingConfig) -> None:
        self._config = config

    def _find(self, task_type: str) -> RoutingPreference | None:
        return next((p for p in self._config.preferences if p.task_type == task_type), None)

    def make_decision(self, classification: TaskClassification, is_explicit: bool = False) -> RoutingDecision:
        """Build a routing decision for `classification`.

        Args:
            classification: Classifier output (or a synthetic explicit one)
            is_explicit: True when the task type was chosen by the user

        Returns:
            RoutingDecision; `model` is None when routing is disabled or no
            preference matches.
        """
        # Disabled tables never leak a model, even when a preference matches.
        if not self._config.enabled:
            return RoutingDecision(
                model=None,
                task_type=classification.type,
                confidence=classification.confidence,
                reason=DISABLED_REASON,
                is_explicit=is_explicit,
            )

        preference = self._find(classification.type)
        if preference is not None:
            return RoutingDecision(
                model=preference.model,
                task_type=classification.type,
                confidence=classification.confidence,
                reason=(
                    f'Routed to {preference.model} based on task type "{classification.type}" '
                    f"with {confidence_percent(classification.confidence)}% confidence. "
                    f"{classification.reasoning}"
                ),
                is_explicit=is_explicit,
            )

        return RoutingDecision(
            model=None,
            task_type=classification.type,
            confidence=classification.confidence,
            reason=(
                f'No routing preference configured for task type "{classification.type}". '
                "Falling back to default model."
            ),
            is_explicit=is_explicit,
        )

    def has_preference_for_task_type(self, task_type: str) -> bool:
        return self._find(task_type) is not None

    def get_model_for_task_type(self, task_type: str) -> str | None:
        preference = self._find(task_type)
        return preference.model if preference is not None else None

    def get_configured_task_types(self) -> list[str]:
        """All configured task types in table order (duplicates kept)."""
        return [p.task_type for p in self._config.preferences]

    def is_enabled(self) -> bool:
        return self._config.enabled

    def get_preference_count(self) -> int:
        return len(self._config.preferences)
