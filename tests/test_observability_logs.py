from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from model_router.core.logging import decision_fields
from model_router.models.routing_models import RoutingConfig, RoutingDecision, RoutingPreference
from model_router.routing.router import ModelRouter


class DummyEnv:
    def get_routing_config(self):
        return RoutingConfig(
            enabled=True,
            preferences=(RoutingPreference(task_type="code_generation", model="gpt-4o"),),
        )

    def get_model(self) -> str:
        return "qwen3-coder-plus"


def test_decision_fields_flatten_and_truncate_reason():
    decision = RoutingDecision(model=None, task_type="bug_fixing", confidence=0.85, reason="x" * 500)

    fields = decision_fields(decision)

    assert fields["routed"] is False
    assert fields["task_type"] == "bug_fixing"
    assert len(fields["reason"]) == 300
    assert fields["reason"].endswith("...")


@pytest.mark.asyncio
async def test_route_request_logs_the_decision():
    env = DummyEnv()
    with capture_logs() as logs:
        decision = await ModelRouter(env, env).route_request("Write a function to sort a list")

    events = [e for e in logs if e["event"] == "routing_decision"]
    assert len(events) == 1
    assert events[0]["log_level"] == "info"
    assert events[0]["model"] == "gpt-4o"
    assert events[0]["routed"] is True
    assert events[0]["reason"] == decision.reason
