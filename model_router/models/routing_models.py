"""Pydantic models for task classification and routing decisions."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TaskTypeMetadata(BaseModel):
    """Human-readable description of a task type (predefined or operator-defined)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    description: str
    is_predefined: bool = False


class TaskClassification(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str = Field(..., min_length=1)
    confidence: float = Field(..., ge=0.0, le=1.0)
    reasoning: str = Field(..., min_length=1)


class RoutingPreference(BaseModel):
    """A single operator mapping: task type -> model."""

    # `taskType` is accepted so settings written for the CLI load unchanged.
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    task_type: str = Field(..., min_length=1, alias="taskType")
    model: str = Field(..., min_length=1)


class RoutingConfig(BaseModel):
    """Routing table snapshot. Read-only for the duration of one decision."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    preferences: tuple[RoutingPreference, ...] = ()


class RoutingDecision(BaseModel):
    model_config = ConfigDict(frozen=True)

    # None means "no preference resolved": the caller uses its own default model.
    model: str | None = None
    task_type: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    reason: str
    is_explicit: bool = False
