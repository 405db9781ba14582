"""Fixed task taxonomy and metadata helpers.

Task types are open strings: operators may configure any identifier. The
predefined categories below are the ones the classifier can emit and the
ones that ship with a human-readable name and description.
"""

from __future__ import annotations

from enum import Enum

from model_router.models.routing_models import TaskTypeMetadata


class PredefinedTaskType(str, Enum):
    code_generation = "code_generation"
    code_understanding = "code_understanding"
    creative_writing = "creative_writing"
    complex_reasoning = "complex_reasoning"
    bug_fixing = "bug_fixing"
    refactoring = "refactoring"
    documentation = "documentation"


_PREDEFINED_TASKS: dict[str, TaskTypeMetadata] = {
    meta.id: meta
    for meta in (
        TaskTypeMetadata(
            id=PredefinedTaskType.code_generation.value,
            name="Code Generation",
            description="Generating new code snippets, functions, or boilerplate based on user prompts",
            is_predefined=True,
        ),
        TaskTypeMetadata(
            id=PredefinedTaskType.code_understanding.value,
            name="Code Understanding",
            description="Understanding and explaining existing code snippets, functions, or libraries",
            is_predefined=True,
        ),
        TaskTypeMetadata(
            id=PredefinedTaskType.creative_writing.value,
            name="Creative Writing",
            description="Creative content generation, storytelling, and writing assistance",
            is_predefined=True,
        ),
        TaskTypeMetadata(
            id=PredefinedTaskType.complex_reasoning.value,
            name="Complex Reasoning",
            description="Deep analysis, mathematical problem solving, and logical reasoning",
            is_predefined=True,
        ),
        TaskTypeMetadata(
            id=PredefinedTaskType.bug_fixing.value,
            name="Bug Fixing",
            description="Identifying and fixing bugs in code",
            is_predefined=True,
        ),
        TaskTypeMetadata(
            id=PredefinedTaskType.refactoring.value,
            name="Refactoring",
            description="Improving code structure without changing behavior",
            is_predefined=True,
        ),
        TaskTypeMetadata(
            id=PredefinedTaskType.documentation.value,
            name="Documentation",
            description="Writing and improving code documentation",
            is_predefined=True,
        ),
    )
}


def get_predefined_tasks() -> list[TaskTypeMetadata]:
    """Return metadata for every predefined task type, in taxonomy order."""
    return list(_PREDEFINED_TASKS.values())


def get_task_metadata(task_type: str) -> TaskTypeMetadata | None:
    return _PREDEFINED_TASKS.get(task_type)


def is_predefined(task_type: str) -> bool:
    return task_type in _PREDEFINED_TASKS


def custom_task_metadata(task_type: str) -> TaskTypeMetadata:
    """Synthesize metadata for an operator-defined task type.

    Nothing is stored; the entry is rebuilt from configuration on each call.
    """
    return TaskTypeMetadata(
        id=task_type,
        name=task_type.replace("_", " "),
        description=f"Custom task type: {task_type}",
        is_predefined=False,
    )
