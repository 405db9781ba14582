"""Tests for TaskClassifier heuristics and the predefined task taxonomy."""
from __future__ import annotations

import re

import pytest

from model_router.routing.classifier import (
    DEFAULT_RULES,
    FALLBACK_RULE,
    ClassificationRule,
    TaskClassifier,
    classify_task,
)
from model_router.routing.taxonomy import PredefinedTaskType


# =============================================================================
# Taxonomy
# =============================================================================

def test_predefined_tasks_cover_the_fixed_taxonomy_in_order():
    tasks = TaskClassifier.get_predefined_tasks()

    assert [t.id for t in tasks] == [t.value for t in PredefinedTaskType]
    assert len(tasks) == 7
    assert all(t.is_predefined for t in tasks)
    assert all(t.description for t in tasks)


def test_task_metadata_lookup():
    meta = TaskClassifier.get_task_metadata("code_generation")
    assert meta is not None
    assert meta.name == "Code Generation"
    assert meta.is_predefined is True

    assert TaskClassifier.get_task_metadata("unknown_task") is None


# =============================================================================
# Rule table
# =============================================================================

def test_rule_table_priority_order():
    assert [r.task_type for r in DEFAULT_RULES] == [
        "code_generation",
        "code_understanding",
        "bug_fixing",
        "refactoring",
        "documentation",
        "creative_writing",
        "complex_reasoning",
        "code_generation",
    ]
    assert [r.confidence for r in DEFAULT_RULES] == [0.85, 0.85, 0.85, 0.85, 0.8, 0.8, 0.75, 0.6]
    assert FALLBACK_RULE.confidence == 0.4


def test_each_rule_requires_both_signal_groups():
    code_gen, understanding, bug, refactor, docs, _creative, reasoning, _block = DEFAULT_RULES

    assert code_gen.matches("write a function")
    assert not code_gen.matches("write a letter")

    assert understanding.matches("explain this module")
    assert understanding.matches("explain ```x = 1```")
    assert not understanding.matches("explain the weather")

    assert bug.matches("fix the script")
    assert not bug.matches("fix my bike")

    assert refactor.matches("simplify the architecture")
    assert not refactor.matches("simplify my life")

    assert docs.matches("add a docstring to the class")
    assert not docs.matches("read the tutorial")

    assert reasoning.matches("solve this puzzle")
    assert reasoning.matches("calculate 2 + 2")
    assert not reasoning.matches("solve it")


def test_creative_rule_is_blocked_by_code_vocabulary():
    creative = DEFAULT_RULES[5]

    assert creative.matches("write a poem about the sea")
    assert not creative.matches("write a poem about my script")
    assert not creative.matches("tell me about this algorithm")


def test_custom_rule_table_is_honored():
    rule = ClassificationRule(
        task_type="sql_tuning",
        confidence=0.9,
        reasoning="SQL keywords found",
        primary=re.compile(r"\bselect\b"),
    )
    classifier = TaskClassifier((rule,))

    result = classifier.classify("Why is this SELECT slow?")
    assert result.type == "sql_tuning"
    assert result.reasoning == "SQL keywords found"

    assert classifier.classify("hello").type == FALLBACK_RULE.task_type


# =============================================================================
# Classification by category
# =============================================================================

@pytest.mark.parametrize(
    "text",
    [
        "Write a function to calculate the fibonacci sequence",
        "Create a React component for a todo list",
        "Generate Python boilerplate for a REST API",
    ],
)
def test_code_generation_requests(text):
    result = classify_task(text)
    assert result.type == PredefinedTaskType.code_generation.value
    assert result.confidence == 0.85


def test_code_understanding_request():
    result = classify_task("Explain what this function does")
    assert result.type == "code_understanding"
    assert result.confidence == 0.85
    assert "explain" in result.reasoning


def test_bug_fixing_request():
    result = classify_task("Debug why this function is returning the wrong value")
    assert result.type == "bug_fixing"
    assert result.confidence == 0.85


def test_refactoring_request():
    result = classify_task("Refactor this function to simplify its structure")
    assert result.type == "refactoring"


def test_documentation_request():
    result = classify_task("Add docstring comments to this module")
    assert result.type == "documentation"
    assert result.confidence == 0.8


@pytest.mark.parametrize("text", ["Write a short story about time travel", "Write a poem about autumn"])
def test_creative_writing_requests(text):
    result = classify_task(text)
    assert result.type == "creative_writing"
    assert result.confidence == 0.8


def test_code_vocabulary_prevents_creative_writing():
    result = classify_task("Create a narrative for my code example")
    assert result.type == "code_generation"


def test_complex_reasoning_with_operator_character():
    result = classify_task("Analyze and reason through the trade-offs between these approaches")
    assert result.type == "complex_reasoning"
    assert result.confidence == 0.75


def test_complex_reasoning_with_domain_noun():
    result = classify_task("Solve this math puzzle for me")
    assert result.type == "complex_reasoning"


def test_code_block_without_other_signals_defaults_to_code_generation():
    result = classify_task("```\nprint('hi')\n```")
    assert result.type == "code_generation"
    assert result.confidence == 0.6
    assert "Code block" in result.reasoning


def test_code_block_with_code_nouns_uses_higher_priority_rule():
    result = classify_task("Here is my code:\n```python\ndef hello():\n    print('world')\n```\nMake it better")
    assert result.type == "code_generation"
    assert result.confidence == 0.85


# =============================================================================
# Fallback and invariants
# =============================================================================

@pytest.mark.parametrize("text", ["", "hello", "help"])
def test_no_signal_falls_back_with_low_confidence(text):
    result = classify_task(text)
    assert result.type == "code_generation"
    assert result.confidence < 0.5
    assert "No specific task type signals found" in result.reasoning


def test_none_input_is_treated_as_empty():
    assert classify_task(None).confidence == 0.4  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "text",
    [
        "write a function to calculate sum",
        "Explain what this function does",
        "Write a poem about autumn",
        "Analyze and reason through the trade-offs",
        "tell me about this",
        "",
    ],
)
def test_classification_is_deterministic_and_case_insensitive(text):
    first = classify_task(text)
    assert classify_task(text) == first
    assert classify_task(text.upper()) == first
    assert 0.0 <= first.confidence <= 1.0
    assert first.type
    assert first.reasoning
