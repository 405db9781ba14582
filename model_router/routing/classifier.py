"""TaskClassifier: deterministic keyword heuristics for task-type detection.

Maps free-text user input to a task type with a fixed confidence and a canned
explanation. Rules are evaluated in priority order and the first rule whose
signal groups all match wins:

1. code_generation      (0.85) creation verbs + code artifact nouns
2. code_understanding   (0.85) explanation verbs + code nouns or a code block
3. bug_fixing           (0.85) defect vocabulary + code nouns or a code block
4. refactoring          (0.85) improvement verbs + code/design nouns or a code block
5. documentation        (0.80) documentation vocabulary + code nouns or a code block
6. creative_writing     (0.80) writing vocabulary and NO code vocabulary
7. complex_reasoning    (0.75) reasoning verbs + problem nouns or an operator character
8. code_generation      (0.60) a fenced code block anywhere
9. code_generation      (0.40) nothing matched

The reasoning string names the rule, not the exact token that matched, so the
same input always yields the same explanation.
"""

from __future__ import annotations

from dataclasses import dataclass
import re

import structlog

from model_router.models.routing_models import TaskClassification, TaskTypeMetadata
from model_router.routing import taxonomy
from model_router.routing.taxonomy import PredefinedTaskType

log = structlog.get_logger(__name__)


def _words(*words: str) -> re.Pattern[str]:
    """Compile a whole-word alternation (phrases allowed)."""
    return re.compile(r"\b(?:" + "|".join(re.escape(w) for w in words) + r")\b")


CODE_BLOCK = re.compile(r"```.*?```", re.DOTALL)
OPERATOR_CHAR = re.compile(r"[+\-*/=<>]")


@dataclass(frozen=True)
class ClassificationRule:
    """One row of the ordered rule table.

    A rule matches when:
    - `primary` is None or found in the text, and
    - `secondary` is empty or at least one of its patterns is found, and
    - `negative` is None or NOT found in the text.
    """

    task_type: str
    confidence: float
    reasoning: str
    primary: re.Pattern[str] | None = None
    secondary: tuple[re.Pattern[str], ...] = ()
    negative: re.Pattern[str] | None = None

    def matches(self, text: str) -> bool:
        if self.primary is not None and not self.primary.search(text):
            return False
        if self.secondary and not any(p.search(text) for p in self.secondary):
            return False
        if self.negative is not None and self.negative.search(text):
            return False
        return True

    def to_classification(self) -> TaskClassification:
        return TaskClassification(type=self.task_type, confidence=self.confidence, reasoning=self.reasoning)


# =============================================================================
# Default rule table (priority order)
# =============================================================================

DEFAULT_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        task_type=PredefinedTaskType.code_generation.value,
        confidence=0.85,
        reasoning=(
            "Input contains keywords suggesting new code generation "
            "(create, generate, write, function, class, component)"
        ),
        primary=_words("generate", "create", "write", "implement", "make", "build", "construct", "code"),
        secondary=(
            _words("function", "class", "method", "component", "module", "library", "script", "api"),
            _words("code", "snippet", "boilerplate", "example"),
        ),
    ),
    ClassificationRule(
        task_type=PredefinedTaskType.code_understanding.value,
        confidence=0.85,
        reasoning=(
            "Input contains keywords suggesting code analysis and explanation "
            "(explain, analyze, review, understand)"
        ),
        primary=_words(
            "explain", "understand", "analyze", "review", "check", "interpret",
            "what does", "how does", "describe", "summarize",
        ),
        secondary=(
            _words("code", "function", "class", "method", "snippet", "library", "module", "file"),
            CODE_BLOCK,
        ),
    ),
    ClassificationRule(
        task_type=PredefinedTaskType.bug_fixing.value,
        confidence=0.85,
        reasoning="Input contains keywords suggesting bug fixing (bug, fix, error, debug, broken)",
        primary=_words(
            "bug", "fix", "error", "crash", "broken", "issue", "problem", "debug",
            "wrong", "not working", "failing", "exception",
        ),
        secondary=(
            _words("code", "function", "method", "script", "program", "application"),
            CODE_BLOCK,
        ),
    ),
    ClassificationRule(
        task_type=PredefinedTaskType.refactoring.value,
        confidence=0.85,
        reasoning="Input contains keywords suggesting code refactoring (refactor, improve, optimize, simplify)",
        primary=_words(
            "refactor", "improve", "optimize", "clean", "simplify", "reorganize", "restructure", "rewrite",
        ),
        secondary=(
            _words("code", "function", "class", "method", "structure", "design", "architecture"),
            CODE_BLOCK,
        ),
    ),
    ClassificationRule(
        task_type=PredefinedTaskType.documentation.value,
        confidence=0.8,
        reasoning="Input contains keywords suggesting documentation tasks (document, comment, docstring, readme)",
        primary=_words(
            "document", "comment", "docstring", "readme", "javadoc", "jsdoc",
            "explain how to", "usage", "tutorial", "guide", "example",
        ),
        secondary=(
            _words("code", "function", "class", "method", "module", "api", "library"),
            CODE_BLOCK,
        ),
    ),
    ClassificationRule(
        task_type=PredefinedTaskType.creative_writing.value,
        confidence=0.8,
        reasoning="Input contains creative writing keywords without code-related terms (write, story, creative)",
        primary=_words(
            "write", "create", "compose", "tell", "story", "poem", "narrative", "essay",
            "article", "blog", "fiction", "imagine", "creative",
        ),
        negative=_words("code", "function", "class", "program", "script", "algorithm"),
    ),
    ClassificationRule(
        task_type=PredefinedTaskType.complex_reasoning.value,
        confidence=0.75,
        reasoning="Input contains keywords suggesting complex reasoning (analyze, solve, think, algorithm)",
        primary=_words(
            "analyze", "think", "reason", "solve", "calculate", "derive", "prove",
            "explain why", "how", "logic", "algorithm", "approach", "design",
        ),
        secondary=(
            _words("problem", "question", "challenge", "puzzle", "math", "physics", "algorithm", "pattern"),
            OPERATOR_CHAR,
        ),
    ),
    ClassificationRule(
        task_type=PredefinedTaskType.code_generation.value,
        confidence=0.6,
        reasoning="Code block detected in input; defaulting to code generation",
        primary=CODE_BLOCK,
    ),
)

FALLBACK_RULE = ClassificationRule(
    task_type=PredefinedTaskType.code_generation.value,
    confidence=0.4,
    reasoning="No specific task type signals found; defaulting to code generation",
)


class TaskClassifier:
    """Classifies user input into task types for preference-aligned routing.

    `classify()` never raises: when no rule fires it returns the low-confidence
    fallback classification.
    """

    def __init__(
        self,
        rules: tuple[ClassificationRule, ...] = DEFAULT_RULES,
        *,
        fallback: ClassificationRule = FALLBACK_RULE,
    ) -> None:
        self._rules = tuple(rules)
        self._fallback = fallback

    @property
    def rules(self) -> tuple[ClassificationRule, ...]:
        """Ordered rule table (highest priority first)."""
        return self._rules

    def classify(self, text: str) -> TaskClassification:
        lowered = (text or "").lower()
        rule = next((r for r in self._rules if r.matches(lowered)), self._fallback)
        classification = rule.to_classification()
        log.debug("task_classified", task_type=classification.type, confidence=classification.confidence)
        return classification

    @staticmethod
    def get_predefined_tasks() -> list[TaskTypeMetadata]:
        return taxonomy.get_predefined_tasks()

    @staticmethod
    def get_task_metadata(task_type: str) -> TaskTypeMetadata | None:
        return taxonomy.get_task_metadata(task_type)


_default_classifier = TaskClassifier()


def classify_task(text: str) -> TaskClassification:
    """Classify `text` with the default rule table."""
    return _default_classifier.classify(text)
