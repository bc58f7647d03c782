"""Enumerations shared by the grammar check models and report builders."""

from __future__ import annotations

from enum import Enum


class RuleId(str, Enum):
    """Symbolic identifiers for every rule the detectors can emit.

    Values are used verbatim in serialised reports and in ``disabled_rules``.
    """

    MISSING_END_PUNCTUATION = "MISSING_END_PUNCTUATION"
    POSSIBLE_INCOMPLETE_SENTENCE = "POSSIBLE_INCOMPLETE_SENTENCE"
    HANGING_PREPOSITION = "HANGING_PREPOSITION"
    INCOMPLETE_TRANSITIVE_VERB = "INCOMPLETE_TRANSITIVE_VERB"
    INCOMPLETE_BROWSER_INITIATED = "INCOMPLETE_BROWSER_INITIATED"

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]


class OutputFormat(str, Enum):
    """Report formats understood by :func:`write_report`."""

    CONSOLE = "console"
    JSON = "json"
    HTML = "html"
    MARKDOWN = "markdown"

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]
