"""Options and per-run state threaded through every pipeline stage."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models import ErrorPosition, GrammarError

from .deduplicator import FragmentRegistry
from .grammar_check_config import DEFAULT_DISABLED_RULES, DEFAULT_LANGUAGE

LOGGER = logging.getLogger(__name__)


def _collect_disabled_rules(additional_rules: object) -> set[str]:
    """Merge default disabled rules with any additional entries."""
    rules = set(DEFAULT_DISABLED_RULES)
    if not additional_rules:
        return rules
    if isinstance(additional_rules, (str, Enum)):
        additional_rules = [additional_rules]
    for rule in additional_rules:  # type: ignore[union-attr]
        if isinstance(rule, Enum):
            rule = rule.value
        cleaned = str(rule or "").strip()
        if cleaned:
            rules.add(cleaned)
    return rules


class CheckerOptions(BaseModel):
    """Caller-supplied settings for a grammar check.

    ``language`` is carried through unchanged; no rule table depends on it yet.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    detect_incomplete: bool = Field(default=True, alias="detectIncomplete")
    disabled_rules: FrozenSet[str] = Field(
        default_factory=lambda: frozenset(DEFAULT_DISABLED_RULES),
        alias="disabledRules",
    )
    language: str = DEFAULT_LANGUAGE

    @field_validator("disabled_rules", mode="before")
    def _merge_disabled_rules(cls, value: object) -> FrozenSet[str]:
        return frozenset(_collect_disabled_rules(value))

    @field_validator("language", mode="before")
    def _default_language(cls, value: object) -> str:
        return str(value or "").strip() or DEFAULT_LANGUAGE


@dataclass
class AnalysisRun:
    """State owned by a single analysis of a single document.

    A fresh instance (and therefore a fresh :class:`FragmentRegistry`) is
    created for every document so concurrent runs never share findings.
    """

    text: str
    options: CheckerOptions = field(default_factory=CheckerOptions)
    registry: FragmentRegistry = field(default_factory=FragmentRegistry)
    errors: list[GrammarError] = field(default_factory=list)

    def submit(
        self,
        *,
        rule_id: str,
        message: str,
        span: str,
        offset: int,
        suggestions: list[str] | tuple[str, ...],
    ) -> GrammarError | None:
        """Record a candidate finding unless it overlaps an accepted one.

        ``span`` is the raw matched text and ``offset`` its start in ``text``;
        both are adjusted to the trimmed context.
        """

        context = span.strip()
        if not context:
            return None
        if not self.registry.try_accept(context):
            LOGGER.debug("Suppressing overlapping %s: %r", rule_id, context[:80])
            return None

        leading = len(span) - len(span.lstrip())
        error = GrammarError(
            message=message,
            context=context,
            suggestions=suggestions,
            rule_id=rule_id,
            position=ErrorPosition(offset=max(0, offset + leading), length=len(context)),
        )
        self.errors.append(error)
        return error
