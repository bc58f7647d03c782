"""Whole-document regex scan for incomplete patterns.

Segmentation works paragraph by paragraph, so some fragments (for example a
hanging preposition after a long capitalised run) are easier to catch with a
scan over the raw text. Matches are re-checked against the heading and UI
predicates before they are recorded.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterator, Sequence

from src.models import RuleId

from .completeness import PUNCTUATION_SUGGESTION
from .grammar_check_config import PREPOSITIONS
from .noise_filters import NoiseClassifier, is_preposition_in_heading
from .run_context import AnalysisRun

LOGGER = logging.getLogger(__name__)


_CLAUSE_TERMINATORS = ".!?\n"
_CAPITALISED_WORD = re.compile(r"\b[A-Z]")


def clause_start(text: str, index: int) -> int:
    """Return the position just after the last terminator before ``index``."""

    return max(text.rfind(ch, 0, index) for ch in _CLAUSE_TERMINATORS) + 1


@dataclass(frozen=True)
class PatternRule:
    """A global regex with the finding it produces.

    ``pattern`` matches the tail of a fragment. With ``widen_to_clause`` the
    reported span is extended back to the start of the enclosing clause, or to
    the first ``clause_lead`` match inside it when one is given. Spans whose
    lead is fewer than ``min_lead_length`` characters before the tail are
    skipped.
    """

    rule_id: str
    pattern: re.Pattern[str]
    message: str
    suggestion: str
    exempt_heading_prepositions: bool = False
    widen_to_clause: bool = False
    clause_lead: re.Pattern[str] | None = None
    min_lead_length: int = 0

    def find_spans(self, text: str) -> Iterator[tuple[int, int]]:
        for match in self.pattern.finditer(text):
            if not self.widen_to_clause:
                yield match.span()
                continue

            start = clause_start(text, match.start())
            lead_end = start
            if self.clause_lead is not None:
                lead = self.clause_lead.search(text, start, match.start())
                if lead is None:
                    continue
                start, lead_end = lead.start(), lead.end()
            if match.start() - lead_end < self.min_lead_length:
                continue
            yield start, match.end()

    def select_suggestions(self, matched_text: str) -> list[str]:
        return [self.suggestion, PUNCTUATION_SUGGESTION]


PATTERN_RULES: tuple[PatternRule, ...] = (
    PatternRule(
        rule_id=RuleId.INCOMPLETE_TRANSITIVE_VERB.value,
        pattern=re.compile(
            r"\b(?:please note|it is important to note)\b.*"
            r"\b(?:do not|does not|will not|cannot)\b.*"
            r"\b(?:recognize|respond|reply|acknowledge)\b[^.!?\n]*$",
            re.IGNORECASE | re.MULTILINE,
        ),
        message="Incomplete sentence missing object after transitive verb",
        suggestion="Complete the sentence by specifying what is recognized or responded to",
    ),
    PatternRule(
        rule_id=RuleId.HANGING_PREPOSITION.value,
        pattern=re.compile(r"\b(?:%s)[ \t]*$" % "|".join(PREPOSITIONS), re.MULTILINE),
        message="Sentence ends with a preposition",
        suggestion="Complete the prepositional phrase with an object",
        exempt_heading_prepositions=True,
        # Only clauses with a capitalised word at least 10 characters before
        # the trailing preposition.
        widen_to_clause=True,
        clause_lead=_CAPITALISED_WORD,
        min_lead_length=10,
    ),
    PatternRule(
        rule_id=RuleId.INCOMPLETE_BROWSER_INITIATED.value,
        pattern=re.compile(r"\bbrowser-initiated\b[^.!?\n]*$", re.MULTILINE),
        message='Incomplete sentence with "browser-initiated"',
        suggestion=(
            "Complete the sentence with what happens with browser-initiated requests/actions"
        ),
        widen_to_clause=True,
    ),
)


class PatternMatcher:
    """Applies :data:`PATTERN_RULES` to the full text of a run."""

    def __init__(
        self,
        noise: NoiseClassifier | None = None,
        rules: Sequence[PatternRule] = PATTERN_RULES,
    ) -> None:
        self.noise = noise or NoiseClassifier()
        self.rules = tuple(rules)

    def is_exempt(self, rule: PatternRule, context: str) -> bool:
        if self.noise.is_heading(context) or self.noise.is_ui_element(context):
            return True
        return rule.exempt_heading_prepositions and is_preposition_in_heading(context)

    def scan(self, text: str, run: AnalysisRun) -> None:
        for rule in self.rules:
            for start, end in rule.find_spans(text):
                span = text[start:end]
                context = span.strip()
                if not context:
                    continue
                if self.is_exempt(rule, context):
                    LOGGER.debug("Exempting heading-like %s match: %r", rule.rule_id, context[:80])
                    continue
                run.submit(
                    rule_id=rule.rule_id,
                    message=rule.message,
                    span=span,
                    offset=start,
                    suggestions=rule.select_suggestions(context),
                )
