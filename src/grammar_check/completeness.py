"""Per-sentence completeness checks.

Every unit that survives noise filtering is either reported for missing
terminal punctuation or run through an ordered table of incomplete-sentence
rules. At most one finding is produced per unit.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Sequence

from src.models import RuleId

from .grammar_check_config import (
    AUXILIARY_WORDS,
    CODE_WORDS,
    MAX_SPECIAL_CHAR_DENSITY,
    MIN_CONTENT_LENGTH,
    MIN_CONTENT_TOKENS,
    MIN_FALLBACK_TOKENS,
    MIN_UNIT_LENGTH,
    PREPOSITIONS,
    SUBJECT_WORDS,
)
from .noise_filters import NoiseClassifier, special_char_density
from .run_context import AnalysisRun
from .segmenter import Paragraph, Segment

LOGGER = logging.getLogger(__name__)

MISSING_PUNCTUATION_MESSAGE = "Sentence does not end with proper punctuation"
MISSING_PUNCTUATION_SUGGESTION = (
    "Add appropriate ending punctuation (period, exclamation mark, or question mark)"
)
INCOMPLETE_MESSAGE = "Possible incomplete sentence or sentence fragment"
GENERIC_SUGGESTION = "Complete the sentence with a main clause"
PUNCTUATION_SUGGESTION = "Add proper punctuation"

_TERMINAL_PUNCTUATION = re.compile(r"[.!?]$")
_ENDS_WITH_COLON = re.compile(r":[^.]?$")
_SUBJECT_WORD = re.compile(r"\b(?:%s)\b" % "|".join(SUBJECT_WORDS), re.IGNORECASE)
_AUXILIARY_WORD = re.compile(r"\b(?:%s)\b" % "|".join(AUXILIARY_WORDS), re.IGNORECASE)

_PREPOSITION_GROUP = "|".join(PREPOSITIONS)
_NEGATION = r"(?:(?:do|does|did|will|can)\s*not|don't|doesn't|didn't|won't|can't)"
_RESPONSE_VERBS = r"(?:recognize|recognise|respond|reply|acknowledge)"
_CLAUSE_END = r"\s*[.!]*\s*$"

_NEGATION_WORD = re.compile(r"\b%s\b" % _NEGATION, re.IGNORECASE)
_RESPONSE_VERB_WORD = re.compile(r"\b%s\b" % _RESPONSE_VERBS, re.IGNORECASE)


def ends_with_terminal_punctuation(text: str) -> bool:
    return bool(_TERMINAL_PUNCTUATION.search(text.strip()))


def has_subject_and_auxiliary(text: str) -> bool:
    subject = _SUBJECT_WORD.search(text)
    return subject is not None and _AUXILIARY_WORD.search(text, subject.end()) is not None


def is_content_sentence(text: str) -> bool:
    """Return True when ``text`` looks like prose rather than UI or code."""

    if len(text) < MIN_CONTENT_LENGTH:
        return False

    words = text.split()
    if len(words) < MIN_CONTENT_TOKENS:
        return False

    if has_subject_and_auxiliary(text):
        return True

    lowered = text.lower()
    has_code_words = any(word in lowered for word in CODE_WORDS)
    return (
        len(words) >= MIN_FALLBACK_TOKENS
        and not has_code_words
        and special_char_density(text) < MAX_SPECIAL_CHAR_DENSITY
    )


@dataclass(frozen=True)
class SuggestionSelector:
    """Suggestion offered when ``pattern`` matches the flagged text.

    With ``followed_by`` set, that pattern must also match after the first
    ``pattern`` match.
    """

    pattern: re.Pattern[str]
    suggestion: str
    followed_by: re.Pattern[str] | None = None

    def matches(self, text: str) -> bool:
        match = self.pattern.search(text)
        if match is None or self.followed_by is None:
            return match is not None
        return self.followed_by.search(text, match.end()) is not None


SUGGESTION_SELECTORS: tuple[SuggestionSelector, ...] = (
    SuggestionSelector(
        _NEGATION_WORD,
        "Complete the sentence by specifying what is recognized or responded to",
        followed_by=_RESPONSE_VERB_WORD,
    ),
    SuggestionSelector(
        re.compile(
            r"\b(?:initiated|completed|started|begun|processed|respond|recognize)\s*$",
            re.IGNORECASE,
        ),
        "Complete the sentence by adding an object",
    ),
    SuggestionSelector(
        re.compile(r"^(?:please|kindly)\s+note\b", re.IGNORECASE),
        "Complete the sentence after noting important information",
    ),
    SuggestionSelector(
        re.compile(r"\b(?:%s)\s*$" % _PREPOSITION_GROUP, re.IGNORECASE),
        "Add the object of the preposition",
    ),
)


def select_suggestions(
    text: str, selectors: Sequence[SuggestionSelector] = SUGGESTION_SELECTORS
) -> list[str]:
    """Pick the most specific suggestion for ``text`` plus the punctuation hint."""

    body = text.strip().rstrip(".!?").rstrip()
    suggestion = GENERIC_SUGGESTION
    for selector in selectors:
        if selector.matches(body):
            suggestion = selector.suggestion
            break
    return [suggestion, PUNCTUATION_SUGGESTION]


@dataclass(frozen=True)
class IncompleteRule:
    """One entry of the ordered incomplete-sentence rule table.

    With ``preceded_by`` set, that pattern must also match somewhere before
    the ``pattern`` match.
    """

    name: str
    pattern: re.Pattern[str]
    rule_id: str = RuleId.POSSIBLE_INCOMPLETE_SENTENCE.value
    message: str = INCOMPLETE_MESSAGE
    preceded_by: re.Pattern[str] | None = None

    def matches(self, text: str) -> bool:
        match = self.pattern.search(text)
        if match is None or self.preceded_by is None:
            return match is not None
        return self.preceded_by.search(text, 0, match.start()) is not None

    def select_suggestions(self, text: str) -> list[str]:
        return select_suggestions(text)


INCOMPLETE_RULES: tuple[IncompleteRule, ...] = (
    IncompleteRule(
        "dangling_transitive_verb",
        re.compile(r"\b%s%s" % (_RESPONSE_VERBS, _CLAUSE_END), re.IGNORECASE),
        preceded_by=_NEGATION_WORD,
    ),
    IncompleteRule(
        "dangling_preposition",
        # Unterminated units only, so "Please log in." is not flagged.
        re.compile(r"\b(?:%s)\s*$" % _PREPOSITION_GROUP, re.IGNORECASE),
    ),
    IncompleteRule(
        "browser_initiated_fragment",
        re.compile(r"\bbrowser-initiated\b[^.!?]*$", re.IGNORECASE),
    ),
    IncompleteRule(
        "dangling_note",
        re.compile(r"^(?:please|kindly)\s+note(?:\s+that)?[\s.!]*$", re.IGNORECASE),
    ),
)


class CompletenessDetector:
    """Flags unterminated and structurally incomplete sentences."""

    def __init__(
        self,
        noise: NoiseClassifier | None = None,
        rules: Sequence[IncompleteRule] = INCOMPLETE_RULES,
    ) -> None:
        self.noise = noise or NoiseClassifier()
        self.rules = tuple(rules)

    def detect(self, segments: Iterable[Segment], run: AnalysisRun) -> None:
        paragraph_noise: dict[int, bool] = {}
        for segment in segments:
            if self._paragraph_is_noise(segment.paragraph, paragraph_noise):
                continue
            self.check_segment(segment, run)

    def _paragraph_is_noise(self, paragraph: Paragraph, cache: dict[int, bool]) -> bool:
        if paragraph.offset not in cache:
            cache[paragraph.offset] = self.noise.is_noise(paragraph.text)
        return cache[paragraph.offset]

    def check_segment(self, segment: Segment, run: AnalysisRun) -> None:
        sentence = segment.trimmed
        if len(sentence) < MIN_UNIT_LENGTH:
            return
        if self.noise.is_noise(sentence):
            return

        if (
            not ends_with_terminal_punctuation(sentence)
            and not _ENDS_WITH_COLON.search(sentence)
            and is_content_sentence(sentence)
        ):
            run.submit(
                rule_id=RuleId.MISSING_END_PUNCTUATION.value,
                message=MISSING_PUNCTUATION_MESSAGE,
                span=segment.text,
                offset=segment.offset,
                suggestions=[MISSING_PUNCTUATION_SUGGESTION],
            )
            return

        for rule in self.rules:
            if rule.matches(sentence):
                LOGGER.debug("Rule %s matched %r", rule.name, sentence[:80])
                run.submit(
                    rule_id=rule.rule_id,
                    message=rule.message,
                    span=segment.text,
                    offset=segment.offset,
                    suggestions=rule.select_suggestions(sentence),
                )
                break
