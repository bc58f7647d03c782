"""Predicates that recognise non-prose text (headings, UI chrome, code, ...).

Each predicate is independent and answers a single question via
``matches(text)``. :class:`NoiseClassifier` evaluates an ordered tuple of
predicates and stops at the first match, so new noise categories are added by
appending another :class:`NoisePredicate` rather than editing existing ones.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import Iterable, Sequence

from .grammar_check_config import (
    CODE_SPECIAL_CHAR_DENSITY,
    CODE_VOCAB_MAX_LENGTH,
    CODE_WORDS,
    COMMON_SECTION_TITLES,
    CONSENT_WORDS,
    HEADING_PREPOSITIONS,
    MAX_TITLE_LENGTH,
    MAX_TITLE_WORDS,
    NAV_CAPITALISED_RATIO,
    NAV_MAX_ITEM_WORDS,
    NAV_MAX_TOKENS,
    NAV_MIN_SEPARATED_ITEMS,
    NAV_MIN_TOKENS,
    ROMAN_NUMERALS,
    SITE_USAGE_WORDS,
    SPECIAL_CHARACTERS,
    UI_PHRASES,
)

LOGGER = logging.getLogger(__name__)


def special_char_density(text: str) -> float:
    """Return the share of ``text`` made up of structural punctuation."""

    if not text:
        return 0.0
    count = sum(1 for ch in text if ch in SPECIAL_CHARACTERS)
    return count / len(text)


_CODE_WORD_PATTERN = re.compile(
    r"\b(?:" + "|".join(CODE_WORDS) + r")\b", re.IGNORECASE
)


def contains_code_words(text: str) -> bool:
    return bool(_CODE_WORD_PATTERN.search(text))


class NoisePredicate(ABC):
    """A single noise category."""

    name: str = "noise"

    @abstractmethod
    def matches(self, text: str) -> bool:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class HeadingPredicate(NoisePredicate):
    """Numbered, Roman-numeral, title-case and templated section headings."""

    name = "heading"

    _NUMBERED = re.compile(r"^(?:[A-Z]|\d+)\.\s+[A-Z][A-Za-z0-9\s]*$")
    _ROMAN = re.compile(
        r"^(?:"
        + "|".join(sorted(ROMAN_NUMERALS, key=len, reverse=True))
        + r")\.\s+[A-Z][A-Za-z0-9\s]*$"
    )
    _TITLE_CASE = re.compile(
        r"^(?:[A-Z][a-z0-9]*\s+){1,%d}[A-Z][a-z0-9]*$" % (MAX_TITLE_WORDS - 1)
    )
    _X_OF_Y = re.compile(r"^(?:[A-Z][a-z]+\s+){0,2}of(?:\s+[A-Z][a-z]+){1,3}$")
    _RIGHT_TO = re.compile(r"^The\s+Right\s+to\s+[A-Z][A-Za-z\s]*$")
    _HOW_TO = re.compile(r"^How\s+(?:to|We)\s+[A-Z][A-Za-z\s]*$")
    _TITLE_WITH_ORGANISATION = re.compile(
        r"^[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*:.*\([\"“”][^)]+[\"“”]\)$"
    )
    _COLON_HEADING = re.compile(r"^[A-Z][A-Za-z\s]{3,%d}:$" % MAX_TITLE_LENGTH)

    def matches(self, text: str) -> bool:
        trimmed = text.strip()
        if not trimmed:
            return False

        if self._NUMBERED.match(trimmed) or self._ROMAN.match(trimmed):
            return True

        if (
            self._TITLE_CASE.match(trimmed)
            and len(trimmed) < MAX_TITLE_LENGTH
            and "," not in trimmed
        ):
            return True

        for pattern in (
            self._X_OF_Y,
            self._RIGHT_TO,
            self._HOW_TO,
            self._TITLE_WITH_ORGANISATION,
            self._COLON_HEADING,
        ):
            if pattern.match(trimmed):
                return True

        return trimmed.lower() in COMMON_SECTION_TITLES


class UiElementPredicate(NoisePredicate):
    """Navigation labels, buttons and legal boilerplate links."""

    name = "ui_element"

    def __init__(self, phrases: Iterable[str] | None = None) -> None:
        source = UI_PHRASES if phrases is None else phrases
        self.phrases = frozenset(phrase.strip().lower() for phrase in source)

    def matches(self, text: str) -> bool:
        return text.strip().lower() in self.phrases


class CodeLikePredicate(NoisePredicate):
    """Source code, CSS and other markup residue."""

    name = "code"

    _CSS_DECLARATIONS = re.compile(r"(?:[a-z-]+\s*:\s*[^;:{}]+;\s*){2,}", re.IGNORECASE)

    def matches(self, text: str) -> bool:
        trimmed = text.strip()
        if not trimmed:
            return False
        if special_char_density(trimmed) > CODE_SPECIAL_CHAR_DENSITY:
            return True
        if self._CSS_DECLARATIONS.search(trimmed):
            return True
        return len(trimmed) <= CODE_VOCAB_MAX_LENGTH and contains_code_words(trimmed)


class NavigationPredicate(NoisePredicate):
    """Menu bars, breadcrumbs and link lists."""

    name = "navigation"

    _SEPARATORS = re.compile(r"\s*[|»›·•]\s*|\s+[/>]\s+")
    _PUNCTUATION = re.compile(r"[.,;:!?]")

    def matches(self, text: str) -> bool:
        trimmed = text.strip()
        if not trimmed:
            return False
        return self._is_separated_list(trimmed) or self._is_capitalised_run(trimmed)

    def _is_separated_list(self, text: str) -> bool:
        items = [item.strip() for item in self._SEPARATORS.split(text)]
        items = [item for item in items if item]
        if len(items) < NAV_MIN_SEPARATED_ITEMS:
            return False
        return all(len(item.split()) <= NAV_MAX_ITEM_WORDS for item in items)

    def _is_capitalised_run(self, text: str) -> bool:
        if self._PUNCTUATION.search(text):
            return False
        tokens = text.split()
        if not NAV_MIN_TOKENS <= len(tokens) <= NAV_MAX_TOKENS:
            return False
        capitalised = sum(1 for token in tokens if token[0].isupper() or token[0].isdigit())
        return capitalised / len(tokens) >= NAV_CAPITALISED_RATIO


class CookieConsentPredicate(NoisePredicate):
    """Cookie and consent banners."""

    name = "cookie_consent"

    def matches(self, text: str) -> bool:
        lowered = text.lower()
        return any(word in lowered for word in CONSENT_WORDS) and any(
            word in lowered for word in SITE_USAGE_WORDS
        )


class ListFragmentPredicate(NoisePredicate):
    """Bulleted list items, list introductions and metadata lines."""

    name = "list_fragment"

    _BULLET = re.compile(r"^(?:\d+\.|[*\-•])\s+[A-Za-z]")
    _LIST_INTRO = re.compile(
        r"^[A-Za-z\s]+(?:include|are|following|include but are not limited to):$"
    )
    _METADATA = re.compile(
        r"^(?:Version\s+Date:|Last\s+Updated:|Effective\s+Date:)", re.IGNORECASE
    )

    def matches(self, text: str) -> bool:
        trimmed = text.strip()
        if self._BULLET.match(trimmed) and "." not in trimmed[2:]:
            return True
        return bool(self._LIST_INTRO.match(trimmed) or self._METADATA.match(trimmed))


_PREPOSITION_GROUP = "|".join(HEADING_PREPOSITIONS)
_HEADING_WITH_PREPOSITION = (
    # "Collection of Personal Information"
    re.compile(
        r"^(?:[A-Z][a-z]+\s+){0,2}(?:%s)(?:\s+[A-Z][a-z]+){1,3}$" % _PREPOSITION_GROUP
    ),
    # "The Right to Deletion"
    re.compile(r"^The\s+[A-Z][a-z]+\s+(?:%s)\s+[A-Z][a-z]+" % _PREPOSITION_GROUP),
    # "How to Exercise Access"
    re.compile(r"^How\s+to\s+[A-Z][a-z]+"),
)


def is_preposition_in_heading(text: str) -> bool:
    """Return True when ``text`` is a heading built around a preposition."""

    trimmed = text.strip()
    return any(pattern.match(trimmed) for pattern in _HEADING_WITH_PREPOSITION)


DEFAULT_PREDICATES: tuple[NoisePredicate, ...] = (
    HeadingPredicate(),
    UiElementPredicate(),
    CodeLikePredicate(),
    NavigationPredicate(),
    CookieConsentPredicate(),
    ListFragmentPredicate(),
)


class NoiseClassifier:
    """Ordered, short-circuiting composition of noise predicates."""

    def __init__(self, predicates: Sequence[NoisePredicate] | None = None) -> None:
        self.predicates: tuple[NoisePredicate, ...] = (
            tuple(predicates) if predicates is not None else DEFAULT_PREDICATES
        )

    def with_predicate(self, predicate: NoisePredicate) -> "NoiseClassifier":
        """Return a new classifier with ``predicate`` appended."""
        return NoiseClassifier(self.predicates + (predicate,))

    def classify(self, text: str) -> str | None:
        """Return the name of the first matching predicate, or None."""
        for predicate in self.predicates:
            if predicate.matches(text):
                return predicate.name
        return None

    def is_noise(self, text: str) -> bool:
        category = self.classify(text)
        if category is not None:
            LOGGER.debug("Skipping %s text: %r", category, text[:80])
            return True
        return False

    def is_heading(self, text: str) -> bool:
        return self._matches_named("heading", text)

    def is_ui_element(self, text: str) -> bool:
        return self._matches_named("ui_element", text)

    def _matches_named(self, name: str, text: str) -> bool:
        return any(p.matches(text) for p in self.predicates if p.name == name)
