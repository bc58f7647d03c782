"""Suppression of repeated and overlapping findings within one run."""

from __future__ import annotations

import logging
from typing import Iterable

from src.models import GrammarError

LOGGER = logging.getLogger(__name__)


class FragmentRegistry:
    """Run-scoped record of accepted text fragments.

    A candidate is rejected when its trimmed text equals, is contained in, or
    contains any fragment accepted earlier in the same run. Acceptance is
    permanent for the lifetime of the registry.
    """

    def __init__(self) -> None:
        self._fragments: list[str] = []
        self._exact: set[str] = set()

    def __len__(self) -> int:
        return len(self._fragments)

    @property
    def fragments(self) -> tuple[str, ...]:
        return tuple(self._fragments)

    def overlaps(self, fragment: str) -> bool:
        """Return True when ``fragment`` overlaps an accepted fragment."""

        candidate = fragment.strip()
        if not candidate:
            return True
        if candidate in self._exact:
            return True
        for seen in self._fragments:
            if candidate in seen or seen in candidate:
                return True
        return False

    def try_accept(self, fragment: str) -> bool:
        """Accept ``fragment`` unless it overlaps; return whether it was accepted."""

        if self.overlaps(fragment):
            return False
        candidate = fragment.strip()
        self._fragments.append(candidate)
        self._exact.add(candidate)
        return True


def deduplicate_errors(errors: Iterable[GrammarError]) -> list[GrammarError]:
    """Drop errors sharing the same (trimmed context, rule) key, keeping the first."""

    unique: list[GrammarError] = []
    seen: set[tuple[str, str]] = set()
    for error in errors:
        key = error.dedupe_key
        if key in seen:
            LOGGER.debug("Dropping duplicate %s for %r", error.rule_id, error.context[:80])
            continue
        seen.add(key)
        unique.append(error)
    return unique
