"""Heuristic grammar checks for prose extracted from web pages.

The pipeline runs strictly forward over a single document:

    raw text -> segmenter -> noise gating -> completeness detector
             -> whole-text pattern matcher -> deduplication -> CheckResult

Every stage is a total function over its input; "no match" is the only
failure mode. All per-document state lives on an :class:`AnalysisRun`
created fresh for each call, so a single :class:`GrammarChecker` can be shared
between threads analysing different documents.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from src.models import CheckResult

from .completeness import CompletenessDetector
from .deduplicator import deduplicate_errors
from .noise_filters import NoiseClassifier
from .pattern_matcher import PatternMatcher
from .run_context import AnalysisRun, CheckerOptions
from .segmenter import segment_text

LOGGER = logging.getLogger(__name__)


class GrammarChecker:
    """Entry point for analysing extracted page text."""

    def __init__(
        self,
        options: CheckerOptions | None = None,
        *,
        noise: NoiseClassifier | None = None,
        detector: CompletenessDetector | None = None,
        matcher: PatternMatcher | None = None,
    ) -> None:
        self.options = options or CheckerOptions()
        self.noise = noise or NoiseClassifier()
        self.detector = detector or CompletenessDetector(self.noise)
        self.matcher = matcher or PatternMatcher(self.noise)

    def check_text(self, text: str, url: str = "") -> CheckResult:
        """Analyse ``text`` and return the deduplicated findings."""

        text = text or ""
        run = AnalysisRun(text=text, options=self.options)

        if run.options.detect_incomplete:
            self.detector.detect(segment_text(text), run)
        self.matcher.scan(text, run)

        unique = deduplicate_errors(run.errors)
        disabled = run.options.disabled_rules
        errors = [error for error in unique if error.rule_id not in disabled]
        if len(errors) != len(unique):
            LOGGER.debug("Dropped %d finding(s) from disabled rules", len(unique) - len(errors))

        LOGGER.info(
            "Checked %d character(s)%s: %d issue(s)",
            len(text),
            f" from {url}" if url else "",
            len(errors),
        )
        return CheckResult(url=url, raw_text=text, errors=tuple(errors))

    def check_page(self, url: str, *, session: Any | None = None, timeout: float = 30) -> CheckResult:
        """Fetch ``url``, extract its readable text and analyse it."""

        from src.scraper import fetch_page_text

        text = fetch_page_text(url, session=session, timeout=timeout)
        LOGGER.info("Extracted %d character(s) from %s", len(text), url)
        return self.check_text(text, url=url)


def check_text(
    text: str,
    *,
    url: str = "",
    detect_incomplete: bool = True,
    disabled_rules: Iterable[str] | None = None,
    language: str | None = None,
) -> CheckResult:
    """Convenience wrapper that builds a checker for a single document."""

    options = CheckerOptions(
        detect_incomplete=detect_incomplete,
        disabled_rules=set(disabled_rules or []),
        language=language,
    )
    return GrammarChecker(options).check_text(text, url=url)
