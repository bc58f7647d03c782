"""Grammar check package exports.

This package exposes the key helpers used by other parts of the project
so callers can import from ``src.grammar_check``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    # Only evaluated by type checkers
    from .completeness import CompletenessDetector, is_content_sentence
    from .deduplicator import FragmentRegistry, deduplicate_errors
    from .grammar_check import GrammarChecker, check_text
    from .grammar_check_config import DEFAULT_DISABLED_RULES, DEFAULT_LANGUAGE
    from .noise_filters import NoiseClassifier, NoisePredicate
    from .pattern_matcher import PatternMatcher
    from .report_utils import (
        build_report_console,
        build_report_html,
        build_report_json,
        build_report_markdown,
        write_report,
    )
    from .run_context import AnalysisRun, CheckerOptions
    from .segmenter import segment_text

__all__ = [
    "AnalysisRun",
    "CheckerOptions",
    "CompletenessDetector",
    "FragmentRegistry",
    "GrammarChecker",
    "NoiseClassifier",
    "NoisePredicate",
    "PatternMatcher",
    "build_report_console",
    "build_report_html",
    "build_report_json",
    "build_report_markdown",
    "check_text",
    "deduplicate_errors",
    "is_content_sentence",
    "segment_text",
    "write_report",
    "DEFAULT_DISABLED_RULES",
    "DEFAULT_LANGUAGE",
]

_LAZY_EXPORTS = {
    # attribute -> (module, attribute)
    "AnalysisRun": (".run_context", "AnalysisRun"),
    "CheckerOptions": (".run_context", "CheckerOptions"),
    "CompletenessDetector": (".completeness", "CompletenessDetector"),
    "FragmentRegistry": (".deduplicator", "FragmentRegistry"),
    "GrammarChecker": (".grammar_check", "GrammarChecker"),
    "NoiseClassifier": (".noise_filters", "NoiseClassifier"),
    "NoisePredicate": (".noise_filters", "NoisePredicate"),
    "PatternMatcher": (".pattern_matcher", "PatternMatcher"),
    "build_report_console": (".report_utils", "build_report_console"),
    "build_report_html": (".report_utils", "build_report_html"),
    "build_report_json": (".report_utils", "build_report_json"),
    "build_report_markdown": (".report_utils", "build_report_markdown"),
    "check_text": (".grammar_check", "check_text"),
    "deduplicate_errors": (".deduplicator", "deduplicate_errors"),
    "is_content_sentence": (".completeness", "is_content_sentence"),
    "segment_text": (".segmenter", "segment_text"),
    "write_report": (".report_utils", "write_report"),
    "DEFAULT_DISABLED_RULES": (".grammar_check_config", "DEFAULT_DISABLED_RULES"),
    "DEFAULT_LANGUAGE": (".grammar_check_config", "DEFAULT_LANGUAGE"),
}


def __getattr__(name: str):
    """Lazily import and return exported attributes.

    This avoids importing submodules (and the report/HTTP dependencies) until
    they are actually used.
    """

    if name in _LAZY_EXPORTS:
        module_name, attr = _LAZY_EXPORTS[name]
        from importlib import import_module

        mod = import_module(f"src.grammar_check{module_name}")
        value = getattr(mod, attr)
        globals()[name] = value
        return value
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(_LAZY_EXPORTS.keys()))
