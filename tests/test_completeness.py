from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.grammar_check import grammar_check_config
from src.grammar_check.completeness import (
    GENERIC_SUGGESTION,
    MISSING_PUNCTUATION_SUGGESTION,
    PUNCTUATION_SUGGESTION,
    CompletenessDetector,
    ends_with_terminal_punctuation,
    has_subject_and_auxiliary,
    is_content_sentence,
    select_suggestions,
)
from src.grammar_check.run_context import AnalysisRun
from src.grammar_check.segmenter import segment_text


def _detect(text: str) -> AnalysisRun:
    run = AnalysisRun(text=text)
    CompletenessDetector().detect(segment_text(text), run)
    return run


def test_terminal_punctuation() -> None:
    assert ends_with_terminal_punctuation("Done.")
    assert ends_with_terminal_punctuation("Really?! ")
    assert not ends_with_terminal_punctuation("Done")
    assert not ends_with_terminal_punctuation("Options:")


def test_subject_and_auxiliary() -> None:
    assert has_subject_and_auxiliary("We will send it")
    assert not has_subject_and_auxiliary("Send it now")


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("It is a fine day", True),
        ("Visit our beautiful store downtown for great deals", True),
        ("Choose your favourite colors for the new design", False),
        ("Please visit our site to", False),
        ("It is", False),
    ],
)
def test_is_content_sentence(text: str, expected: bool) -> None:
    assert is_content_sentence(text) is expected


@pytest.mark.parametrize(
    ("text", "suggestion"),
    [
        ("Our servers do not recognize.", "Complete the sentence by specifying what is recognized or responded to"),
        ("Handling for browser-initiated", "Complete the sentence by adding an object"),
        ("Please note that", "Complete the sentence after noting important information"),
        ("Please visit our site to", "Add the object of the preposition"),
        ("Something else entirely", GENERIC_SUGGESTION),
    ],
)
def test_select_suggestions(text: str, suggestion: str) -> None:
    assert select_suggestions(text) == [suggestion, PUNCTUATION_SUGGESTION]


def test_hanging_preposition_unit_is_incomplete() -> None:
    text = "We appreciate your business. Please visit our site to"
    run = _detect(text)

    assert len(run.errors) == 1
    error = run.errors[0]
    assert error.rule_id == "POSSIBLE_INCOMPLETE_SENTENCE"
    assert error.context == "Please visit our site to"
    assert error.suggestions[0] == "Add the object of the preposition"
    assert error.position.offset == text.index("Please")
    assert error.position.length == len("Please visit our site to")


def test_missing_punctuation_takes_precedence() -> None:
    text = "1. Introduction\n\nThis policy explains how we collect data"
    run = _detect(text)

    assert [(e.rule_id, e.context) for e in run.errors] == [
        ("MISSING_END_PUNCTUATION", "This policy explains how we collect data"),
    ]
    assert run.errors[0].suggestions == (MISSING_PUNCTUATION_SUGGESTION,)
    assert run.errors[0].position.offset == 17


def test_one_finding_per_unit() -> None:
    # Qualifies for missing punctuation and the dangling preposition rule.
    run = _detect("We will send the confirmation email to")
    assert [e.rule_id for e in run.errors] == ["MISSING_END_PUNCTUATION"]


@pytest.mark.parametrize(
    ("text", "suggestion"),
    [
        ("Our servers do not recognize.", "Complete the sentence by specifying what is recognized or responded to"),
        ("Handling for browser-initiated", "Complete the sentence by adding an object"),
        ("Please note that.", "Complete the sentence after noting important information"),
    ],
)
def test_incomplete_rules(text: str, suggestion: str) -> None:
    run = _detect(text)
    assert len(run.errors) == 1
    assert run.errors[0].rule_id == "POSSIBLE_INCOMPLETE_SENTENCE"
    assert run.errors[0].suggestions[0] == suggestion


@pytest.mark.parametrize(
    "text",
    [
        "We have these 3 options:",
        "Too short",
        "This is a complete sentence.",
        "Contact Us",
        "Home | About Us | Blog | Contact Support",
    ],
)
def test_units_without_findings(text: str) -> None:
    assert _detect(text).errors == []


def test_noise_paragraph_skips_every_unit() -> None:
    # The second unit would be flagged on its own.
    text = "This website uses cookies. By continuing you agree to"
    assert _detect(text).errors == []
    assert len(_detect("By continuing you agree to").errors) == 1


def test_threshold_values_are_pinned() -> None:
    assert grammar_check_config.MIN_UNIT_LENGTH == 10
    assert grammar_check_config.MIN_CONTENT_LENGTH == 15
    assert grammar_check_config.MIN_CONTENT_TOKENS == 4
    assert grammar_check_config.MIN_FALLBACK_TOKENS == 7
    assert grammar_check_config.MAX_SPECIAL_CHAR_DENSITY == 0.05


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        # length: 14 vs 15 characters
        ("It is so nicer", False),
        ("It is so nicest", True),
        # tokens: 3 vs 4
        ("It is wonderful", False),
        ("It is so wonderful", True),
        # fallback tokens without subject/auxiliary: 6 vs 7
        ("Visit our store downtown for deals", False),
        ("Visit our store downtown for great deals", True),
        # special-character density: 2/41 vs 2/40
        ("Visit our store downtown for great deal$$", True),
        ("Visit our store downtown for great dea$$", False),
    ],
)
def test_content_sentence_boundaries(text: str, expected: bool) -> None:
    assert is_content_sentence(text) is expected


def test_unit_length_boundary() -> None:
    assert len("Go out to") == 9
    assert _detect("Go out to").errors == []
    assert len("Send it to") == 10
    assert [e.context for e in _detect("Send it to").errors] == ["Send it to"]


def test_auxiliary_must_follow_subject() -> None:
    assert not has_subject_and_auxiliary("Will we go")
    assert has_subject_and_auxiliary("Soon we will go")


def test_negation_suggestion_needs_verb_after_negation() -> None:
    assert select_suggestions("We recognize that we do not respond")[0] == (
        "Complete the sentence by specifying what is recognized or responded to"
    )
    assert select_suggestions("Do not forget to reply to")[0] == (
        "Complete the sentence by specifying what is recognized or responded to"
    )
    assert select_suggestions("We recognize it but do not stop")[0] == GENERIC_SUGGESTION


def test_terminated_preposition_ending_is_complete() -> None:
    assert _detect("Please log in.").errors == []
    assert _detect("Sign in to see what you are signed up for.").errors == []
