"""Tests for the noise predicates and their composition."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.grammar_check.noise_filters import (
    DEFAULT_PREDICATES,
    CodeLikePredicate,
    CookieConsentPredicate,
    HeadingPredicate,
    ListFragmentPredicate,
    NavigationPredicate,
    NoiseClassifier,
    NoisePredicate,
    UiElementPredicate,
    is_preposition_in_heading,
)


@pytest.mark.parametrize(
    "text",
    [
        "1. Introduction",
        "A. Information We Collect",
        "IV. Terms of Service",
        "Contact Us",
        "Collection of Personal Information",
        "The Right to Deletion",
        "How to Exercise Your Rights",
        "privacy policy",
        "Our Services:",
        "Privacy Notice: Acme Holdings (\"Acme\")",
    ],
)
def test_heading_predicate_matches_headings(text: str) -> None:
    assert HeadingPredicate().matches(text)


@pytest.mark.parametrize(
    "text",
    [
        "This is a complete sentence.",
        "Please visit our site to",
        "Contact us, we reply fast",
        "This Is A Very Long Title With Too Many Words",
        "",
    ],
)
def test_heading_predicate_rejects_prose(text: str) -> None:
    assert not HeadingPredicate().matches(text)


def test_ui_predicate_is_exact_and_case_insensitive() -> None:
    predicate = UiElementPredicate()
    assert predicate.matches("Home")
    assert predicate.matches("  SIGN UP ")
    assert predicate.matches("Terms and Conditions")
    assert not predicate.matches("Home page")


def test_ui_predicate_accepts_custom_vocabulary() -> None:
    predicate = UiElementPredicate(["Add to basket"])
    assert predicate.matches("add to basket")
    assert not predicate.matches("Home")


def test_code_predicate() -> None:
    predicate = CodeLikePredicate()
    assert predicate.matches("{ display: none; }")
    assert predicate.matches("margin: 0 auto; padding: 4px;")
    assert predicate.matches("font size")
    assert not predicate.matches("We collect data to improve our services.")
    assert not predicate.matches("The color of the sky is blue and bright today.")


def test_navigation_predicate() -> None:
    predicate = NavigationPredicate()
    assert predicate.matches("Home | About | Blog | Contact")
    assert predicate.matches("Products > Shoes > Running")
    assert predicate.matches("Home About Services Blog Careers Press Investors Help")
    assert not predicate.matches("This policy explains how we collect data")
    assert not predicate.matches("Home About")
    assert not predicate.matches("Read more · 5 min")


def test_cookie_consent_predicate_needs_both_vocabularies() -> None:
    predicate = CookieConsentPredicate()
    assert predicate.matches("This website uses cookies to improve your experience.")
    assert not predicate.matches("We accept returns within 30 days.")


def test_list_fragment_predicate() -> None:
    predicate = ListFragmentPredicate()
    assert predicate.matches("- Free shipping on all orders")
    assert predicate.matches("Our services include:")
    assert predicate.matches("Last Updated: January 2024")
    assert not predicate.matches("- Ships today. Returns are free")


def test_classifier_reports_first_matching_category() -> None:
    classifier = NoiseClassifier()
    assert classifier.classify("1. Introduction") == "heading"
    assert classifier.classify("Accept") == "ui_element"
    assert classifier.classify("Home | About Us | Blog | Contact Support") == "navigation"
    assert classifier.classify("This is a complete sentence.") is None
    assert classifier.is_noise("Contact Us")
    assert not classifier.is_noise("Please visit our site to")


def test_classifier_priority_follows_predicate_order() -> None:
    # "Privacy Policy" is both a heading and a UI label; headings come first.
    assert NoiseClassifier().classify("Privacy Policy") == "heading"
    ui_first = NoiseClassifier([UiElementPredicate(), HeadingPredicate()])
    assert ui_first.classify("Privacy Policy") == "ui_element"


class _LoremPredicate(NoisePredicate):
    name = "placeholder"

    def matches(self, text: str) -> bool:
        return "lorem ipsum" in text.lower()


def test_classifier_can_be_extended_without_touching_defaults() -> None:
    base = NoiseClassifier()
    extended = base.with_predicate(_LoremPredicate())

    text = "Lorem ipsum dolor sit amet consectetur adipiscing elit sed do"
    assert base.classify(text) is None
    assert extended.classify(text) == "placeholder"
    assert len(extended.predicates) == len(DEFAULT_PREDICATES) + 1
    assert base.predicates == DEFAULT_PREDICATES


def test_preposition_in_heading_exemption() -> None:
    assert is_preposition_in_heading("Collection of Personal Information")
    assert is_preposition_in_heading("The Right to Deletion")
    assert is_preposition_in_heading("How to Exercise Access")
    assert is_preposition_in_heading("The Rules of Conduct we adhere to")
    assert not is_preposition_in_heading("Please visit our site to")
