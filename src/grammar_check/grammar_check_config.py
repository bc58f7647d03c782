"""Configuration for grammar checking rules, vocabularies and thresholds.

The thresholds below are empirically tuned heuristics. They are kept as named
constants so they can be pinned by regression tests and overridden in one
place.
"""

from __future__ import annotations

DEFAULT_LANGUAGE = "en-US"

# Rules dropped from every run unless the caller re-enables them.
DEFAULT_DISABLED_RULES: set[str] = set()


# --- Segmentation / content scoring thresholds ---

# Units shorter than this (after trimming) are never analysed.
MIN_UNIT_LENGTH = 10

# "Looks like real content" test used before reporting missing punctuation.
MIN_CONTENT_LENGTH = 15
MIN_CONTENT_TOKENS = 4
MIN_FALLBACK_TOKENS = 7
MAX_SPECIAL_CHAR_DENSITY = 0.05


# --- Heading detection ---

MAX_TITLE_WORDS = 7
MAX_TITLE_LENGTH = 60

COMMON_SECTION_TITLES = {
    "introduction",
    "purpose",
    "scope",
    "definitions",
    "privacy policy",
    "terms of service",
    "disclaimer",
    "collection of information",
    "use of information",
    "information sharing",
    "data protection",
    "security measures",
    "your rights",
    "contact us",
    "effective date",
}

ROMAN_NUMERALS = (
    "I", "II", "III", "IV", "V", "VI", "VII", "VIII", "IX", "X", "XI", "XII",
)


# --- UI chrome ---

# Compared case-insensitively against the whole unit.
UI_PHRASES = {
    "home", "about", "contact", "login", "signup", "videos", "menu",
    "accept", "decline", "submit", "cancel", "next", "previous",
    "terms and conditions", "privacy policy",
    "skip to content", "log in", "sign up",
}


# --- Code / CSS detection ---

# Structural punctuation counted when measuring special-character density.
SPECIAL_CHARACTERS = "{}[]()=<>:;$&#%~`^\\|"

CODE_WORDS = (
    "width", "height", "margin", "padding", "color", "font",
    "grid", "flex", "style", "class", "display", "position",
)

CODE_SPECIAL_CHAR_DENSITY = 0.1
CODE_VOCAB_MAX_LENGTH = 30


# --- Navigation detection ---

NAV_MIN_TOKENS = 3
NAV_MAX_TOKENS = 12
NAV_CAPITALISED_RATIO = 0.8
NAV_MIN_SEPARATED_ITEMS = 3
NAV_MAX_ITEM_WORDS = 4
NAV_SEPARATORS = "|»›·•/>"


# --- Cookie consent ---

CONSENT_WORDS = ("cookie", "consent", "accept", "decline", "privacy")
SITE_USAGE_WORDS = ("website", "experience", "browse", "uses")


# --- Sentence structure vocabulary ---

SUBJECT_WORDS = (
    "the", "a", "an", "this", "that", "these", "those",
    "we", "you", "they", "he", "she", "it", "I",
)

AUXILIARY_WORDS = (
    "am", "is", "are", "was", "were", "have", "has", "had", "do", "does", "did",
    "will", "shall", "may", "might", "can", "could", "would", "should", "must",
)

PREPOSITIONS = (
    "to", "for", "with", "by", "from", "in", "on", "at", "about", "upon",
)

HEADING_PREPOSITIONS = (
    "of", "to", "for", "with", "by", "from", "in", "on", "at", "about",
)
