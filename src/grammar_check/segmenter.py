"""Split extracted page text into paragraphs and sentence-like units."""

from __future__ import annotations

import re
from dataclasses import dataclass

_PARAGRAPH_BREAK = re.compile(r"\n[ \t\r\f\v]*\n\s*")

# A run of text up to and including terminal punctuation, or the trailing
# residue of the paragraph that has none.
_SENTENCE_PATTERN = re.compile(r"[^.!?]+(?:[.!?]+|$)|[.!?]+")


@dataclass(frozen=True)
class Paragraph:
    """A non-empty paragraph and its offset in the source document."""

    text: str
    offset: int


@dataclass(frozen=True)
class Segment:
    """A sentence-like unit within a paragraph.

    ``offset`` is the position of the untrimmed unit in the source document.
    """

    paragraph: Paragraph
    text: str
    offset: int

    @property
    def trimmed(self) -> str:
        return self.text.strip()

    @property
    def trimmed_offset(self) -> int:
        return self.offset + (len(self.text) - len(self.text.lstrip()))


def split_paragraphs(text: str) -> list[Paragraph]:
    """Return the non-blank paragraphs of ``text`` in document order."""

    paragraphs: list[Paragraph] = []
    if not text:
        return paragraphs

    start = 0
    for match in _PARAGRAPH_BREAK.finditer(text):
        _append_paragraph(paragraphs, text, start, match.start())
        start = match.end()
    _append_paragraph(paragraphs, text, start, len(text))
    return paragraphs


def _append_paragraph(paragraphs: list[Paragraph], text: str, start: int, end: int) -> None:
    chunk = text[start:end]
    if chunk.strip():
        paragraphs.append(Paragraph(text=chunk, offset=start))


def split_sentences(paragraph: Paragraph) -> list[Segment]:
    """Split ``paragraph`` into sentence-like units.

    Unterminated trailing text becomes its own unit. Nothing is filtered here.
    """

    segments: list[Segment] = []
    for match in _SENTENCE_PATTERN.finditer(paragraph.text):
        if not match.group(0).strip():
            continue
        segments.append(
            Segment(
                paragraph=paragraph,
                text=match.group(0),
                offset=paragraph.offset + match.start(),
            )
        )
    return segments


def segment_text(text: str) -> list[Segment]:
    """Return every (paragraph, sentence) unit of ``text`` in order."""

    segments: list[Segment] = []
    for paragraph in split_paragraphs(text):
        segments.extend(split_sentences(paragraph))
    return segments
