"""Fetch web pages and extract their readable prose for grammar checking."""

from __future__ import annotations

import logging
from typing import Any, Iterator

import requests
from bs4 import BeautifulSoup
from bs4.element import Tag

logger = logging.getLogger(__name__)

__all__ = [
    "NON_CONTENT_SELECTORS",
    "extract_text",
    "fetch_html",
    "fetch_page_text",
    "iter_content_blocks",
]

DEFAULT_HEADERS = {
    "User-Agent": "website-grammar-checker/0.1 (+https://pypi.org/project/requests/)",
}

# Elements removed before any text is collected.
NON_CONTENT_SELECTORS = (
    "script, style, noscript, svg, head, meta, link, nav, header, footer, "
    ".cookie-banner, [role=\"navigation\"], button, .menu"
)

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
BLOCK_TAGS = ["p", *HEADING_TAGS, "li"]

MIN_DIV_TEXT_LENGTH = 20


def fetch_html(url: str, *, session: Any | None = None, timeout: float = 30) -> str:
    """Fetch raw HTML for the provided URL."""
    client = session or requests
    response = client.get(url, headers=DEFAULT_HEADERS, timeout=timeout)
    response.raise_for_status()
    return response.text


def _clean_text(element: Tag) -> str:
    return " ".join(element.get_text(" ", strip=True).split())


def iter_content_blocks(soup: BeautifulSoup) -> Iterator[str]:
    """Yield text blocks in extraction order: paragraphs, headings, list items, leaf divs."""

    for element in soup.find_all("p"):
        text = _clean_text(element)
        if text:
            yield text

    for element in soup.find_all(HEADING_TAGS):
        text = _clean_text(element)
        if text:
            yield text

    for element in soup.find_all("li"):
        text = _clean_text(element)
        if text:
            yield text

    for element in soup.find_all("div"):
        # Divs wrapping blocks that were already collected are skipped.
        if element.find(BLOCK_TAGS) is not None:
            continue
        text = _clean_text(element)
        if text and len(text) > MIN_DIV_TEXT_LENGTH:
            yield text


def extract_text(html: str) -> str:
    """Return the readable text of ``html`` with blocks separated by blank lines."""

    if not html or not html.strip():
        return ""

    soup = BeautifulSoup(html, "html.parser")
    for element in soup.select(NON_CONTENT_SELECTORS):
        # Nested matches are destroyed along with their ancestor.
        if element.decomposed:
            continue
        element.decompose()

    return "\n\n".join(iter_content_blocks(soup))


def fetch_page_text(url: str, *, session: Any | None = None, timeout: float = 30) -> str:
    """Fetch ``url`` and extract its readable text.

    ``requests.RequestException`` is propagated to the caller.
    """

    logger.info("Fetching %s", url)
    html = fetch_html(url, session=session, timeout=timeout)
    return extract_text(html)
