"""Forward rendering of AI-generated summaries into display markup.

Pipeline:
    preprocess -> markdown (with highlighted code blocks) -> timestamp links
    -> link hardening -> sanitizing

The last three stages share one parsed tree, so each stage sees the previous
stage's elements rather than re-matching strings.
"""

import logging

from bs4 import BeautifulSoup

from .html.links import harden_soup
from .html.sanitizer import sanitize_soup
from .html.utils import render_markdown, serialize_markup
from .preprocess import preprocess_text
from .timestamps import linkify_soup

logger = logging.getLogger(__name__)


def render_summary(text: str) -> str:
    """Render a raw summary into sanitized display markup.

    Args:
        text: Summary text, markdown-flavoured and possibly JSON-escaped

    Returns:
        Markup limited to the sanitizer's allow-list; empty for blank input

    Raises:
        TypeError: If text is None or not a string
    """
    if text is None:
        raise TypeError("summary text is required, got None")
    if not isinstance(text, str):
        raise TypeError(f"summary text must be str, not {type(text).__name__}")

    cleaned = preprocess_text(text)
    if not cleaned.strip():
        return ""

    soup = BeautifulSoup(render_markdown(cleaned), "html.parser")
    linked = linkify_soup(soup)
    hardened = harden_soup(soup)
    sanitize_soup(soup)
    logger.debug(
        "Rendered summary: %d chars in, %d timestamp links, %d external links",
        len(text),
        linked,
        hardened,
    )
    return serialize_markup(soup).strip()
