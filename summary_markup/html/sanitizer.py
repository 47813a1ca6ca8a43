"""Allow-list sanitizer for rendered summary markup.

Reduces a fragment to the small tag vocabulary the summary panel displays.
Unknown tags are unwrapped so their text survives; executable and
style-bearing elements are dropped together with their content.
"""

import logging
from typing import Optional
from urllib.parse import urlsplit

from bs4 import BeautifulSoup, NavigableString, Tag

from .utils import has_class, serialize_markup
from ..timestamps import TIMESTAMP_HREF, TIMESTAMP_LINK_CLASS

logger = logging.getLogger(__name__)

ALLOWED_TAGS = frozenset(
    {
        # Structure
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "p",
        "br",
        # Emphasis
        "strong",
        "em",
        "code",
        "pre",
        # Lists
        "ul",
        "ol",
        "li",
        # Links
        "a",
        "span",
        # Collapsible
        "details",
        "summary",
    }
)

ALLOWED_ATTRIBUTES = frozenset(
    {"href", "data-seconds", "class", "target", "rel", "open"}
)

# Removed together with everything inside them
DROPPED_WITH_CONTENT = frozenset(
    {
        "script",
        "style",
        "iframe",
        "object",
        "embed",
        "template",
        "noscript",
        "textarea",
        "select",
        "svg",
        "math",
        "head",
        "title",
        "meta",
        "link",
        "base",
        "form",
    }
)

SAFE_URL_SCHEMES = frozenset({"http", "https", "mailto"})


def is_allowed_attribute(name: str) -> bool:
    return name in ALLOWED_ATTRIBUTES or name.startswith("data-")


def is_safe_href(tag: Tag, href: str) -> bool:
    """Allow web, mail, fragment and relative targets only.

    The one script URL let through is the inert placeholder on timestamp
    anchors, which the display surface intercepts on click.
    """
    value = href.strip()
    if value == TIMESTAMP_HREF:
        return has_class(tag, TIMESTAMP_LINK_CLASS)
    # Control characters and whitespace can hide a scheme from urlsplit
    if any(ord(char) < 33 for char in value):
        return False
    try:
        scheme = urlsplit(value).scheme.lower()
    except ValueError:
        return False
    return not scheme or scheme in SAFE_URL_SCHEMES


def _clean_attributes(tag: Tag) -> None:
    for name in list(tag.attrs):
        if not is_allowed_attribute(name):
            del tag.attrs[name]
            continue
        if name == "href":
            value = tag.attrs[name]
            if not isinstance(value, str) or not is_safe_href(tag, value):
                del tag.attrs[name]


def sanitize_soup(soup: BeautifulSoup) -> None:
    """Sanitize a parsed fragment in place."""
    for node in list(soup.descendants):
        if isinstance(node, NavigableString) and type(node) is not NavigableString:
            # Comments, doctypes, CDATA, processing instructions
            node.extract()

    # Drop first so nothing inside a dropped element is unwrapped below
    for tag in soup.find_all(sorted(DROPPED_WITH_CONTENT)):
        if not tag.decomposed:
            logger.debug("Dropping <%s> with its content", tag.name)
            tag.decompose()

    for tag in soup.find_all(True):
        if tag.name not in ALLOWED_TAGS:
            logger.debug("Unwrapping disallowed <%s>", tag.name)
            tag.unwrap()
        else:
            _clean_attributes(tag)


def sanitize_html(fragment: Optional[str]) -> str:
    """Reduce a fragment to the allow-listed tags and attributes.

    Never raises for string input; an empty or structure-free fragment gives
    an empty string.
    """
    if not fragment or not fragment.strip():
        return ""
    soup = BeautifulSoup(fragment, "html.parser")
    sanitize_soup(soup)
    return serialize_markup(soup).strip()
