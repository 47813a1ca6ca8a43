"""Safe-navigation attributes for outbound links."""

from typing import Optional

from bs4 import BeautifulSoup, Tag

from .utils import has_class, serialize_markup
from ..timestamps import TIMESTAMP_LINK_CLASS

INTERNAL_HREF_PREFIXES = ("#", "/", "./", "../")
REQUIRED_REL_TOKENS = ("noopener", "noreferrer")


def is_internal_href(href: str) -> bool:
    """Whether a link stays on the current page or site.

    Protocol-relative URLs ("//host/path") leave the site and are not internal.
    """
    if href.startswith("//"):
        return False
    return href.startswith(INTERNAL_HREF_PREFIXES)


def _rel_tokens(anchor: Tag) -> list[str]:
    value = anchor.get("rel")
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    return [str(token) for token in value]


def harden_anchor(anchor: Tag) -> bool:
    """Add ``target`` and ``rel`` to an external anchor.

    Returns:
        True if the anchor was treated as external
    """
    href = anchor.get("href")
    if not isinstance(href, str) or is_internal_href(href):
        return False
    if has_class(anchor, TIMESTAMP_LINK_CLASS):
        return False

    if not anchor.has_attr("target"):
        anchor["target"] = "_blank"
    rel = _rel_tokens(anchor)
    for token in REQUIRED_REL_TOKENS:
        if token not in rel:
            rel.append(token)
    anchor["rel"] = " ".join(rel)
    return True


def harden_soup(soup: BeautifulSoup) -> int:
    """Harden every anchor in a parsed fragment; returns how many were external."""
    return sum(1 for anchor in soup.find_all("a") if harden_anchor(anchor))


def harden_links(fragment: Optional[str]) -> str:
    """Add ``target="_blank"`` and ``rel="noopener noreferrer"`` to external links."""
    if not fragment:
        return ""
    soup = BeautifulSoup(fragment, "html.parser")
    harden_soup(soup)
    return serialize_markup(soup)
