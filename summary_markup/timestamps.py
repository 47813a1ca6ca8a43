"""Timestamp linkification.

Turns video time codes in summary text into clickable anchors carrying the
offset in seconds. Works in two passes over a list of text spans:

1. Grouped: ``[1:23, 2:45]`` / ``(0:00 - 1:18)`` clusters are split into one
   link per time code, the brackets are dropped and the separator style kept.
2. Standalone: any remaining ``H:MM:SS`` / ``M:SS`` token is linked.

Spans linked by pass 1 are marked as such, so pass 2 never looks at them
again.
"""

import re
from typing import Iterable, Optional

from bs4 import BeautifulSoup, NavigableString, Tag

from .html.utils import has_class, serialize_markup
from .models import TIME_GROUP_PATTERN, TIME_PATTERN, TextSpan, Timestamp

TIMESTAMP_LINK_CLASS = "timestamp-link"
TIMESTAMP_ANCHOR_CLASSES = (
    "timestamp-link yt-core-attributed-string__link "
    "yt-core-attributed-string__link--call-to-action-color"
)
TIMESTAMP_HREF = "javascript:void(0)"

TIMESTAMP_RE = re.compile(rf"(?<![\d:])\b{TIME_PATTERN}\b(?![:\d])")
GROUP_RE = re.compile(
    rf"\[\s*({TIME_GROUP_PATTERN})\s*\]|\(\s*({TIME_GROUP_PATTERN})\s*\)"
)

# Text under these elements is never linkified
_SKIP_PARENTS = frozenset({"a", "pre", "code", "script", "style"})


def seconds_of(token: str) -> int:
    """Convert an ``H:MM:SS`` or ``M:SS`` token to seconds."""
    return Timestamp.parse(token).seconds


def _group_separator(interior: str) -> str:
    """Infer how the items of a timestamp group were separated."""
    if "," in interior:
        return ", "
    if re.search(r"[-–]", interior):
        return " - "
    return " "


def _link_groups(text: str) -> list[TextSpan]:
    spans: list[TextSpan] = []
    position = 0
    for match in GROUP_RE.finditer(text):
        interior = match.group(1) or match.group(2)
        if match.start() > position:
            spans.append(TextSpan(text[position : match.start()]))
        separator = _group_separator(interior)
        for index, token in enumerate(TIMESTAMP_RE.findall(interior)):
            if index:
                spans.append(TextSpan(separator))
            spans.append(TextSpan(token, Timestamp.parse(token)))
        position = match.end()
    if position < len(text):
        spans.append(TextSpan(text[position:]))
    return spans


def _link_standalone(span: TextSpan) -> list[TextSpan]:
    if span.is_linked:
        return [span]
    spans: list[TextSpan] = []
    position = 0
    for match in TIMESTAMP_RE.finditer(span.text):
        if match.start() > position:
            spans.append(TextSpan(span.text[position : match.start()]))
        spans.append(TextSpan(match.group(0), Timestamp.parse(match.group(0))))
        position = match.end()
    if position < len(span.text):
        spans.append(TextSpan(span.text[position:]))
    return spans


def split_timestamp_spans(text: str) -> list[TextSpan]:
    """Split text into plain spans and linked timestamp spans.

    Concatenating the span texts gives the display text: identical to the
    input except that grouping brackets around timestamps are gone.
    """
    spans: list[TextSpan] = []
    for span in _link_groups(text):
        spans.extend(_link_standalone(span))
    return spans


def build_timestamp_anchor(soup: BeautifulSoup, timestamp: Timestamp) -> Tag:
    """Create the anchor element for a single timestamp."""
    anchor = soup.new_tag(
        "a",
        attrs={
            "href": TIMESTAMP_HREF,
            "data-seconds": str(timestamp.seconds),
            "class": TIMESTAMP_ANCHOR_CLASSES,
        },
    )
    anchor.string = timestamp.text
    return anchor


def is_timestamp_anchor(tag: Tag) -> bool:
    return tag.name == "a" and has_class(tag, TIMESTAMP_LINK_CLASS)


def _is_linkable(node: NavigableString) -> bool:
    # Comments, CDATA and friends are NavigableString subclasses
    if type(node) is not NavigableString:
        return False
    return not any(parent.name in _SKIP_PARENTS for parent in node.parents)


def _replacement_nodes(
    soup: BeautifulSoup, spans: Iterable[TextSpan]
) -> list[Tag | NavigableString]:
    nodes: list[Tag | NavigableString] = []
    for span in spans:
        if span.timestamp is not None:
            nodes.append(build_timestamp_anchor(soup, span.timestamp))
        elif span.text:
            nodes.append(NavigableString(span.text))
    return nodes


def linkify_soup(soup: BeautifulSoup) -> int:
    """Replace timestamps in every text node of a parsed fragment.

    Returns:
        Number of timestamp anchors inserted
    """
    inserted = 0
    for node in list(soup.find_all(string=True)):
        if not _is_linkable(node):
            continue
        spans = split_timestamp_spans(str(node))
        linked = sum(1 for span in spans if span.is_linked)
        if not linked:
            continue
        node.replace_with(*_replacement_nodes(soup, spans))
        inserted += linked
    return inserted


def linkify_timestamps(fragment: Optional[str]) -> str:
    """Link every timestamp in a markup fragment (or plain text)."""
    if not fragment:
        return ""
    soup = BeautifulSoup(fragment, "html.parser")
    linkify_soup(soup)
    return serialize_markup(soup)
