"""Engine-neutral view of a rendered markup tree.

The text exporter walks this interface rather than a specific HTML library,
so it can be fed a freshly parsed fragment or any other tree that exposes
node kind, tag name, attributes and ordered children.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Sequence

from bs4 import BeautifulSoup, NavigableString, PageElement, Tag


class NodeKind(str, Enum):
    """Kind of a markup tree node."""

    ELEMENT = "element"
    TEXT = "text"
    OTHER = "other"  # comments, doctypes and the like


class MarkupNode(Protocol):
    """Minimal tree interface the text exporter relies on."""

    @property
    def kind(self) -> NodeKind: ...

    @property
    def tag(self) -> str:
        """Lower-case tag name for elements, empty otherwise."""
        ...

    @property
    def text(self) -> str:
        """Text of a text node, or the concatenated text of an element."""
        ...

    @property
    def children(self) -> Sequence["MarkupNode"]: ...

    def get_attribute(self, name: str) -> Optional[str]: ...

    def has_class(self, class_name: str) -> bool: ...


@dataclass(frozen=True)
class SoupNode:
    """MarkupNode backed by a BeautifulSoup element."""

    element: PageElement

    @property
    def kind(self) -> NodeKind:
        if isinstance(self.element, Tag):
            return NodeKind.ELEMENT
        if type(self.element) is NavigableString:
            return NodeKind.TEXT
        return NodeKind.OTHER

    @property
    def tag(self) -> str:
        if isinstance(self.element, Tag):
            return (self.element.name or "").lower()
        return ""

    @property
    def text(self) -> str:
        if isinstance(self.element, Tag):
            return self.element.get_text()
        if isinstance(self.element, NavigableString):
            return str(self.element)
        return ""

    @property
    def children(self) -> list["SoupNode"]:
        if not isinstance(self.element, Tag):
            return []
        return [SoupNode(child) for child in self.element.children]

    def get_attribute(self, name: str) -> Optional[str]:
        if not isinstance(self.element, Tag):
            return None
        value = self.element.get(name)
        if value is None:
            return None
        if isinstance(value, str):
            return value
        return " ".join(str(token) for token in value)

    def has_class(self, class_name: str) -> bool:
        classes = self.get_attribute("class")
        return bool(classes) and class_name in classes.split()


def parse_markup(markup: str) -> SoupNode:
    """Parse an HTML fragment into a tree rooted at a document node."""
    return SoupNode(BeautifulSoup(markup, "html.parser"))
