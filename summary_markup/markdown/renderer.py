"""Plain-text export of rendered summary markup.

Walks a rendered tree and rebuilds a markdown-like document: headings,
paragraphs, indented bullet lists, emphasis markers, fenced code and
bracketed timestamps.
"""

import re
from typing import Optional

from ..timestamps import TIMESTAMP_LINK_CLASS
from ..tree import MarkupNode, NodeKind, parse_markup

LIST_TAGS = ("ul", "ol")
HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")


class TextExporter:
    """Plain-text renderer for summary markup trees."""

    def __init__(self, indent: str = "  "):
        """Initialize the exporter.

        Args:
            indent: Indentation added per list nesting level
        """
        self.indent = indent

    # -------------------------------------------------------------------------
    # Private Utility Methods
    # -------------------------------------------------------------------------

    def _code_fence(self, text: str, lang: str = "") -> str:
        """Wrap text in a fenced code block with adaptive delimiter.

        If the text contains backtick runs of three or more, uses a longer
        delimiter to avoid conflicts.
        """
        max_ticks = 2
        for match in re.finditer(r"`+", text):
            max_ticks = max(max_ticks, len(match.group()))
        fence = "`" * max(3, max_ticks + 1)
        return f"{fence}{lang}\n{text}\n{fence}"

    def _code_language(self, pre: MarkupNode, code: Optional[MarkupNode]) -> str:
        """Language alias of a rendered code block, if any."""
        lang = pre.get_attribute("data-language")
        if lang:
            return lang
        classes = (code.get_attribute("class") if code else None) or ""
        for token in classes.split():
            if token.startswith("language-"):
                return token[len("language-") :]
        return ""

    def _is_list_child(self, node: MarkupNode) -> bool:
        if node.kind is NodeKind.ELEMENT:
            return True
        return node.kind is NodeKind.TEXT and bool(node.text.strip())

    def _children(self, node: MarkupNode, depth: int) -> str:
        return "".join(self._convert(child, depth) for child in node.children)

    # -------------------------------------------------------------------------
    # Block Elements
    # -------------------------------------------------------------------------

    def _heading(self, node: MarkupNode, depth: int) -> str:
        content = self._children(node, depth).strip()
        if not content:
            return ""
        level = int(node.tag[1])
        return f"{'#' * level} {content}\n\n"

    def _paragraph(self, node: MarkupNode, depth: int) -> str:
        content = self._children(node, depth).strip()
        return f"{content}\n\n" if content else ""

    def _list(self, node: MarkupNode, depth: int) -> str:
        ordered = node.tag == "ol"
        parts: list[str] = []
        for child in node.children:
            if not self._is_list_child(child):
                continue
            if child.tag == "li":
                parts.append(self._list_item(child, depth, ordered))
            else:
                parts.append(self._convert(child, depth))
        # A blank line closes the outermost list only
        return "".join(parts) + ("\n" if depth == 0 else "")

    def _list_item(self, node: MarkupNode, depth: int, ordered: bool) -> str:
        """Render an item line, then any nested lists one level deeper.

        The item's own content goes on a single line so a child list's items
        never end up interleaved inside it.
        """
        marker = "1. " if ordered else "- "
        prefix = self.indent * depth
        own = [child for child in node.children if child.tag not in LIST_TAGS]
        nested = [child for child in node.children if child.tag in LIST_TAGS]

        content = "".join(self._convert(child, depth + 1) for child in own)
        lines = [line.strip() for line in content.splitlines() if line.strip()]
        continuation = "\n" + prefix + " " * len(marker)
        # An item holding only a nested list keeps a bare marker
        result = (prefix + marker + continuation.join(lines)).rstrip() + "\n"

        for child in nested:
            result += self._list(child, depth + 1)
        return result

    def _code_block(self, node: MarkupNode) -> str:
        code = next((c for c in node.children if c.tag == "code"), None)
        if code is not None:
            source = code.text
        else:
            source = "".join(
                child.text
                for child in node.children
                if not child.has_class("code-language")
            )
        lang = self._code_language(node, code)
        return self._code_fence(source.rstrip("\n"), lang) + "\n\n"

    def _details(self, node: MarkupNode, depth: int) -> str:
        summary = next((c for c in node.children if c.tag == "summary"), None)
        body = "".join(
            self._convert(child, depth)
            for child in node.children
            if child.tag != "summary"
        )
        if summary is None:
            return body
        title = self._children(summary, depth).strip()
        return f"**{title}**\n{body}" if title else body

    # -------------------------------------------------------------------------
    # Inline Elements
    # -------------------------------------------------------------------------

    def _anchor(self, node: MarkupNode) -> str:
        text = node.text.strip()
        if node.has_class(TIMESTAMP_LINK_CLASS):
            return f"[{text}]"
        href = node.get_attribute("href")
        if not href:
            return text
        return f"[{text}]({href})"

    def _wrap(self, node: MarkupNode, depth: int, marker: str) -> str:
        content = self._children(node, depth)
        if not content.strip():
            return content
        return f"{marker}{content}{marker}"

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def _convert(self, node: MarkupNode, depth: int) -> str:
        if node.kind is NodeKind.TEXT:
            return node.text
        if node.kind is not NodeKind.ELEMENT:
            return ""

        tag = node.tag
        if tag in HEADING_TAGS:
            return self._heading(node, depth)
        if tag == "p":
            return self._paragraph(node, depth)
        if tag in LIST_TAGS:
            return self._list(node, depth)
        if tag == "li":
            return self._list_item(node, depth, ordered=False)
        if tag in ("strong", "b"):
            return self._wrap(node, depth, "**")
        if tag in ("em", "i"):
            return self._wrap(node, depth, "*")
        if tag == "code":
            return f"`{node.text}`"
        if tag == "pre":
            return self._code_block(node)
        if tag == "a":
            return self._anchor(node)
        if tag == "details":
            return self._details(node, depth)
        return self._children(node, depth)

    def export(self, root: MarkupNode) -> str:
        """Convert a markup tree to plain text.

        Runs of three or more newlines collapse to one blank line and the
        result is trimmed.
        """
        text = self._convert(root, 0)
        text = re.sub(r"\n{3,}", "\n\n", text)
        return text.strip()


def export_as_text(root: MarkupNode) -> str:
    """Export a rendered markup tree as plain, indentation-correct text."""
    return TextExporter().export(root)


def export_markup_as_text(markup: str) -> str:
    """Parse rendered markup and export it as plain text."""
    return export_as_text(parse_markup(markup))
