#!/usr/bin/env python3
"""Code block rendering with syntax highlighting.

Fenced code blocks in a summary are decoded, highlighted with Pygments
(using the fence's language hint, or a guess when there is none) and emitted
as a labeled ``<pre>`` block built only from allow-listed tags.
"""

import html
import logging
from typing import Any, Optional

from pygments import highlight  # type: ignore[reportUnknownVariableType]
from pygments.lexers import TextLexer, get_lexer_by_name, guess_lexer  # type: ignore[reportUnknownVariableType]
from pygments.formatters import HtmlFormatter  # type: ignore[reportUnknownVariableType]
from pygments.util import ClassNotFound  # type: ignore[reportUnknownVariableType]

from ..models import CodeBlock
from ..renderer_timings import timing_stat

logger = logging.getLogger(__name__)

# &amp; comes last so "&amp;lt;" decodes to "&lt;" and not "<"
_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&#x27;", "'"),
    ("&apos;", "'"),
    ("&amp;", "&"),
)


def decode_entities(text: str) -> str:
    """Decode the HTML entities a code body may arrive encoded with."""
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return text


def language_label(alias: Optional[str]) -> str:
    """Human-readable language name: capitalized alias, or "Text"."""
    if not alias:
        return "Text"
    return alias[:1].upper() + alias[1:]


def _resolve_lexer(block: CodeBlock) -> Any:
    """Pick a lexer from the language hint, falling back to a guess."""
    if block.language:
        try:
            return get_lexer_by_name(block.language, stripall=False)  # type: ignore[reportUnknownVariableType]
        except ClassNotFound:
            logger.debug(
                "Unknown code language %r, guessing from content", block.language
            )
    try:
        return guess_lexer(block.source)  # type: ignore[reportUnknownVariableType]
    except ClassNotFound:
        return TextLexer()  # type: ignore[reportUnknownVariableType]


def render_code_block_html(
    body_html: str, label: str, alias: Optional[str] = None, highlighted: bool = True
) -> str:
    """Wrap already-escaped code in the labeled block markup."""
    pre_attrs = ' class="code-block"'
    code_classes: list[str] = ["highlight"] if highlighted else []
    if alias:
        safe_alias = html.escape(alias)
        pre_attrs += f' data-language="{safe_alias}"'
        code_classes.append(f"language-{safe_alias}")
    code_attrs = f' class="{" ".join(code_classes)}"' if code_classes else ""
    return (
        f"<pre{pre_attrs}>"
        f'<span class="code-language">{html.escape(label)}</span>'
        f"<code{code_attrs}>{body_html}</code>"
        "</pre>"
    )


def highlight_code_block(code: str, language: Optional[str] = None) -> str:
    """Highlight a fenced code block.

    Never raises: if Pygments fails the block is rendered unhighlighted, with
    the requested language (or "Code") as its label.

    Args:
        code: Code body, possibly entity-encoded
        language: Language hint from the fence info string

    Returns:
        HTML for the labeled code block
    """
    block = CodeBlock(language=language or None, source=decode_entities(code))
    try:
        lexer = _resolve_lexer(block)
        aliases = getattr(lexer, "aliases", None) or []
        alias = str(aliases[0]) if aliases else None
        formatter = HtmlFormatter(nowrap=True)  # type: ignore[reportUnknownVariableType]
        with timing_stat("_pygments_timings"):
            body_html = str(highlight(block.source, lexer, formatter))  # type: ignore[reportUnknownArgumentType]
    except Exception:
        logger.warning(
            "Syntax highlighting failed for language %r, rendering plain block",
            language,
            exc_info=True,
        )
        return render_code_block_html(
            html.escape(block.source.rstrip("\n")),
            block.label,
            alias=block.language,
            highlighted=False,
        )

    return render_code_block_html(
        body_html.rstrip("\n"), language_label(alias), alias=alias
    )
