"""Shared plumbing for the HTML display stages.

- class-list helpers and serialization for parsed BeautifulSoup trees
- the summary markdown parser (mistune, with highlighted code blocks)
- the Jinja2 environment for the panel templates
"""

import functools
from pathlib import Path
from typing import Any, Optional

import mistune
from bs4 import BeautifulSoup, Tag
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter
from jinja2 import Environment, FileSystemLoader, select_autoescape
from mistune.helpers import LINK_LABEL

from .renderer_code import highlight_code_block
from ..models import TIME_GROUP_PATTERN
from ..renderer_timings import timing_stat


# -- Parsed Tags --------------------------------------------------------------


def get_classes(tag: Tag) -> list[str]:
    """Return the class tokens of a tag.

    html.parser splits ``class`` into a list, but tags built by hand may carry
    a plain string.
    """
    value = tag.get("class")
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    return [str(token) for token in value]


def has_class(tag: Tag, class_name: str) -> bool:
    return class_name in get_classes(tag)


class _SourceOrderFormatter(HTMLFormatter):
    """Minimal HTML formatter that writes attributes in the order they were set.

    bs4 sorts attributes by default; timestamp anchors must come out as
    ``href``, ``data-seconds``, ``class``.
    """

    def attributes(self, tag: Tag) -> Any:
        if tag.attrs is None:
            return []
        return list(tag.attrs.items())


MARKUP_FORMATTER = _SourceOrderFormatter(
    entity_substitution=EntitySubstitution.substitute_xml
)


def serialize_markup(soup: BeautifulSoup) -> str:
    """Write a parsed tree back out as HTML, keeping attribute order."""
    return soup.decode(formatter=MARKUP_FORMATTER)


# -- Summary Markdown ---------------------------------------------------------

# A bracketed timestamp group at the start of a line ("[1:23]: Intro") is
# summary text, not a link reference definition
_REF_LINK_PATTERN = (
    r"^ {0,3}\[(?!\s*"
    + TIME_GROUP_PATTERN
    + r"\s*\])(?P<reflink_1>"
    + LINK_LABEL
    + r")\]:"
)


def _timestamp_label_plugin(md: Any) -> None:
    """Keep mistune from reading timestamp groups as reference labels."""
    md.block.specification["ref_link"] = _REF_LINK_PATTERN


def _code_block_plugin() -> Any:
    """Build the mistune plugin that hands fenced code to the highlighter."""

    def plugin(md: Any) -> None:
        def block_code(code: str, info: Optional[str] = None) -> str:
            # Only the first word of the info string names the language
            lang = info.split()[0] if info and info.strip() else None
            return highlight_code_block(code, lang) + "\n"

        md.renderer.block_code = block_code

    return plugin


@functools.lru_cache(maxsize=1)
def _summary_markdown() -> mistune.Markdown:
    """The markdown parser for summaries, built once per process."""
    return mistune.create_markdown(
        plugins=["url", _timestamp_label_plugin, _code_block_plugin()],
        escape=False,  # Raw HTML is left for the sanitizer to strip
        hard_wrap=True,  # Single newlines become <br>
    )


def render_markdown(text: str) -> str:
    """Convert summary markdown to unsanitized HTML."""
    with timing_stat("_markdown_timings"):
        return str(_summary_markdown()(text))


# -- Panel Templates ----------------------------------------------------------


@functools.lru_cache(maxsize=1)
def get_template_environment() -> Environment:
    """Jinja2 environment over the bundled panel templates, autoescaping HTML."""
    return Environment(
        loader=FileSystemLoader(Path(__file__).parent / "templates"),
        autoescape=select_autoescape(["html", "xml"]),
    )
