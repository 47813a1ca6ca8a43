"""HTML-specific rendering utilities package.

Re-exports the shared helpers. The pipeline stages (links, sanitizer, panel)
are imported from their own modules since they depend on the timestamp
linkifier, which itself uses these helpers.
"""

from .utils import (
    get_classes,
    get_template_environment,
    has_class,
    render_markdown,
    serialize_markup,
)
from .renderer_code import (
    decode_entities,
    highlight_code_block,
    language_label,
    render_code_block_html,
)

__all__ = [
    "decode_entities",
    "get_classes",
    "get_template_environment",
    "has_class",
    "highlight_code_block",
    "language_label",
    "render_code_block_html",
    "render_markdown",
    "serialize_markup",
]
