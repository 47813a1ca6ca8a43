"""Summary panel and standalone page rendering.

The panel is what the display surface shows for a summary response: either
the rendered summary under a heading, or an error message.
"""

import logging
from typing import Optional

from pygments.formatters import HtmlFormatter  # type: ignore[reportUnknownVariableType]

from .utils import get_template_environment
from ..models import SummaryResponse
from ..renderer import render_summary

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong while displaying the summary."
MISSING_SUMMARY_MESSAGE = "Failed to get a valid summary."


def _render_panel(
    summary_html: str = "", error_message: Optional[str] = None
) -> str:
    template = get_template_environment().get_template("summary_panel.html")
    return str(
        template.render(summary_html=summary_html, error_message=error_message)
    )


def render_summary_html_panel(summary_html: str) -> str:
    """Render the panel around summary markup that is already sanitized."""
    return _render_panel(summary_html=summary_html)


def render_error_panel(message: str) -> str:
    """Render an error panel; the message is escaped."""
    return _render_panel(error_message=message)


def render_summary_panel(response: SummaryResponse) -> str:
    """Render the panel for a summary response.

    Errors reported by the response, summaries that are themselves error
    text, and a renderer failure all produce an error panel instead of
    raising.
    """
    if response.error:
        return render_error_panel(response.error)

    summary = response.summary
    if not summary:
        return render_error_panel(MISSING_SUMMARY_MESSAGE)
    if summary.startswith("Error:"):
        return render_error_panel(summary)

    try:
        summary_html = render_summary(summary)
    except Exception:
        logger.exception("Rendering the summary failed")
        return render_error_panel(GENERIC_ERROR_MESSAGE)
    return render_summary_html_panel(summary_html)


def render_summary_page(panel_html: str, title: str = "Video Summary") -> str:
    """Wrap panel markup in a standalone HTML page with code styles."""
    pygments_css = HtmlFormatter().get_style_defs(".code-block")  # type: ignore[reportUnknownMemberType]
    template = get_template_environment().get_template("summary_page.html")
    return str(
        template.render(
            title=title, panel_html=panel_html, pygments_css=pygments_css
        )
    )
