#!/usr/bin/env python3
"""CLI interface for summary-markup."""

import logging
import sys
import time
from pathlib import Path
from typing import Optional

import click

from .html.panel import (
    render_summary_html_panel,
    render_summary_page,
    render_summary_panel,
)
from .markdown.renderer import export_as_text, export_markup_as_text
from .models import SummaryResponse
from .renderer import render_summary
from .renderer_timings import (
    DEBUG_TIMING,
    get_timing_var,
    log_timing,
    report_timing_statistics,
    set_timing_var,
)
from .tree import parse_markup

HTML_SUFFIXES = (".html", ".htm")


def _read_input(input_path: Path) -> str:
    """Read the summary from a file, or from stdin when the path is "-"."""
    if str(input_path) == "-":
        return click.get_text_stream("stdin").read()
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")
    return input_path.read_text(encoding="utf-8")


def _convert(
    raw: str, input_path: Path, output_format: str, from_response: bool
) -> str:
    """Produce the requested output format from the raw input."""
    t_start = time.time()

    if from_response:
        with log_timing("Parse response", t_start):
            response = SummaryResponse.model_validate_json(raw)
        with log_timing("Render panel", t_start):
            html = render_summary_panel(response)
        if output_format == "text":
            with log_timing("Export text", t_start):
                return export_markup_as_text(html)
        if output_format == "page":
            return render_summary_page(html)
        return html

    if output_format == "text" and input_path.suffix.lower() in HTML_SUFFIXES:
        with log_timing("Export text", t_start):
            return export_markup_as_text(raw)

    with log_timing("Render summary", t_start):
        html = render_summary(raw)
    if output_format == "text":
        with log_timing("Export text", t_start):
            return export_as_text(parse_markup(html))
    if output_format == "page":
        return render_summary_page(render_summary_html_panel(html))
    return html


@click.command()
@click.argument("input_path", type=click.Path(path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    help="Output file path (default: write to stdout)",
)
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["html", "page", "text"]),
    default="html",
    help="Output format (default: html). html is the sanitized fragment, page a standalone HTML document, text the plain-text export.",
)
@click.option(
    "--response",
    "from_response",
    is_flag=True,
    help='Treat the input as a JSON response envelope ({"payload": {"summary": ...}, "error": ...}).',
)
@click.option(
    "--open-browser",
    is_flag=True,
    help="Open the generated file in the default browser (requires --output)",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Show debug logging and full traceback on errors.",
)
def main(
    input_path: Path,
    output: Optional[Path],
    output_format: str,
    from_response: bool,
    open_browser: bool,
    debug: bool,
) -> None:
    """Render an AI-generated video summary to display markup or plain text.

    INPUT_PATH: Path to a file holding the summary text (it may be a JSON-escaped string literal), or - for stdin.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if DEBUG_TIMING:
        set_timing_var("_markdown_timings", [])
        set_timing_var("_pygments_timings", [])
        set_timing_var("_current_input", str(input_path))

    try:
        raw = _read_input(input_path)
        result = _convert(raw, input_path, output_format, from_response)

        if output is not None:
            output.write_text(result + "\n", encoding="utf-8")
            click.echo(f"Successfully converted {input_path} to {output}")
            if open_browser:
                click.launch(str(output))
        else:
            click.echo(result)

        if DEBUG_TIMING:
            report_timing_statistics(
                [
                    ("Markdown", get_timing_var("_markdown_timings") or []),
                    ("Pygments", get_timing_var("_pygments_timings") or []),
                ]
            )

    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        if debug:
            import traceback

            traceback.print_exc()
        sys.exit(1)
    except Exception as e:
        click.echo(f"Error converting summary: {e}", err=True)
        if debug:
            import traceback

            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
