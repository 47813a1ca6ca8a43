#!/usr/bin/env python3
"""Tests for CLI functionality."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from summary_markup.cli import main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def summary_file(tmp_path: Path) -> Path:
    path = tmp_path / "summary.md"
    path.write_text("### Key Points\n\n* Intro [0:45]\n    * Detail\n", encoding="utf-8")
    return path


class TestHtmlOutput:
    """Default fragment output."""

    def test_renders_fragment(self, runner: CliRunner, summary_file: Path):
        result = runner.invoke(main, [str(summary_file)])

        assert result.exit_code == 0, result.output
        assert "<h3>Key Points</h3>" in result.output
        assert 'data-seconds="45"' in result.output

    def test_reads_stdin(self, runner: CliRunner):
        result = runner.invoke(main, ["-"], input='"### From\\nstdin"')

        assert result.exit_code == 0, result.output
        assert "<h3>From</h3>" in result.output

    def test_writes_output_file(
        self, runner: CliRunner, summary_file: Path, tmp_path: Path
    ):
        output = tmp_path / "out.html"
        result = runner.invoke(main, [str(summary_file), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert "Successfully converted" in result.output
        assert "<h3>Key Points</h3>" in output.read_text(encoding="utf-8")


class TestOtherFormats:
    """Page and text output."""

    def test_page(self, runner: CliRunner, summary_file: Path):
        result = runner.invoke(main, [str(summary_file), "--format", "page"])

        assert result.exit_code == 0, result.output
        assert result.output.startswith("<!DOCTYPE html>")
        assert '<div class="markdown-content">' in result.output

    def test_text(self, runner: CliRunner, summary_file: Path):
        result = runner.invoke(main, [str(summary_file), "-f", "text"])

        assert result.exit_code == 0, result.output
        assert result.output == "### Key Points\n\n- Intro [0:45]\n  - Detail\n"

    def test_text_from_html_input(self, runner: CliRunner, tmp_path: Path):
        path = tmp_path / "summary.html"
        path.write_text("<ul><li>a<ul><li>b</li></ul></li></ul>", encoding="utf-8")

        result = runner.invoke(main, [str(path), "-f", "text"])

        assert result.exit_code == 0, result.output
        assert result.output == "- a\n  - b\n"


class TestResponseInput:
    """JSON response envelopes."""

    def test_summary_response(self, runner: CliRunner, tmp_path: Path):
        path = tmp_path / "response.json"
        path.write_text(
            json.dumps({"type": "summary", "payload": {"summary": "### Hi"}}),
            encoding="utf-8",
        )

        result = runner.invoke(main, [str(path), "--response"])

        assert result.exit_code == 0, result.output
        assert (
            '<h3>Summary</h3><div class="markdown-content"><h3>Hi</h3></div>'
            in result.output
        )

    def test_error_response(self, runner: CliRunner, tmp_path: Path):
        path = tmp_path / "response.json"
        path.write_text(json.dumps({"error": "Quota exceeded"}), encoding="utf-8")

        result = runner.invoke(main, [str(path), "--response", "-f", "text"])

        assert result.exit_code == 0, result.output
        assert result.output == "**Error:** Quota exceeded\n"

    def test_invalid_json(self, runner: CliRunner, tmp_path: Path):
        path = tmp_path / "response.json"
        path.write_text("not json", encoding="utf-8")

        result = runner.invoke(main, [str(path), "--response"])

        assert result.exit_code == 1
        assert "Error converting summary" in result.output


class TestErrors:
    """Failure exits."""

    def test_missing_file(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(main, [str(tmp_path / "missing.md")])

        assert result.exit_code == 1
        assert "Input file not found" in result.output

    def test_invalid_format(self, runner: CliRunner, summary_file: Path):
        result = runner.invoke(main, [str(summary_file), "-f", "pdf"])

        assert result.exit_code != 0
        assert "Invalid value" in result.output
