#!/usr/bin/env python3
"""Tests for renderer timing utilities."""

import importlib
import time
from typing import Iterator

import pytest

import summary_markup.renderer_timings as rt

ENV_VAR = "SUMMARY_MARKUP_DEBUG_TIMING"


def _reload(monkeypatch: pytest.MonkeyPatch, value: str):
    monkeypatch.setenv(ENV_VAR, value)
    return importlib.reload(rt)


@pytest.fixture(autouse=True)
def restore_timing_module() -> Iterator[None]:
    """Reload the module with timing disabled once each test is done."""
    yield
    with pytest.MonkeyPatch.context() as mp:
        mp.delenv(ENV_VAR, raising=False)
        importlib.reload(rt)


class TestDebugTimingFlag:
    """Tests for the SUMMARY_MARKUP_DEBUG_TIMING environment variable."""

    @pytest.mark.parametrize("value", ["1", "true", "yes", "TRUE", "Yes"])
    def test_enabled_values(self, monkeypatch: pytest.MonkeyPatch, value: str):
        """Truthy values enable timing, case-insensitively."""
        assert _reload(monkeypatch, value).DEBUG_TIMING is True

    @pytest.mark.parametrize("value", ["", "0", "false", "no", "on"])
    def test_disabled_values(self, monkeypatch: pytest.MonkeyPatch, value: str):
        """Anything else leaves timing off."""
        assert _reload(monkeypatch, value).DEBUG_TIMING is False


class TestTimingVars:
    """Tests for set_timing_var and get_timing_var."""

    def test_sets_variable_when_enabled(self, monkeypatch: pytest.MonkeyPatch):
        """Sets timing variable when DEBUG_TIMING enabled."""
        module = _reload(monkeypatch, "1")
        module.set_timing_var("test_var", "test_value")
        assert module.get_timing_var("test_var") == "test_value"

    def test_ignores_when_disabled(self, monkeypatch: pytest.MonkeyPatch):
        """Ignores set when DEBUG_TIMING disabled."""
        module = _reload(monkeypatch, "")
        module.set_timing_var("test_var", "test_value")
        assert module.get_timing_var("test_var") is None


class TestLogTiming:
    """Tests for log_timing context manager."""

    def test_logs_phase_timing_when_enabled(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ):
        """Logs phase timing when DEBUG_TIMING enabled."""
        module = _reload(monkeypatch, "1")

        with module.log_timing("Render summary", time.time()):
            pass

        out = capsys.readouterr().out
        assert "[TIMING]" in out
        assert "Render summary" in out
        assert "total:" in out

    def test_callable_phase_name(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ):
        """A callable phase name is evaluated when the block ends."""
        module = _reload(monkeypatch, "1")
        count = {"links": 0}

        with module.log_timing(lambda: f"Linked {count['links']} timestamps"):
            count["links"] = 3

        assert "Linked 3 timestamps" in capsys.readouterr().out

    def test_no_output_when_disabled(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ):
        """No output when DEBUG_TIMING disabled."""
        module = _reload(monkeypatch, "")

        with module.log_timing("Render summary"):
            pass

        assert capsys.readouterr().out == ""


class TestTimingStat:
    """Tests for timing_stat context manager."""

    def test_records_with_current_input_label(self, monkeypatch: pytest.MonkeyPatch):
        """Durations are recorded against the current input."""
        module = _reload(monkeypatch, "1")
        module.set_timing_var("_markdown_timings", [])
        module.set_timing_var("_current_input", "summary.md")

        with module.timing_stat("_markdown_timings"):
            pass

        timings = module.get_timing_var("_markdown_timings")
        assert len(timings) == 1
        duration, label = timings[0]
        assert duration >= 0
        assert label == "summary.md"

    def test_unregistered_list_ignored(self, monkeypatch: pytest.MonkeyPatch):
        """Lists that were never registered are not created."""
        module = _reload(monkeypatch, "1")

        with module.timing_stat("_pygments_timings"):
            pass

        assert module.get_timing_var("_pygments_timings") is None

    def test_markdown_rendering_is_timed(self, monkeypatch: pytest.MonkeyPatch):
        """The markdown stage reports into the registered list."""
        module = _reload(monkeypatch, "1")
        module.set_timing_var("_markdown_timings", [])

        from summary_markup.html.utils import render_markdown

        render_markdown("### Title")
        assert len(module.get_timing_var("_markdown_timings")) == 1


class TestReportTimingStatistics:
    """Tests for report_timing_statistics."""

    def test_reports_slowest_operations(self, capsys: pytest.CaptureFixture[str]):
        rt.report_timing_statistics(
            [
                ("Markdown", [(0.002, "a.md"), (0.010, "b.md")]),
                ("Pygments", []),
            ]
        )

        out = capsys.readouterr().out
        assert "Markdown stage:" in out
        assert "Samples: 2" in out
        assert "mean 6.0ms" in out
        assert out.index("b.md") < out.index("a.md")
        assert "Pygments" not in out
