"""Stage timing for the summary pipeline.

Turned on by setting SUMMARY_MARKUP_DEBUG_TIMING to 1, true or yes. When it
is off, every helper here does nothing, so callers can leave the timing
calls in place.

Two kinds of measurement are kept:
- phases (log_timing): printed as soon as the phase ends
- stage samples (timing_stat): collected per input file and summarized by
  report_timing_statistics once the run is over
"""

import os
import time
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, Tuple, Union

DEBUG_TIMING = os.getenv("SUMMARY_MARKUP_DEBUG_TIMING", "").lower() in (
    "1",
    "true",
    "yes",
)

# Stage sample lists ("_markdown_timings", "_pygments_timings") and the label
# of the input being converted ("_current_input")
_timing_data: dict[str, Any] = {}

StageSample = Tuple[float, str]


def set_timing_var(name: str, value: Any) -> None:
    """Register a timing variable; ignored while timing is off."""
    if DEBUG_TIMING:
        _timing_data[name] = value


def get_timing_var(name: str) -> Any:
    """Return a timing variable, or None when unset or timing is disabled."""
    return _timing_data.get(name)


def _print_timing(line: str) -> None:
    print(f"[TIMING] {line}", flush=True)


@contextmanager
def log_timing(
    phase: Union[str, Callable[[], str]],
    t_start: Optional[float] = None,
) -> Iterator[None]:
    """Print how long the wrapped phase took.

    Args:
        phase: Phase name, or a callable returning it (evaluated at the end)
        t_start: Start of the whole run; adds the running total to the line
    """
    if not DEBUG_TIMING:
        yield
        return

    began = time.time()
    try:
        yield
    finally:
        ended = time.time()
        name = phase() if callable(phase) else phase
        line = f"{name:40s} {ended - began:8.3f}s"
        if t_start is not None:
            line += f" (total: {ended - t_start:8.3f}s)"
        _print_timing(line)


@contextmanager
def timing_stat(list_name: str) -> Iterator[None]:
    """Record one sample for a pipeline stage.

    The sample is labelled with the current input and only kept when the
    stage list was registered with set_timing_var first.
    """
    if not DEBUG_TIMING:
        yield
        return

    began = time.time()
    try:
        yield
    finally:
        samples = _timing_data.get(list_name)
        if samples is not None:
            samples.append((time.time() - began, _timing_data.get("_current_input", "")))


def report_timing_statistics(
    stage_timings: list[Tuple[str, list[StageSample]]],
    slowest: int = 5,
) -> None:
    """Print a summary per stage: sample count, total, mean and slowest inputs.

    Args:
        stage_timings: (stage name, samples) pairs, e.g.
            [("Markdown", markdown_timings), ("Pygments", pygments_timings)]
        slowest: How many of the slowest samples to list per stage
    """
    for stage, samples in stage_timings:
        if not samples:
            continue
        total = sum(duration for duration, _ in samples)
        _print_timing(f"{stage} stage:")
        _print_timing(f"  Samples: {len(samples)}")
        _print_timing(f"  Total: {total:.3f}s (mean {total / len(samples) * 1000:.1f}ms)")
        _print_timing(f"  Slowest {min(slowest, len(samples))}:")
        ranked = sorted(samples, key=lambda sample: sample[0], reverse=True)
        for duration, label in ranked[:slowest]:
            _print_timing(f"    {label or '<input>'}: {duration * 1000:.1f}ms")
