"""Data models for summary rendering.

Plain dataclasses for the transient values the pipeline derives per call,
and Pydantic models for the response envelope a summary arrives in.
"""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel


# =============================================================================
# Pipeline Values
# =============================================================================

# Time code grammar shared by the linkifier and the markdown parser setup
TIME_PATTERN = r"\d+:\d{2}(?::\d{2})?"
TIME_SEPARATOR_PATTERN = r"(?:\s*[,\-–]\s*|\s+)"
TIME_GROUP_PATTERN = rf"{TIME_PATTERN}(?:{TIME_SEPARATOR_PATTERN}{TIME_PATTERN})*"


@dataclass(frozen=True)
class Timestamp:
    """A video time code such as ``1:02:30`` or ``4:05``.

    ``text`` is kept verbatim so distinct spellings of the same offset
    (``1:02:30`` and ``62:30``) stay distinguishable.
    """

    text: str
    seconds: int

    @classmethod
    def parse(cls, token: str) -> "Timestamp":
        """Parse an ``H:MM:SS`` or ``M:SS`` token.

        Raises:
            ValueError: If the token is not two or three colon-separated integers
        """
        parts = token.split(":")
        if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
            raise ValueError(f"Not a timestamp: {token!r}")
        numbers = [int(p) for p in parts]
        if len(numbers) == 3:
            hours, minutes, seconds = numbers
        else:
            hours = 0
            minutes, seconds = numbers
        return cls(text=token, seconds=hours * 3600 + minutes * 60 + seconds)


@dataclass(frozen=True)
class TextSpan:
    """A run of text produced while linkifying.

    A span with a timestamp has already been turned into a link; later passes
    only look at spans where ``timestamp`` is None.
    """

    text: str
    timestamp: Optional[Timestamp] = None

    @property
    def is_linked(self) -> bool:
        return self.timestamp is not None


@dataclass
class CodeBlock:
    """A fenced code block: optional language hint plus decoded source."""

    language: Optional[str]
    source: str

    @property
    def label(self) -> str:
        """Human-readable language name shown above the block."""
        if not self.language:
            return "Code"
        return self.language[:1].upper() + self.language[1:]


# =============================================================================
# Response Envelope
# =============================================================================


class SummaryPayload(BaseModel):
    summary: Optional[str] = None


class SummaryResponse(BaseModel):
    """Response carrying a generated summary to the display surface.

    Mirrors the ``{type, payload: {summary}, error}`` message shape; only the
    shape is modelled here, not how it is transported.
    """

    type: str = "summary"
    payload: Optional[SummaryPayload] = None
    error: Optional[str] = None

    @property
    def summary(self) -> Optional[str]:
        return self.payload.summary if self.payload else None
