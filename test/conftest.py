"""Pytest configuration and shared fixtures."""

from typing import Callable

import pytest
from bs4 import BeautifulSoup

TIMESTAMP_ANCHOR = (
    '<a href="javascript:void(0)" data-seconds="{seconds}" '
    'class="timestamp-link yt-core-attributed-string__link '
    'yt-core-attributed-string__link--call-to-action-color">{text}</a>'
)


@pytest.fixture
def timestamp_anchor() -> Callable[[int, str], str]:
    """Build the exact anchor markup expected for a timestamp."""

    def build(seconds: int, text: str) -> str:
        return TIMESTAMP_ANCHOR.format(seconds=seconds, text=text)

    return build


@pytest.fixture
def soup_of() -> Callable[[str], BeautifulSoup]:
    """Parse markup for structural assertions."""

    def parse(markup: str) -> BeautifulSoup:
        return BeautifulSoup(markup, "html.parser")

    return parse


@pytest.fixture
def sample_summary() -> str:
    """A realistic summary as returned by the model."""
    return """### **Overview**

The video argues for building agents from **first principles** (0:45).

### **Key Points**

*   **Thesis: Build with First Principles, Not Frameworks (5:05)**
    *   The current landscape is full of noise, e.g. LangChain [4:21]
    *   The most effective agents are **deterministic software**
*   **Intelligence Layer** [8:09, 9:15]
    *   Only call the model where reasoning is needed

### **Notable Mentions**

1.  **Tools:** OpenAI Python SDK (8:41), **Pydantic** (15:03)
2.  **People:** Jason Liu (2:18), Dan Martell (2:20)

```python
def route(query: str) -> str:
    return "search" if "?" in query else "chat"
```

Full talk: [recording](https://example.com/talk)"""
