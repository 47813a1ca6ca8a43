"""Normalization of summaries that arrive as JSON-escaped string literals."""

# Order matters: the backslash pair must be unescaped last, otherwise "\\n"
# would first collapse to "\n" and then be read as a newline.
_ESCAPES: tuple[tuple[str, str], ...] = (
    ('\\"', '"'),
    ("\\n", "\n"),
    ("\\r", "\r"),
    ("\\t", "\t"),
    ("\\\\", "\\"),
)


def preprocess_text(text: str) -> str:
    """Strip enclosing quotes and unescape JSON string escapes.

    Text without any of these artifacts is returned unchanged.
    """
    if text.startswith('"') and text.endswith('"'):
        text = text[1:-1]
    for escaped, plain in _ESCAPES:
        text = text.replace(escaped, plain)
    return text
