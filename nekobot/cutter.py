"""Truncation of long program output."""

TRUNCATION_MARK = "\n............\n............"

_MAX_LINES = 30
_MAX_INDEX = 1000


def cut_too_long(text: str) -> str:
    """Cut text after 30 line breaks or about 1000 characters."""
    newlines = 0
    for i, ch in enumerate(text):
        if ch == "\n" or (ch == "\r" and text[i + 1 : i + 2] != "\n"):
            newlines += 1
        if newlines > _MAX_LINES or i > _MAX_INDEX:
            return text[: i - 1] + TRUNCATION_MARK
    return text