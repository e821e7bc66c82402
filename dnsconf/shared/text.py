"""
Line-oriented preprocessing shared by the hosts and resolv.conf parsers.
"""

from typing import Iterator


COMMENT_PREFIXES = ("#", ";")


def normalize_text(text: str) -> str:
    """
    Strip a leading byte-order mark, convert tabs to spaces, fold every
    line-ending style to LF, and join backslash-newline continuations.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    text = text.replace("\t", " ")
    text = text.replace("\r\n", "\n")
    text = text.replace("\r", "\n")

    return text.replace("\\\n", "")


def iter_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, line)`` for each trimmed, non-empty, non-comment line."""
    for line_number, chunk in enumerate(text.split("\n"), start=1):
        line = chunk.strip()

        if not line or line.startswith(COMMENT_PREFIXES):
            continue

        yield line_number, line
