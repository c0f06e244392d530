#!/usr/bin/env python3

"""Splitting commit message text into lines without losing terminators."""

from dataclasses import dataclass
from typing import Iterable, List, Literal

__all__ = [
    "Line",
    "split_lines",
    "join_lines",
    "detect_line_ending",
]


@dataclass(frozen=True)
class Line:
    """One physical line and the terminator that followed it ("" for the last line)."""

    text: str
    terminator: str = "\n"

    def with_terminator(self, terminator: str) -> "Line":
        """Return a copy ending in terminator.

        Text ending in "\\r" always gets "\\r\\n", so that split_lines reads the
        same text back instead of taking the "\\r" as part of the terminator.
        """
        if terminator and self.text.endswith("\r"):
            return Line(self.text, "\r\n")
        return Line(self.text, terminator)

    def __str__(self) -> str:
        return self.text + self.terminator


def split_lines(content: str) -> List[Line]:
    """Split content on LF, remembering whether each line ended in CRLF or LF.

    Only "\\n" and "\\r\\n" end a line; a lone "\\r" is kept as part of the text.
    A trailing terminator does not produce an extra empty line, so
    ``join_lines(split_lines(content)) == content`` for every string.

    Args:
        content: The raw commit message text

    Returns:
        The lines of the message in order
    """
    if not content:
        return []

    parts = content.split("\n")
    lines: List[Line] = []
    for part in parts[:-1]:
        if part.endswith("\r"):
            lines.append(Line(part[:-1], "\r\n"))
        else:
            lines.append(Line(part, "\n"))

    # Text after the final "\n" is an unterminated last line
    if parts[-1]:
        lines.append(Line(parts[-1], ""))

    return lines


def join_lines(lines: Iterable[Line]) -> str:
    return "".join(str(line) for line in lines)


def detect_line_ending(
    content: str, return_format: Literal["str", "format"] = "str"
) -> str:
    """Detect the line ending used by a piece of text.

    Args:
        content: The text to inspect
        return_format: Return format - either "str" for actual characters ("\\n" or "\\r\\n")
                      or "format" for "LF" or "CRLF" strings

    Returns:
        The detected line endings ('\\n' or '\\r\\n') or ('LF' or 'CRLF') based on return_format
    """
    if "\r\n" in content:
        return "CRLF" if return_format == "format" else "\r\n"
    return "LF" if return_format == "format" else "\n"
