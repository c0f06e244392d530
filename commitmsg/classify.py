#!/usr/bin/env python3

"""Line classification.

Every line of the logical part of a commit message is exactly one of:

- a scissors marker (the "cut here" line written by verbose commits)
- a comment (its first character is the configured comment character)
- content (everything else, including blank lines)
"""

import enum
import logging
import re
from typing import Optional

from .lines import split_lines
from .regex import LEGAL_COMMENT_CHARS, SCISSORS_REGEX

__all__ = [
    "LineKind",
    "classify_line",
    "is_blank",
    "is_scissors_line",
    "validate_comment_char",
    "detect_comment_char",
]

log = logging.getLogger(__name__)

SCISSORS_RE = re.compile(SCISSORS_REGEX)


class LineKind(enum.Enum):
    SCISSORS = "scissors"
    COMMENT = "comment"
    CONTENT = "content"


def validate_comment_char(comment_char: Optional[str]) -> Optional[str]:
    """Check that a comment character is a single character (or None).

    Raises:
        ValueError: If the value is not exactly one character long
    """
    if comment_char is not None and len(comment_char) != 1:
        raise ValueError(
            f"Comment character must be a single character, got {comment_char!r}"
        )
    return comment_char


def is_scissors_line(text: str) -> bool:
    return SCISSORS_RE.match(text) is not None


def is_blank(text: str) -> bool:
    return not text.strip()


def classify_line(text: str, comment_char: Optional[str]) -> LineKind:
    """Classify a single line of text.

    The scissors marker is recognized whether or not it starts with the comment
    character. With no comment character configured no line is a comment.

    Args:
        text: The line, without its terminator
        comment_char: The configured comment character, or None

    Returns:
        The kind of the line
    """
    if is_scissors_line(text):
        return LineKind.SCISSORS
    if comment_char is not None and text.startswith(comment_char):
        return LineKind.COMMENT
    return LineKind.CONTENT


def detect_comment_char(message: str) -> Optional[str]:
    """Guess the comment character a commit message was written with.

    The character in front of a scissors line wins. Otherwise the first legal
    comment character that opens a line after the subject, either alone or
    followed by a space, is used.

    Args:
        message: The raw commit message

    Returns:
        The detected comment character, or None if the message has no comments
    """
    lines = [line.text for line in split_lines(message)]

    for text in lines:
        match = SCISSORS_RE.match(text)
        if match:
            if match.group(1) is not None:
                log.debug(f"Comment character {match.group(1)!r} taken from scissors")
                return match.group(1)
            break

    candidates = lines[1:]
    for char in LEGAL_COMMENT_CHARS:
        if any(text == char or text.startswith(char + " ") for text in candidates):
            log.debug(f"Comment character {char!r} detected from comment lines")
            return char

    return None
