#!/usr/bin/env python3

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .classify import is_scissors_line
from .lines import Line, join_lines

__all__ = [
    "Scissors",
    "split_scissors",
]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scissors:
    """The scissors line and everything after it, kept verbatim.

    Attributes:
        lines: The marker line followed by the diff preview lines
        position: Index of the marker line in the full message
    """

    lines: Tuple[Line, ...]
    position: int

    @property
    def text(self) -> str:
        return join_lines(self.lines)

    @property
    def marker(self) -> str:
        return self.lines[0].text

    def __str__(self) -> str:
        return self.text


def split_scissors(lines: Sequence[Line]) -> Tuple[List[Line], Optional[Scissors]]:
    """Split a message into the part before the scissors line and the scissors region.

    Only the first scissors line counts; anything that looks like another one is
    part of the region.

    Args:
        lines: All lines of the message

    Returns:
        A tuple containing:
            - The lines before the scissors marker (all lines if there is none)
            - The scissors region, or None
    """
    for i, line in enumerate(lines):
        if is_scissors_line(line.text):
            log.debug(f"Scissors line found at line {i}")
            return list(lines[:i]), Scissors(tuple(lines[i:]), i)

    return list(lines), None
