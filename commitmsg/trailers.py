#!/usr/bin/env python3

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .regex import TRAILER_REGEX

__all__ = [
    "Trailer",
    "parse_trailer_line",
    "recognize_trailers",
]

log = logging.getLogger(__name__)

TRAILER_RE = re.compile(TRAILER_REGEX)


@dataclass(frozen=True)
class Trailer:
    """A ``Key: Value`` line from the trailer block of a commit message."""

    key: str
    value: str

    def has_key(self, key: str) -> bool:
        """Compare keys ignoring case, so "signed-off-by" matches "Signed-off-by"."""
        return self.key.casefold() == key.casefold()

    def __str__(self) -> str:
        return f"{self.key}: {self.value}"


def parse_trailer_line(line: str) -> Optional[Trailer]:
    """Parse a single trailer line.

    Args:
        line: The line to parse, e.g. "Signed-off-by: Alice <alice@example.com>"

    Returns:
        The trailer, or None if the line does not follow the trailer grammar
    """
    match = TRAILER_RE.match(line)
    if match is None:
        return None
    return Trailer(match.group(1), match.group(3).strip())


def recognize_trailers(paragraphs: Sequence[str]) -> Optional[List[Trailer]]:
    """Decide whether the last paragraph of a message is a trailer block.

    Only the last paragraph is considered, and every one of its lines has to be a
    trailer; one stray line makes the whole paragraph ordinary body text.

    Args:
        paragraphs: The body paragraphs of the message in order

    Returns:
        The trailers in the order they appear, or None if there is no trailer block
    """
    if not paragraphs:
        return None

    trailers: List[Trailer] = []
    for line in paragraphs[-1].split("\n"):
        trailer = parse_trailer_line(line)
        if trailer is None:
            log.debug(f"Last paragraph is not a trailer block: {line!r}")
            return None
        trailers.append(trailer)

    log.debug(f"Recognized {len(trailers)} trailers")
    return trailers
