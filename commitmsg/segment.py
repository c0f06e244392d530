#!/usr/bin/env python3

"""Segmentation of the logical part of a commit message.

The lines before the scissors marker are grouped into blocks:

    LEADING    blank lines before the subject
    SUBJECT    the first non-blank content line
    GAP        the blank lines in front of a paragraph (possibly none)
    PARAGRAPH  a run of non-blank content lines
    TAIL       blank lines after the last paragraph

Comment lines never belong to a block. Each one is remembered together with
the block line it follows, so it can be put back in the same place after the
blocks around it have been edited.
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .classify import LineKind, classify_line, is_blank
from .lines import Line

__all__ = [
    "BlockKind",
    "Block",
    "Comment",
    "Layout",
    "segment",
]

log = logging.getLogger(__name__)

# (block index, offset of the preceding line inside that block)
Anchor = Optional[Tuple[int, int]]


class BlockKind(enum.Enum):
    LEADING = "leading"
    SUBJECT = "subject"
    GAP = "gap"
    PARAGRAPH = "paragraph"
    TAIL = "tail"


@dataclass(frozen=True)
class Block:
    kind: BlockKind
    lines: Tuple[Line, ...]
    positions: Tuple[int, ...]

    @property
    def text(self) -> str:
        return "\n".join(line.text for line in self.lines)


@dataclass(frozen=True)
class Comment:
    """A comment line and the index it occupies in the full message."""

    line: Line
    position: int

    @property
    def text(self) -> str:
        return self.line.text

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Layout:
    blocks: Tuple[Block, ...] = ()
    comments: Tuple[Comment, ...] = ()
    anchors: Tuple[Anchor, ...] = ()

    @property
    def subject(self) -> str:
        for block in self.blocks:
            if block.kind is BlockKind.SUBJECT:
                return block.text
        return ""

    @property
    def paragraphs(self) -> List[Block]:
        return [block for block in self.blocks if block.kind is BlockKind.PARAGRAPH]


@dataclass
class _BlockBuilder:
    kind: BlockKind
    lines: List[Line] = field(default_factory=list)
    positions: List[int] = field(default_factory=list)

    def add(self, line: Line, position: int) -> None:
        self.lines.append(line)
        self.positions.append(position)

    def build(self) -> Block:
        return Block(self.kind, tuple(self.lines), tuple(self.positions))


def segment(lines: Sequence[Line], comment_char: Optional[str]) -> Layout:
    """Group the lines in front of the scissors marker into blocks.

    Args:
        lines: The logical prefix of the message (no scissors region)
        comment_char: The configured comment character, or None

    Returns:
        The blocks in document order plus the comments and their anchors
    """
    blocks: List[_BlockBuilder] = []
    comments: List[Comment] = []
    anchors: List[Anchor] = []

    for position, line in enumerate(lines):
        kind = classify_line(line.text, comment_char)

        if kind is LineKind.COMMENT:
            comments.append(Comment(line, position))
            if blocks:
                anchors.append((len(blocks) - 1, len(blocks[-1].lines) - 1))
            else:
                anchors.append(None)
            continue

        blank = is_blank(line.text)
        current = blocks[-1] if blocks else None

        if current is None or current.kind is BlockKind.LEADING:
            # Nothing but blank lines so far, still looking for the subject
            if blank:
                if current is None:
                    current = _BlockBuilder(BlockKind.LEADING)
                    blocks.append(current)
                current.add(line, position)
            else:
                subject = _BlockBuilder(BlockKind.SUBJECT)
                subject.add(line, position)
                blocks.append(subject)
        elif blank:
            if current.kind is not BlockKind.GAP:
                current = _BlockBuilder(BlockKind.GAP)
                blocks.append(current)
            current.add(line, position)
        else:
            if current.kind is BlockKind.SUBJECT:
                # Body text right under the subject, with no blank line in between
                blocks.append(_BlockBuilder(BlockKind.GAP))
                current = blocks[-1]
            if current.kind is BlockKind.GAP:
                current = _BlockBuilder(BlockKind.PARAGRAPH)
                blocks.append(current)
            current.add(line, position)

    # Blank lines that no paragraph followed
    if blocks and blocks[-1].kind is BlockKind.GAP:
        blocks[-1].kind = BlockKind.TAIL

    layout = Layout(
        blocks=tuple(builder.build() for builder in blocks),
        comments=tuple(comments),
        anchors=tuple(anchors),
    )
    log.debug(
        f"Segmented {len(lines)} lines into {len(layout.paragraphs)} paragraphs "
        f"and {len(comments)} comments"
    )
    return layout
