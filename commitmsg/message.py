#!/usr/bin/env python3

"""The CommitMessage aggregate.

A CommitMessage owns the original lines of a commit message and exposes the
subject, bodies, comments, trailers and scissors region derived from them.
Edits never modify an instance; they rebuild the lines and return a new one.
"""

import logging
import re
import sys
from typing import Dict, Hashable, List, Optional, Pattern, Sequence, Tuple, Union

from .classify import (
    LineKind,
    classify_line,
    detect_comment_char,
    is_blank,
    validate_comment_char,
)
from .lines import Line, detect_line_ending, join_lines, split_lines
from .scissors import Scissors, split_scissors
from .segment import BlockKind, Comment, Layout, segment
from .trailers import Trailer, recognize_trailers

__all__ = [
    "AUTO",
    "DEFAULT_COMMENT_CHAR",
    "CommitMessage",
]

log = logging.getLogger(__name__)

# Pass as comment_char to detect the comment character from the message itself
AUTO = "auto"

DEFAULT_COMMENT_CHAR = "#"

SUBJECT_KEY = ("subject",)
LEADING_KEY = ("leading",)
TAIL_KEY = ("tail",)
TRAILERS_KEY = ("trailers",)

KeyedBlock = Tuple[Hashable, List[Line]]


def _gap_key(key: Hashable) -> Tuple[str, Hashable]:
    return ("gap", key)


def _body_key(index: int) -> Tuple[str, int]:
    return ("body", index)


class CommitMessage:
    """A parsed commit message.

    Use :meth:`parse` to build one from text. ``to_text()`` of an unedited message
    returns exactly the text it was parsed from.
    """

    def __init__(
        self,
        lines: Sequence[Line] = (),
        comment_char: Optional[str] = DEFAULT_COMMENT_CHAR,
    ) -> None:
        self._lines: Tuple[Line, ...] = tuple(lines)
        self._comment_char = validate_comment_char(comment_char)

        prefix, self._scissors = split_scissors(self._lines)
        self._layout: Layout = segment(prefix, self._comment_char)

        trailers = recognize_trailers([p.text for p in self._layout.paragraphs])
        self._has_trailer_block = trailers is not None
        self._trailers: Tuple[Trailer, ...] = tuple(trailers or ())

    @classmethod
    def parse(
        cls, message: str, comment_char: Optional[str] = DEFAULT_COMMENT_CHAR
    ) -> "CommitMessage":
        """Parse a commit message.

        Parsing never fails: any text produces a CommitMessage.

        Args:
            message: The raw commit message text
            comment_char: The comment character, None for no comments, or AUTO to
                          detect it from the message

        Returns:
            The parsed commit message
        """
        if comment_char == AUTO:
            comment_char = detect_comment_char(message)
        return cls(split_lines(message), comment_char)

    def get_subject(self) -> str:
        return self._layout.subject

    def get_body(self) -> List[str]:
        """Return the body paragraphs, without comments and without the trailer block."""
        paragraphs = self._layout.paragraphs
        if self._has_trailer_block:
            paragraphs = paragraphs[:-1]
        return [paragraph.text for paragraph in paragraphs]

    def get_body_text(self) -> str:
        return "\n\n".join(self.get_body())

    def get_comments(self) -> List[Comment]:
        return list(self._layout.comments)

    def get_trailers(self) -> List[Trailer]:
        return list(self._trailers)

    def get_trailer_values(self, key: str) -> List[str]:
        """Return the values of every trailer whose key matches, ignoring case."""
        return [trailer.value for trailer in self._trailers if trailer.has_key(key)]

    def get_scissors(self) -> Optional[Scissors]:
        return self._scissors

    def get_comment_char(self) -> Optional[str]:
        return self._comment_char

    def get_lines(self) -> Tuple[Line, ...]:
        return self._lines

    def matches_pattern(self, pattern: Union[str, Pattern[str]]) -> bool:
        """Search the visible text of the message.

        Only the subject and the body paragraphs are searched; comments, trailers
        and the scissors region are not.
        """
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        visible = "\n\n".join([self.get_subject(), *self.get_body()])
        return regex.search(visible) is not None

    def to_text(self) -> str:
        return join_lines(self._lines)

    def replace_subject(self, subject: str) -> "CommitMessage":
        """Return a copy of the message with a different subject line.

        Raises:
            ValueError: If the subject spans more than one line, is blank, or would
                        be read back as a comment or scissors line
        """
        if "\n" in subject or "\r" in subject:
            raise ValueError(f"Subject must be a single line, got {subject!r}")
        if is_blank(subject):
            raise ValueError("Subject must not be blank")
        self._check_content([Line(subject)])

        blocks = self._keyed_blocks()
        for i, (key, lines) in enumerate(blocks):
            if key == SUBJECT_KEY:
                blocks[i] = (key, [Line(subject, lines[0].terminator)])
                break
        else:
            blocks.insert(0, (SUBJECT_KEY, [Line(subject, self._line_ending())]))

        return self._rebuild(blocks)

    def replace_body(self, bodies: Sequence[str]) -> "CommitMessage":
        """Return a copy of the message with different body paragraphs.

        The trailer block, comments and scissors region are kept. Blank bodies are
        dropped. A body containing a blank line will read back as two paragraphs.

        Raises:
            ValueError: If the message has no subject to put the bodies under, or a
                        body line would be read back as a comment or scissors line
        """
        bodies = [body for body in bodies if not is_blank(body)]
        if bodies and not self._has_subject():
            raise ValueError("Cannot add a body to a message without a subject")

        original = self._keyed_blocks()
        gaps = {key: lines for key, lines in original if _is_gap_of(key, "body")}

        body_blocks: List[KeyedBlock] = []
        for index, body in enumerate(bodies):
            key = _body_key(index)
            gap = gaps.get(_gap_key(key), [Line("", self._line_ending())])
            body_blocks.append((_gap_key(key), list(gap)))
            body_blocks.append((key, self._check_content(self._text_to_lines(body))))

        blocks: List[KeyedBlock] = []
        inserted = False
        for key, lines in original:
            if _is_body_key(key) or _is_gap_of(key, "body"):
                continue
            if not inserted and key not in (LEADING_KEY, SUBJECT_KEY):
                blocks.extend(body_blocks)
                inserted = True
            blocks.append((key, lines))
        if not inserted:
            blocks.extend(body_blocks)

        return self._rebuild(blocks)

    def replace_trailers(self, trailers: Sequence[Trailer]) -> "CommitMessage":
        """Return a copy of the message with a different trailer block.

        Trailers are written as ``Key: Value``. An empty sequence removes the
        trailer block together with the blank lines in front of it.

        Raises:
            ValueError: If the message has no subject to put the trailers under, or
                        a trailer would be read back as a comment or scissors line
        """
        if trailers and not self._has_subject():
            raise ValueError("Cannot add trailers to a message without a subject")

        original = self._keyed_blocks()
        gap_key = _gap_key(TRAILERS_KEY)
        gap = dict(original).get(gap_key, [Line("", self._line_ending())])

        blocks = [
            (key, lines) for key, lines in original if key not in (TRAILERS_KEY, gap_key)
        ]
        if trailers:
            trailer_lines = self._check_content(
                [
                    line
                    for trailer in trailers
                    for line in self._text_to_lines(str(trailer))
                ]
            )
            position = len(blocks)
            if blocks and blocks[-1][0] == TAIL_KEY:
                position -= 1
            blocks[position:position] = [
                (gap_key, list(gap)),
                (TRAILERS_KEY, trailer_lines),
            ]

        return self._rebuild(blocks)

    def _line_ending(self) -> str:
        return detect_line_ending(self.to_text())

    def _text_to_lines(self, text: str) -> List[Line]:
        line_ending = self._line_ending()
        return [line.with_terminator(line_ending) for line in split_lines(text)]

    def _check_content(self, lines: List[Line]) -> List[Line]:
        for line in lines:
            kind = classify_line(line.text, self._comment_char)
            if kind is not LineKind.CONTENT:
                raise ValueError(
                    f"{line.text!r} would be read back as a {kind.value} line"
                )
        return lines

    def _has_subject(self) -> bool:
        return any(block.kind is BlockKind.SUBJECT for block in self._layout.blocks)

    def _separate_paragraphs(self, blocks: List[KeyedBlock]) -> List[KeyedBlock]:
        """Put a blank line into every empty gap that does not follow the subject.

        Only the subject may be directly followed by a paragraph; anywhere else the
        two paragraphs would read back as one.
        """
        separated: List[KeyedBlock] = []
        previous: Optional[Hashable] = None
        for key, lines in blocks:
            if _is_gap(key) and not lines and previous != SUBJECT_KEY:
                lines = [Line("", self._line_ending())]
            separated.append((key, lines))
            previous = key
        return separated

    def _keyed_blocks(self) -> List[KeyedBlock]:
        """Name each block after the role it plays in the message.

        Body paragraphs are numbered, the trailer block and the fixed blocks get
        their own keys, and a gap is named after the paragraph that follows it.
        """
        blocks = self._layout.blocks
        paragraph_count = len(self._layout.paragraphs)
        keys: List[Hashable] = []
        paragraph_index = 0

        for block in blocks:
            if block.kind is BlockKind.PARAGRAPH:
                if self._has_trailer_block and paragraph_index == paragraph_count - 1:
                    keys.append(TRAILERS_KEY)
                else:
                    keys.append(_body_key(paragraph_index))
                paragraph_index += 1
            else:
                keys.append((block.kind.value,))

        for i, block in enumerate(blocks):
            # A gap is always followed by the paragraph it separates
            if block.kind is BlockKind.GAP:
                keys[i] = _gap_key(keys[i + 1])

        return [(key, list(block.lines)) for key, block in zip(keys, blocks)]

    def _rebuild(self, blocks: List[KeyedBlock]) -> "CommitMessage":
        """Assemble a new message from edited blocks and this message's comments.

        Each comment goes back after the line it followed originally. If that
        block is gone, it follows the closest earlier block that is still there.
        """
        blocks = self._separate_paragraphs(blocks)
        original = self._keyed_blocks()
        original_keys = [key for key, _ in original]
        new_keys = {key for key, _ in blocks}

        head: List[Line] = []
        anchored: Dict[Hashable, List[Tuple[int, Line]]] = {}
        for comment, anchor in zip(self._layout.comments, self._layout.anchors):
            if anchor is None:
                head.append(comment.line)
                continue

            block_index, offset = anchor
            key: Optional[Hashable] = original_keys[block_index]
            if offset == len(original[block_index][1]) - 1:
                # Comments after the last line of a block stay after its end
                offset = sys.maxsize
            if key not in new_keys:
                key = next(
                    (k for k in reversed(original_keys[:block_index]) if k in new_keys),
                    None,
                )
                offset = sys.maxsize

            if key is None:
                head.append(comment.line)
            else:
                anchored.setdefault(key, []).append((offset, comment.line))

        lines = list(head)
        for key, block_lines in blocks:
            pending = anchored.get(key, [])
            i = 0
            for offset, line in enumerate(block_lines):
                lines.append(line)
                while i < len(pending) and pending[i][0] <= offset:
                    lines.append(pending[i][1])
                    i += 1
            lines.extend(line for _, line in pending[i:])

        if self._scissors is not None:
            lines.extend(self._scissors.lines)

        rebuilt = CommitMessage(self._fix_terminators(lines), self._comment_char)
        log.debug(f"Rebuilt commit message with {len(rebuilt.get_lines())} lines")
        return rebuilt

    def _fix_terminators(self, lines: List[Line]) -> List[Line]:
        """Terminate every line but the last, and end the message like the original."""
        if not lines:
            return lines

        line_ending = self._line_ending()
        fixed = [
            line if line.terminator else line.with_terminator(line_ending)
            for line in lines[:-1]
        ]

        last = lines[-1]
        ends_with_newline = not self._lines or bool(self._lines[-1].terminator)
        if ends_with_newline and not last.terminator:
            last = last.with_terminator(line_ending)
        elif not ends_with_newline and last.terminator and last.text:
            last = last.with_terminator("")
        fixed.append(last)

        return fixed

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"CommitMessage.parse({self.to_text()!r}, {self._comment_char!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommitMessage):
            return NotImplemented
        return (self._lines, self._comment_char) == (other._lines, other._comment_char)

    def __hash__(self) -> int:
        return hash((self._lines, self._comment_char))


def _is_body_key(key: Hashable) -> bool:
    return isinstance(key, tuple) and key[0] == "body"


def _is_gap(key: Hashable) -> bool:
    return isinstance(key, tuple) and key[0] == "gap"


def _is_gap_of(key: Hashable, kind: str) -> bool:
    return (
        _is_gap(key)
        and isinstance(key[1], tuple)
        and key[1][0] == kind
    )
