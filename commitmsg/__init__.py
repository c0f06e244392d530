#!/usr/bin/env python3

from .classify import LineKind, classify_line, detect_comment_char
from .lines import Line, join_lines, split_lines
from .main import cli, configure_logging
from .message import AUTO, DEFAULT_COMMENT_CHAR, CommitMessage
from .scissors import Scissors, split_scissors
from .segment import Comment, segment
from .trailers import Trailer, parse_trailer_line, recognize_trailers

__all__ = [
    "AUTO",
    "DEFAULT_COMMENT_CHAR",
    "CommitMessage",
    "Comment",
    "Line",
    "LineKind",
    "Scissors",
    "Trailer",
    "classify_line",
    "detect_comment_char",
    "split_lines",
    "join_lines",
    "split_scissors",
    "segment",
    "parse_trailer_line",
    "recognize_trailers",
    "configure_logging",
    "cli",
]
