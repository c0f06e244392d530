#!/usr/bin/env python3

"""Centralized regular expression patterns for commitmsg."""

# Trailer keys are runs of letters, digits and hyphens (Signed-off-by, Co-authored-by)
TRAILER_KEY_REGEX = r"[A-Za-z0-9-]+"

# Separators accepted between a trailer key and its value
TRAILER_SEPARATOR_REGEX = r": | #"

# A full trailer line: key, separator, value
TRAILER_REGEX = f"^({TRAILER_KEY_REGEX})({TRAILER_SEPARATOR_REGEX})(.*)$"

# The "cut here" line written by `git commit --verbose`, optionally preceded by the
# comment character and a space, e.g. "# ------------------------ >8 ------------------------"
SCISSORS_REGEX = r"^(?:([^\s-]) )?-+ >8 -+$"

# Characters git accepts when core.commentChar is "auto", in preference order
LEGAL_COMMENT_CHARS = "#;@!$%^&|:"
