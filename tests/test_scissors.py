#!/usr/bin/env python3

import unittest

from commitmsg.lines import Line, split_lines
from commitmsg.scissors import split_scissors

VERBOSE_MESSAGE = (
    "Subject\n"
    "\n"
    "# ------------------------ >8 ------------------------\n"
    "# Do not modify or remove the line above.\n"
    "diff --git a/x b/x\n"
)


class TestSplitScissors(unittest.TestCase):
    def test_no_scissors(self):
        lines = split_lines("Subject\n\nBody\n")
        prefix, scissors = split_scissors(lines)
        self.assertEqual(prefix, lines)
        self.assertIsNone(scissors)

    def test_scissors(self):
        prefix, scissors = split_scissors(split_lines(VERBOSE_MESSAGE))
        self.assertEqual(prefix, [Line("Subject"), Line("")])
        self.assertIsNotNone(scissors)
        self.assertEqual(scissors.position, 2)
        self.assertEqual(
            scissors.marker, "# ------------------------ >8 ------------------------"
        )
        self.assertEqual(
            scissors.text,
            "# ------------------------ >8 ------------------------\n"
            "# Do not modify or remove the line above.\n"
            "diff --git a/x b/x\n",
        )

    def test_only_first_scissors_counts(self):
        text = (
            "Subject\n"
            "------------------------ >8 ------------------------\n"
            "first\n"
            "------------------------ >8 ------------------------\n"
            "second\n"
        )
        prefix, scissors = split_scissors(split_lines(text))
        self.assertEqual(prefix, [Line("Subject")])
        self.assertEqual(scissors.position, 1)
        self.assertEqual(len(scissors.lines), 4)

    def test_scissors_without_trailing_newline(self):
        text = "Subject\n# ------------------------ >8 ------------------------"
        prefix, scissors = split_scissors(split_lines(text))
        self.assertEqual(
            str(scissors), "# ------------------------ >8 ------------------------"
        )

    def test_dashed_line_without_marker(self):
        lines = split_lines("Subject\n\n-----------------\nmore\n")
        prefix, scissors = split_scissors(lines)
        self.assertEqual(prefix, lines)
        self.assertIsNone(scissors)


if __name__ == "__main__":
    unittest.main()
