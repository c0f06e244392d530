#!/usr/bin/env python3

import unittest

from commitmsg.classify import (
    LineKind,
    classify_line,
    detect_comment_char,
    is_blank,
    validate_comment_char,
)


class TestClassifyLine(unittest.TestCase):
    def test_comment(self):
        self.assertEqual(classify_line("# a comment", "#"), LineKind.COMMENT)
        self.assertEqual(classify_line("#", "#"), LineKind.COMMENT)
        self.assertEqual(classify_line("; ignored", ";"), LineKind.COMMENT)

    def test_comment_char_must_be_first(self):
        self.assertEqual(classify_line(" # indented", "#"), LineKind.CONTENT)
        self.assertEqual(classify_line("Fixes #12", "#"), LineKind.CONTENT)

    def test_no_comment_char_means_no_comments(self):
        self.assertEqual(classify_line("# looks like a comment", None), LineKind.CONTENT)

    def test_other_comment_char(self):
        self.assertEqual(classify_line("# heading", ";"), LineKind.CONTENT)

    def test_scissors(self):
        self.assertEqual(
            classify_line(
                "# ------------------------ >8 ------------------------", "#"
            ),
            LineKind.SCISSORS,
        )
        self.assertEqual(
            classify_line("------------------------ >8 ------------------------", "#"),
            LineKind.SCISSORS,
        )
        # Recognized even when it does not start with the comment character
        self.assertEqual(
            classify_line(
                "# ------------------------ >8 ------------------------", ";"
            ),
            LineKind.SCISSORS,
        )

    def test_dashes_without_marker_are_not_scissors(self):
        self.assertEqual(
            classify_line("# ------------------------------------------------", "#"),
            LineKind.COMMENT,
        )
        self.assertEqual(classify_line("---", "#"), LineKind.CONTENT)
        self.assertEqual(classify_line("cut here >8", "#"), LineKind.CONTENT)

    def test_blank(self):
        self.assertTrue(is_blank(""))
        self.assertTrue(is_blank("  \t"))
        self.assertFalse(is_blank(" x"))

    def test_validate_comment_char(self):
        self.assertEqual(validate_comment_char(";"), ";")
        self.assertIsNone(validate_comment_char(None))
        with self.assertRaises(ValueError):
            validate_comment_char("")
        with self.assertRaises(ValueError):
            validate_comment_char("//")


class TestDetectCommentChar(unittest.TestCase):
    def test_from_scissors(self):
        message = (
            "Subject\n"
            "\n"
            "; Please enter the commit message\n"
            "% ------------------------ >8 ------------------------\n"
            "diff --git a/x b/x\n"
        )
        self.assertEqual(detect_comment_char(message), "%")

    def test_from_comment_lines(self):
        message = (
            "Subject\n"
            "\n"
            "fixes:\n"
            "#6436\n"
            "\n"
            "; Bitte geben Sie eine Commit-Beschreibung ein.\n"
            ";\n"
        )
        self.assertEqual(detect_comment_char(message), ";")

    def test_hash_preferred(self):
        self.assertEqual(detect_comment_char("Subject\n; one\n# two\n"), "#")

    def test_subject_is_ignored(self):
        self.assertIsNone(detect_comment_char("# not a comment\n\nBody\n"))

    def test_illegal_character(self):
        self.assertIsNone(detect_comment_char("Subject\n\n? Bitte geben Sie\n"))

    def test_empty(self):
        self.assertIsNone(detect_comment_char(""))


if __name__ == "__main__":
    unittest.main()
