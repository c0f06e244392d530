#!/usr/bin/env python3

"""Unit tests for config.py module."""

import os
import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from commitmsg.config import (
    get_comment_char_preference,
    get_config_path,
    get_git_comment_char,
    get_logger_path,
    get_logger_verbosity,
    load_config,
    resolve_comment_char,
)
from commitmsg.message import AUTO


class ConfigTest(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.config_dir = Path(self.temp_dir.name)
        self.config_file = self.config_dir / "commitmsgrc"
        self.env_patcher = mock.patch.dict(
            os.environ, {"COMMITMSG_CONFIG_DIR": str(self.config_dir)}
        )
        self.env_patcher.start()

    def tearDown(self):
        self.env_patcher.stop()
        self.temp_dir.cleanup()

    def write_config(self, content: str) -> None:
        self.config_file.write_text(content, encoding="utf-8")

    def test_config_dir_is_used_when_file_exists(self):
        self.write_config("")
        self.assertEqual(get_config_path(), self.config_file)

    def test_defaults(self):
        with mock.patch(
            "commitmsg.config.get_config_path", return_value=self.config_file
        ):
            config = load_config()
            self.assertEqual(config["logger"]["verbosity"], "INFO")
            self.assertIsNone(config["message"]["comment_char"])
            self.assertIsNone(get_comment_char_preference())

    def test_user_config_is_merged(self):
        self.write_config('[logger]\nverbosity = "DEBUG"\npath = "~/logs"\n')
        config = load_config()
        self.assertEqual(config["logger"]["verbosity"], "DEBUG")
        self.assertEqual(config["message"], {"comment_char": None})
        self.assertEqual(get_logger_verbosity(), "DEBUG")
        self.assertEqual(get_logger_path(), os.path.expanduser("~/logs"))

    def test_malformed_config_falls_back_to_defaults(self):
        self.write_config("[logger\nverbosity = ")
        with self.assertLogs(level="WARNING"):
            config = load_config()
        self.assertEqual(config["logger"]["verbosity"], "INFO")

    def test_comment_char_preference(self):
        self.write_config('[message]\ncomment_char = ";"\n')
        self.assertEqual(get_comment_char_preference(), ";")

        self.write_config('[message]\ncomment_char = "auto"\n')
        self.assertEqual(get_comment_char_preference(), AUTO)

        self.write_config('[message]\ncomment_char = ""\n')
        self.assertEqual(get_comment_char_preference(), "")

        self.write_config('[message]\ncomment_char = "//"\n')
        with self.assertRaises(ValueError):
            get_comment_char_preference()


class ResolveCommentCharTest(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.config_file = Path(self.temp_dir.name) / "commitmsgrc"
        self.path_patcher = mock.patch(
            "commitmsg.config.get_config_path", return_value=self.config_file
        )
        self.path_patcher.start()

    def tearDown(self):
        self.path_patcher.stop()
        self.temp_dir.cleanup()

    def test_option_wins(self):
        self.config_file.write_text('[message]\ncomment_char = ";"\n')
        self.assertEqual(resolve_comment_char("%"), "%")
        self.assertIsNone(resolve_comment_char("none"))
        self.assertEqual(resolve_comment_char("auto"), AUTO)

    def test_config_file(self):
        self.config_file.write_text('[message]\ncomment_char = ";"\n')
        self.assertEqual(resolve_comment_char(), ";")

    def test_config_file_disables_comments(self):
        self.config_file.write_text('[message]\ncomment_char = "none"\n')
        with mock.patch("commitmsg.config.get_git_comment_char") as git:
            self.assertIsNone(resolve_comment_char())
            git.assert_not_called()

    def test_git_config(self):
        with mock.patch("commitmsg.config.get_git_comment_char", return_value=";"):
            self.assertEqual(resolve_comment_char(), ";")
        with mock.patch("commitmsg.config.get_git_comment_char", return_value="auto"):
            self.assertEqual(resolve_comment_char(), AUTO)

    def test_default(self):
        with mock.patch("commitmsg.config.get_git_comment_char", return_value=None):
            self.assertEqual(resolve_comment_char(), "#")

    def test_invalid_option(self):
        with self.assertRaises(ValueError):
            resolve_comment_char("##")


class GitCommentCharTest(unittest.TestCase):
    def test_reads_git_config(self):
        completed = subprocess.CompletedProcess(
            args=[], returncode=0, stdout=";\n", stderr=""
        )
        with mock.patch("subprocess.run", return_value=completed) as run:
            self.assertEqual(get_git_comment_char("/repo"), ";")
            self.assertEqual(
                run.call_args[0][0], ["git", "config", "--get", "core.commentChar"]
            )
            self.assertEqual(run.call_args[1]["cwd"], "/repo")

    def test_unset(self):
        completed = subprocess.CompletedProcess(
            args=[], returncode=1, stdout="", stderr=""
        )
        with mock.patch("subprocess.run", return_value=completed):
            self.assertIsNone(get_git_comment_char())

    def test_git_missing(self):
        with mock.patch("subprocess.run", side_effect=FileNotFoundError("git")):
            self.assertIsNone(get_git_comment_char())


if __name__ == "__main__":
    unittest.main()
