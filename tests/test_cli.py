#!/usr/bin/env python3
"""
Tests for the command-line interface.
"""

import csv
import logging
import shutil
import tempfile
import unittest
from pathlib import Path

from click.testing import CliRunner

from clone_git_repo import __version__
from clone_git_repo.cli_cloner import main
from clone_git_repo.logging_setup import LOGGER_NAME

from helpers import make_source_repo


class TestCli(unittest.TestCase):
    """Test cases for the clone-git-repo command."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = Path(tempfile.mkdtemp())
        self.clone_dir = self.temp_dir / "clonedir"
        self.csv_file = self.temp_dir / "repositories.csv"
        self.result_file = self.temp_dir / "clone-git-repo-result.csv"
        self.config_file = self.temp_dir / "config.ini"
        self.runner = CliRunner()

    def tearDown(self):
        """Clean up test fixtures."""
        logger = logging.getLogger(LOGGER_NAME)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _write_config(self, username="alice", token="s3cret"):
        self.config_file.write_text(
            f"[credentials]\nusername = {username}\ntoken = {token}\n"
            f"[paths]\ncsv_file = {self.csv_file}\nclone_dir = {self.clone_dir}\n"
            f"[logging]\nlog_dir = {self.temp_dir / 'logs'}\n",
            encoding="utf-8",
        )

    def _invoke(self, *args):
        return self.runner.invoke(
            main, ["-c", str(self.config_file), "--result-file", str(self.result_file), *args]
        )

    def test_version(self):
        result = self.runner.invoke(main, ["--version"])

        self.assertEqual(result.exit_code, 0)
        self.assertIn(__version__, result.output)

    def test_clones_and_writes_result_file(self):
        source = make_source_repo(self.temp_dir / "remotes", name="project", branches=["dev"], tags=["v1"])
        self.csv_file.write_text(f"url\n{source}\n{self.temp_dir / 'missing'}\n", encoding="utf-8")
        self._write_config()

        result = self._invoke()

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Repository", result.output)
        with open(self.result_file, newline="", encoding="utf-8") as fh:
            rows = list(csv.reader(fh))
        self.assertEqual(rows, [
            ["Repository", "Cloned", "Branches", "Tags"],
            [str(self.clone_dir / "project"), "true", "2", "1"],
            [str(self.clone_dir / "missing"), "false", "0", "0"],
        ])
        self.assertTrue(list((self.temp_dir / "logs").glob("clone-git-repo-*.log")))

    def test_command_line_overrides_config(self):
        source = make_source_repo(self.temp_dir / "remotes", name="project", branches=[], tags=[])
        other_csv = self.temp_dir / "other.csv"
        other_csv.write_text(f"url\n{source}\n", encoding="utf-8")
        other_clone_dir = self.temp_dir / "elsewhere"
        self._write_config()

        result = self._invoke("-f", str(other_csv), "-d", str(other_clone_dir), "-q")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue((other_clone_dir / "project" / ".git").is_dir())

    def test_missing_credentials(self):
        self.csv_file.write_text("url\n", encoding="utf-8")
        self._write_config(username="", token="")

        result = self._invoke()

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Username and Token are required", result.output)

    def test_credentials_from_command_line(self):
        self.csv_file.write_text("url\n", encoding="utf-8")
        self._write_config(username="", token="")

        result = self._invoke("-u", "alice", "-t", "s3cret")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(self.result_file.exists())

    def test_missing_repository_list(self):
        self._write_config()

        result = self._invoke()

        self.assertEqual(result.exit_code, 1)
        self.assertFalse(self.result_file.exists())


if __name__ == '__main__':
    unittest.main(verbosity=2)
