"""Tests for the command-line front door."""

from __future__ import annotations

import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

from lineread import cli


class CliTests(unittest.TestCase):
    def test_single_read_echoes_line(self) -> None:
        out = io.StringIO()
        with mock.patch("lineread.cli.read_line", return_value="hello") as read_mock, redirect_stdout(out):
            status = cli.main(["--prompt", "? ", "--initial-capacity", "8"])

        self.assertEqual(status, 0)
        self.assertEqual(out.getvalue(), "hello\n")
        read_mock.assert_called_once_with("? ", initial_capacity=8)

    def test_defaults_come_from_config(self) -> None:
        out = io.StringIO()
        with mock.patch("lineread.cli.config.load_prompt", return_value="$ "), mock.patch(
            "lineread.cli.config.load_initial_capacity", return_value=32
        ), mock.patch("lineread.cli.read_line", return_value="x") as read_mock, redirect_stdout(out):
            cli.main([])

        read_mock.assert_called_once_with("$ ", initial_capacity=32)

    def test_repeat_stops_on_empty_line(self) -> None:
        out = io.StringIO()
        with mock.patch("lineread.cli.read_line", side_effect=["one", "two", ""]), redirect_stdout(out):
            status = cli.main(["--repeat", "--prompt", "> "])

        self.assertEqual(status, 0)
        self.assertEqual(out.getvalue(), "one\ntwo\n")

    def test_failed_read_reports_error(self) -> None:
        err = io.StringIO()
        with mock.patch("lineread.cli.read_line", return_value=None), redirect_stderr(err):
            status = cli.main(["--prompt", "> "])

        self.assertEqual(status, 1)
        self.assertIn("could not read a line", err.getvalue())

    def test_save_config_persists_given_options(self) -> None:
        with mock.patch("lineread.cli.config.save_prompt") as save_prompt, mock.patch(
            "lineread.cli.config.save_initial_capacity"
        ) as save_capacity, mock.patch("lineread.cli.read_line", return_value="x"), redirect_stdout(io.StringIO()):
            cli.main(["--save-config", "--prompt", "% ", "--initial-capacity", "128"])

        save_prompt.assert_called_once_with("% ")
        save_capacity.assert_called_once_with(128)

    def test_rejects_non_positive_capacity(self) -> None:
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                cli.main(["--initial-capacity", "0"])


if __name__ == "__main__":
    unittest.main()
