"""Tests for raw-mode acquisition and restoration.

Verifies the raw attribute mask, failure conversion, and that the scoped
guard restores the saved state on every exit path.
"""

from __future__ import annotations

import termios
import unittest
from unittest import mock

from lineread.errors import TerminalUnavailable
from lineread.terminal import TerminalMode, raw_attributes

SAVED_STATE = [0o1, termios.OPOST | 0o10, 0o2, termios.ECHO | termios.ICANON | termios.ISIG, 38400, 38400, []]


class RawAttributeTests(unittest.TestCase):
    def test_raw_attributes_clear_output_processing_echo_and_canonical(self) -> None:
        raw = raw_attributes(SAVED_STATE)

        self.assertEqual(raw[1], 0o10)
        self.assertEqual(raw[3], termios.ISIG)
        self.assertEqual(raw[0], SAVED_STATE[0])
        self.assertEqual(SAVED_STATE[3], termios.ECHO | termios.ICANON | termios.ISIG)


class TerminalModeTests(unittest.TestCase):
    def test_acquire_and_release_apply_raw_then_saved_state(self) -> None:
        with mock.patch("lineread.terminal.termios.tcgetattr", return_value=list(SAVED_STATE)), mock.patch(
            "lineread.terminal.termios.tcsetattr"
        ) as setattr_mock:
            mode = TerminalMode(stdin_fd=0)
            mode.acquire()
            self.assertTrue(mode.acquired)
            mode.release()

        self.assertFalse(mode.acquired)
        self.assertEqual(
            setattr_mock.call_args_list,
            [
                mock.call(0, termios.TCSANOW, raw_attributes(SAVED_STATE)),
                mock.call(0, termios.TCSANOW, SAVED_STATE),
            ],
        )

    def test_acquire_on_non_terminal_raises_terminal_unavailable(self) -> None:
        with mock.patch(
            "lineread.terminal.termios.tcgetattr", side_effect=termios.error(25, "Inappropriate ioctl for device")
        ), mock.patch("lineread.terminal.termios.tcsetattr") as setattr_mock:
            mode = TerminalMode(stdin_fd=0)
            with self.assertRaises(TerminalUnavailable):
                mode.acquire()

        setattr_mock.assert_not_called()
        self.assertFalse(mode.acquired)

    def test_failed_attribute_write_raises_terminal_unavailable(self) -> None:
        with mock.patch("lineread.terminal.termios.tcgetattr", return_value=list(SAVED_STATE)), mock.patch(
            "lineread.terminal.termios.tcsetattr", side_effect=termios.error(5, "I/O error")
        ):
            mode = TerminalMode(stdin_fd=0)
            with self.assertRaises(TerminalUnavailable):
                mode.acquire()

        self.assertFalse(mode.acquired)

    def test_release_without_acquire_is_a_noop(self) -> None:
        with mock.patch("lineread.terminal.termios.tcsetattr") as setattr_mock:
            TerminalMode(stdin_fd=0).release()

        setattr_mock.assert_not_called()

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        mode = TerminalMode(stdin_fd=0)

        with mock.patch.object(mode, "acquire") as acquire_mock, mock.patch.object(mode, "release") as release_mock:
            with self.assertRaises(RuntimeError):
                with mode.raw_mode():
                    raise RuntimeError("boom")

        acquire_mock.assert_called_once()
        release_mock.assert_called_once()

    def test_raw_mode_skips_release_when_acquire_fails(self) -> None:
        mode = TerminalMode(stdin_fd=0)

        with mock.patch.object(mode, "acquire", side_effect=TerminalUnavailable("no tty")), mock.patch.object(
            mode, "release"
        ) as release_mock:
            with self.assertRaises(TerminalUnavailable):
                with mode.raw_mode():
                    self.fail("body must not run")

        release_mock.assert_not_called()


if __name__ == "__main__":
    unittest.main()
