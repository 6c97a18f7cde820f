"""Terminal mode control for the line editor.

Owns the raw-mode lifecycle: saves the current attributes, switches input to
non-canonical no-echo mode with output post-processing off, and restores the
saved attributes when editing ends.
"""

from __future__ import annotations

import contextlib
import logging
import termios

from .errors import TerminalUnavailable

logger = logging.getLogger(__name__)

# Indices into the list returned by ``termios.tcgetattr``.
_OFLAG = 1
_LFLAG = 3


def raw_attributes(attributes: list) -> list:
    """Return a copy of ``attributes`` adjusted for per-keystroke editing."""
    raw = list(attributes)
    raw[_OFLAG] = raw[_OFLAG] & ~termios.OPOST
    raw[_LFLAG] = raw[_LFLAG] & ~(termios.ECHO | termios.ICANON)
    return raw


class TerminalMode:
    """Capture and restore raw input mode on one terminal descriptor."""

    def __init__(self, stdin_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self._saved_tty_state: list | None = None

    @property
    def acquired(self) -> bool:
        return self._saved_tty_state is not None

    def acquire(self) -> None:
        try:
            saved = termios.tcgetattr(self.stdin_fd)
        except (termios.error, OSError) as exc:
            raise TerminalUnavailable(f"cannot read attributes of fd {self.stdin_fd}") from exc
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSANOW, raw_attributes(saved))
        except (termios.error, OSError) as exc:
            raise TerminalUnavailable(f"cannot enter raw mode on fd {self.stdin_fd}") from exc
        self._saved_tty_state = saved
        logger.debug("raw mode acquired on fd %d", self.stdin_fd)

    def release(self) -> None:
        saved = self._saved_tty_state
        if saved is None:
            return
        self._saved_tty_state = None
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSANOW, saved)
        except (termios.error, OSError) as exc:
            raise TerminalUnavailable(f"cannot restore attributes of fd {self.stdin_fd}") from exc
        logger.debug("terminal attributes restored on fd %d", self.stdin_fd)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with acquire/release calls."""
        self.acquire()
        try:
            yield self
        finally:
            self.release()
