"""Interactive single-line edit session.

Ties the pieces together: raw mode is held for the whole session, each
decoded key is applied to the gap buffer, and the line is redrawn after
every event until a newline submits it.
"""

from __future__ import annotations

import enum
import logging
import os
import sys

from .errors import LineReadError, TerminalUnavailable
from .gap_buffer import INITIAL_CAPACITY, GapBuffer
from .input import KeyEvent, KeyKind, read_event
from .render import prompt_visible_width, render_line, render_submit
from .terminal import TerminalMode

logger = logging.getLogger(__name__)


def _default_fd(name: str) -> int:
    """Return the descriptor behind ``sys.<name>``.

    Raises ``TerminalUnavailable`` when the stream is missing or has been
    replaced by an object without a real descriptor.
    """
    stream = getattr(sys, name)
    try:
        return stream.fileno()
    except (AttributeError, ValueError, OSError) as exc:
        raise TerminalUnavailable(f"sys.{name} has no file descriptor") from exc


def _flush_stdout() -> None:
    if sys.stdout is not None:
        sys.stdout.flush()


class SessionState(enum.Enum):
    INIT = "init"
    EDITING = "editing"
    SUBMITTED = "submitted"
    FAILED = "failed"


# Buffer operation applied for each command key.
_BUFFER_ACTIONS: dict[KeyKind, str] = {
    KeyKind.MOVE_LEFT: "move_cursor_left",
    KeyKind.MOVE_RIGHT: "move_cursor_right",
    KeyKind.MOVE_TO_START: "move_to_start",
    KeyKind.MOVE_TO_END: "move_to_end",
    KeyKind.DELETE_FORWARD: "delete_forward",
    KeyKind.DELETE_BACKWARD: "delete_backward",
    KeyKind.DELETE_ALL: "clear",
}


class EditSession:
    """One ``read_line`` call: owns the terminal guard and the gap buffer."""

    def __init__(
        self,
        prompt: bytes,
        *,
        stdin_fd: int,
        stdout_fd: int,
        initial_capacity: int = INITIAL_CAPACITY,
    ) -> None:
        self.prompt = prompt
        self.prompt_width = prompt_visible_width(prompt)
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self.initial_capacity = initial_capacity
        self.terminal = TerminalMode(stdin_fd)
        self.buffer: GapBuffer | None = None
        self.state = SessionState.INIT

    def _set_state(self, state: SessionState) -> None:
        logger.debug("session %s -> %s", self.state.value, state.value)
        self.state = state

    def _write(self, data: bytes) -> None:
        view = memoryview(data)
        while view:
            written = os.write(self.stdout_fd, view)
            view = view[written:]

    def apply_event(self, event: KeyEvent) -> bool:
        """Apply one key to the buffer; return True when it submits the line."""
        buffer = self.buffer
        if buffer is None:
            raise RuntimeError("session is not editing")
        kind = event.kind
        if kind is KeyKind.SUBMIT:
            return True
        if kind is KeyKind.LITERAL:
            buffer.insert(event.byte)
        elif kind in _BUFFER_ACTIONS:
            getattr(buffer, _BUFFER_ACTIONS[kind])()
        return False

    def run(self) -> bytes:
        """Edit until submit and return the line bytes.

        Raises ``LineReadError`` subclasses on failure; the terminal is
        restored and the buffer released on every exit path. Pending
        ``sys.stdout`` text is flushed and the prompt written before raw
        mode is entered, so newlines in the prompt still return the carriage.
        """
        try:
            _flush_stdout()
            self._write(self.prompt)
            with self.terminal.raw_mode():
                self.buffer = GapBuffer(self.initial_capacity)
                self._set_state(SessionState.EDITING)
                while not self.apply_event(read_event(self.stdin_fd)):
                    self._write(render_line(self.buffer.snapshot(), self.prompt_width))
                self._write(render_submit())
                line = self.buffer.finalize()
        except BaseException:
            self._set_state(SessionState.FAILED)
            if self.buffer is not None and not self.buffer.released:
                self.buffer.release()
            raise
        self._set_state(SessionState.SUBMITTED)
        logger.debug("line submitted (%d bytes)", len(line))
        return line


def read_line_bytes(
    prompt: str | bytes,
    *,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
    initial_capacity: int = INITIAL_CAPACITY,
) -> bytes | None:
    """Read one edited line as raw bytes, or ``None`` when the read fails."""
    if isinstance(prompt, str):
        prompt = prompt.encode("utf-8")
    try:
        session = EditSession(
            prompt,
            stdin_fd=_default_fd("stdin") if stdin_fd is None else stdin_fd,
            stdout_fd=_default_fd("stdout") if stdout_fd is None else stdout_fd,
            initial_capacity=initial_capacity,
        )
        return session.run()
    except LineReadError as exc:
        logger.warning("line read failed: %s", exc)
        return None


def read_line(
    prompt: str | bytes,
    *,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
    initial_capacity: int = INITIAL_CAPACITY,
) -> str | None:
    """Read one edited line, decoded as UTF-8, or ``None`` on failure."""
    line = read_line_bytes(
        prompt,
        stdin_fd=stdin_fd,
        stdout_fd=stdout_fd,
        initial_capacity=initial_capacity,
    )
    if line is None:
        return None
    return line.decode("utf-8", errors="replace")


__all__ = [
    "SessionState",
    "EditSession",
    "read_line_bytes",
    "read_line",
]
