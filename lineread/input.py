"""Low-level terminal input decoding.

Reads raw bytes from the input descriptor and translates them into logical
edit events. One read of up to three bytes is made per event: short reads
are single keys, and a full three-byte read starting with ``ESC [`` is an
arrow key.
"""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass

from .errors import InputClosed

READ_SIZE = 3
ESC = 0x1B
CSI_PREFIX = b"\x1b["
SUBMIT_BYTE = 0x0A


def ctrl(letter: str) -> int:
    """Byte produced by Ctrl plus a lowercase letter."""
    return ord(letter) - 0x60


class KeyKind(enum.Enum):
    LITERAL = "literal"
    NO_EVENT = "no_event"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_TO_START = "move_to_start"
    MOVE_TO_END = "move_to_end"
    DELETE_FORWARD = "delete_forward"
    DELETE_BACKWARD = "delete_backward"
    DELETE_ALL = "delete_all"
    SUBMIT = "submit"


@dataclass(frozen=True)
class KeyEvent:
    """One decoded key; ``byte`` is set only for ``KeyKind.LITERAL``."""

    kind: KeyKind
    byte: int | None = None

    @classmethod
    def literal(cls, byte: int) -> "KeyEvent":
        return cls(KeyKind.LITERAL, byte)


NO_EVENT = KeyEvent(KeyKind.NO_EVENT)

CONTROL_KEYS: dict[int, KeyKind] = {
    ctrl("a"): KeyKind.MOVE_TO_START,
    ctrl("b"): KeyKind.MOVE_LEFT,
    ctrl("d"): KeyKind.DELETE_FORWARD,
    ctrl("e"): KeyKind.MOVE_TO_END,
    ctrl("f"): KeyKind.MOVE_RIGHT,
    ctrl("h"): KeyKind.DELETE_BACKWARD,
    ctrl("u"): KeyKind.DELETE_ALL,
    0x7F: KeyKind.DELETE_BACKWARD,
    SUBMIT_BYTE: KeyKind.SUBMIT,
}

ARROW_KEYS: dict[int, KeyKind] = {
    ord("A"): KeyKind.MOVE_TO_START,
    ord("B"): KeyKind.MOVE_TO_END,
    ord("C"): KeyKind.MOVE_RIGHT,
    ord("D"): KeyKind.MOVE_LEFT,
}


def key_for_byte(byte: int) -> KeyEvent:
    kind = CONTROL_KEYS.get(byte)
    if kind is None:
        return KeyEvent.literal(byte)
    return KeyEvent(kind)


def decode_key(data: bytes) -> KeyEvent:
    """Decode the bytes of one read into an event.

    A full-size read that is not an ``ESC [`` sequence yields only its first
    byte; the other two are dropped.
    """
    if not data:
        return NO_EVENT
    if len(data) < READ_SIZE or not data.startswith(CSI_PREFIX):
        return key_for_byte(data[0])
    kind = ARROW_KEYS.get(data[2])
    if kind is None:
        return NO_EVENT
    return KeyEvent(kind)


def read_event(fd: int) -> KeyEvent:
    """Block for one read on ``fd`` and decode it.

    Read errors are reported as ``NO_EVENT``; end-of-file raises
    ``InputClosed``.
    """
    try:
        data = os.read(fd, READ_SIZE)
    except OSError:
        return NO_EVENT
    if not data:
        raise InputClosed(f"end of input on fd {fd}")
    return decode_key(data)


__all__ = [
    "READ_SIZE",
    "KeyKind",
    "KeyEvent",
    "NO_EVENT",
    "CONTROL_KEYS",
    "ARROW_KEYS",
    "ctrl",
    "key_for_byte",
    "decode_key",
    "read_event",
]
