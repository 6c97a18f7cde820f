"""Byte-level rendering of the edit line.

Everything here is pure: functions return the bytes to write and never touch
a descriptor, so redraw output can be checked without a terminal.
"""

from __future__ import annotations

from .gap_buffer import BufferSnapshot

INVISIBLE_START = 0x01
INVISIBLE_END = 0x02

CARRIAGE_RETURN = b"\r"
ERASE_TO_END_OF_LINE = b"\x1b[K"
SUBMIT_SEQUENCE = b"\r\n"


def cursor_forward(columns: int) -> bytes:
    return b"\x1b[%dC" % columns


def cursor_backward(columns: int) -> bytes:
    return b"\x1b[%dD" % columns


def prompt_visible_width(prompt: bytes) -> int:
    """Count prompt columns, skipping bytes between the invisible markers.

    ``\\x01`` starts a zero-width span and ``\\x02`` ends it; the markers
    themselves never count.
    """
    width = 0
    counting = True
    for byte in prompt:
        if byte == INVISIBLE_START:
            counting = False
        elif byte == INVISIBLE_END:
            counting = True
        elif counting:
            width += 1
    return width


def render_line(snapshot: BufferSnapshot, prompt_width: int) -> bytes:
    """Redraw the whole line after the prompt and park the cursor on it.

    ``ESC[0C`` moves one column on VT100 terminals, so the forward move is
    omitted for an empty prompt, as is the backward move at end of line.
    """
    out = [CARRIAGE_RETURN]
    if prompt_width > 0:
        out.append(cursor_forward(prompt_width))
    out.append(ERASE_TO_END_OF_LINE)
    out.append(snapshot.pre)
    out.append(snapshot.post)
    back = snapshot.distance_from_end
    if back > 0:
        out.append(cursor_backward(back))
    return b"".join(out)


def render_submit() -> bytes:
    return SUBMIT_SEQUENCE


__all__ = [
    "INVISIBLE_START",
    "INVISIBLE_END",
    "CARRIAGE_RETURN",
    "ERASE_TO_END_OF_LINE",
    "SUBMIT_SEQUENCE",
    "cursor_forward",
    "cursor_backward",
    "prompt_visible_width",
    "render_line",
    "render_submit",
]
