"""Gap-buffer storage for the line being edited.

The line lives in one ``bytearray`` as two runs: ``pre`` at the front
(text left of the cursor) and ``post`` at the back (text right of it), with
unused capacity between them. Cursor movement only adjusts a pending offset;
the gap is physically relocated lazily, right before the next insert or
delete, so repeated arrow presses cost nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import OutOfMemory

logger = logging.getLogger(__name__)

INITIAL_CAPACITY = 64


def _allocate(size: int) -> bytearray:
    return bytearray(size)


@dataclass(frozen=True)
class BufferSnapshot:
    """Read-only view of buffer state used by the renderer."""

    pre: bytes
    post: bytes
    pending: int = 0

    @property
    def cursor(self) -> int:
        """Resolved cursor offset from the start of the line."""
        return len(self.pre) + self.pending

    @property
    def line(self) -> bytes:
        return self.pre + self.post

    @property
    def distance_from_end(self) -> int:
        """Columns between the cursor and the end of the line."""
        return len(self.post) - self.pending


class GapBuffer:
    """Single-line byte buffer with a movable gap at the cursor."""

    def __init__(self, capacity: int = INITIAL_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be >= 1")
        try:
            self._data: bytearray | None = _allocate(capacity)
        except MemoryError as exc:
            raise OutOfMemory(f"cannot allocate {capacity} bytes") from exc
        self._gap = 0
        self._post = capacity
        self._pending = 0

    @property
    def capacity(self) -> int:
        return len(self._storage())

    @property
    def cursor(self) -> int:
        return self._gap + self._pending

    def __len__(self) -> int:
        return self._gap + (len(self._storage()) - self._post)

    def _storage(self) -> bytearray:
        if self._data is None:
            raise ValueError("gap buffer already released")
        return self._data

    def move_cursor_left(self) -> None:
        if self._gap + self._pending > 0:
            self._pending -= 1

    def move_cursor_right(self) -> None:
        if self._post + self._pending < len(self._storage()):
            self._pending += 1

    def move_to_start(self) -> None:
        self._pending = -self._gap

    def move_to_end(self) -> None:
        self._pending = len(self._storage()) - self._post

    def resolve_pending_offset(self) -> None:
        """Relocate the gap so it sits exactly at the cursor.

        Copies only the bytes between the old and new cursor positions.
        A second call with nothing pending is a no-op.
        """
        offset = self._pending
        if offset == 0:
            return
        data = self._storage()
        if offset < 0:
            count = -offset
            self._gap -= count
            self._post -= count
            data[self._post : self._post + count] = data[self._gap : self._gap + count]
        else:
            data[self._gap : self._gap + offset] = data[self._post : self._post + offset]
            self._gap += offset
            self._post += offset
        self._pending = 0

    def _grow(self) -> None:
        data = self._storage()
        old_capacity = len(data)
        new_capacity = old_capacity * 2
        try:
            grown = _allocate(new_capacity)
        except MemoryError as exc:
            raise OutOfMemory(f"cannot grow buffer to {new_capacity} bytes") from exc
        post_len = old_capacity - self._post
        new_post = new_capacity - post_len
        grown[: self._gap] = data[: self._gap]
        grown[new_post:] = data[self._post :]
        self._data = grown
        self._post = new_post
        logger.debug("gap buffer grown from %d to %d bytes", old_capacity, new_capacity)

    def insert(self, byte: int) -> None:
        """Insert one byte at the cursor, doubling capacity when the gap is full.

        Raises ``OutOfMemory`` when growth fails; the buffer is left intact.
        """
        self.resolve_pending_offset()
        if self._gap == self._post:
            self._grow()
        self._storage()[self._gap] = byte
        self._gap += 1

    def delete_forward(self) -> None:
        self.resolve_pending_offset()
        if self._post < len(self._storage()):
            self._post += 1

    def delete_backward(self) -> None:
        self.resolve_pending_offset()
        if self._gap > 0:
            self._gap -= 1

    def clear(self) -> None:
        """Drop the whole line, leaving an empty buffer with the cursor at 0."""
        self._gap = 0
        self._post = len(self._storage())
        self._pending = 0

    def snapshot(self) -> BufferSnapshot:
        data = self._storage()
        return BufferSnapshot(
            pre=bytes(data[: self._gap]),
            post=bytes(data[self._post :]),
            pending=self._pending,
        )

    def finalize(self) -> bytes:
        """Return the full line and release the storage."""
        data = self._storage()
        line = bytes(data[: self._gap]) + bytes(data[self._post :])
        self.release()
        return line

    def release(self) -> None:
        self._data = None
        self._gap = 0
        self._post = 0
        self._pending = 0

    @property
    def released(self) -> bool:
        return self._data is None


__all__ = [
    "INITIAL_CAPACITY",
    "BufferSnapshot",
    "GapBuffer",
]
