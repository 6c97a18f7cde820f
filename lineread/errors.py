"""Failure taxonomy for a single line-read operation.

Every error here is fatal to the current ``read_line`` call and is resolved
at that boundary into an absent result.
"""

from __future__ import annotations


class LineReadError(Exception):
    """Base class for failures that abort a line read."""


class TerminalUnavailable(LineReadError):
    """Terminal attributes could not be read or written."""


class OutOfMemory(LineReadError):
    """Buffer allocation or growth failed."""


class InputClosed(LineReadError):
    """The input stream reached end-of-file before a line was submitted."""


__all__ = [
    "LineReadError",
    "TerminalUnavailable",
    "OutOfMemory",
    "InputClosed",
]
