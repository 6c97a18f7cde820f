"""Public package surface for lineread.

Exports ``read_line`` / ``read_line_bytes`` and the error taxonomy.
Most implementation lives in submodules under ``lineread``.
"""

from __future__ import annotations

import logging

from .errors import InputClosed, LineReadError, OutOfMemory, TerminalUnavailable
from .session import read_line, read_line_bytes

logging.getLogger(__name__).addHandler(logging.NullHandler())


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "read_line",
    "read_line_bytes",
    "LineReadError",
    "TerminalUnavailable",
    "OutOfMemory",
    "InputClosed",
    "main",
]
