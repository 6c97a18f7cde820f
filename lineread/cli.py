"""Command-line front door for lineread.

Reads lines interactively with the edit session and echoes each one back.
Mostly useful for trying the editor out in a real terminal.
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import config
from .session import read_line


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Read a line from the terminal with in-place editing.")
    parser.add_argument("--prompt", default=None, help="Prompt text (default: configured prompt).")
    parser.add_argument(
        "--initial-capacity",
        type=_positive_int,
        default=None,
        help="Initial edit buffer size in bytes (default: configured value).",
    )
    parser.add_argument("--repeat", action="store_true", help="Keep reading until an empty line is submitted.")
    parser.add_argument("--log-file", metavar="PATH", help="Write debug logs to PATH.")
    parser.add_argument("--save-config", action="store_true", help="Persist --prompt/--initial-capacity as defaults.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, read line(s), and echo them to stdout.

    Returns the process exit status: 0 on success, 1 when a read fails.
    """
    args = build_parser().parse_args(argv)

    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    if args.save_config:
        if args.prompt is not None:
            config.save_prompt(args.prompt)
        if args.initial_capacity is not None:
            config.save_initial_capacity(args.initial_capacity)

    prompt = args.prompt if args.prompt is not None else config.load_prompt()
    capacity = args.initial_capacity if args.initial_capacity is not None else config.load_initial_capacity()

    while True:
        line = read_line(prompt, initial_capacity=capacity)
        if line is None:
            print("lineread: could not read a line from the terminal", file=sys.stderr)
            return 1
        if args.repeat and not line:
            return 0
        print(line)
        if not args.repeat:
            return 0
