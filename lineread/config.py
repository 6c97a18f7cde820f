"""Persistent JSON config helpers.

Stores the demo prompt and the initial buffer capacity. All access is
defensive: malformed or missing config falls back to the defaults.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .gap_buffer import INITIAL_CAPACITY

APP_NAME = "lineread"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_PROMPT = "> "


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON; write failures are ignored."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def load_initial_capacity() -> int:
    """Return the configured initial capacity, or the default when invalid.

    Booleans are rejected even though they are ``int`` instances.
    """
    value = load_config().get("initial_capacity")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return INITIAL_CAPACITY
    return value


def save_initial_capacity(capacity: int) -> None:
    if capacity <= 0:
        return
    config = load_config()
    config["initial_capacity"] = int(capacity)
    save_config(config)


def load_prompt() -> str:
    value = load_config().get("prompt")
    return value if isinstance(value, str) else DEFAULT_PROMPT


def save_prompt(prompt: str) -> None:
    config = load_config()
    config["prompt"] = str(prompt)
    save_config(config)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_PROMPT",
    "load_config",
    "save_config",
    "load_initial_capacity",
    "save_initial_capacity",
    "load_prompt",
    "save_prompt",
]
