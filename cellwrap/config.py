"""Persistent JSON config helpers.

Stores the default wrap options and highlight style used by the CLI.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .breaking import WrapOptions
from .highlight import DEFAULT_STYLE

logger = logging.getLogger(__name__)

APP_NAME = "cellwrap"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("Ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem and serialization errors are logged and otherwise ignored.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        logger.debug("Could not write config %s: %s", CONFIG_PATH, exc)


def load_wrap_options() -> WrapOptions:
    """Return the stored default wrap options, coerced to valid values."""
    return WrapOptions.coerce(load_config())


def save_wrap_options(options: WrapOptions) -> None:
    config = load_config()
    config["tolerance"] = options.tolerance
    config["trim_break"] = options.trim_break
    save_config(config)


def load_style() -> str:
    """Return the stored Pygments style name, or ``monokai``."""
    value = load_config().get("style")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return DEFAULT_STYLE


def save_style(style: str) -> None:
    config = load_config()
    config["style"] = style
    save_config(config)
