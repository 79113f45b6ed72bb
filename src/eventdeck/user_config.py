"""User configuration: TOML loading, validation, and template auto-creation."""

from __future__ import annotations

import pathlib
import sys
import tomllib
from typing import Any

from eventdeck.config import MAX_SEARCH_LENGTH

CONFIG_TEMPLATE = """\
# Dataset file (fallback if --data is not given)
# data_file = "~/.eventdeck/data.json"

# Defaults applied to 'eventdeck events' when the flag is omitted.
# [defaults]
# tab = "upcoming"          # upcoming | past | saved
# sort = "date"             # date | title | popularity | capacity
# view = "timeline"         # timeline | grid | list
# max_search_length = 100
"""

_ALLOWED_DEFAULTS: dict[str, frozenset[str]] = {
    "tab": frozenset({"upcoming", "past", "saved"}),
    "sort": frozenset({"date", "title", "popularity", "capacity"}),
    "view": frozenset({"timeline", "grid", "list"}),
}


def ensure_config(path: pathlib.Path) -> None:
    """Create config file with template if it does not exist."""
    if path.is_file():
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(CONFIG_TEMPLATE, encoding="utf-8")


def load_config(path: pathlib.Path) -> dict:
    """Read and parse a TOML config file."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        print(f"Error: malformed config file {path}: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc


def validate_config(config: dict) -> None:
    """Validate the [defaults] table and data_file in the parsed config."""
    data_file = config.get("data_file")
    if data_file is not None and not isinstance(data_file, str):
        print("Error: data_file must be a string.", file=sys.stderr)
        raise SystemExit(2)

    defaults = config.get("defaults")
    if defaults is None:
        return
    if not isinstance(defaults, dict):
        print("Error: [defaults] must be a table.", file=sys.stderr)
        raise SystemExit(2)
    for name, value in defaults.items():
        if name == "max_search_length":
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                print(
                    "Error: max_search_length must be a positive integer.",
                    file=sys.stderr,
                )
                raise SystemExit(2)
            continue
        if name not in _ALLOWED_DEFAULTS:
            print(f"Error: unknown default '{name}'.", file=sys.stderr)
            raise SystemExit(2)
        if value not in _ALLOWED_DEFAULTS[name]:
            choices = ", ".join(sorted(_ALLOWED_DEFAULTS[name]))
            print(
                f"Error: default {name} = '{value}' is invalid. Use one of: {choices}.",
                file=sys.stderr,
            )
            raise SystemExit(2)


def get_defaults(config: dict) -> dict[str, Any]:
    """Return the [defaults] mapping from config."""
    return config.get("defaults", {})


def get_max_search_length(config: dict) -> int:
    return get_defaults(config).get("max_search_length", MAX_SEARCH_LENGTH)


def get_data_file(config: dict) -> str | None:
    """Return the data_file value from config, if present."""
    return config.get("data_file")
