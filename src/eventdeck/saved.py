"""Saved-event id set, kept as a JSON list in the state directory."""

from __future__ import annotations

import json
import logging
import pathlib

logger = logging.getLogger(__name__)


def load_saved_ids(path: pathlib.Path) -> set[str]:
    if not path.is_file():
        return set()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as err:
        logger.warning("Ignoring unreadable saved events file %s: %s", path, err)
        return set()
    if not isinstance(data, list):
        logger.warning("Ignoring saved events file %s: expected a JSON list", path)
        return set()
    return {str(item) for item in data}


def save_saved_ids(ids: set[str], path: pathlib.Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(sorted(ids), f, indent=2)
