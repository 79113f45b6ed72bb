"""Shared configuration values for eventdeck modules."""

from __future__ import annotations

import pathlib

_DEFAULT_STATE_DIR = pathlib.Path.home() / ".eventdeck"
_state_dir_override: pathlib.Path | None = None
_data_file_override: pathlib.Path | None = None

MAX_SEARCH_LENGTH = 100
ATTENDEE_PREVIEW_LIMIT = 5

DEFAULT_TAB = "upcoming"
DEFAULT_SORT = "date"
DEFAULT_VIEW = "timeline"
DEFAULT_DATE_RANGE = "all"
DEFAULT_CATEGORY = "AI & Tech"

DATA_FILENAME = "data.json"
SAVED_FILENAME = "saved.json"
CONFIG_FILENAME = "config.toml"


def configure(
    *,
    state_dir: str | None = None,
    data_file: str | None = None,
) -> None:
    global _state_dir_override, _data_file_override
    if state_dir is not None:
        _state_dir_override = pathlib.Path(state_dir).expanduser()
    if data_file is not None:
        _data_file_override = pathlib.Path(data_file).expanduser()


def get_state_dir() -> pathlib.Path:
    if _state_dir_override is not None:
        return _state_dir_override
    return _DEFAULT_STATE_DIR


def get_data_file() -> pathlib.Path:
    if _data_file_override is not None:
        return _data_file_override
    return get_state_dir() / DATA_FILENAME


def get_saved_file() -> pathlib.Path:
    return get_state_dir() / SAVED_FILENAME


def _reset() -> None:
    """Reset runtime overrides. For testing only."""
    global _state_dir_override, _data_file_override
    _state_dir_override = None
    _data_file_override = None
