"""Free-text search input normalization.

Raw search text is clamped to the input control's maximum length, has the
markup-injection characters escaped, and is stripped of surrounding
whitespace.  Escaping can push a clamped value past the maximum again; such
input is flagged as not accepted and the calling surface keeps its previous
term.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from eventdeck.config import MAX_SEARCH_LENGTH

logger = logging.getLogger(__name__)

_ESCAPES = (
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#x27;"),
    ("/", "&#x2F;"),
)


@dataclass(frozen=True)
class NormalizedInput:
    value: str
    accepted: bool


def sanitize_input(text: str) -> str:
    for char, entity in _ESCAPES:
        text = text.replace(char, entity)
    return text


def validate_length(text: str, min_length: int, max_length: int) -> bool:
    return min_length <= len(text) <= max_length


def normalize_search(raw: str | None, max_length: int = MAX_SEARCH_LENGTH) -> NormalizedInput:
    if not isinstance(raw, str):
        return NormalizedInput(value="", accepted=True)
    value = sanitize_input(raw[:max_length]).strip()
    if not validate_length(value, 0, max_length):
        logger.debug("Rejected search input of length %d (max %d)", len(value), max_length)
        return NormalizedInput(value=value, accepted=False)
    return NormalizedInput(value=value, accepted=True)


def adopt_search(current: str, raw: str | None, max_length: int = MAX_SEARCH_LENGTH) -> str:
    """Return the search term the calling surface should hold after *raw* arrives."""
    result = normalize_search(raw, max_length)
    return result.value if result.accepted else current
