"""Sort keys for filtered result lists.

Every ordering is a single key over a stable sort: records with equal keys
keep their input order. Title keys fold case and accents, so "apple"
and "Apple" tie and stay in input order. Browser locale collation would
break that tie by case; this key deliberately does not.
"""

from __future__ import annotations

import unicodedata
from typing import Callable, Iterable

from eventdeck.models import EventRecord


def collation_key(text: str) -> str:
    """Accent- and case-insensitive key approximating locale-aware comparison."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


_EVENT_SORT_KEYS: dict[str, Callable[[EventRecord], object]] = {
    "date": lambda e: e.start,
    "title": lambda e: collation_key(e.title),
    "popularity": lambda e: -e.registered_count,
    "capacity": lambda e: -(e.total_capacity or 0),
}


def sort_events(events: Iterable[EventRecord], sort: str = "date") -> list[EventRecord]:
    key = _EVENT_SORT_KEYS.get(sort, _EVENT_SORT_KEYS["date"])
    return sorted(events, key=key)
