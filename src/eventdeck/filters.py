"""Facet filter pipeline.

Each facet is an independent predicate; a record survives only if every
active facet accepts it.  Within the tag facet a single matching tag is
enough.  Screens differ only in which facets they activate, described by a
``SurfaceProfile``.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, Collection, Iterable, Literal, Sequence

from eventdeck.classify import category_page_terms, classify_event, matching_labels
from eventdeck.models import EventRecord

Facet = Literal[
    "tab", "text", "category", "location", "tags", "date_range",
    "calendar", "category_page",
]
CategoryMode = Literal["label", "keyword"]

TAB_STATUSES: dict[str, frozenset[str]] = {
    "upcoming": frozenset({"upcoming", "live"}),
    "past": frozenset({"past", "cancelled"}),
}


@dataclass(frozen=True)
class SurfaceProfile:
    name: str
    facets: frozenset[Facet]
    category_mode: CategoryMode = "keyword"


EVENTS_SURFACE = SurfaceProfile(
    "events",
    frozenset({"tab", "text", "category", "location", "tags", "date_range"}),
    "keyword",
)
SEARCH_SURFACE = SurfaceProfile(
    "search",
    frozenset({"tab", "text", "category"}),
    "label",
)
CALENDAR_SURFACE = SurfaceProfile(
    "calendar",
    frozenset({"calendar", "tab", "text"}),
)
CATEGORY_SURFACE = SurfaceProfile(
    "category",
    frozenset({"category_page", "text"}),
)

SURFACES: dict[str, SurfaceProfile] = {
    s.name: s
    for s in (EVENTS_SURFACE, SEARCH_SURFACE, CALENDAR_SURFACE, CATEGORY_SURFACE)
}


# ---------------------------------------------------------------------------
# Facet option lists
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FacetOptions:
    categories: tuple[str, ...]
    locations: tuple[str, ...]
    tags: tuple[str, ...]


def derive_facets(events: Iterable[EventRecord]) -> FacetOptions:
    """Distinct category, location and tag options in order of first appearance."""
    categories: dict[str, None] = {}
    locations: dict[str, None] = {}
    tags: dict[str, None] = {}
    for event in events:
        for label in matching_labels(event.title):
            categories.setdefault(label)
        if event.location:
            locations.setdefault(event.location)
        for tag in event.tags:
            tags.setdefault(tag)
    return FacetOptions(tuple(categories), tuple(locations), tuple(tags))


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

def tab_predicate(tab: str, saved_ids: Collection[str]) -> Callable[[EventRecord], bool]:
    if tab == "saved":
        return lambda e: e.id in saved_ids
    statuses = TAB_STATUSES.get(tab, frozenset())
    return lambda e: e.status in statuses


def text_predicate(term: str) -> Callable[[EventRecord], bool]:
    needle = term.lower()
    return lambda e: (
        needle in e.title.lower()
        or needle in e.description.lower()
        or needle in e.organizer.name.lower()
        or needle in e.location.lower()
    )


def category_predicate(category: str, mode: CategoryMode) -> Callable[[EventRecord], bool]:
    if mode == "label":
        return lambda e: classify_event(e) == category
    needle = category.lower()
    return lambda e: needle in e.title.lower() or needle in e.description.lower()


def keywords_predicate(terms: Sequence[str]) -> Callable[[EventRecord], bool]:
    """Any of *terms* (lowercase) in title or description; used by category pages."""
    return lambda e: any(
        t in e.title.lower() or t in e.description.lower() for t in terms
    )


def location_predicate(location: str) -> Callable[[EventRecord], bool]:
    return lambda e: e.location == location


def tags_predicate(selected: Collection[str]) -> Callable[[EventRecord], bool]:
    return lambda e: bool(e.tags) and any(tag in e.tags for tag in selected)


def calendar_predicate(calendar_id: str) -> Callable[[EventRecord], bool]:
    return lambda e: e.calendar_id == calendar_id


def _add_months(day: date, months: int) -> date:
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last))


def date_window(date_range: str, now: datetime | date) -> tuple[date, date] | None:
    """Inclusive ``(start, end)`` day window for *date_range*, or None for ``all``."""
    today = now.date() if isinstance(now, datetime) else now
    if date_range == "today":
        return today, today
    if date_range == "week":
        return today, today + timedelta(days=7)
    if date_range == "month":
        return today, _add_months(today, 1)
    if date_range == "year":
        return today, _add_months(today, 12)
    return None


def date_range_predicate(date_range: str, now: datetime | date) -> Callable[[EventRecord], bool]:
    window = date_window(date_range, now)
    if window is None:
        return lambda e: True
    start, end = window
    return lambda e: start <= e.day <= end


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def build_predicates(
    *,
    surface: SurfaceProfile,
    tab: str,
    search: str,
    category: str | None,
    location: str | None,
    tags: Collection[str],
    date_range: str,
    now: datetime | date,
    saved_ids: Collection[str],
    calendar_id: str | None = None,
    category_slug: str | None = None,
    category_mode: CategoryMode | None = None,
) -> list[tuple[str, Callable[[EventRecord], bool]]]:
    """Named predicates for every facet that is both on the surface and selected."""
    active = surface.facets
    predicates: list[tuple[str, Callable[[EventRecord], bool]]] = []
    if "calendar" in active and calendar_id is not None:
        predicates.append(("calendar", calendar_predicate(calendar_id)))
    if "category_page" in active and category_slug:
        terms = category_page_terms(category_slug)
        predicates.append(("category_page", keywords_predicate(terms)))
    if "tab" in active:
        predicates.append(("tab", tab_predicate(tab, saved_ids)))
    if "text" in active and search.strip():
        predicates.append(("text", text_predicate(search)))
    if "category" in active and category:
        mode = category_mode or surface.category_mode
        predicates.append(("category", category_predicate(category, mode)))
    if "location" in active and location:
        predicates.append(("location", location_predicate(location)))
    if "tags" in active and tags:
        predicates.append(("tags", tags_predicate(tags)))
    if "date_range" in active and date_range != "all":
        predicates.append(("date_range", date_range_predicate(date_range, now)))
    return predicates


def apply_filters(
    events: Iterable[EventRecord],
    predicates: Sequence[tuple[str, Callable[[EventRecord], bool]]],
) -> list[EventRecord]:
    filtered = list(events)
    for _name, predicate in predicates:
        filtered = [item for item in filtered if predicate(item)]
    return filtered
