"""EventStore: query engine over the dashboard's event dataset.

Providers handle where the dataset comes from (a JSON file or memory).
Callers construct a provider, pass it to ``EventStore``, and interact only
with the store after that.  The query itself is a pure function of the
records, the ``QueryState``, the injected ``now`` and the saved-id set.
"""

from __future__ import annotations

import json
import logging
import pathlib
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Collection, Literal, Protocol, Sequence

from pydantic import BaseModel, ConfigDict, Field

from eventdeck.config import (
    DEFAULT_DATE_RANGE,
    DEFAULT_SORT,
    DEFAULT_TAB,
    DEFAULT_VIEW,
)
from eventdeck.filters import (
    EVENTS_SURFACE,
    CategoryMode,
    FacetOptions,
    SurfaceProfile,
    apply_filters,
    build_predicates,
    derive_facets,
)
from eventdeck.models import Dataset, EventRecord
from eventdeck.sorting import sort_events
from eventdeck.timeline import Bucket, bucket_by_day

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class DatasetError(Exception):
    """Raised when the dataset file is missing or corrupt."""


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------

class QueryState(BaseModel):
    model_config = ConfigDict(frozen=True)

    search: str = Field("", description="Normalized free-text term matched against title, description, organizer and location.")
    tab: Literal["upcoming", "past", "saved"] = Field(DEFAULT_TAB, description="upcoming = upcoming/live, past = past/cancelled, saved = saved ids only.")
    category: str | None = Field(None, description="Selected category name or classifier label.")
    category_mode: CategoryMode | None = Field(None, description="Override the surface's category matching: 'label' or 'keyword'.")
    location: str | None = Field(None, description="Exact location string.")
    tags: frozenset[str] = Field(frozenset(), description="Selected tags; a record matches if it has any of them.")
    date_range: Literal["all", "today", "week", "month", "year"] = Field(DEFAULT_DATE_RANGE, description="Window starting today, inclusive of both ends.")
    sort: Literal["date", "title", "popularity", "capacity"] = Field(DEFAULT_SORT, description="Sort key applied after filtering.")
    view: Literal["timeline", "grid", "list"] = Field(DEFAULT_VIEW, description="timeline groups results into day buckets.")
    calendar_id: str | None = Field(None, description="Managed calendar id, used by the calendar surface.")
    category_slug: str | None = Field(None, description="Category page slug, used by the category surface.")

    @property
    def filters_active(self) -> bool:
        return bool(
            self.category
            or self.location
            or self.tags
            or self.date_range != "all"
            or self.search.strip()
            or self.calendar_id
            or self.category_slug
        )


@dataclass(frozen=True)
class ResultView:
    events: tuple[EventRecord, ...]
    buckets: tuple[Bucket, ...] | None
    filters_active: bool

    @property
    def is_empty(self) -> bool:
        return not self.events


# ---------------------------------------------------------------------------
# Query engine
# ---------------------------------------------------------------------------

def query_events(
    events: Sequence[EventRecord],
    state: QueryState,
    *,
    now: datetime | date,
    saved_ids: Collection[str] = frozenset(),
    surface: SurfaceProfile = EVENTS_SURFACE,
) -> ResultView:
    """Filter, sort, and optionally bucket events.  Pure function, no I/O."""
    predicates = build_predicates(
        surface=surface,
        tab=state.tab,
        search=state.search,
        category=state.category,
        location=state.location,
        tags=state.tags,
        date_range=state.date_range,
        now=now,
        saved_ids=saved_ids,
        calendar_id=state.calendar_id,
        category_slug=state.category_slug,
        category_mode=state.category_mode,
    )
    filtered = apply_filters(events, predicates)
    ordered = sort_events(filtered, state.sort)

    buckets = None
    if state.view == "timeline":
        buckets = tuple(bucket_by_day(ordered, now))

    logger.debug(
        "Query on %s surface: %d of %d events after %s",
        surface.name,
        len(ordered),
        len(events),
        ", ".join(name for name, _ in predicates) or "no filters",
    )
    return ResultView(
        events=tuple(ordered),
        buckets=buckets,
        filters_active=state.filters_active,
    )


# ---------------------------------------------------------------------------
# Provider protocol & implementations
# ---------------------------------------------------------------------------

class DatasetProvider(Protocol):
    def load(self) -> Dataset: ...


class FileProvider:
    """Reads the mock dataset from a JSON file on disk."""

    def __init__(self, path: pathlib.Path) -> None:
        self._path = path

    def load(self) -> Dataset:
        if not self._path.is_file():
            raise DatasetError(f"No dataset at {self._path}. Pass --data PATH.")
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data: Any = json.load(f)
            dataset = Dataset.from_dict(data)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, OSError) as err:
            raise DatasetError(f"Cannot read dataset file {self._path}: {err}") from err
        logger.debug(
            "Loaded %d events, %d calendars, %d people from %s",
            len(dataset.events),
            len(dataset.calendars),
            len(dataset.people),
            self._path,
        )
        return dataset


class MemoryProvider:
    """Holds a dataset in memory.  Used by tests and embedding callers."""

    def __init__(self, dataset: Dataset) -> None:
        self._dataset = dataset

    def load(self) -> Dataset:
        return self._dataset


# ---------------------------------------------------------------------------
# EventStore
# ---------------------------------------------------------------------------

class EventStore:
    """Read-only access to the dataset plus the event query engine.

    Provider binding is fixed after construction.
    """

    def __init__(self, provider: DatasetProvider) -> None:
        self._provider = provider

    def dataset(self) -> Dataset:
        return self._provider.load()

    def query(
        self,
        state: QueryState,
        *,
        now: datetime | date,
        saved_ids: Collection[str] = frozenset(),
        surface: SurfaceProfile = EVENTS_SURFACE,
    ) -> ResultView:
        events = self._provider.load().events
        return query_events(
            events, state, now=now, saved_ids=saved_ids, surface=surface
        )

    def facets(self) -> FacetOptions:
        return derive_facets(self._provider.load().events)

    def get_by_ids(self, ids: list[str]) -> list[EventRecord]:
        index = {e.id: e for e in self._provider.load().events}
        return [index[eid] for eid in dict.fromkeys(ids) if eid in index]
