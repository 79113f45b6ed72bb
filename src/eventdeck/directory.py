"""Calendar list and calendar membership (people) queries.

Same shape as the event query: pure filter chain, then one stable sort key.
"""

from __future__ import annotations

from typing import Iterable, Literal

from pydantic import BaseModel, ConfigDict, Field

from eventdeck.models import CalendarRecord, PersonRecord
from eventdeck.sorting import collation_key

_SCOPE_RELATIONS = {
    "all": frozenset({"owner", "subscriber"}),
    "my": frozenset({"owner"}),
    "subscribed": frozenset({"subscriber"}),
}


class CalendarQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    search: str = Field("", description="Case-insensitive match on name or description.")
    scope: Literal["all", "my", "subscribed"] = Field("all", description="Calendars the viewer owns, subscribes to, or both.")
    status: Literal["active", "archived", "draft"] | None = Field(None, description="Only calendars with this status.")
    sort: Literal["name", "subscribers", "events", "recent"] = Field("name", description="name ascending; the others descending.")


class PeopleQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    search: str = Field("", description="Case-insensitive match on name or email.")
    status: str = Field("all", description="'all' or an exact membership status.")
    sort: Literal["recently-joined", "name-az", "name-za", "oldest"] = Field("recently-joined", description="recently-joined keeps the list order.")


def query_calendars(
    calendars: Iterable[CalendarRecord], query: CalendarQuery
) -> list[CalendarRecord]:
    relations = _SCOPE_RELATIONS[query.scope]
    filtered = [c for c in calendars if c.relation in relations]
    if query.status is not None:
        filtered = [c for c in filtered if c.status == query.status]
    if query.search.strip():
        term = query.search.lower()
        filtered = [
            c for c in filtered
            if term in c.name.lower() or term in c.description.lower()
        ]

    if query.sort == "subscribers":
        filtered.sort(key=lambda c: -c.subscriber_count)
    elif query.sort == "events":
        filtered.sort(key=lambda c: -c.total_events)
    elif query.sort == "recent":
        filtered.sort(key=lambda c: c.recency, reverse=True)
    else:
        filtered.sort(key=lambda c: collation_key(c.name))
    return filtered


def query_people(
    people: Iterable[PersonRecord], query: PeopleQuery
) -> list[PersonRecord]:
    filtered = list(people)
    if query.search.strip():
        term = query.search.lower()
        filtered = [
            p for p in filtered
            if term in p.name.lower() or term in p.email.lower()
        ]
    if query.status != "all":
        filtered = [p for p in filtered if p.status == query.status]

    if query.sort == "name-az":
        filtered.sort(key=lambda p: collation_key(p.name))
    elif query.sort == "name-za":
        filtered.sort(key=lambda p: collation_key(p.name), reverse=True)
    elif query.sort == "oldest":
        filtered.sort(key=lambda p: p.joined_at)
    return filtered
