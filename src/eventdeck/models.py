"""Shared domain models for eventdeck.

Records are supplied by the dashboard's mock data source and are treated as
immutable values: nothing in the query engine mutates them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any


def parse_day(value: str) -> date:
    return date.fromisoformat(value[:10])


@dataclass(frozen=True)
class Organizer:
    name: str
    avatar: str | None = None


@dataclass(frozen=True)
class TicketType:
    name: str
    price: float = 0

    @property
    def is_free(self) -> bool:
        return self.price == 0


@dataclass(frozen=True)
class EventRecord:
    id: str
    title: str
    description: str
    date: str
    time: str
    location: str
    organizer: Organizer
    status: str
    registered_count: int
    total_capacity: int | None = None
    tags: tuple[str, ...] = ()
    ticket_types: tuple[TicketType, ...] = ()
    location_type: str = "physical"
    calendar_id: str | None = None

    @property
    def day(self) -> date:
        return parse_day(self.date)

    @property
    def start(self) -> datetime:
        return datetime.fromisoformat(f"{self.date[:10]}T{self.time or '00:00'}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "date": self.date,
            "time": self.time,
            "location": self.location,
            "location_type": self.location_type,
            "organizer": {"name": self.organizer.name, "avatar": self.organizer.avatar},
            "status": self.status,
            "registered_count": self.registered_count,
            "total_capacity": self.total_capacity,
            "tags": list(self.tags),
            "ticket_types": [
                {"name": t.name, "price": t.price} for t in self.ticket_types
            ],
            "calendar_id": self.calendar_id,
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> EventRecord:
        organizer = d.get("organizer") or {}
        if isinstance(organizer, str):
            organizer = {"name": organizer}
        day = d["date"]
        time = d.get("time") or "00:00"
        # Raises ValueError on a malformed date or time.
        datetime.fromisoformat(f"{parse_day(day).isoformat()}T{time}")
        return EventRecord(
            id=str(d["id"]),
            title=d["title"],
            description=d.get("description") or "",
            date=day,
            time=time,
            location=d.get("location") or "",
            location_type=d.get("location_type", "physical"),
            organizer=Organizer(
                name=organizer.get("name", ""),
                avatar=organizer.get("avatar"),
            ),
            status=d.get("status", "upcoming"),
            registered_count=int(d.get("registered_count", 0)),
            total_capacity=d.get("total_capacity"),
            tags=tuple(d.get("tags") or ()),
            ticket_types=tuple(
                TicketType(name=t.get("name", ""), price=t.get("price", 0))
                for t in d.get("ticket_types") or ()
            ),
            calendar_id=d.get("calendar_id"),
        )


@dataclass(frozen=True)
class CalendarRecord:
    id: str
    name: str
    description: str
    subscriber_count: int
    total_events: int
    status: str
    created_at: str
    last_event_at: str | None = None
    relation: str = "subscriber"

    @property
    def recency(self) -> date:
        return parse_day(self.last_event_at or self.created_at)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "subscriber_count": self.subscriber_count,
            "total_events": self.total_events,
            "status": self.status,
            "created_at": self.created_at,
            "last_event_at": self.last_event_at,
            "relation": self.relation,
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> CalendarRecord:
        return CalendarRecord(
            id=str(d["id"]),
            name=d["name"],
            description=d.get("description") or "",
            subscriber_count=int(d.get("subscriber_count", 0)),
            total_events=int(d.get("total_events", 0)),
            status=d.get("status", "active"),
            created_at=d["created_at"],
            last_event_at=d.get("last_event_at"),
            relation=d.get("relation", "subscriber"),
        )


@dataclass(frozen=True)
class PersonRecord:
    id: str
    name: str
    email: str
    joined_at: str
    status: str = "active"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "joined_at": self.joined_at,
            "status": self.status,
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> PersonRecord:
        return PersonRecord(
            id=str(d["id"]),
            name=d["name"],
            email=d.get("email") or "",
            joined_at=d["joined_at"],
            status=d.get("status", "active"),
        )


@dataclass(frozen=True)
class Dataset:
    events: tuple[EventRecord, ...] = ()
    calendars: tuple[CalendarRecord, ...] = ()
    people: tuple[PersonRecord, ...] = ()
    attendees: dict[str, tuple[str, ...]] = field(default_factory=dict)

    @staticmethod
    def from_dict(d: dict[str, Any]) -> Dataset:
        return Dataset(
            events=tuple(EventRecord.from_dict(e) for e in d.get("events", [])),
            calendars=tuple(CalendarRecord.from_dict(c) for c in d.get("calendars", [])),
            people=tuple(PersonRecord.from_dict(p) for p in d.get("people", [])),
            attendees={
                str(k): tuple(v) for k, v in (d.get("attendees") or {}).items()
            },
        )
