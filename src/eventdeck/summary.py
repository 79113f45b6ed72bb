"""Scalar summaries shown next to list items."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from eventdeck.config import ATTENDEE_PREVIEW_LIMIT
from eventdeck.models import EventRecord


@dataclass(frozen=True)
class EventSummary:
    price: str
    capacity_percent: float | None
    overflow: int


@dataclass(frozen=True)
class ResultCounts:
    total: int
    free: int
    live: int


def _format_price(value: float) -> str:
    if float(value).is_integer():
        return f"${int(value)}"
    return f"${value}"


def price_display(event: EventRecord) -> str:
    free = [t for t in event.ticket_types if t.is_free]
    paid = [t for t in event.ticket_types if t.price > 0]
    if free and not paid:
        return "Free"
    if paid and not free:
        return _format_price(min(t.price for t in paid))
    return "Free - Paid"


def capacity_percent(event: EventRecord) -> float | None:
    if not event.total_capacity:
        return None
    return event.registered_count / event.total_capacity * 100


def overflow_count(event: EventRecord, known_attendees: int) -> int:
    """Attendees beyond the avatar preview.  May be negative; callers clamp."""
    return event.registered_count - min(ATTENDEE_PREVIEW_LIMIT, known_attendees)


def summarize(event: EventRecord, attendees: Sequence[str] = ()) -> EventSummary:
    return EventSummary(
        price=price_display(event),
        capacity_percent=capacity_percent(event),
        overflow=overflow_count(event, len(attendees)),
    )


def count_results(events: Sequence[EventRecord]) -> ResultCounts:
    return ResultCounts(
        total=len(events),
        free=sum(1 for e in events if price_display(e) == "Free"),
        live=sum(1 for e in events if e.status == "live"),
    )
