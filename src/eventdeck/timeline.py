"""Timeline view grouping."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable

from eventdeck.models import EventRecord


@dataclass(frozen=True)
class Bucket:
    label: str
    events: tuple[EventRecord, ...]


def day_label(day: date, today: date) -> str:
    weekday = day.strftime("%A")
    if day == today:
        return f"Today {weekday}"
    return f"{day.day} {day.strftime('%b')} {weekday}"


def bucket_by_day(events: Iterable[EventRecord], now: datetime | date) -> list[Bucket]:
    """Group *events* by calendar day.

    Buckets follow the order in which their day first appears; the input is
    assumed to be date-sorted already and is never re-sorted here.
    """
    today = now.date() if isinstance(now, datetime) else now
    grouped: dict[date, list[EventRecord]] = {}
    for event in events:
        grouped.setdefault(event.day, []).append(event)
    return [Bucket(day_label(day, today), tuple(items)) for day, items in grouped.items()]
