"""Shared fixtures: an event factory and a fixed reference time."""
from __future__ import annotations

from datetime import datetime
from itertools import count

import pytest

from eventdeck.models import EventRecord, Organizer, TicketType

# Saturday.
FIXED_NOW = datetime(2024, 11, 16, 10, 0)


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def make_event():
    """Build an ``EventRecord`` with sensible defaults; override any field."""
    ids = count(1)

    def _make(**overrides) -> EventRecord:
        fields = {
            "id": str(next(ids)),
            "title": "Community Meetup",
            "description": "",
            "date": "2024-11-16",
            "time": "18:00",
            "location": "Antler",
            "organizer": Organizer("GrowthLab Events"),
            "status": "upcoming",
            "registered_count": 10,
            "total_capacity": None,
            "tags": (),
            "ticket_types": (TicketType("General Admission", 0),),
        }
        if isinstance(overrides.get("organizer"), str):
            overrides["organizer"] = Organizer(overrides["organizer"])
        if "tags" in overrides:
            overrides["tags"] = tuple(overrides["tags"])
        fields.update(overrides)
        return EventRecord(**fields)

    return _make
