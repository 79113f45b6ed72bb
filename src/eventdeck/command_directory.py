"""Calendars and people commands – list the directory views."""

from __future__ import annotations

import argparse
import json
import sys

from pydantic import ValidationError

from eventdeck.directory import CalendarQuery, PeopleQuery, query_calendars, query_people
from eventdeck.event_store import DatasetError, EventStore
from eventdeck.normalize import adopt_search


def run_calendars(args: argparse.Namespace, store: EventStore, max_search_length: int) -> int:
    try:
        query = CalendarQuery(
            search=adopt_search("", args.search, max_search_length),
            scope=args.scope,
            status=args.status,
            sort=args.sort,
        )
    except ValidationError as err:
        print(f"Invalid query: {err}", file=sys.stderr)
        return 2
    try:
        calendars = query_calendars(store.dataset().calendars, query)
    except DatasetError as e:
        print(str(e), file=sys.stderr)
        return 1

    if args.json_output:
        print(json.dumps([c.to_dict() for c in calendars], indent=2))
        return 0
    if not calendars:
        print("No calendars found.")
        return 0
    name_width = max(len(c.name) for c in calendars)
    for cal in calendars:
        print(
            f"{cal.name.ljust(name_width)} | {cal.subscriber_count} subscribers"
            f" | {cal.total_events} events | {cal.status}"
        )
    return 0


def run_people(args: argparse.Namespace, store: EventStore, max_search_length: int) -> int:
    try:
        query = PeopleQuery(
            search=adopt_search("", args.search, max_search_length),
            status=args.status,
            sort=args.sort,
        )
    except ValidationError as err:
        print(f"Invalid query: {err}", file=sys.stderr)
        return 2
    try:
        people = query_people(store.dataset().people, query)
    except DatasetError as e:
        print(str(e), file=sys.stderr)
        return 1

    if args.json_output:
        print(json.dumps([p.to_dict() for p in people], indent=2))
        return 0
    print(f"{len(people)} {'person' if len(people) == 1 else 'people'}:")
    for person in people:
        print(f"{person.name} <{person.email}> | joined {person.joined_at} | {person.status}")
    return 0
