"""Events command – run the faceted query and print a flat or timeline view."""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime

from pydantic import ValidationError

from eventdeck.config import get_saved_file
from eventdeck.event_store import (
    DatasetError,
    EventStore,
    QueryState,
    ResultView,
    query_events,
)
from eventdeck.filters import SURFACES
from eventdeck.models import EventRecord
from eventdeck.normalize import normalize_search
from eventdeck.saved import load_saved_ids, save_saved_ids
from eventdeck.summary import count_results, summarize


def parse_now(raw: str | None) -> datetime:
    if raw is None:
        return datetime.now()
    return datetime.fromisoformat(raw)


def _format_time(value: str) -> str:
    hours, _, minutes = value.partition(":")
    hour = int(hours or 0)
    ampm = "pm" if hour >= 12 else "am"
    return f"{hour % 12 or 12}:{minutes or '00'} {ampm}"


def _build_query_state(args: argparse.Namespace, defaults: dict, search: str) -> QueryState:
    return QueryState(
        search=search,
        tab=args.tab or defaults.get("tab", "upcoming"),
        category=args.category,
        category_mode=args.category_mode,
        location=args.location,
        tags=frozenset(args.tag or ()),
        date_range=args.range,
        sort=args.sort or defaults.get("sort", "date"),
        view=args.view or defaults.get("view", "timeline"),
        calendar_id=args.calendar,
        category_slug=args.category_page,
    )


def _event_line(event: EventRecord, attendees: tuple[str, ...], score_width: int) -> str:
    summary = summarize(event, attendees)
    score_text = f"[{event.registered_count}]".ljust(score_width)
    parts = [
        f"{score_text} {_format_time(event.time)}",
        event.title,
        event.location or "-",
        summary.price,
    ]
    if summary.capacity_percent is not None:
        parts.append(f"{summary.capacity_percent:.0f}% full")
    return " | ".join(parts)


def _print_result(view: ResultView, state: QueryState, attendees: dict) -> None:
    if view.is_empty:
        if view.filters_active:
            print("No events match the current filters.")
        else:
            print(f"No {state.tab} events.")
        return

    counts = count_results(view.events)
    print(f"{counts.total} events (sorted by {state.sort}, {counts.free} free, {counts.live} live):")
    score_width = max(len(f"[{e.registered_count}]") for e in view.events)
    if view.buckets is not None:
        for idx, bucket in enumerate(view.buckets):
            if idx:
                print()
            print(bucket.label)
            for event in bucket.events:
                print("  " + _event_line(event, attendees.get(event.id, ()), score_width))
        return
    for event in view.events:
        print(f"{event.date} " + _event_line(event, attendees.get(event.id, ()), score_width))


def _result_to_json(view: ResultView, state: QueryState, attendees: dict, now: datetime) -> dict:
    def _item(event: EventRecord) -> dict:
        summary = summarize(event, attendees.get(event.id, ()))
        return {
            **event.to_dict(),
            "price_display": summary.price,
            "capacity_percent": summary.capacity_percent,
            "attendee_overflow": summary.overflow,
        }

    output = {
        "generated_at": now.isoformat(),
        "query": state.model_dump(mode="json"),
        "filters_active": view.filters_active,
        "total": len(view.events),
        "events": [_item(e) for e in view.events],
    }
    if view.buckets is not None:
        output["timeline"] = [
            {"label": b.label, "event_ids": [e.id for e in b.events]}
            for b in view.buckets
        ]
    return output


def run(
    args: argparse.Namespace,
    store: EventStore,
    defaults: dict,
    max_search_length: int,
) -> int:
    try:
        now = parse_now(args.now)
    except ValueError:
        print(f"Invalid --now value: '{args.now}'. Use ISO format, e.g. 2024-11-16T09:00.", file=sys.stderr)
        return 2

    search = ""
    if args.search is not None:
        normalized = normalize_search(args.search, max_search_length)
        if normalized.accepted:
            search = normalized.value
        else:
            print(
                f"Search text not accepted: longer than {max_search_length} "
                "characters after escaping. Showing results without it.",
                file=sys.stderr,
            )

    try:
        state = _build_query_state(args, defaults, search)
    except ValidationError as err:
        print(f"Invalid query: {err}", file=sys.stderr)
        return 2

    saved_ids = load_saved_ids(get_saved_file())
    try:
        dataset = store.dataset()
    except DatasetError as e:
        print(str(e), file=sys.stderr)
        return 1
    view = query_events(
        dataset.events, state, now=now, saved_ids=saved_ids, surface=SURFACES[args.surface]
    )

    if args.json_output:
        print(json.dumps(_result_to_json(view, state, dataset.attendees, now), indent=2))
        return 0
    _print_result(view, state, dataset.attendees)
    return 0


def run_facets(args: argparse.Namespace, store: EventStore) -> int:
    try:
        facets = store.facets()
    except DatasetError as e:
        print(str(e), file=sys.stderr)
        return 1
    if args.json_output:
        print(json.dumps({
            "categories": list(facets.categories),
            "locations": list(facets.locations),
            "tags": list(facets.tags),
        }, indent=2))
        return 0
    print("Categories: " + (", ".join(facets.categories) or "-"))
    print("Locations:  " + (", ".join(facets.locations) or "-"))
    print("Tags:       " + (", ".join(facets.tags) or "-"))
    return 0


def run_save(args: argparse.Namespace, store: EventStore, *, saved: bool) -> int:
    try:
        known = {e.id for e in store.get_by_ids(args.event_ids)}
    except DatasetError as e:
        print(str(e), file=sys.stderr)
        return 1
    unknown = [eid for eid in args.event_ids if eid not in known]
    if unknown:
        print(f"Unknown event id(s): {', '.join(unknown)}", file=sys.stderr)
        return 2

    path = get_saved_file()
    ids = load_saved_ids(path)
    if saved:
        ids |= known
    else:
        ids -= known
    save_saved_ids(ids, path)
    verb = "Saved" if saved else "Removed"
    print(f"{verb} {len(known)} event{'s' if len(known) != 1 else ''}.", file=sys.stderr)
    return 0
