#!/usr/bin/env python3
"""Browse the dashboard's events, calendars and members from a dataset file.

Subcommands:
- events     faceted event query (tab, search, category, location, tags,
             date range, sort) with timeline/grid/list views
- facets     category, location and tag options present in the dataset
- calendars  calendar list with my/subscribed scope and sort
- people     calendar members with status filter and sort
- save/unsave  maintain the saved-events list used by --tab saved
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys

import eventdeck.config as config
from eventdeck import command_directory, command_events
from eventdeck.config import CONFIG_FILENAME
from eventdeck.event_store import EventStore, FileProvider
from eventdeck.filters import SURFACES
from eventdeck.user_config import (
    ensure_config,
    get_data_file,
    get_defaults,
    get_max_search_length,
    load_config,
    validate_config,
)

DEFAULT_CONFIG_PATH = pathlib.Path.home() / ".eventdeck" / CONFIG_FILENAME


def _add_events_args(parser: argparse.ArgumentParser) -> None:
    """Register event query flags on *parser*."""
    parser.add_argument(
        "--tab",
        choices=["upcoming", "past", "saved"],
        default=None,
        help="upcoming (upcoming + live, default), past (past + cancelled), or saved.",
    )
    parser.add_argument(
        "--search",
        default=None,
        help="Case-insensitive text matched against title, description, organizer and location.",
    )
    parser.add_argument(
        "--category",
        default=None,
        help="Category name, e.g. 'Hackathon' or 'AI & Tech'.",
    )
    parser.add_argument(
        "--category-mode",
        choices=["label", "keyword"],
        default=None,
        help="label: exact classifier label. keyword: name appears in title/description. "
             "Default depends on --surface.",
    )
    parser.add_argument(
        "--category-page",
        default=None,
        metavar="SLUG",
        help="Category page slug for --surface category, e.g. 'demo-days'.",
    )
    parser.add_argument(
        "--location",
        default=None,
        help="Exact location string.",
    )
    parser.add_argument(
        "--tag",
        action="append",
        default=None,
        help="Tag filter; repeat for several tags (matches any).",
    )
    parser.add_argument(
        "--range",
        choices=["all", "today", "week", "month", "year"],
        default="all",
        help="Date window starting today, inclusive (default: all).",
    )
    parser.add_argument(
        "--sort",
        choices=["date", "title", "popularity", "capacity"],
        default=None,
        help="Sort key (default: date).",
    )
    parser.add_argument(
        "--view",
        choices=["timeline", "grid", "list"],
        default=None,
        help="timeline groups events by day (default); grid and list print a flat list.",
    )
    parser.add_argument(
        "--surface",
        choices=sorted(SURFACES),
        default="events",
        help="Which screen's facet set to apply (default: events).",
    )
    parser.add_argument(
        "--calendar",
        default=None,
        metavar="CALENDAR_ID",
        help="Managed calendar id for --surface calendar.",
    )
    parser.add_argument(
        "--now",
        default=None,
        metavar="ISO_DATETIME",
        help="Reference time for date ranges and the 'Today' label (default: current time).",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Query the event dashboard's dataset.\n"
            "\n"
            f"Dataset: --data PATH, data_file in config, or {config.get_data_file()}"
        ),
        epilog=(
            "Examples:\n"
            "  eventdeck events --range week\n"
            "    Upcoming events in the next 7 days, grouped by day.\n"
            "\n"
            "  eventdeck events --search ai --sort popularity --view list\n"
            "    Events mentioning 'ai', most registrations first.\n"
            "\n"
            "  eventdeck events --surface calendar --calendar 1 --tab past\n"
            "    Past events of calendar 1.\n"
            "\n"
            "  eventdeck calendars --scope subscribed --sort subscribers"
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--data", default=None, help="Dataset JSON file.")
    parser.add_argument("--state-dir", default=None, help="Directory holding saved.json.")
    parser.add_argument("--config", default=None, help=f"Config file (default: {DEFAULT_CONFIG_PATH}).")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")

    subparsers = parser.add_subparsers(dest="command", required=True)

    events_parser = subparsers.add_parser("events", help="Run the faceted event query.")
    _add_events_args(events_parser)
    events_parser.add_argument("--json", action="store_true", dest="json_output", help="Print JSON.")

    facets_parser = subparsers.add_parser("facets", help="List filter options present in the dataset.")
    facets_parser.add_argument("--json", action="store_true", dest="json_output", help="Print JSON.")

    calendars_parser = subparsers.add_parser("calendars", help="List calendars.")
    calendars_parser.add_argument("--search", default=None, help="Match on name or description.")
    calendars_parser.add_argument("--scope", choices=["all", "my", "subscribed"], default="all")
    calendars_parser.add_argument("--status", choices=["active", "archived", "draft"], default=None)
    calendars_parser.add_argument(
        "--sort", choices=["name", "subscribers", "events", "recent"], default="name"
    )
    calendars_parser.add_argument("--json", action="store_true", dest="json_output", help="Print JSON.")

    people_parser = subparsers.add_parser("people", help="List calendar members.")
    people_parser.add_argument("--search", default=None, help="Match on name or email.")
    people_parser.add_argument("--status", default="all", help="'all' (default) or an exact status.")
    people_parser.add_argument(
        "--sort",
        choices=["recently-joined", "name-az", "name-za", "oldest"],
        default="recently-joined",
    )
    people_parser.add_argument("--json", action="store_true", dest="json_output", help="Print JSON.")

    for name, help_text in (("save", "Add events to the saved list."), ("unsave", "Remove events from the saved list.")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("event_ids", nargs="+", metavar="EVENT_ID")

    return parser.parse_args(argv)


def main() -> int:
    args = parse_args()
    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    config_path = pathlib.Path(args.config).expanduser() if args.config else DEFAULT_CONFIG_PATH
    ensure_config(config_path)
    user_cfg = load_config(config_path)
    validate_config(user_cfg)

    config.configure(
        state_dir=args.state_dir,
        data_file=args.data or get_data_file(user_cfg),
    )
    store = EventStore(FileProvider(config.get_data_file()))
    max_search_length = get_max_search_length(user_cfg)

    if args.command == "events":
        return command_events.run(args, store, get_defaults(user_cfg), max_search_length)
    if args.command == "facets":
        return command_events.run_facets(args, store)
    if args.command == "calendars":
        return command_directory.run_calendars(args, store, max_search_length)
    if args.command == "people":
        return command_directory.run_people(args, store, max_search_length)
    return command_events.run_save(args, store, saved=args.command == "save")


if __name__ == "__main__":
    raise SystemExit(main())
