"""Tests for the facet filter pipeline."""
from __future__ import annotations

from datetime import date, datetime

import pytest

from eventdeck.filters import (
    CALENDAR_SURFACE,
    CATEGORY_SURFACE,
    EVENTS_SURFACE,
    SEARCH_SURFACE,
    apply_filters,
    build_predicates,
    date_window,
    derive_facets,
)


def _run(events, now, *, surface=EVENTS_SURFACE, saved_ids=frozenset(), **selection):
    params = {
        "tab": "upcoming",
        "search": "",
        "category": None,
        "location": None,
        "tags": (),
        "date_range": "all",
    }
    params.update(selection)
    predicates = build_predicates(surface=surface, now=now, saved_ids=saved_ids, **params)
    return apply_filters(events, predicates)


def _ids(events):
    return [e.id for e in events]


# ---------------------------------------------------------------------------
# Tab / status
# ---------------------------------------------------------------------------

class TestTabFilter:
    @pytest.fixture
    def events(self, make_event):
        return [
            make_event(id=status, status=status)
            for status in ("upcoming", "live", "past", "cancelled", "postponed")
        ]

    def test_upcoming_includes_live(self, events, now):
        assert _ids(_run(events, now, tab="upcoming")) == ["upcoming", "live"]

    def test_past_includes_cancelled(self, events, now):
        assert _ids(_run(events, now, tab="past")) == ["past", "cancelled"]

    def test_saved_ignores_status(self, events, now):
        result = _run(events, now, tab="saved", saved_ids={"past", "postponed"})
        assert _ids(result) == ["past", "postponed"]

    def test_saved_with_empty_set(self, events, now):
        assert _run(events, now, tab="saved") == []


# ---------------------------------------------------------------------------
# Text search
# ---------------------------------------------------------------------------

class TestTextFilter:
    def test_case_insensitive_title_and_description(self, make_event, now):
        events = [
            make_event(id="title", title="AI Robotics Hackathon"),
            make_event(id="desc", title="Founders Night", description="Startups meet the Singapore AI scene"),
            make_event(id="none", title="Book Club", description="Reading together"),
        ]
        assert _ids(_run(events, now, search="ai")) == ["title", "desc"]

    def test_matches_organizer_and_location(self, make_event, now):
        events = [
            make_event(id="org", organizer="Lorong Collective"),
            make_event(id="loc", location="Lorong AI Hub"),
            make_event(id="neither"),
        ]
        assert _ids(_run(events, now, search="LORONG")) == ["org", "loc"]

    def test_empty_term_passes_all(self, make_event, now):
        events = [make_event(), make_event()]
        assert len(_run(events, now, search="")) == 2
        assert len(_run(events, now, search="   ")) == 2


# ---------------------------------------------------------------------------
# Category
# ---------------------------------------------------------------------------

class TestCategoryFilter:
    @pytest.fixture
    def events(self, make_event):
        return [
            make_event(id="hack", title="AI Robotics Hackathon"),
            make_event(id="show", title="Startup Showcase", description="Pitch your hackathon project"),
            make_event(id="plain", title="Book Club"),
        ]

    def test_keyword_mode_matches_title_or_description(self, events, now):
        result = _run(events, now, category="Hackathon")
        assert _ids(result) == ["hack", "show"]

    def test_label_mode_uses_classifier(self, events, now):
        result = _run(events, now, surface=SEARCH_SURFACE, category="Hackathon")
        assert _ids(result) == ["hack"]

    def test_label_mode_is_case_sensitive(self, events, now):
        assert _run(events, now, surface=SEARCH_SURFACE, category="hackathon") == []

    def test_label_mode_default_label(self, events, now):
        result = _run(events, now, surface=SEARCH_SURFACE, category="AI & Tech")
        assert _ids(result) == ["plain"]

    def test_mode_override(self, events, now):
        result = _run(events, now, category="Hackathon", category_mode="label")
        assert _ids(result) == ["hack"]

    def test_category_page_terms(self, make_event, now):
        events = [
            make_event(id="slug", title="Demo days at the library"),
            make_event(id="other", title="Book Club"),
        ]
        result = _run(events, now, surface=CATEGORY_SURFACE, category_slug="demo-days")
        assert _ids(result) == ["slug"]


# ---------------------------------------------------------------------------
# Location and tags
# ---------------------------------------------------------------------------

class TestLocationFilter:
    def test_exact_match_only(self, make_event, now):
        events = [
            make_event(id="exact", location="Antler"),
            make_event(id="case", location="antler"),
            make_event(id="longer", location="Antler HQ"),
        ]
        assert _ids(_run(events, now, location="Antler")) == ["exact"]


class TestTagFilter:
    def test_any_selected_tag_matches(self, make_event, now):
        events = [
            make_event(id="ai", tags=["ai", "robotics"]),
            make_event(id="web3", tags=["web3"]),
            make_event(id="design", tags=["design"]),
        ]
        assert _ids(_run(events, now, tags={"robotics", "web3"})) == ["ai", "web3"]

    def test_untagged_never_passes(self, make_event, now):
        events = [make_event(id="untagged")]
        assert _run(events, now, tags={"ai"}) == []

    def test_inactive_when_no_tags_selected(self, make_event, now):
        events = [make_event(id="untagged")]
        assert _ids(_run(events, now, tags=())) == ["untagged"]


# ---------------------------------------------------------------------------
# Date range
# ---------------------------------------------------------------------------

class TestDateRangeFilter:
    def test_week_includes_day_seven_excludes_day_eight(self, make_event, now):
        events = [
            make_event(id="d0", date="2024-11-16"),
            make_event(id="d7", date="2024-11-23", time="23:59"),
            make_event(id="d8", date="2024-11-24", time="00:00"),
            make_event(id="yesterday", date="2024-11-15"),
        ]
        assert _ids(_run(events, now, date_range="week")) == ["d0", "d7"]

    def test_today_ignores_time_of_day(self, make_event, now):
        events = [
            make_event(id="early", date="2024-11-16", time="07:00"),
            make_event(id="tomorrow", date="2024-11-17", time="07:00"),
        ]
        assert _ids(_run(events, now, date_range="today")) == ["early"]

    def test_month_boundary(self, make_event, now):
        events = [
            make_event(id="in", date="2024-12-16"),
            make_event(id="out", date="2024-12-17"),
        ]
        assert _ids(_run(events, now, date_range="month")) == ["in"]

    def test_year_boundary(self, make_event, now):
        events = [
            make_event(id="in", date="2025-11-16"),
            make_event(id="out", date="2025-11-17"),
        ]
        assert _ids(_run(events, now, date_range="year")) == ["in"]

    def test_month_end_is_clamped(self):
        assert date_window("month", date(2024, 1, 31)) == (date(2024, 1, 31), date(2024, 2, 29))

    def test_year_from_leap_day(self):
        assert date_window("year", datetime(2024, 2, 29, 12)) == (
            date(2024, 2, 29), date(2025, 2, 28),
        )

    def test_all_has_no_window(self, now):
        assert date_window("all", now) is None


# ---------------------------------------------------------------------------
# Conjunction and surfaces
# ---------------------------------------------------------------------------

class TestConjunction:
    SELECTION = {
        "tab": "upcoming",
        "search": "robotics",
        "category": "Hackathon",
        "location": "Antler",
        "tags": {"ai"},
        "date_range": "week",
    }

    def _matching(self, make_event, **overrides):
        fields = {
            "title": "AI Robotics Hackathon",
            "location": "Antler",
            "tags": ["ai"],
            "date": "2024-11-18",
            "status": "upcoming",
        }
        fields.update(overrides)
        return make_event(**fields)

    def test_record_matching_every_facet_passes(self, make_event, now):
        event = self._matching(make_event)
        assert _run([event], now, **self.SELECTION) == [event]

    @pytest.mark.parametrize(
        "override",
        [
            {"status": "past"},
            {"title": "AI Hackathon"},
            {"title": "Robotics Showcase"},
            {"location": "SGInnovate"},
            {"tags": ["web3"]},
            {"date": "2024-12-01"},
        ],
    )
    def test_failing_one_facet_excludes(self, make_event, now, override):
        event = self._matching(make_event, **override)
        assert _run([event], now, **self.SELECTION) == []


class TestSurfaceProfiles:
    def test_inactive_facets_are_ignored(self, make_event, now):
        event = make_event(location="SGInnovate")
        result = _run([event], now, surface=SEARCH_SURFACE, location="Antler", tags={"x"})
        assert result == [event]

    def test_calendar_surface(self, make_event, now):
        events = [
            make_event(id="mine", calendar_id="1"),
            make_event(id="theirs", calendar_id="2"),
            make_event(id="none"),
        ]
        result = _run(events, now, surface=CALENDAR_SURFACE, calendar_id="1")
        assert _ids(result) == ["mine"]


# ---------------------------------------------------------------------------
# Facet options
# ---------------------------------------------------------------------------

class TestDeriveFacets:
    def test_options_in_order_of_first_appearance(self, make_event):
        events = [
            make_event(title="AI Robotics Hackathon", location="Antler", tags=["ai"]),
            make_event(title="AI Vibe & Connect", location="SGInnovate", tags=["ai", "social"]),
            make_event(title="Book Club", location="", tags=[]),
            make_event(title="Startup Showcase", location="Antler"),
        ]
        facets = derive_facets(events)
        assert facets.categories == ("AI & Tech", "Hackathon", "Networking", "Showcase")
        assert facets.locations == ("Antler", "SGInnovate")
        assert facets.tags == ("ai", "social")

    def test_empty(self):
        facets = derive_facets([])
        assert facets.categories == ()
        assert facets.locations == ()
        assert facets.tags == ()
