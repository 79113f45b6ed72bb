"""Keyword-heuristic category classification.

Rules are an ordered table evaluated top to bottom over the lowercased
title; the first matching rule wins.  The same table drives the category
facet list, which instead collects every matching label.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from eventdeck.config import DEFAULT_CATEGORY
from eventdeck.models import EventRecord


@dataclass(frozen=True)
class CategoryRule:
    keywords: tuple[str, ...]
    label: str

    def matches(self, title: str) -> bool:
        lowered = title.lower()
        return any(kw in lowered for kw in self.keywords)


CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(("hackathon",), "Hackathon"),
    CategoryRule(("showcase",), "Showcase"),
    CategoryRule(("connect", "networking"), "Networking"),
    CategoryRule(("ai",), "AI & Tech"),
)

# Facet chips list labels in this order per event.
_FACET_RULE_ORDER: tuple[CategoryRule, ...] = (
    CATEGORY_RULES[3],
    CATEGORY_RULES[0],
    CATEGORY_RULES[1],
    CATEGORY_RULES[2],
)


@dataclass(frozen=True)
class CategoryInfo:
    slug: str
    name: str
    description: str


CATEGORY_DIRECTORY: dict[str, CategoryInfo] = {
    info.slug: info
    for info in (
        CategoryInfo("pitch-nights", "Pitch Nights", "Showcase your startup and connect with investors"),
        CategoryInfo("workshops", "Workshops", "Learn new skills and grow your expertise"),
        CategoryInfo("networking", "Networking", "Connect with like-minded professionals"),
        CategoryInfo("demo-days", "Demo Days", "See the latest innovations and product launches"),
        CategoryInfo("hackathons", "Hackathons", "Build, compete, and innovate"),
        CategoryInfo("fireside-chats", "Fireside Chats", "Intimate conversations with industry leaders"),
    )
}


def classify(
    title: str,
    description: str = "",
    rules: Iterable[CategoryRule] = CATEGORY_RULES,
    default: str = DEFAULT_CATEGORY,
) -> str:
    """Return the label of the first rule matching *title*, else *default*.

    *description* is accepted for call-site symmetry; the rules only look at
    the title.
    """
    for rule in rules:
        if rule.matches(title):
            return rule.label
    return default


def classify_event(event: EventRecord) -> str:
    return classify(event.title, event.description)


def matching_labels(title: str, rules: Iterable[CategoryRule] = _FACET_RULE_ORDER) -> list[str]:
    return [rule.label for rule in rules if rule.matches(title)]


def resolve_category(slug: str) -> CategoryInfo:
    """Look up a category page by slug; unknown slugs get a title-cased name."""
    if slug in CATEGORY_DIRECTORY:
        return CATEGORY_DIRECTORY[slug]
    name = " ".join(w[:1].upper() + w[1:] for w in slug.split("-"))
    return CategoryInfo(slug, name, "Events in this category")


def category_page_terms(slug: str) -> tuple[str, ...]:
    """Lowercased substrings that place an event on the *slug* category page."""
    info = resolve_category(slug)
    # Only the first hyphen becomes a space.
    return (info.name.lower(), slug.replace("-", " ", 1))
