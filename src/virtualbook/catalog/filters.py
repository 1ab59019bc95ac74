"""Catalog queries - filter, sort and count events for display layers."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from virtualbook.catalog.names import SPORT_KEYS
from virtualbook.models.market import Event

SORT_KEYS = ("start_asc", "vol_desc", "mover_desc")


def filter_events(
    events: Iterable[Event],
    sport: str = "all",
    q: str = "",
    status: str = "all",
    sort: str = "start_asc",
) -> list[Event]:
    """Filter by sport, text and status, then sort. Unknown sort keys keep input order."""
    out = list(events)
    if sport != "all":
        out = [e for e in out if e.sport == sport]

    needle = q.strip().lower()
    if needle:
        out = [e for e in out if needle in f"{e.home} {e.away} {e.league}".lower()]

    if status != "all":
        out = [e for e in out if e.status == status]

    if sort == "start_asc":
        out.sort(key=lambda e: e.start_at)
    elif sort == "vol_desc":
        out.sort(key=lambda e: e.popularity, reverse=True)
    elif sort == "mover_desc":
        out.sort(key=lambda e: abs(e.mover), reverse=True)
    return out


def count_by_sport(events: Iterable[Event]) -> dict[str, int]:
    """Event counts keyed by 'all' and each sport key."""
    events = list(events)
    counts = Counter(e.sport for e in events)
    result = {"all": len(events)}
    for key in SPORT_KEYS:
        result[key] = counts.get(key, 0)
    return result


def live_events(events: Iterable[Event]) -> list[Event]:
    """Live events, most popular first."""
    return sorted((e for e in events if e.status == "live"), key=lambda e: e.popularity, reverse=True)


def top_movers(events: Iterable[Event], n: int = 8) -> list[Event]:
    """Events with the largest odds movement this tick."""
    return sorted(events, key=lambda e: abs(e.mover), reverse=True)[:n]
