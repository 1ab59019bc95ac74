"""Odds drift - per-tick random movement of open markets and the mover magnitude."""

from __future__ import annotations

import random
from typing import Iterable

from virtualbook.models.market import Event
from virtualbook.pricing.odds import band_for, clamp, move_odds, round2

LIVE_VOLATILITY = 0.055
TENNIS_VOLATILITY = 0.045
DEFAULT_VOLATILITY = 0.035


def volatility_for(event: Event) -> float:
    if event.status == "live":
        return LIVE_VOLATILITY
    if event.sport == "tennis":
        return TENNIS_VOLATILITY
    return DEFAULT_VOLATILITY


def drift_event(event: Event, rng: random.Random) -> float:
    """Move one event's odds and set its mover. Finished events are left alone with mover 0.

    mover is measured on the drifted odds before they are pulled back into the
    market-type band, so it can differ slightly from the stored change.
    """
    event.mover = 0.0
    if event.status == "finished":
        return 0.0

    vol = volatility_for(event)
    biggest = 0.0
    for sel in event.market.selections:
        before = sel.odds
        sel.odds = round2(move_odds(sel.odds, vol, rng))
        biggest = max(biggest, abs(sel.odds - before))

    lo, hi = band_for(event.market.type)
    for sel in event.market.selections:
        sel.odds = clamp(sel.odds, lo, hi)

    event.mover = round2(biggest)
    return event.mover


def simulate_odds_movement(events: Iterable[Event], rng: random.Random) -> float:
    """Drift every event. Returns the largest mover."""
    largest = 0.0
    for event in events:
        largest = max(largest, drift_event(event, rng))
    return largest
