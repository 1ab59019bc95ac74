"""Event lifecycle - status from virtual time, live score increments, one-shot outcome resolution."""

from __future__ import annotations

import random
from typing import Callable, Iterable

import structlog

from virtualbook.models.market import Event, EventStatus

log = structlog.get_logger(__name__)

# Chance per tick that a live event scores
SCORE_PROBABILITY = 0.22


def next_status(status: EventStatus, now: int, start_at: int, end_at: int) -> EventStatus:
    """Pure transition: upcoming before start, live in [start, end), finished after. Finished is terminal."""
    if status == "finished":
        return "finished"
    if now < start_at:
        return "upcoming"
    if now < end_at:
        return "live"
    return "finished"


def resolve_outcome(event: Event, rng: random.Random) -> str:
    """Winning selection key from the final score.

    Three-way: H / D / A. Two-way has no draw, so a level score is settled by
    a coin flip between A and B.
    """
    a, b = event.score.a, event.score.b
    three_way = event.market.type == "three"
    if a > b:
        return "H" if three_way else "A"
    if a < b:
        return "A" if three_way else "B"
    if three_way:
        return "D"
    return "A" if rng.random() < 0.5 else "B"


def update_event_statuses(
    events: Iterable[Event],
    now: int,
    rng: random.Random,
    on_finished: Callable[[Event], None] | None = None,
) -> list[Event]:
    """Recompute every event's status at now. Resolves outcome once per event on finish.

    on_finished is called right after the outcome is set. Returns the events
    that finished during this call, in catalog order.
    """
    finished: list[Event] = []
    for event in events:
        prev = event.status
        event.status = next_status(prev, now, event.start_at, event.end_at)
        if prev != "finished" and event.status == "finished":
            event.outcome = resolve_outcome(event, rng)
            log.info(
                "event_finished",
                event_id=event.id,
                score=f"{event.score.a}-{event.score.b}",
                outcome=event.outcome,
            )
            finished.append(event)
            if on_finished is not None:
                on_finished(event)
    return finished


def simulate_live_scores(
    events: Iterable[Event],
    rng: random.Random,
    probability: float = SCORE_PROBABILITY,
) -> int:
    """Give each live event a chance to score one point for a random side. Returns goals scored."""
    scored = 0
    for event in events:
        if event.status != "live":
            continue
        if rng.random() < probability:
            if rng.random() < 0.5:
                event.score.a += 1
            else:
                event.score.b += 1
            scored += 1
    return scored
