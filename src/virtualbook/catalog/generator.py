"""Event catalog generator - the fixed universe of fictional events and their opening markets."""

from __future__ import annotations

import random

import structlog

from virtualbook.catalog.names import DURATION_MIN, LEAGUES, SPORT_KEYS, TEAMS
from virtualbook.models.market import Event, Market, Selection
from virtualbook.pricing.odds import THREE_WAY_MARGIN, TWO_WAY_MARGIN, clamp, prob_to_odds, round2

log = structlog.get_logger(__name__)

EVENTS_PER_SPORT = 6
MINUTE_MS = 60_000

# Opening probability for the primary (home) side
BASE_PROB_CENTER = 0.46
BASE_PROB_SPREAD = 0.18
BASE_PROB_RANGE = (0.20, 0.72)
COMPLEMENT_RANGE = (0.20, 0.80)

DRAW_PROB_CENTER = 0.26
DRAW_PROB_SPREAD = 0.08
DRAW_PROB_RANGE = (0.18, 0.34)
MIN_AWAY_PROB = 0.18


def two_way_probabilities(p_a: float, p_b: float) -> tuple[float, float]:
    """Normalize a pair of probabilities so they sum to 1."""
    total = p_a + p_b
    return p_a / total, p_b / total


def three_way_probabilities(p_home: float, p_draw: float) -> tuple[float, float, float]:
    """Derive the away probability, floor it at 0.18, and normalize the triple to 1."""
    p_away = 1 - p_home - p_draw
    if p_away < MIN_AWAY_PROB:
        p_away = MIN_AWAY_PROB
        p_draw = clamp(1 - p_home - p_away, *DRAW_PROB_RANGE)
    total = p_home + p_draw + p_away
    return p_home / total, p_draw / total, p_away / total


def make_two_way_market(p_a: float, p_b: float) -> Market:
    p_a, p_b = two_way_probabilities(p_a, p_b)
    return Market(
        type="two",
        selections=[
            Selection(key="A", label="Win", odds=round2(prob_to_odds(p_a, TWO_WAY_MARGIN))),
            Selection(key="B", label="Win", odds=round2(prob_to_odds(p_b, TWO_WAY_MARGIN))),
        ],
    )


def make_three_way_market(p_home: float, rng: random.Random) -> Market:
    p_draw = clamp(
        DRAW_PROB_CENTER + (rng.random() - 0.5) * DRAW_PROB_SPREAD,
        *DRAW_PROB_RANGE,
    )
    p_home, p_draw, p_away = three_way_probabilities(p_home, p_draw)
    return Market(
        type="three",
        selections=[
            Selection(key="H", label="1", odds=round2(prob_to_odds(p_home, THREE_WAY_MARGIN))),
            Selection(key="D", label="X", odds=round2(prob_to_odds(p_draw, THREE_WAY_MARGIN))),
            Selection(key="A", label="2", odds=round2(prob_to_odds(p_away, THREE_WAY_MARGIN))),
        ],
    )


def start_offset_minutes(sport: str, index: int) -> int:
    """Staggered start: 12 minutes apart from +8m, plus a small per-sport jitter."""
    return 8 + index * 12 + ord(sport[0]) % 7


def generate_events(base_time: int, rng: random.Random) -> list[Event]:
    """Build the full ordered event collection starting from base_time (virtual ms epoch)."""
    events: list[Event] = []
    id_counter = 1

    for sport in SPORT_KEYS:
        leagues = LEAGUES[sport]
        teams = TEAMS[sport]
        duration_ms = DURATION_MIN[sport] * MINUTE_MS

        for i in range(EVENTS_PER_SPORT):
            # Offsets 2i and 2i+3 differ by an odd number mod 8, never the same team
            home = teams[(i * 2) % len(teams)]
            away = teams[(i * 2 + 3) % len(teams)]
            start_at = base_time + start_offset_minutes(sport, i) * MINUTE_MS

            p_a = clamp(
                BASE_PROB_CENTER + (rng.random() - 0.5) * BASE_PROB_SPREAD,
                *BASE_PROB_RANGE,
            )
            p_b = clamp(1 - p_a, *COMPLEMENT_RANGE)
            if sport == "football":
                market = make_three_way_market(p_a, rng)
            else:
                market = make_two_way_market(p_a, p_b)

            events.append(
                Event(
                    id=f"EV{id_counter}",
                    sport=sport,
                    league=leagues[i % len(leagues)],
                    home=home,
                    away=away,
                    start_at=start_at,
                    end_at=start_at + duration_ms,
                    popularity=rng.randrange(40, 100),
                    market=market,
                )
            )
            id_counter += 1

    log.debug("catalog_generated", events=len(events), base_time=base_time)
    return events
