"""Shared fixtures: a seeded simulator and a hand-built event factory."""

import random

import pytest

from virtualbook.models.market import Event, Market, Selection
from virtualbook.simulation.engine import MarketSimulator

# 2024-01-01T12:00:00Z, already on a whole minute
T0 = 1_704_110_400_000
MINUTE = 60_000


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def sim():
    """Paused simulator so nothing moves unless a test drives it."""
    return MarketSimulator(T0, seed=42, playing=False)


@pytest.fixture
def make_event():
    def _make(
        event_id="EVX",
        sport="basketball",
        market_type="two",
        odds=(1.8, 2.0),
        start_at=T0 + 10 * MINUTE,
        end_at=T0 + 40 * MINUTE,
        status="upcoming",
    ):
        keys = ("A", "B") if market_type == "two" else ("H", "D", "A")
        labels = ("Win", "Win") if market_type == "two" else ("1", "X", "2")
        return Event(
            id=event_id,
            sport=sport,
            league="Test League",
            home="Home",
            away="Away",
            start_at=start_at,
            end_at=end_at,
            status=status,
            popularity=50,
            market=Market(
                type=market_type,
                selections=[Selection(key=k, label=l, odds=o) for k, l, o in zip(keys, labels, odds)],
            ),
        )

    return _make
