"""Catalog generator and query tests."""

import random

import pytest

from virtualbook.catalog.filters import count_by_sport, filter_events, live_events, top_movers
from virtualbook.catalog.generator import (
    generate_events,
    make_two_way_market,
    start_offset_minutes,
    three_way_probabilities,
    two_way_probabilities,
)
from virtualbook.catalog.names import DURATION_MIN, SPORT_KEYS, pretty_sport

from conftest import MINUTE, T0


@pytest.fixture
def events():
    return generate_events(T0, random.Random(5))


def test_catalog_shape(events):
    assert len(events) == 24
    assert [e.id for e in events] == [f"EV{i}" for i in range(1, 25)]
    assert count_by_sport(events) == {"all": 24, "football": 6, "basketball": 6, "tennis": 6, "esports": 6}
    for e in events:
        assert e.home != e.away
        assert e.start_at < e.end_at
        assert e.end_at - e.start_at == DURATION_MIN[e.sport] * MINUTE
        assert e.status == "upcoming"
        assert (e.score.a, e.score.b) == (0, 0)
        assert e.outcome is None
        assert e.mover == 0
        assert 40 <= e.popularity <= 100


def test_markets_per_sport(events):
    for e in events:
        if e.sport == "football":
            assert e.market.type == "three"
            assert e.market.keys == ("H", "D", "A")
            assert [s.label for s in e.market.selections] == ["1", "X", "2"]
        else:
            assert e.market.type == "two"
            assert e.market.keys == ("A", "B")
        for s in e.market.selections:
            assert 1.02 <= s.odds <= 25


def test_start_offsets_are_staggered(events):
    first_football = events[0]
    assert first_football.sport == "football"
    # 'f' -> 102 % 7 == 4
    assert first_football.start_at == T0 + 12 * MINUTE
    assert start_offset_minutes("basketball", 0) == 8
    assert start_offset_minutes("esports", 5) == 8 + 60 + 3
    for sport in SPORT_KEYS:
        starts = [e.start_at for e in events if e.sport == sport]
        assert starts == sorted(starts)
        assert all(b - a == 12 * MINUTE for a, b in zip(starts, starts[1:]))


def test_same_seed_same_catalog():
    a = generate_events(T0, random.Random(11))
    b = generate_events(T0, random.Random(11))
    assert [e.model_dump() for e in a] == [e.model_dump() for e in b]


def test_two_way_probabilities_sum_to_one():
    for p_a in (0.2, 0.37, 0.46, 0.72):
        p_b = min(max(1 - p_a, 0.2), 0.8)
        pa, pb = two_way_probabilities(p_a, p_b)
        assert pa + pb == pytest.approx(1.0)


def test_three_way_probabilities_sum_to_one():
    for p_home in (0.2, 0.46, 0.6, 0.72):
        for p_draw in (0.18, 0.26, 0.34):
            triple = three_way_probabilities(p_home, p_draw)
            assert sum(triple) == pytest.approx(1.0)
            assert all(p >= 0 for p in triple)


def test_three_way_floors_away_probability():
    p_home, p_draw, p_away = three_way_probabilities(0.72, 0.26)
    # away floored at 0.18, draw recomputed and clamped to 0.18, then normalized over 1.08
    assert p_away == pytest.approx(0.18 / 1.08)
    assert p_draw == pytest.approx(0.18 / 1.08)
    assert p_home == pytest.approx(0.72 / 1.08)


def test_two_way_market_odds():
    market = make_two_way_market(0.5, 0.5)
    assert [s.odds for s in market.selections] == [1.89, 1.89]


def test_filter_and_sort(events):
    events[3].status = "live"
    events[3].mover = 0.3
    events[10].mover = 0.1
    assert [e.id for e in filter_events(events, status="live")] == ["EV4"]
    assert all(e.sport == "tennis" for e in filter_events(events, sport="tennis"))
    assert filter_events(events, sort="mover_desc")[0].id == "EV4"
    pops = [e.popularity for e in filter_events(events, sort="vol_desc")]
    assert pops == sorted(pops, reverse=True)
    assert {e.id for e in filter_events(events, q="  ORION fc ")} == {
        e.id for e in events if "Orion FC" in (e.home, e.away)
    }
    assert [e.id for e in live_events(events)] == ["EV4"]
    assert [e.id for e in top_movers(events, 2)] == ["EV4", "EV11"]


def test_pretty_sport():
    assert pretty_sport("esports") == "Esports"
    assert pretty_sport("curling") == "curling"
