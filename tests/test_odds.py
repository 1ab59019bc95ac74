"""Odds math unit tests."""

import random

import pytest

from virtualbook.pricing.odds import (
    MAX_ODDS,
    MIN_ODDS,
    band_for,
    clamp,
    combined_odds,
    move_odds,
    prob_to_odds,
    round2,
)


def test_prob_to_odds_applies_margin():
    assert prob_to_odds(0.5, 0.0) == pytest.approx(2.0)
    assert prob_to_odds(0.5, 0.06) == pytest.approx(1 / 0.53)


def test_prob_to_odds_bounds_over_grid():
    for i in range(5, 96):
        p = i / 100
        for margin in (0.0, 0.06, 0.08, 0.5, 2.0):
            assert MIN_ODDS <= prob_to_odds(p, margin) <= MAX_ODDS


def test_prob_to_odds_clamps_extremes():
    # tiny probability inflates to the 0.05 floor -> 20.0
    assert prob_to_odds(0.01, 0.0) == pytest.approx(20.0)
    # near-certain outcome caps at 0.95 -> ~1.0526
    assert prob_to_odds(0.99, 0.0) == pytest.approx(1 / 0.95)
    assert prob_to_odds(0.9, 1.0) == pytest.approx(1 / 0.95)


def test_move_odds_stays_in_range():
    rng = random.Random(7)
    for _ in range(500):
        out = move_odds(2.0, 0.055, rng)
        assert 2.0 * (1 - 0.055) - 1e-9 <= out <= 2.0 * (1 + 0.055) + 1e-9
    assert move_odds(25.0, 0.5, random.Random(1)) <= MAX_ODDS
    assert move_odds(1.02, 0.5, random.Random(1)) >= MIN_ODDS


def test_move_odds_replays_from_seed():
    first, second = random.Random(99), random.Random(99)
    a = [move_odds(3.0, 0.04, first) for _ in range(5)]
    b = [move_odds(3.0, 0.04, second) for _ in range(5)]
    assert a == b


def test_helpers():
    assert clamp(5, 1, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert round2(1.23456) == 1.23
    assert combined_odds([]) == 1.0
    assert combined_odds([1.5, 2.0, 1.1]) == pytest.approx(3.3)
    assert band_for("two") == (1.10, 7.5)
    assert band_for("three") == (1.45, 9.5)
