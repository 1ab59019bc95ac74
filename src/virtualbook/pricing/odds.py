"""Odds math - probability to decimal odds with margin, and random odds drift.

Everything except ``move_odds`` is pure. Randomness comes in only through an
injected ``random.Random`` so callers can replay a simulation from a seed.
"""

from __future__ import annotations

import random

MIN_ODDS = 1.02
MAX_ODDS = 25.0

# Inflated probability is kept inside this band before inversion.
MIN_PROB = 0.05
MAX_PROB = 0.95

TWO_WAY_MARGIN = 0.06
THREE_WAY_MARGIN = 0.08

# Post-drift bands per market type
TWO_WAY_BAND = (1.10, 7.5)
THREE_WAY_BAND = (1.45, 9.5)


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def round2(value: float) -> float:
    return round(value * 100) / 100


def prob_to_odds(p: float, margin: float = TWO_WAY_MARGIN) -> float:
    """Implied probability -> decimal odds, with the bookmaker margin applied.

    The probability is inflated by ``1 + margin``, kept in [0.05, 0.95] and
    inverted; the result always lies in [1.02, 25].
    """
    pm = p * (1 + margin)
    return clamp(1 / clamp(pm, MIN_PROB, MAX_PROB), MIN_ODDS, MAX_ODDS)


def move_odds(odds: float, volatility: float, rng: random.Random) -> float:
    """Multiply odds by a uniform factor in [1 - volatility, 1 + volatility]."""
    factor = rng.uniform(1 - volatility, 1 + volatility)
    return clamp(odds * factor, MIN_ODDS, MAX_ODDS)


def band_for(market_type: str) -> tuple[float, float]:
    return THREE_WAY_BAND if market_type == "three" else TWO_WAY_BAND


def combined_odds(odds: list[float]) -> float:
    """Accumulator odds: product of the legs, rounded to 2 decimals."""
    total = 1.0
    for o in odds:
        total *= o
    return round2(total)
