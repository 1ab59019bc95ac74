"""Pulse - advisory one-line market summary and the status messages commands leave behind."""

from __future__ import annotations

from typing import Iterable

from virtualbook.models.market import Event

DEFAULT_PULSE = "Markets stable • Low volatility"
INITIAL_PULSE = "Markets initialized • Simulation running"
SLIP_CLEARED = "Slip cleared • Markets stable"
INSUFFICIENT_BALANCE = "Insufficient demo balance • Reduce stake"
SETTLED_LOSS = "Ticket settled • LOSS • Better luck next simulation"

HIGH_VOLATILITY = 0.2
ACTIVE_MOVEMENT = 0.12


def fmt_money(amount: float) -> str:
    """Euro amount with thousands separators, e.g. €1,250.00."""
    sign = "-" if amount < 0 else ""
    return f"{sign}€{abs(amount):,.2f}"


def mood(max_mover: float) -> str:
    if max_mover > HIGH_VOLATILITY:
        return "High volatility"
    if max_mover > ACTIVE_MOVEMENT:
        return "Active movement"
    return "Low volatility"


def market_pulse(events: Iterable[Event]) -> str:
    """'<mood> • Live: N • Largest mover: X.XX' over the current board."""
    events = list(events)
    live_count = sum(1 for e in events if e.status == "live")
    max_mover = max((abs(e.mover) for e in events), default=0.0)
    return f"{mood(max_mover)} • Live: {live_count} • Largest mover: {max_mover:.2f}"


def plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def slip_updated(n_picks: int, total_odds: float) -> str:
    return f"Slip updated • {plural(n_picks, 'pick')} • Total odds {total_odds:.2f}"


def pick_removed(remaining: int) -> str:
    if remaining:
        return f"Pick removed • {remaining} remaining"
    return SLIP_CLEARED


def ticket_placed(stake: float) -> str:
    return f"Demo ticket placed • Stake {fmt_money(stake)} • Watching outcomes as events finish"


def ticket_won(payout: float) -> str:
    return f"Ticket settled • WIN • Payout {fmt_money(payout)}"


def playing_changed(playing: bool) -> str:
    return "Simulation running" if playing else "Simulation paused"


def speed_changed(speed: float) -> str:
    return f"Speed set to {speed:g}×"


def jumped(minutes: int) -> str:
    return f"Jumped +{minutes}m • Simulation advanced"
