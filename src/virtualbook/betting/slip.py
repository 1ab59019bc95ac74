"""Betting slip - one provisional pick per event, odds locked at the moment of picking."""

from __future__ import annotations

import uuid

from virtualbook.metrics import pulse
from virtualbook.models.commands import CommandResult, applied, ignored
from virtualbook.models.market import Event
from virtualbook.models.slip import Pick
from virtualbook.pricing.odds import clamp, combined_odds

MAX_STAKE = 1_000_000


def new_id() -> str:
    return uuid.uuid4().hex[:12]


def selection_text(event: Event, sel_key: str) -> str:
    """Readable description of a selection, e.g. 'Orion FC to win' or 'Draw'."""
    if event.market.type == "three":
        if sel_key == "H":
            return f"{event.home} to win"
        if sel_key == "D":
            return "Draw"
        if sel_key == "A":
            return f"{event.away} to win"
    else:
        if sel_key == "A":
            return f"{event.home} win"
        if sel_key == "B":
            return f"{event.away} win"
    return "Selection"


class Slip:
    """Ordered picks, at most one per event."""

    def __init__(self) -> None:
        self.picks: list[Pick] = []

    def __len__(self) -> int:
        return len(self.picks)

    def add_or_replace(self, event: Event | None, sel_key: str, now: int) -> CommandResult:
        """Pick sel_key on event. Replaces an existing pick for the same event, keeping its id."""
        if event is None:
            return ignored("Unknown event")
        if event.status == "finished":
            return ignored("Event finished")
        sel = event.market.selection(sel_key)
        if sel is None:
            return ignored("Unknown selection")

        existing = self._index_for_event(event.id)
        pick = Pick(
            pick_id=self.picks[existing].pick_id if existing is not None else new_id(),
            event_id=event.id,
            sel_key=sel_key,
            label=selection_text(event, sel_key),
            odds_locked=sel.odds,
            at_time=now,
        )
        if existing is not None:
            self.picks[existing] = pick
        else:
            self.picks.append(pick)
        return applied(pulse.slip_updated(len(self.picks), self.total_odds()))

    def remove(self, pick_id: str) -> CommandResult:
        remaining = [p for p in self.picks if p.pick_id != pick_id]
        if len(remaining) == len(self.picks):
            return ignored("Unknown pick")
        self.picks = remaining
        return applied(pulse.pick_removed(len(self.picks)))

    def clear(self) -> CommandResult:
        if not self.picks:
            return ignored("Slip already empty")
        self.picks = []
        return applied(pulse.SLIP_CLEARED)

    def total_odds(self) -> float:
        """Product of locked odds; 1.0 for an empty slip."""
        return combined_odds([p.odds_locked for p in self.picks])

    def potential_payout(self, stake: float) -> float | None:
        if not self.picks:
            return None
        return clamp(stake, 0, MAX_STAKE) * self.total_odds()

    def pick_for_event(self, event_id: str) -> Pick | None:
        idx = self._index_for_event(event_id)
        return self.picks[idx] if idx is not None else None

    def _index_for_event(self, event_id: str) -> int | None:
        for i, p in enumerate(self.picks):
            if p.event_id == event_id:
                return i
        return None
