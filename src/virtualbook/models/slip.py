"""Pick, Leg, Ticket - the betting slip and placed wagers."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

TicketStatus = Literal["pending", "win", "lose"]


class Pick(BaseModel):
    """Provisional selection in the slip. Odds are locked when picked."""

    pick_id: str
    event_id: str
    sel_key: str
    label: str
    odds_locked: float
    at_time: int  # virtual ms epoch


class Leg(BaseModel):
    """Locked-in selection of a placed ticket."""

    model_config = ConfigDict(frozen=True)

    event_id: str
    sel_key: str
    selection_label: str
    odds_locked: float


class Ticket(BaseModel):
    """Placed wager. Settled exactly once when all leg events have finished."""

    ticket_id: str
    placed_at: int  # virtual ms epoch
    stake: float = Field(..., ge=1, le=1_000_000)
    legs: tuple[Leg, ...]
    total_odds_locked: float
    status: TicketStatus = "pending"
    resolved_at: int | None = None
    payout: float = 0.0


class SlipSummary(BaseModel):
    """Current picks with combined odds and the payout a proposed stake would return."""

    picks: list[Pick] = Field(default_factory=list)
    total_odds: float | None = None  # None when the slip is empty
    stake: float = 0.0
    potential_payout: float | None = None
