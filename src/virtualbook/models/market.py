"""Selection, Market, Event - simulated sports entities."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

EventStatus = Literal["upcoming", "live", "finished"]
MarketType = Literal["two", "three"]

TWO_WAY_KEYS = ("A", "B")
THREE_WAY_KEYS = ("H", "D", "A")


class Selection(BaseModel):
    """One bettable outcome of a market."""

    key: str
    label: str
    odds: float = Field(..., ge=1.02, le=25, description="Decimal odds")


class Market(BaseModel):
    """Two-way (A/B) or three-way (H/D/A) market. Shape is fixed; only odds move."""

    type: MarketType
    selections: list[Selection] = Field(default_factory=list)

    def selection(self, key: str) -> Selection | None:
        for sel in self.selections:
            if sel.key == key:
                return sel
        return None

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(s.key for s in self.selections)


class Score(BaseModel):
    """Running score; a is home, b is away."""

    a: int = Field(0, ge=0)
    b: int = Field(0, ge=0)


class Event(BaseModel):
    """One fictional contest on the virtual timeline."""

    id: str
    sport: str
    league: str
    home: str
    away: str
    start_at: int  # virtual ms epoch
    end_at: int  # virtual ms epoch
    status: EventStatus = "upcoming"
    score: Score = Field(default_factory=Score)
    popularity: int = Field(..., ge=40, le=100)
    mover: float = Field(0.0, ge=0)  # largest odds change this tick
    market: Market
    outcome: str | None = None  # set once when the event finishes
