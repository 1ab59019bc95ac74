"""Canonical schema (Pydantic) - Event, Market, Selection, Pick, Ticket."""

from virtualbook.models.market import Event, Market, Score, Selection
from virtualbook.models.slip import Leg, Pick, SlipSummary, Ticket
from virtualbook.models.commands import CommandResult

__all__ = [
    "Event",
    "Market",
    "Score",
    "Selection",
    "Pick",
    "Leg",
    "Ticket",
    "SlipSummary",
    "CommandResult",
]
