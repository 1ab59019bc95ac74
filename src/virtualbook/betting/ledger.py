"""Ticket ledger - placement against the balance and settlement as events finish."""

from __future__ import annotations

import math
from typing import Mapping

import structlog

from virtualbook.betting.slip import MAX_STAKE, Slip, new_id, selection_text
from virtualbook.metrics import pulse
from virtualbook.models.commands import CommandResult, applied, ignored, rejected
from virtualbook.models.market import Event
from virtualbook.models.slip import Leg, Ticket
from virtualbook.pricing.odds import clamp, round2

log = structlog.get_logger(__name__)

MIN_STAKE = 1


def normalize_stake(stake_input: float | str | None) -> float:
    """Coerce stake input to a number and clamp it to [1, 1,000,000]."""
    try:
        stake = float(stake_input or 0)
    except (TypeError, ValueError):
        stake = 0.0
    if not math.isfinite(stake):
        stake = 0.0
    return clamp(stake, MIN_STAKE, MAX_STAKE)


class TicketLedger:
    """Single local balance and the history of placed tickets."""

    def __init__(self, balance: float = 1000.0) -> None:
        self.balance = balance
        self.tickets: list[Ticket] = []

    def place(
        self,
        slip: Slip,
        events: Mapping[str, Event],
        stake_input: float | str | None,
        now: int,
    ) -> CommandResult:
        """Turn the slip into a pending ticket, debit the stake and empty the slip.

        Nothing changes if the slip is empty, holds a pick on a finished or
        unknown event, or the stake exceeds the balance.
        """
        if not slip.picks:
            return ignored("Slip is empty")
        for p in slip.picks:
            event = events.get(p.event_id)
            if event is None or event.status == "finished":
                return ignored(f"Event closed: {p.event_id}")

        stake = normalize_stake(stake_input)
        if stake > self.balance:
            log.info("ticket_rejected", stake=stake, balance=self.balance)
            return rejected(pulse.INSUFFICIENT_BALANCE)

        legs = []
        for p in slip.picks:
            legs.append(
                Leg(
                    event_id=p.event_id,
                    sel_key=p.sel_key,
                    selection_label=selection_text(events[p.event_id], p.sel_key),
                    odds_locked=p.odds_locked,
                )
            )
        ticket = Ticket(
            ticket_id=new_id(),
            placed_at=now,
            stake=stake,
            legs=tuple(legs),
            total_odds_locked=slip.total_odds(),
        )

        self.balance = round2(self.balance - stake)
        self.tickets.append(ticket)
        slip.picks = []
        log.info(
            "ticket_placed",
            ticket_id=ticket.ticket_id,
            stake=stake,
            legs=len(legs),
            total_odds=ticket.total_odds_locked,
            balance=self.balance,
        )
        return applied(pulse.ticket_placed(stake), ticket=ticket)

    def resolve_tickets_for_event(
        self,
        event_id: str,
        events: Mapping[str, Event],
        now: int,
    ) -> list[Ticket]:
        """Settle every pending ticket whose legs are all on finished events. Returns settled tickets.

        Tickets are settled at most once; a second call finds nothing pending to settle.
        """
        settled: list[Ticket] = []
        for ticket in self.tickets:
            if ticket.status != "pending":
                continue
            if not self._all_legs_finished(ticket, events):
                continue

            won = all(events[leg.event_id].outcome == leg.sel_key for leg in ticket.legs)
            ticket.resolved_at = now
            if won:
                ticket.status = "win"
                ticket.payout = round2(ticket.stake * ticket.total_odds_locked)
                self.balance = round2(self.balance + ticket.payout)
            else:
                ticket.status = "lose"
                ticket.payout = 0.0
            log.info(
                "ticket_settled",
                ticket_id=ticket.ticket_id,
                trigger_event=event_id,
                status=ticket.status,
                payout=ticket.payout,
                balance=self.balance,
            )
            settled.append(ticket)
        return settled

    def history(self) -> list[Ticket]:
        """Tickets newest first."""
        return sorted(reversed(self.tickets), key=lambda t: t.placed_at, reverse=True)

    @staticmethod
    def _all_legs_finished(ticket: Ticket, events: Mapping[str, Event]) -> bool:
        for leg in ticket.legs:
            event = events.get(leg.event_id)
            if event is None:
                log.warning("ticket_leg_missing_event", ticket_id=ticket.ticket_id, event_id=leg.event_id)
                return False
            if event.status != "finished":
                return False
        return True
