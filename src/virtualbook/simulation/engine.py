"""Market simulator - the single state container and the command/query surface.

One ``MarketSimulator`` owns the virtual clock, the event catalog, the slip,
the ticket ledger and the pulse line. Every mutation happens inside one of its
methods and runs to completion; nothing here blocks or is reentrant.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field

import structlog

from virtualbook.betting.ledger import TicketLedger
from virtualbook.betting.slip import Slip
from virtualbook.catalog.generator import generate_events
from virtualbook.config.settings import Settings
from virtualbook.metrics import pulse
from virtualbook.models.commands import CommandResult, applied, ignored
from virtualbook.models.market import Event
from virtualbook.models.slip import SlipSummary, Ticket
from virtualbook.simulation.clock import VirtualClock, align_to_minute
from virtualbook.simulation.drift import simulate_odds_movement
from virtualbook.simulation.lifecycle import simulate_live_scores, update_event_statuses

log = structlog.get_logger(__name__)

DEFAULT_JUMP_MINUTES = 15


@dataclass
class TickReport:
    """What a single tick or jump changed."""

    virtual_now: int
    advanced_ms: int = 0
    finished: list[str] = field(default_factory=list)  # event ids
    settled: list[Ticket] = field(default_factory=list)
    goals: int = 0


class MarketSimulator:
    """Virtual-time sports market: clock, events, slip, ledger, pulse."""

    def __init__(
        self,
        base_time: int | None = None,
        *,
        seed: int | None = None,
        rng: random.Random | None = None,
        starting_balance: float = 1000.0,
        speed: float = 1.0,
        playing: bool = True,
    ) -> None:
        if base_time is None:
            base_time = int(time.time() * 1000)
        self.rng = rng or random.Random(seed)
        self.clock = VirtualClock(now_ms=align_to_minute(base_time), playing=playing)
        self.clock.set_speed(speed)
        self.events: list[Event] = generate_events(self.clock.now_ms, self.rng)
        self._events_by_id = {e.id: e for e in self.events}
        self.slip = Slip()
        self.ledger = TicketLedger(balance=starting_balance)
        self.pulse = pulse.INITIAL_PULSE
        self._settled_this_step: list[Ticket] = []
        log.info(
            "simulator_initialized",
            virtual_now=self.clock.now_ms,
            events=len(self.events),
            balance=starting_balance,
            seed=seed,
        )

    @classmethod
    def from_settings(cls, settings: Settings, base_time: int | None = None) -> MarketSimulator:
        return cls(
            base_time,
            seed=settings.seed,
            starting_balance=settings.starting_balance,
            speed=settings.speed,
            playing=settings.playing,
        )

    # --- Queries ---

    @property
    def now_ms(self) -> int:
        return self.clock.now_ms

    @property
    def balance(self) -> float:
        return self.ledger.balance

    @property
    def playing(self) -> bool:
        return self.clock.playing

    @property
    def speed(self) -> float:
        return self.clock.speed

    @property
    def tickets(self) -> list[Ticket]:
        return self.ledger.tickets

    def pulse_text(self) -> str:
        return self.pulse or pulse.DEFAULT_PULSE

    def event(self, event_id: str) -> Event | None:
        return self._events_by_id.get(event_id)

    def slip_summary(self, stake: float = 0.0) -> SlipSummary:
        picks = list(self.slip.picks)
        if not picks:
            return SlipSummary(stake=stake)
        return SlipSummary(
            picks=picks,
            total_odds=self.slip.total_odds(),
            stake=stake,
            potential_payout=self.slip.potential_payout(stake),
        )

    def ticket_history(self) -> list[Ticket]:
        return self.ledger.history()

    # --- Time ---

    def tick(self, wall_delta_ms: float) -> TickReport:
        """Advance by one wall-clock step. Does nothing while paused.

        Order: clock, status and outcome (settling tickets as events finish),
        live scores, odds drift, pulse.
        """
        if not self.clock.playing:
            return TickReport(virtual_now=self.clock.now_ms)

        advanced = self.clock.advance(wall_delta_ms)
        report = self._refresh_statuses()
        report.advanced_ms = advanced
        report.goals = simulate_live_scores(self.events, self.rng)
        simulate_odds_movement(self.events, self.rng)
        self.pulse = self._settlement_pulse(report.settled) or pulse.market_pulse(self.events)
        return report

    def jump_forward(self, minutes: int = DEFAULT_JUMP_MINUTES) -> CommandResult:
        """Skip ahead whole virtual minutes, playing or not. Scores are not simulated during a jump."""
        if minutes <= 0:
            return ignored("Jump must be positive")
        advanced = self.clock.jump(minutes)
        report = self._refresh_statuses()
        simulate_odds_movement(self.events, self.rng)
        self.pulse = pulse.jumped(minutes)
        log.info(
            "clock_jumped",
            minutes=minutes,
            advanced_ms=advanced,
            finished=len(report.finished),
            settled=len(report.settled),
        )
        return applied(self.pulse)

    def set_playing(self, playing: bool) -> CommandResult:
        self.clock.playing = bool(playing)
        self.pulse = pulse.playing_changed(self.clock.playing)
        return applied(self.pulse)

    def set_speed(self, speed: float) -> CommandResult:
        if not self.clock.set_speed(speed):
            return ignored("Speed must be a positive number")
        self.pulse = pulse.speed_changed(self.clock.speed)
        return applied(self.pulse)

    # --- Slip and tickets ---

    def select_odds(self, event_id: str, sel_key: str) -> CommandResult:
        return self._apply(self.slip.add_or_replace(self.event(event_id), sel_key, self.clock.now_ms))

    def remove_pick(self, pick_id: str) -> CommandResult:
        return self._apply(self.slip.remove(pick_id))

    def clear_slip(self) -> CommandResult:
        return self._apply(self.slip.clear())

    def place_ticket(self, stake: float | str | None) -> CommandResult:
        return self._apply(self.ledger.place(self.slip, self._events_by_id, stake, self.clock.now_ms))

    # --- Internals ---

    def _apply(self, result: CommandResult) -> CommandResult:
        """Ignored commands leave the pulse alone; applied and rejected ones report through it."""
        if result.status != "ignored":
            self.pulse = result.message
        return result

    def _refresh_statuses(self) -> TickReport:
        self._settled_this_step = []
        finished = update_event_statuses(
            self.events,
            self.clock.now_ms,
            self.rng,
            on_finished=self._on_event_finished,
        )
        return TickReport(
            virtual_now=self.clock.now_ms,
            finished=[e.id for e in finished],
            settled=list(self._settled_this_step),
        )

    def _on_event_finished(self, event: Event) -> None:
        settled = self.ledger.resolve_tickets_for_event(event.id, self._events_by_id, self.clock.now_ms)
        self._settled_this_step.extend(settled)

    @staticmethod
    def _settlement_pulse(settled: list[Ticket]) -> str | None:
        if not settled:
            return None
        last = settled[-1]
        if last.status == "win":
            return pulse.ticket_won(last.payout)
        return pulse.SETTLED_LOSS


def initialize(base_time: int | None = None, **kwargs) -> MarketSimulator:
    """Create a simulator with its catalog generated at base_time."""
    return MarketSimulator(base_time, **kwargs)
