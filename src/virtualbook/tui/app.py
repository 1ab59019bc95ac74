"""Textual TUI dashboard - board, slip and pulse driven by the virtual clock."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any

from textual.app import App, ComposeResult
from textual.reactive import reactive
from textual.widgets import DataTable, Footer, Header, Static

from virtualbook.catalog.filters import filter_events
from virtualbook.catalog.names import pretty_sport
from virtualbook.metrics.pulse import fmt_money
from virtualbook.simulation.engine import MarketSimulator

SPEEDS = (1.0, 2.0, 5.0, 10.0)


def fmt_time(ts_ms: int) -> str:
    """Virtual timestamp as 'Mon 14:05'."""
    return datetime.fromtimestamp(ts_ms / 1000, tz=timezone.utc).strftime("%a %H:%M")


class ClockPanel(Static):
    """Virtual time, speed, balance and pulse."""

    virtual_time = reactive("")
    speed = reactive(1.0)
    playing = reactive(True)
    balance = reactive(0.0)
    pulse = reactive("")

    def render(self) -> str:
        state = "▶" if self.playing else "⏸"
        return (
            f"[bold]{self.virtual_time}[/] {state} {self.speed:g}×  |  "
            f"Balance {fmt_money(self.balance)}  |  {self.pulse}"
        )


class EventTable(DataTable):
    """Events with status, score and live odds."""

    def __init__(self, sim: MarketSimulator, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._sim = sim
        self.cursor_type = "row"

    def on_mount(self) -> None:
        self.add_columns("Id", "Sport", "Match", "Status", "Score", "Odds", "Move", "Pick")
        self.refresh_rows()

    def refresh_rows(self) -> None:
        row = self.cursor_row
        self.clear()
        for e in filter_events(self._sim.events):
            pick = self._sim.slip.pick_for_event(e.id)
            odds = "  ".join(f"{s.key} {s.odds:.2f}" for s in e.market.selections)
            score = "-" if e.status == "upcoming" else f"{e.score.a}-{e.score.b}"
            self.add_row(
                e.id,
                pretty_sport(e.sport),
                f"{e.home} vs {e.away}",
                e.status.upper(),
                score,
                odds,
                f"{e.mover:.2f}",
                pick.sel_key if pick else "",
                key=e.id,
            )
        if self.row_count:
            self.move_cursor(row=min(row, self.row_count - 1))

    def highlighted_event_id(self) -> str | None:
        if not self.row_count:
            return None
        row_key = self.coordinate_to_cell_key(self.cursor_coordinate).row_key
        return row_key.value


class SlipPanel(Static):
    """Picks, total odds and the ticket history summary."""

    def __init__(self, sim: MarketSimulator, stake: float, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._sim = sim
        self._stake = stake

    def refresh_slip(self) -> None:
        summary = self._sim.slip_summary(self._stake)
        lines = ["[bold]Slip[/]"]
        if not summary.picks:
            lines.append("Empty - press 1/2/3 on an event to pick")
        for p in summary.picks:
            lines.append(f"  {p.event_id} {p.label} @ {p.odds_locked:.2f}")
        total = f"{summary.total_odds:.2f}" if summary.total_odds is not None else "—"
        potential = fmt_money(summary.potential_payout) if summary.potential_payout is not None else "—"
        lines.append(f"Stake {fmt_money(self._stake)}  Total {total}  Potential {potential}")
        lines.append("[bold]Tickets[/]")
        for t in self._sim.ticket_history()[:5]:
            lines.append(f"  {t.status.upper():<7} {fmt_money(t.stake)} @ {t.total_odds_locked:.2f}  {fmt_money(t.payout)}")
        self.update("\n".join(lines))


class VirtualBookTUI(App[None]):
    """VirtualBook TUI - live board, slip and tickets."""

    TITLE = "VirtualBook"
    BINDINGS = [
        ("space", "toggle_play", "Play/Pause"),
        ("f", "jump", "+15m"),
        ("s", "cycle_speed", "Speed"),
        ("1", "pick(0)", "Pick 1"),
        ("2", "pick(1)", "Pick 2"),
        ("3", "pick(2)", "Pick 3"),
        ("c", "clear_slip", "Clear"),
        ("p", "place", "Place"),
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        sim: MarketSimulator,
        tick_interval_sec: float = 0.25,
        stake: float = 10.0,
        jump_minutes: int = 15,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._sim = sim
        self._tick_interval_sec = tick_interval_sec
        self._stake = stake
        self._jump_minutes = jump_minutes
        self._last_real = time.monotonic()

    def compose(self) -> ComposeResult:
        yield Header()
        yield ClockPanel(id="clock")
        yield EventTable(self._sim, id="events")
        yield SlipPanel(self._sim, self._stake, id="slip")
        yield Footer()

    def on_mount(self) -> None:
        self._last_real = time.monotonic()
        self.set_interval(self._tick_interval_sec, self._tick)
        self._refresh()

    def _tick(self) -> None:
        now = time.monotonic()
        self._sim.tick((now - self._last_real) * 1000)
        self._last_real = now
        self._refresh()

    def _refresh(self) -> None:
        clock = self.query_one(ClockPanel)
        clock.virtual_time = fmt_time(self._sim.now_ms)
        clock.speed = self._sim.speed
        clock.playing = self._sim.playing
        clock.balance = self._sim.balance
        clock.pulse = self._sim.pulse_text()
        self.query_one(EventTable).refresh_rows()
        self.query_one(SlipPanel).refresh_slip()

    def action_toggle_play(self) -> None:
        self._sim.set_playing(not self._sim.playing)
        self._refresh()

    def action_jump(self) -> None:
        self._sim.jump_forward(self._jump_minutes)
        self._refresh()

    def action_cycle_speed(self) -> None:
        idx = SPEEDS.index(self._sim.speed) + 1 if self._sim.speed in SPEEDS else 0
        self._sim.set_speed(SPEEDS[idx % len(SPEEDS)])
        self._refresh()

    def action_pick(self, index: int) -> None:
        event_id = self.query_one(EventTable).highlighted_event_id()
        event = self._sim.event(event_id) if event_id else None
        if event is None or index >= len(event.market.selections):
            return
        self._sim.select_odds(event.id, event.market.selections[index].key)
        self._refresh()

    def action_clear_slip(self) -> None:
        self._sim.clear_slip()
        self._refresh()

    def action_place(self) -> None:
        self._sim.place_ticket(self._stake)
        self._refresh()


def run_tui(settings: Any) -> None:
    """Entry point: build a simulator from settings and run the TUI."""
    sim = MarketSimulator.from_settings(settings)
    app = VirtualBookTUI(
        sim,
        tick_interval_sec=settings.tick_interval_sec,
        stake=settings.default_stake,
        jump_minutes=settings.jump_minutes,
    )
    app.run()
