"""Sim subcommand: headless run with optional bets."""

from __future__ import annotations

import typer

from virtualbook.metrics.pulse import fmt_money
from virtualbook.simulation.engine import MarketSimulator

app = typer.Typer(help="Headless simulation runs")


def _parse_bet(spec: str) -> tuple[str, str] | None:
    event_id, sep, sel_key = spec.partition(":")
    if not sep or not event_id or not sel_key:
        return None
    return event_id.strip(), sel_key.strip().upper()


@app.command("run")
def run_sim(
    ctx: typer.Context,
    minutes: int = typer.Option(120, "--minutes", "-m", help="Virtual minutes to simulate"),
    speed: float | None = typer.Option(None, "--speed", help="Speed multiplier (default from config)"),
    step_ms: int = typer.Option(250, "--step-ms", help="Wall-clock ms per tick"),
    seed: int | None = typer.Option(None, "--seed", help="Random seed (default from config)"),
    bet: list[str] = typer.Option([], "--bet", "-b", help="EVENT:KEY leg, repeatable (one accumulator)"),
    stake: float | None = typer.Option(None, "--stake", help="Stake for the bet (default from config)"),
) -> None:
    """Run the market for a span of virtual time and report tickets."""
    settings = ctx.obj["settings"]
    sim = MarketSimulator(
        seed=seed if seed is not None else settings.seed,
        starting_balance=settings.starting_balance,
        speed=speed if speed is not None else settings.speed,
        playing=True,
    )
    if step_ms <= 0:
        typer.echo("--step-ms must be positive")
        raise typer.Exit(1)

    for spec in bet:
        parsed = _parse_bet(spec)
        if parsed is None:
            typer.echo(f"Bad --bet {spec!r}; expected EVENT:KEY (e.g. EV7:A)")
            raise typer.Exit(1)
        result = sim.select_odds(*parsed)
        if not result.ok:
            typer.echo(f"Skipped {spec}: {result.message}")
    if sim.slip.picks:
        result = sim.place_ticket(stake if stake is not None else settings.default_stake)
        typer.echo(sim.pulse_text())
        if not result.ok:
            raise typer.Exit(1)

    start = sim.now_ms
    end = start + minutes * 60_000
    ticks = 0
    while sim.now_ms < end:
        report = sim.tick(step_ms)
        ticks += 1
        for event_id in report.finished:
            e = sim.event(event_id)
            typer.echo(f"  FINAL {e.id:<5} {e.home} {e.score.a}-{e.score.b} {e.away}  -> {e.outcome}")

    finished = sum(1 for e in sim.events if e.status == "finished")
    typer.echo(f"Ticks: {ticks}  Virtual minutes: {(sim.now_ms - start) // 60_000}  Finished: {finished}/{len(sim.events)}")
    for t in sim.ticket_history():
        legs = ", ".join(f"{leg.event_id}:{leg.sel_key}@{leg.odds_locked:.2f}" for leg in t.legs)
        typer.echo(
            f"Ticket {t.ticket_id}  {t.status.upper():<7} stake {fmt_money(t.stake)}  "
            f"odds {t.total_odds_locked:.2f}  payout {fmt_money(t.payout)}  [{legs}]"
        )
    typer.echo(f"Balance: {fmt_money(sim.balance)}")
    typer.echo(sim.pulse_text())
