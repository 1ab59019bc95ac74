"""Markets subcommand: list the generated catalog."""

from __future__ import annotations

import typer

from virtualbook.catalog.filters import SORT_KEYS, filter_events
from virtualbook.catalog.names import pretty_sport
from virtualbook.simulation.engine import MarketSimulator

app = typer.Typer(help="Inspect the simulated event catalog")


def format_odds(event) -> str:
    return "  ".join(f"{s.key} {s.odds:.2f}" for s in event.market.selections)


@app.command("list")
def list_markets(
    ctx: typer.Context,
    sport: str = typer.Option("all", "--sport", help="Sport key (football, basketball, tennis, esports) or all"),
    status: str = typer.Option("all", "--status", help="upcoming, live, finished or all"),
    q: str = typer.Option("", "--q", help="Search home/away/league"),
    sort: str = typer.Option("start_asc", "--sort", help="start_asc, vol_desc or mover_desc"),
    seed: int | None = typer.Option(None, "--seed", help="Random seed (default from config)"),
    after: int = typer.Option(0, "--after", help="Jump this many virtual minutes before listing"),
) -> None:
    """List events with their current odds."""
    if sort not in SORT_KEYS:
        typer.echo(f"Unknown sort: {sort}. Choose from: {list(SORT_KEYS)}")
        raise typer.Exit(1)
    settings = ctx.obj["settings"]
    sim = MarketSimulator(
        seed=seed if seed is not None else settings.seed,
        starting_balance=settings.starting_balance,
        playing=False,
    )
    if after > 0:
        sim.jump_forward(after)
    events = filter_events(sim.events, sport=sport, q=q, status=status, sort=sort)
    if not events:
        typer.echo("No events match.")
        return
    for e in events:
        starts_in = (e.start_at - sim.now_ms) // 60_000
        typer.echo(
            f"{e.id:<5} {pretty_sport(e.sport):<10} {e.league:<18} "
            f"{e.home} vs {e.away:<18} {starts_in:+d}m  {e.status:<8} {e.score.a}-{e.score.b} {format_odds(e)}"
        )
    typer.echo(f"{len(events)} event(s)")
