"""TUI dashboard command."""

import typer

from virtualbook.tui.app import run_tui

app = typer.Typer(help="Launch TUI dashboard")


@app.callback(invoke_without_command=True)
def tui(ctx: typer.Context) -> None:
    """Launch the Textual dashboard (board, slip, pulse)."""
    if ctx.invoked_subcommand is not None:
        return
    settings = ctx.obj["settings"]
    run_tui(settings)
