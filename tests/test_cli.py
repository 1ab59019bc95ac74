"""CLI smoke tests with typer's CliRunner."""

import pytest
from typer.testing import CliRunner

from virtualbook.cli.app import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def default_logging(monkeypatch):
    """Keep structlog unconfigured so loggers do not cache the runner's captured stdout."""
    monkeypatch.setattr("virtualbook.cli.app.configure_logging", lambda settings: None)


def test_markets_list():
    result = runner.invoke(app, ["markets", "list", "--seed", "3", "--sport", "football"])
    assert result.exit_code == 0, result.output
    assert "EV1 " in result.output
    assert "6 event(s)" in result.output
    assert "EV7 " not in result.output


def test_markets_list_bad_sort():
    result = runner.invoke(app, ["markets", "list", "--sort", "random"])
    assert result.exit_code == 1
    assert "Unknown sort" in result.output


def test_sim_run_settles_bet():
    result = runner.invoke(
        app,
        ["sim", "run", "--minutes", "120", "--speed", "10", "--step-ms", "1000", "--seed", "5", "--bet", "EV7:A", "--stake", "20"],
    )
    assert result.exit_code == 0, result.output
    assert "Demo ticket placed" in result.output
    assert "Finished: 24/24" in result.output
    assert "PENDING" not in result.output
    assert "Balance:" in result.output


def test_sim_run_rejects_bad_bet_spec():
    result = runner.invoke(app, ["sim", "run", "--bet", "EV7"])
    assert result.exit_code == 1
    assert "expected EVENT:KEY" in result.output
