"""HTTP surface tests via FastAPI TestClient."""

import pytest
from fastapi.testclient import TestClient

from virtualbook.api.main import create_app
from virtualbook.simulation.engine import MarketSimulator

from conftest import MINUTE, T0


@pytest.fixture
def sim():
    return MarketSimulator(T0, seed=11, playing=False)


@pytest.fixture
def client(sim):
    with TestClient(create_app(sim, autoplay=False)) as c:
        yield c


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_clock_and_controls(client):
    body = client.get("/clock").json()
    assert body["virtual_now"] == T0
    assert body["playing"] is False
    assert body["balance"] == 1000

    assert client.post("/clock/speed", json={"speed": 3}).json()["message"] == "Speed set to 3×"
    bad_speed = client.post("/clock/speed", json={"speed": 0})
    assert bad_speed.status_code == 200
    assert bad_speed.json()["status"] == "ignored"
    assert client.get("/clock").json()["speed"] == 3
    assert client.post("/clock/playing", json={"playing": True}).json()["status"] == "applied"

    tick = client.post("/clock/tick", json={"wall_delta_ms": 1000}).json()
    assert tick["advanced_ms"] == 3 * MINUTE
    assert client.get("/clock").json()["virtual_now"] == T0 + 3 * MINUTE

    jump = client.post("/clock/jump", json={"minutes": 15}).json()
    assert jump["message"] == "Jumped +15m • Simulation advanced"
    assert client.get("/clock").json()["virtual_now"] == T0 + 18 * MINUTE


def test_events_query(client):
    body = client.get("/events").json()
    assert body["total"] == 24
    assert body["counts"]["football"] == 6
    tennis = client.get("/events", params={"sport": "tennis"}).json()
    assert {e["sport"] for e in tennis["events"]} == {"tennis"}
    assert client.get("/events", params={"sort": "sideways"}).status_code == 422

    assert client.get("/events/EV1").json()["market"]["type"] == "three"
    missing = client.get("/events/EV99")
    assert missing.status_code == 404
    assert missing.json()["code"] == "not_found"


def test_board(client):
    client.post("/clock/jump", json={"minutes": 15})
    body = client.get("/board").json()
    assert all(e["status"] == "live" for e in body["live"])
    assert len(body["movers"]) == 8


def test_slip_and_ticket_flow(client, sim):
    assert client.post("/slip/picks", json={"event_id": "EV7", "sel_key": "Z"}).json()["status"] == "ignored"
    added = client.post("/slip/picks", json={"event_id": "EV7", "sel_key": "A"}).json()
    assert added["status"] == "applied"

    slip = client.get("/slip", params={"stake": 10}).json()
    assert len(slip["picks"]) == 1
    odds = slip["picks"][0]["odds_locked"]
    assert slip["total_odds"] == pytest.approx(odds)
    assert slip["potential_payout"] == pytest.approx(10 * odds)

    placed = client.post("/tickets", json={"stake": 25}).json()
    assert placed["status"] == "applied"
    assert placed["ticket"]["stake"] == 25
    assert client.get("/clock").json()["balance"] == 975
    assert client.get("/slip").json()["picks"] == []

    tickets = client.get("/tickets").json()
    assert tickets["total"] == 1
    assert tickets["tickets"][0]["status"] == "pending"

    sim.event("EV7").score.a = 3
    client.post("/clock/jump", json={"minutes": 40})
    ticket = client.get("/tickets").json()["tickets"][0]
    assert ticket["status"] == "win"
    assert ticket["payout"] == pytest.approx(25 * odds, abs=0.01)


def test_insufficient_balance_is_409(client):
    client.post("/slip/picks", json={"event_id": "EV2", "sel_key": "D"})
    resp = client.post("/tickets", json={"stake": 5000})
    assert resp.status_code == 409
    assert resp.json() == {"detail": "Insufficient demo balance • Reduce stake", "code": "insufficient_balance"}
    assert client.get("/clock").json()["balance"] == 1000
    assert len(client.get("/slip").json()["picks"]) == 1


def test_remove_and_clear(client):
    pick = client.post("/slip/picks", json={"event_id": "EV9", "sel_key": "B"})
    pick_id = client.get("/slip").json()["picks"][0]["pick_id"]
    assert pick.json()["status"] == "applied"
    assert client.delete("/slip/picks/unknown").json()["status"] == "ignored"
    assert client.delete(f"/slip/picks/{pick_id}").json()["status"] == "applied"
    assert client.delete("/slip").json()["status"] == "ignored"


def test_non_positive_jump_is_ignored(client):
    resp = client.post("/clock/jump", json={"minutes": 0})
    assert resp.status_code == 200
    assert resp.json()["status"] == "ignored"
    assert client.get("/clock").json()["virtual_now"] == T0
