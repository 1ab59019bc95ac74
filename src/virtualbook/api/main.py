"""FastAPI backend - the simulator's commands and queries over HTTP."""

from __future__ import annotations

import asyncio
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import structlog
from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from virtualbook.api.schemas import (
    BoardResponse,
    ClockResponse,
    ErrorResponse,
    EventsListResponse,
    HealthResponse,
    JumpRequest,
    PickRequest,
    PlaceTicketRequest,
    PlayingRequest,
    SpeedRequest,
    TickRequest,
    TickResponse,
    TicketsResponse,
)
from virtualbook.catalog.filters import count_by_sport, filter_events, live_events, top_movers
from virtualbook.config import get_settings
from virtualbook.models import CommandResult, Event, SlipSummary
from virtualbook.simulation.engine import MarketSimulator

log = structlog.get_logger(__name__)

# Set by run_api() so the lifespan reads the same config as the CLI.
_config_profile: str | None = None
_config_dir: Path | None = None


async def run_ticker(sim: MarketSimulator, interval_sec: float, stop_event: asyncio.Event) -> None:
    """Drive sim.tick with measured wall-clock deltas until stop_event is set."""
    last = time.monotonic()
    log.info("ticker_started", interval_sec=interval_sec)
    while not stop_event.is_set():
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=interval_sec)
        except asyncio.TimeoutError:
            pass
        now = time.monotonic()
        sim.tick((now - last) * 1000)
        last = now
    log.info("ticker_stopped", virtual_now=sim.now_ms)


def create_app(
    simulator: MarketSimulator | None = None,
    autoplay: bool | None = None,
) -> FastAPI:
    """Build the API around one simulator. Without one, it is created from config at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        settings = get_settings(_config_profile, _config_dir)
        sim = simulator or MarketSimulator.from_settings(settings)
        app.state.simulator = sim
        run_background = settings.api_autoplay if autoplay is None else autoplay

        ticker_task = None
        ticker_stop = None
        if run_background:
            ticker_stop = asyncio.Event()
            ticker_task = asyncio.create_task(run_ticker(sim, settings.tick_interval_sec, ticker_stop))

        yield

        if ticker_task is not None and ticker_stop is not None:
            ticker_stop.set()
            await ticker_task

    app = FastAPI(title="VirtualBook API", version="0.1.0", lifespan=lifespan)
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    _register_routes(app)
    return app


def _error_json(code: str, message: str, status_code: int = 404) -> JSONResponse:
    """Return consistent error JSON: { detail, code }."""
    return JSONResponse(
        status_code=status_code,
        content={"detail": message, "code": code},
    )


def _sim(request: Request) -> MarketSimulator:
    return request.app.state.simulator


def _clock(sim: MarketSimulator) -> ClockResponse:
    return ClockResponse(
        virtual_now=sim.now_ms,
        speed=sim.speed,
        playing=sim.playing,
        balance=sim.balance,
        pulse=sim.pulse_text(),
    )


def _register_routes(app: FastAPI) -> None:
    # Handlers are async so every mutation runs on the event loop alongside the ticker.

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/clock", response_model=ClockResponse)
    async def clock(request: Request) -> ClockResponse:
        return _clock(_sim(request))

    @app.post("/clock/tick", response_model=TickResponse)
    async def clock_tick(request: Request, body: TickRequest) -> TickResponse:
        report = _sim(request).tick(body.wall_delta_ms)
        return TickResponse(
            virtual_now=report.virtual_now,
            advanced_ms=report.advanced_ms,
            finished=report.finished,
            settled=report.settled,
        )

    @app.post("/clock/jump", response_model=CommandResult)
    async def clock_jump(request: Request, body: JumpRequest) -> CommandResult:
        return _sim(request).jump_forward(body.minutes)

    @app.post("/clock/playing", response_model=CommandResult)
    async def clock_playing(request: Request, body: PlayingRequest) -> CommandResult:
        return _sim(request).set_playing(body.playing)

    @app.post("/clock/speed", response_model=CommandResult)
    async def clock_speed(request: Request, body: SpeedRequest) -> CommandResult:
        return _sim(request).set_speed(body.speed)

    @app.get("/events", response_model=EventsListResponse)
    async def events_list(
        request: Request,
        sport: str = Query("all"),
        status: str = Query("all", pattern="^(all|upcoming|live|finished)$"),
        q: str = Query(""),
        sort: str = Query("start_asc", pattern="^(start_asc|vol_desc|mover_desc)$"),
    ) -> EventsListResponse:
        sim = _sim(request)
        events = filter_events(sim.events, sport=sport, q=q, status=status, sort=sort)
        return EventsListResponse(events=events, total=len(events), counts=count_by_sport(sim.events))

    @app.get(
        "/events/{event_id}",
        response_model=Event,
        responses={404: {"model": ErrorResponse}},
    )
    async def event_detail(request: Request, event_id: str) -> Any:
        event = _sim(request).event(event_id)
        if event is None:
            return _error_json("not_found", f"Event not found: {event_id}")
        return event

    @app.get("/board", response_model=BoardResponse)
    async def board(request: Request, movers: int = Query(8, ge=1, le=24)) -> BoardResponse:
        sim = _sim(request)
        return BoardResponse(live=live_events(sim.events), movers=top_movers(sim.events, movers))

    @app.get("/slip", response_model=SlipSummary)
    async def slip(request: Request, stake: float = Query(0.0, ge=0)) -> SlipSummary:
        return _sim(request).slip_summary(stake)

    @app.post("/slip/picks", response_model=CommandResult)
    async def slip_add(request: Request, body: PickRequest) -> CommandResult:
        return _sim(request).select_odds(body.event_id, body.sel_key)

    @app.delete("/slip/picks/{pick_id}", response_model=CommandResult)
    async def slip_remove(request: Request, pick_id: str) -> CommandResult:
        return _sim(request).remove_pick(pick_id)

    @app.delete("/slip", response_model=CommandResult)
    async def slip_clear(request: Request) -> CommandResult:
        return _sim(request).clear_slip()

    @app.post(
        "/tickets",
        response_model=CommandResult,
        responses={409: {"model": ErrorResponse}},
    )
    async def tickets_place(request: Request, body: PlaceTicketRequest) -> Any:
        result = _sim(request).place_ticket(body.stake)
        if result.status == "rejected":
            return _error_json("insufficient_balance", result.message, status_code=409)
        return result

    @app.get("/tickets", response_model=TicketsResponse)
    async def tickets_list(request: Request) -> TicketsResponse:
        history = _sim(request).ticket_history()
        return TicketsResponse(tickets=history, total=len(history))


app = create_app()


def run_api(
    host: str = "127.0.0.1",
    port: int = 8000,
    profile: str | None = None,
    config_dir: Path | None = None,
) -> None:
    global _config_profile, _config_dir
    _config_profile = profile
    _config_dir = config_dir
    import uvicorn

    uvicorn.run("virtualbook.api.main:app", host=host, port=port, reload=False)
