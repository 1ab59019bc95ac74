"""Pydantic schemas for API request/response consistency and OpenAPI docs."""

from __future__ import annotations

from pydantic import BaseModel, Field

from virtualbook.models import Event, Ticket


# --- Health ---
class HealthResponse(BaseModel):
    status: str = "ok"


# --- Error (consistent shape for 4xx/5xx) ---
class ErrorResponse(BaseModel):
    detail: str = Field(..., description="Human-readable message")
    code: str | None = Field(None, description="Machine-readable code, e.g. not_found, insufficient_balance")


# --- Clock ---
class ClockResponse(BaseModel):
    virtual_now: int = Field(..., description="Virtual time (ms epoch)")
    speed: float
    playing: bool
    balance: float
    pulse: str


class TickRequest(BaseModel):
    wall_delta_ms: float = Field(..., ge=0, description="Wall-clock ms since the previous tick")


class TickResponse(BaseModel):
    virtual_now: int
    advanced_ms: int
    finished: list[str]
    settled: list[Ticket]


class JumpRequest(BaseModel):
    minutes: int = 15


class PlayingRequest(BaseModel):
    playing: bool


class SpeedRequest(BaseModel):
    speed: float


# --- Events ---
class EventsListResponse(BaseModel):
    events: list[Event]
    total: int
    counts: dict[str, int] = Field(default_factory=dict, description="Event counts per sport ('all' included)")


class BoardResponse(BaseModel):
    live: list[Event]
    movers: list[Event]


# --- Slip and tickets ---
class PickRequest(BaseModel):
    event_id: str
    sel_key: str


class PlaceTicketRequest(BaseModel):
    stake: float = Field(..., description="Clamped to [1, 1000000]")


class TicketsResponse(BaseModel):
    tickets: list[Ticket]
    total: int
