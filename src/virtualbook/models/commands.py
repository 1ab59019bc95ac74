"""CommandResult - outcome of a command issued into the simulator."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from virtualbook.models.slip import Ticket

CommandStatus = Literal["applied", "ignored", "rejected"]


class CommandResult(BaseModel):
    """applied: state changed. ignored: invalid input, nothing changed. rejected: business rule refused it."""

    status: CommandStatus
    message: str = ""
    ticket: Ticket | None = None

    @property
    def ok(self) -> bool:
        return self.status == "applied"


def applied(message: str = "", ticket: Ticket | None = None) -> CommandResult:
    return CommandResult(status="applied", message=message, ticket=ticket)


def ignored(message: str = "") -> CommandResult:
    return CommandResult(status="ignored", message=message)


def rejected(message: str) -> CommandResult:
    return CommandResult(status="rejected", message=message)
