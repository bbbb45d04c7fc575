"""Solve task status, outcomes and backend payloads."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel

from sudosolve.domain.images import ImageRef


class SolveStatus(str, Enum):
    """Observable status of the solve orchestrator."""

    IDLE = "idle"
    PENDING = "pending"


@dataclass(frozen=True)
class SolveSucceeded:
    """Terminal outcome carrying the solved image."""

    image: ImageRef


@dataclass(frozen=True)
class SolveFailed:
    """Terminal outcome carrying a user-facing failure message."""

    message: str


SolveOutcome = SolveSucceeded | SolveFailed


class SolveResponse(BaseModel):
    """Payload returned by the solving backend."""

    image: str | None = None
    error: str | None = None
