"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field

import pytest

from sudosolve.config import Settings
from sudosolve.containers import AppContainer, build_registry
from sudosolve.domain.errors import SolveError
from sudosolve.domain.images import ImageRef
from sudosolve.services.commands import TerminalOptions
from sudosolve.services.progress import ProgressEstimator
from sudosolve.services.solver import SolverClient
from sudosolve.services.terminals import TerminalRegistry, TerminalSession

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"puzzle-pixels"
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"other-puzzle"
SOLVED_BYTES = b"\x89PNG\r\n\x1a\n" + b"solved-pixels"


@dataclass
class FakeSolverClient(SolverClient):
    """Fake solver that records calls and returns a fixed image."""

    result: ImageRef = field(default_factory=lambda: ImageRef.from_bytes(SOLVED_BYTES))
    error: str | None = None
    exception: Exception | None = None
    gate: asyncio.Event | None = None
    calls: list[tuple[bytes, str, str]] = field(default_factory=list)

    async def solve(
        self, image_bytes: bytes, *, content_type: str, filename: str
    ) -> ImageRef:
        self.calls.append((image_bytes, content_type, filename))
        if self.gate is not None:
            await self.gate.wait()
        if self.exception is not None:
            raise self.exception
        if self.error is not None:
            raise SolveError(self.error)
        return self.result


def quiet_progress() -> ProgressEstimator:
    """Progress estimator whose timers never fire during a test."""
    return ProgressEstimator(interval=60.0, reset_delay=60.0)


def make_terminal(
    client: SolverClient | None = None,
    options: TerminalOptions | None = None,
    keep_welcome: bool = True,
) -> TerminalSession:
    """Build a single terminal session around a fake solver."""
    registry = TerminalRegistry(
        client=client or FakeSolverClient(),
        options=options or TerminalOptions(),
        progress_factory=quiet_progress,
        keep_welcome=keep_welcome,
    )
    return registry.create()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        solver_url="https://solver.example.test/solve",
        admin_token="admin-token",
        progress_interval_seconds=60.0,
        progress_reset_delay_seconds=60.0,
        _env_file=None,
    )


@pytest.fixture
def solver_client() -> FakeSolverClient:
    return FakeSolverClient()


@pytest.fixture
def container(settings: Settings, solver_client: FakeSolverClient) -> AppContainer:
    terminal_registry = build_registry(settings, solver_client)

    async def close_resources() -> None:
        terminal_registry.close_all()

    return AppContainer(
        settings=settings,
        solver_client=solver_client,
        terminal_registry=terminal_registry,
        close_resources=close_resources,
    )
