"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import partial

from sudosolve.adapters.solver_client import HttpxSolverClient
from sudosolve.config import Settings
from sudosolve.services.progress import ProgressEstimator
from sudosolve.services.solver import SolverClient
from sudosolve.services.terminals import TerminalRegistry


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    solver_client: SolverClient
    terminal_registry: TerminalRegistry
    close_resources: Callable[[], Awaitable[None]]


def build_registry(settings: Settings, client: SolverClient) -> TerminalRegistry:
    """Create a terminal registry configured from settings."""
    progress_factory = partial(
        ProgressEstimator,
        increment=settings.progress_increment,
        cap=settings.progress_cap,
        interval=settings.progress_interval_seconds,
        reset_delay=settings.progress_reset_delay_seconds,
    )
    return TerminalRegistry(
        client=client,
        options=settings.terminal_options(),
        progress_factory=progress_factory,
        keep_welcome=settings.clear_keeps_welcome,
        ttl_seconds=settings.session_ttl_seconds,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    solver_client = HttpxSolverClient.create(
        solver_url=resolved_settings.solver_url,
        api_key=resolved_settings.solver_api_key,
        timeout=resolved_settings.solver_timeout_seconds,
    )
    terminal_registry = build_registry(resolved_settings, solver_client)

    async def close_resources() -> None:
        terminal_registry.close_all()
        await solver_client.close()

    return AppContainer(
        settings=resolved_settings,
        solver_client=solver_client,
        terminal_registry=terminal_registry,
        close_resources=close_resources,
    )
