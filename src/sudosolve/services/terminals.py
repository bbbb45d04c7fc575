"""In-memory hosting of terminal sessions."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from sudosolve.services.commands import CommandInterpreter, TerminalOptions
from sudosolve.services.progress import ProgressEstimator
from sudosolve.services.sessions import SessionState
from sudosolve.services.solver import SolveOrchestrator, SolverClient
from sudosolve.services.transcript import OutputLog

logger = logging.getLogger(__name__)


@dataclass
class TerminalSession:
    """Everything one user's terminal needs, wired together."""

    id: UUID
    log: OutputLog
    state: SessionState
    progress: ProgressEstimator
    orchestrator: SolveOrchestrator
    interpreter: CommandInterpreter
    last_active_at: datetime

    def touch(self) -> None:
        self.last_active_at = datetime.now(tz=UTC)

    def close(self) -> None:
        """Stop timers and any in-flight solve."""
        self.orchestrator.close()


@dataclass
class TerminalRegistry:
    """Creates terminal sessions and expires idle ones."""

    client: SolverClient
    options: TerminalOptions = field(default_factory=TerminalOptions)
    progress_factory: Callable[[], ProgressEstimator] = ProgressEstimator
    keep_welcome: bool = True
    ttl_seconds: int = 3600
    _sessions: dict[UUID, TerminalSession] = field(default_factory=dict)

    def create(self) -> TerminalSession:
        """Create and register a new terminal session."""
        self.expire()
        log = OutputLog(keep_welcome=self.keep_welcome)
        state = SessionState()
        progress = self.progress_factory()
        orchestrator = SolveOrchestrator(
            client=self.client, state=state, log=log, progress=progress
        )
        interpreter = CommandInterpreter(
            state=state,
            log=log,
            orchestrator=orchestrator,
            progress=progress,
            options=self.options,
        )
        session = TerminalSession(
            id=uuid4(),
            log=log,
            state=state,
            progress=progress,
            orchestrator=orchestrator,
            interpreter=interpreter,
            last_active_at=datetime.now(tz=UTC),
        )
        self._sessions[session.id] = session
        logger.info(
            "Created terminal session", extra={"session_id": str(session.id)}
        )
        return session

    def get(self, session_id: UUID) -> TerminalSession | None:
        """Return a live session and refresh its idle timer."""
        self.expire()
        session = self._sessions.get(session_id)
        if session is not None:
            session.touch()
        return session

    def close(self, session_id: UUID) -> bool:
        """Tear down a session; returns False if it was unknown."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.close()
        return True

    def close_all(self) -> None:
        for session_id in list(self._sessions):
            self.close(session_id)

    def expire(self) -> None:
        """Drop sessions idle for longer than the TTL, unless still solving."""
        cutoff = datetime.now(tz=UTC) - timedelta(seconds=self.ttl_seconds)
        for session_id, session in list(self._sessions.items()):
            if session.last_active_at < cutoff and not session.orchestrator.is_pending:
                logger.info(
                    "Expiring idle terminal session",
                    extra={"session_id": str(session_id)},
                )
                self.close(session_id)

    def active_sessions(self) -> list[TerminalSession]:
        self.expire()
        return list(self._sessions.values())
