"""Single-flight orchestration of solve requests."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol

from sudosolve.domain.errors import SolveError
from sudosolve.domain.images import ImageRef, StagedImage
from sudosolve.domain.solve import (
    SolveFailed,
    SolveOutcome,
    SolveStatus,
    SolveSucceeded,
)
from sudosolve.services.progress import ProgressEstimator
from sudosolve.services.sessions import SessionState
from sudosolve.services.transcript import OutputLog

logger = logging.getLogger(__name__)

SOLVED_MESSAGE = "Puzzle solved successfully! Type 'download' to save the image."
GENERIC_FAILURE = "Sorry, the puzzle could not be solved. Please try again."


class SolverClient(Protocol):
    """Interface for the Sudoku solving backend."""

    async def solve(
        self, image_bytes: bytes, *, content_type: str, filename: str
    ) -> ImageRef:
        """Return a reference to the solved image or raise SolveError."""


@dataclass
class SolveOrchestrator:
    """Runs at most one solve at a time and records its outcome."""

    client: SolverClient
    state: SessionState
    log: OutputLog
    progress: ProgressEstimator
    last_outcome: SolveOutcome | None = None
    generation: int = 0
    _task: asyncio.Task[SolveOutcome] | None = field(default=None, repr=False)

    @property
    def status(self) -> SolveStatus:
        if self._task is not None and not self._task.done():
            return SolveStatus.PENDING
        return SolveStatus.IDLE

    @property
    def is_pending(self) -> bool:
        return self.status is SolveStatus.PENDING

    def submit(self, image: StagedImage) -> asyncio.Task[SolveOutcome] | None:
        """Start solving ``image``; returns None if a solve is already running."""
        if self.is_pending:
            logger.info("Solve already in progress, ignoring %s", image.filename)
            return None
        logger.info(
            "Submitting solve",
            extra={"image_name": image.filename, "size": len(image.content)},
        )
        self.progress.begin()
        self._task = asyncio.get_running_loop().create_task(
            self._run(image, self.generation)
        )
        return self._task

    async def wait(self) -> SolveOutcome | None:
        """Wait for the in-flight solve, if any, and return its outcome."""
        if self._task is None:
            return self.last_outcome
        return await self._task

    async def _run(self, image: StagedImage, generation: int) -> SolveOutcome:
        outcome = await self._attempt(image)
        if generation != self.generation:
            logger.info(
                "Discarding solve outcome from a reset session",
                extra={"image_name": image.filename},
            )
            return outcome
        self._consume(outcome, image)
        return outcome

    async def _attempt(self, image: StagedImage) -> SolveOutcome:
        try:
            solved = await self.client.solve(
                image.content,
                content_type=image.content_type,
                filename=image.filename,
            )
        except SolveError as exc:
            logger.warning("Solver reported failure: %s", exc.message)
            return SolveFailed(message=exc.message or GENERIC_FAILURE)
        except Exception:
            logger.exception(
                "Solve request failed", extra={"image_name": image.filename}
            )
            return SolveFailed(message=GENERIC_FAILURE)
        return SolveSucceeded(image=solved)

    def _consume(self, outcome: SolveOutcome, image: StagedImage) -> None:
        if isinstance(outcome, SolveSucceeded):
            self.state.record_solve_success(outcome.image, submitted=image)
            self.log.response(SOLVED_MESSAGE)
            self.log.image(outcome.image)
        else:
            self.state.record_solve_failure(outcome.message)
            self.log.error(outcome.message)
        self.last_outcome = outcome
        self.progress.finish()

    def detach(self) -> None:
        """Stop recording the in-flight solve into this session.

        The request keeps running and still counts as pending, but its
        outcome is dropped and the progress timers are torn down.
        """
        self.generation += 1
        self.progress.cancel()

    def close(self) -> None:
        """Drop the in-flight task when the terminal is torn down."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self.progress.cancel()
