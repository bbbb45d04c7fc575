"""Tests for single-flight solve orchestration."""

import asyncio

from sudosolve.domain.images import StagedImage
from sudosolve.domain.solve import SolveFailed, SolveStatus, SolveSucceeded
from sudosolve.domain.transcript import EntryKind
from sudosolve.services.sessions import SessionState
from sudosolve.services.solver import (
    GENERIC_FAILURE,
    SOLVED_MESSAGE,
    SolveOrchestrator,
)
from sudosolve.services.transcript import OutputLog
from tests.conftest import PNG_BYTES, FakeSolverClient, quiet_progress


def _orchestrator(client: FakeSolverClient) -> SolveOrchestrator:
    return SolveOrchestrator(
        client=client,
        state=SessionState(initialized=True),
        log=OutputLog(),
        progress=quiet_progress(),
    )


def test_success_records_image_and_appends_response_then_image() -> None:
    client = FakeSolverClient()
    orchestrator = _orchestrator(client)
    staged = StagedImage.from_upload("puzzle.png", PNG_BYTES)
    orchestrator.state.stage_image(staged)

    async def scenario() -> object:
        task = orchestrator.submit(staged)
        assert task is not None
        return await task

    outcome = asyncio.run(scenario())

    assert outcome == SolveSucceeded(image=client.result)
    assert orchestrator.state.last_solved_image == client.result
    assert orchestrator.state.staged_image is None
    tail = orchestrator.log.entries[-2:]
    assert [entry.kind for entry in tail] == [EntryKind.RESPONSE, EntryKind.IMAGE]
    assert tail[0].text == SOLVED_MESSAGE
    assert tail[1].payload == client.result
    assert client.calls == [(PNG_BYTES, "image/png", "puzzle.png")]
    assert orchestrator.status is SolveStatus.IDLE
    assert orchestrator.progress.value == 100


def test_backend_failure_is_reported_verbatim() -> None:
    orchestrator = _orchestrator(FakeSolverClient(error="No Sudoku grid detected."))
    staged = StagedImage.from_upload("puzzle.png", PNG_BYTES)
    orchestrator.state.stage_image(staged)

    async def scenario() -> object:
        orchestrator.submit(staged)
        return await orchestrator.wait()

    outcome = asyncio.run(scenario())

    assert outcome == SolveFailed(message="No Sudoku grid detected.")
    assert orchestrator.state.staged_image is staged
    assert orchestrator.state.last_error == "No Sudoku grid detected."
    last = orchestrator.log.entries[-1]
    assert last.kind is EntryKind.ERROR
    assert last.text == "No Sudoku grid detected."


def test_unexpected_exception_becomes_generic_failure() -> None:
    orchestrator = _orchestrator(FakeSolverClient(exception=ConnectionError("down")))
    staged = StagedImage.from_upload("puzzle.png", PNG_BYTES)

    async def scenario() -> object:
        orchestrator.submit(staged)
        return await orchestrator.wait()

    assert asyncio.run(scenario()) == SolveFailed(message=GENERIC_FAILURE)
    assert orchestrator.log.entries[-1].text == GENERIC_FAILURE


def test_second_submit_while_pending_is_rejected() -> None:
    client = FakeSolverClient()
    orchestrator = _orchestrator(client)
    staged = StagedImage.from_upload("puzzle.png", PNG_BYTES)

    async def scenario() -> tuple[bool, bool, SolveStatus]:
        client.gate = asyncio.Event()
        first = orchestrator.submit(staged)
        await asyncio.sleep(0)
        second = orchestrator.submit(staged)
        status = orchestrator.status
        client.gate.set()
        await orchestrator.wait()
        return first is not None, second is None, status

    first_ok, second_rejected, status = asyncio.run(scenario())

    assert first_ok
    assert second_rejected
    assert status is SolveStatus.PENDING
    assert len(client.calls) == 1
    assert orchestrator.status is SolveStatus.IDLE


def test_close_cancels_in_flight_task() -> None:
    client = FakeSolverClient()
    orchestrator = _orchestrator(client)
    staged = StagedImage.from_upload("puzzle.png", PNG_BYTES)

    async def scenario() -> bool:
        client.gate = asyncio.Event()
        task = orchestrator.submit(staged)
        await asyncio.sleep(0)
        orchestrator.close()
        await asyncio.sleep(0.01)
        return task is not None and task.cancelled()

    assert asyncio.run(scenario())
    assert orchestrator.last_outcome is None
    assert orchestrator.progress.value == 0
