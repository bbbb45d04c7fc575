"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, Response, status

from sudosolve.api.admin import router as admin_router
from sudosolve.api.models import (
    CommandRequest,
    CommandResponse,
    TranscriptEntry,
    TranscriptResponse,
)
from sudosolve.app_logging import configure_logging
from sudosolve.containers import AppContainer
from sudosolve.services.commands import CommandResult
from sudosolve.services.terminals import TerminalSession
from sudosolve.terminal_commands import terminal_commands


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/terminals/commands")
    async def list_commands(request: Request) -> dict[str, object]:
        """Return the commands available in the configured solve mode."""
        state_container: AppContainer = request.app.state.container
        return {"commands": terminal_commands(state_container.settings.manual_solve)}

    @app.post("/terminals", status_code=status.HTTP_201_CREATED)
    async def create_terminal(request: Request) -> TranscriptResponse:
        """Open a new terminal session showing the welcome line."""
        state_container: AppContainer = request.app.state.container
        session = state_container.terminal_registry.create()
        return _transcript(session, since=0)

    @app.post("/terminals/{session_id}/commands")
    async def run_command(
        session_id: UUID, payload: CommandRequest, request: Request
    ) -> CommandResponse:
        """Interpret one line typed into the terminal."""
        session = _get_session(request, session_id)
        result = session.interpreter.handle(payload.text)
        return _command_response(session, result)

    @app.post("/terminals/{session_id}/files")
    async def select_file(
        session_id: UUID, filename: str, request: Request
    ) -> CommandResponse:
        """Receive the file chosen after an 'upload' command."""
        state_container: AppContainer = request.app.state.container
        session = _get_session(request, session_id)
        limit = state_container.settings.max_upload_bytes
        declared = request.headers.get("content-length")
        if declared is not None and declared.isdigit() and int(declared) > limit:
            raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE)
        content = await request.body()
        if len(content) > limit:
            raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE)
        result = session.interpreter.select_file(filename, content)
        return _command_response(session, result)

    @app.get("/terminals/{session_id}/transcript")
    async def read_transcript(
        session_id: UUID, request: Request, since: int = 0
    ) -> TranscriptResponse:
        """Return transcript entries from ``since`` onwards."""
        session = _get_session(request, session_id)
        return _transcript(session, since=since)

    @app.get("/terminals/{session_id}/download")
    async def download(session_id: UUID, request: Request) -> Response:
        """Serve the solved image as a file attachment."""
        session = _get_session(request, session_id)
        solved = session.state.last_solved_image
        if solved is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No solved image to download.",
            )
        try:
            content = solved.content
        except ValueError:
            logger.exception(
                "Solved image is not downloadable",
                extra={"session_id": str(session_id)},
            )
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Solved image is unavailable.",
            ) from None
        return Response(
            content=content,
            media_type=solved.content_type,
            headers={
                "Content-Disposition": 'attachment; filename="solved-sudoku.png"'
            },
        )

    @app.delete("/terminals/{session_id}")
    async def close_terminal(session_id: UUID, request: Request) -> dict[str, str]:
        """Tear down a terminal session."""
        state_container: AppContainer = request.app.state.container
        if not state_container.terminal_registry.close(session_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"status": "closed"}

    return app


def _get_session(request: Request, session_id: UUID) -> TerminalSession:
    """Look up a live terminal session or raise 404."""
    state_container: AppContainer = request.app.state.container
    session = state_container.terminal_registry.get(session_id)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Unknown terminal session.",
        )
    return session


def _command_response(
    session: TerminalSession, result: CommandResult
) -> CommandResponse:
    download_url = None
    if result.download is not None:
        download_url = f"/terminals/{session.id}/download"
    return CommandResponse(
        session_id=session.id,
        entries=[TranscriptEntry.from_entry(entry) for entry in result.entries],
        effect=result.effect.value if result.effect else None,
        download_url=download_url,
        filename=result.filename,
        error=result.error.value if result.error else None,
        cleared=result.cleared,
        clear_input=result.clear_input,
        progress=session.progress.value,
        solving=session.orchestrator.is_pending,
    )


def _transcript(session: TerminalSession, since: int) -> TranscriptResponse:
    entries = session.log.since(since)
    return TranscriptResponse(
        session_id=session.id,
        entries=[TranscriptEntry.from_entry(entry) for entry in entries],
        next_index=len(session.log),
        initialized=session.state.is_initialized(),
        progress=session.progress.value,
        solving=session.orchestrator.is_pending,
    )
