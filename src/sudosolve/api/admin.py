"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from sudosolve.api.models import TerminalSummary

if TYPE_CHECKING:
    from sudosolve.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/terminals", dependencies=[Depends(require_admin)])
async def list_terminals(request: Request) -> dict[str, object]:
    """Return live terminal sessions."""
    container: AppContainer = request.app.state.container
    summaries = [
        TerminalSummary(
            id=session.id,
            initialized=session.state.is_initialized(),
            staged_image=(
                session.state.staged_image.filename
                if session.state.staged_image
                else None
            ),
            has_solved_image=session.state.has_solved_image(),
            solving=session.orchestrator.is_pending,
            entries=len(session.log),
            last_active_at=session.last_active_at.isoformat(),
        )
        for session in container.terminal_registry.active_sessions()
    ]
    return {"terminals": [summary.model_dump(mode="json") for summary in summaries]}
