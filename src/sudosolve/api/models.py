"""Pydantic models for the terminal HTTP API."""

from uuid import UUID

from pydantic import BaseModel

from sudosolve.domain.transcript import EntryKind, OutputEntry


class TranscriptEntry(BaseModel):
    """One transcript line as rendered by clients."""

    kind: EntryKind
    content: str

    @classmethod
    def from_entry(cls, entry: OutputEntry) -> "TranscriptEntry":
        return cls(kind=entry.kind, content=entry.text)


class CommandRequest(BaseModel):
    """A line typed into the terminal."""

    text: str


class CommandResponse(BaseModel):
    """Entries and client actions produced by one input event."""

    session_id: UUID
    entries: list[TranscriptEntry]
    effect: str | None = None
    download_url: str | None = None
    filename: str | None = None
    error: str | None = None
    cleared: bool = False
    clear_input: bool = True
    progress: int
    solving: bool


class TranscriptResponse(BaseModel):
    """Transcript snapshot for polling clients."""

    session_id: UUID
    entries: list[TranscriptEntry]
    next_index: int
    initialized: bool
    progress: int
    solving: bool


class TerminalSummary(BaseModel):
    """Admin view of a live terminal session."""

    id: UUID
    initialized: bool
    staged_image: str | None
    has_solved_image: bool
    solving: bool
    entries: int
    last_active_at: str
