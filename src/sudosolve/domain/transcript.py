"""Domain models for the terminal transcript."""

from dataclasses import dataclass
from enum import Enum

from sudosolve.domain.images import ImageRef


class EntryKind(str, Enum):
    """Kinds of lines shown in the terminal transcript."""

    COMMAND = "command"
    RESPONSE = "response"
    ERROR = "error"
    IMAGE = "image"
    COMPONENT = "component"


@dataclass(frozen=True)
class OutputEntry:
    """Single immutable transcript line."""

    kind: EntryKind
    payload: str | ImageRef

    @property
    def text(self) -> str:
        """Return the payload as display text."""
        if isinstance(self.payload, ImageRef):
            return self.payload.uri
        return self.payload
