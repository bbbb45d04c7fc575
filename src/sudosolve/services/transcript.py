"""Append-only transcript shown in the terminal."""

from collections.abc import Iterator
from dataclasses import dataclass, field

from sudosolve.domain.images import ImageRef
from sudosolve.domain.transcript import EntryKind, OutputEntry

WELCOME_MESSAGE = "Welcome to SudoSolve CLI. Type 'start' to begin."


@dataclass
class OutputLog:
    """Ordered transcript; entries are only ever appended or fully reset."""

    keep_welcome: bool = True
    _entries: list[OutputEntry] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self._entries:
            self._entries.append(_welcome_entry())

    def append(self, entry: OutputEntry) -> OutputEntry:
        """Append an entry and return it."""
        self._entries.append(entry)
        return entry

    def command(self, text: str) -> OutputEntry:
        return self.append(OutputEntry(EntryKind.COMMAND, text))

    def response(self, text: str) -> OutputEntry:
        return self.append(OutputEntry(EntryKind.RESPONSE, text))

    def error(self, text: str) -> OutputEntry:
        return self.append(OutputEntry(EntryKind.ERROR, text))

    def image(self, image: ImageRef) -> OutputEntry:
        return self.append(OutputEntry(EntryKind.IMAGE, image))

    def component(self, handle: str) -> OutputEntry:
        return self.append(OutputEntry(EntryKind.COMPONENT, handle))

    def reset(self) -> None:
        """Drop every entry, keeping only the welcome line if configured."""
        self._entries = [_welcome_entry()] if self.keep_welcome else []

    def since(self, index: int) -> list[OutputEntry]:
        """Return entries appended at or after the given position."""
        return self._entries[max(index, 0) :]

    @property
    def entries(self) -> tuple[OutputEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[OutputEntry]:
        return iter(tuple(self._entries))


def _welcome_entry() -> OutputEntry:
    return OutputEntry(EntryKind.RESPONSE, WELCOME_MESSAGE)
