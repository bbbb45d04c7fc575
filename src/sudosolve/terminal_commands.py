"""Terminal command configuration."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class TerminalCommand:
    """Declarative terminal command definition."""

    command: str
    description: str


class Command(Enum):
    """Enum of terminal commands (single source of truth)."""

    START = TerminalCommand("start", "Initialize the solver session")
    UPLOAD = TerminalCommand("upload", "Select a Sudoku image")
    SOLVE = TerminalCommand("solve", "Solve the uploaded image")
    DOWNLOAD = TerminalCommand("download", "Save the solved image")
    CLEAR = TerminalCommand("clear", "Clear the terminal")

    @classmethod
    def parse(cls, text: str) -> "Command | None":
        """Match a trimmed, case-folded input line to a command."""
        token = text.strip().lower()
        for entry in cls:
            if entry.value.command == token:
                return entry
        return None


def available_commands(manual_solve: bool = True) -> list[Command]:
    """Return the commands offered in the given solve mode."""
    return [
        entry for entry in Command if manual_solve or entry is not Command.SOLVE
    ]


def terminal_commands(manual_solve: bool = True) -> list[dict[str, str]]:
    """Return commands formatted for the HTTP API."""
    return [
        {"command": entry.value.command, "description": entry.value.description}
        for entry in available_commands(manual_solve)
    ]
