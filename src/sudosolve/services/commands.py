"""Command interpreter for the solver terminal."""

import logging
from dataclasses import dataclass, field
from enum import Enum

from sudosolve.domain.errors import TerminalErrorKind
from sudosolve.domain.images import ImageRef, StagedImage
from sudosolve.domain.transcript import OutputEntry
from sudosolve.services.progress import ProgressEstimator
from sudosolve.services.sessions import SessionState
from sudosolve.services.solver import SolveOrchestrator
from sudosolve.services.transcript import OutputLog
from sudosolve.terminal_commands import Command, available_commands

logger = logging.getLogger(__name__)

DOWNLOAD_FILENAME = "solved-sudoku.png"


class SideEffect(str, Enum):
    """Client-side actions requested by a command."""

    SELECT_FILE = "select_file"
    SAVE_FILE = "save_file"


@dataclass(frozen=True)
class TerminalOptions:
    """Behavior switches for the observed command-set variants."""

    manual_solve: bool = True
    clear_resets_session: bool = True


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one input event."""

    entries: list[OutputEntry]
    effect: SideEffect | None = None
    download: ImageRef | None = None
    filename: str | None = None
    error: TerminalErrorKind | None = None
    cleared: bool = False
    clear_input: bool = True


@dataclass
class CommandInterpreter:
    """State machine turning input lines into transcript updates."""

    state: SessionState
    log: OutputLog
    orchestrator: SolveOrchestrator
    progress: ProgressEstimator
    options: TerminalOptions = field(default_factory=TerminalOptions)

    def handle(self, text: str) -> CommandResult:  # noqa: PLR0911
        """Echo the input, then evaluate it against the session state."""
        mark = len(self.log)
        self.log.command(text)
        command = Command.parse(text)

        if command is Command.CLEAR:
            return self._clear()
        if command is Command.START:
            self.state.initialize()
            self.log.response(
                "SudoSolve is ready. Type 'upload' to select a Sudoku image."
            )
            return self._result(mark)
        if not self.state.is_initialized():
            return self._not_started(mark)
        if command is Command.UPLOAD:
            return self._result(mark, effect=SideEffect.SELECT_FILE)
        if command is Command.SOLVE:
            return self._solve(mark)
        if command is Command.DOWNLOAD:
            return self._download(mark)

        token = text.strip().lower()
        names = ", ".join(
            entry.value.command
            for entry in available_commands(self.options.manual_solve)
        )
        self.log.error(f"Command not found: {token}. Available commands: {names}")
        return self._result(mark, error=TerminalErrorKind.UNKNOWN_COMMAND)

    def select_file(self, filename: str, content: bytes) -> CommandResult:
        """Stage a file chosen through the file picker."""
        mark = len(self.log)
        if not self.state.is_initialized():
            return self._not_started(mark)
        if not content:
            self.log.error(f"Selected file is empty: {filename}")
            return self._result(mark, error=TerminalErrorKind.INVALID_FILE)
        try:
            image = StagedImage.from_upload(filename, content)
        except ValueError as exc:
            self.log.error(f"{exc}. Please select an image file.")
            return self._result(mark, error=TerminalErrorKind.INVALID_FILE)

        self.state.stage_image(image)
        logger.info("Staged image", extra={"image_name": filename})
        if self.options.manual_solve:
            self.log.response(
                f"File selected: {filename}. Type 'solve' to process the image."
            )
            return self._result(mark)
        self.log.response(f"File selected: {filename}.")
        return self._submit(mark, image)

    def _solve(self, mark: int) -> CommandResult:
        if not self.options.manual_solve:
            self.log.error(
                "The 'solve' command is deprecated. "
                "Puzzles are solved automatically after 'upload'."
            )
            return self._result(mark, error=TerminalErrorKind.DEPRECATED_COMMAND)
        image = self.state.staged_image
        if image is None:
            self.log.error("No image uploaded. Please use the 'upload' command first.")
            return self._result(mark, error=TerminalErrorKind.PRECONDITION)
        return self._submit(mark, image)

    def _submit(self, mark: int, image: StagedImage) -> CommandResult:
        if self.orchestrator.is_pending:
            self.log.error(
                "A puzzle is already being solved. Please wait for it to finish."
            )
            return self._result(
                mark, error=TerminalErrorKind.CONCURRENT_SOLVE_REJECTED
            )
        self.log.response("Solving puzzle, please wait...")
        self.orchestrator.submit(image)
        return self._result(mark)

    def _download(self, mark: int) -> CommandResult:
        solved = self.state.last_solved_image
        if solved is None:
            verb = "solve" if self.options.manual_solve else "upload"
            self.log.error(
                f"No solved image to download. Please '{verb}' a puzzle first."
            )
            return self._result(mark, error=TerminalErrorKind.PRECONDITION)
        self.log.response("Solved image downloaded.")
        return self._result(
            mark,
            effect=SideEffect.SAVE_FILE,
            download=solved,
            filename=DOWNLOAD_FILENAME,
        )

    def _clear(self) -> CommandResult:
        self.log.reset()
        if self.options.clear_resets_session:
            self.state.reset_session()
            self.orchestrator.detach()
        elif not self.orchestrator.is_pending:
            self.progress.cancel()
        return CommandResult(entries=list(self.log.entries), cleared=True)

    def _not_started(self, mark: int) -> CommandResult:
        self.log.error("Please type 'start' first to initialize.")
        return self._result(mark, error=TerminalErrorKind.SESSION_NOT_INITIALIZED)

    def _result(
        self,
        mark: int,
        *,
        effect: SideEffect | None = None,
        download: ImageRef | None = None,
        filename: str | None = None,
        error: TerminalErrorKind | None = None,
    ) -> CommandResult:
        return CommandResult(
            entries=self.log.since(mark),
            effect=effect,
            download=download,
            filename=filename,
            error=error,
        )
