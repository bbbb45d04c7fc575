"""Error taxonomy for terminal commands."""

from enum import Enum


class TerminalErrorKind(str, Enum):
    """Categories of non-fatal errors reported in the transcript."""

    SESSION_NOT_INITIALIZED = "session_not_initialized"
    PRECONDITION = "precondition"
    UNKNOWN_COMMAND = "unknown_command"
    DEPRECATED_COMMAND = "deprecated_command"
    SOLVE_FAILURE = "solve_failure"
    CONCURRENT_SOLVE_REJECTED = "concurrent_solve_rejected"
    INVALID_FILE = "invalid_file"


class SolveError(Exception):
    """Raised by solver clients when the backend reports a failure."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
