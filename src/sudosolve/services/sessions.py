"""Per-terminal session state."""

from dataclasses import dataclass

from sudosolve.domain.images import ImageRef, StagedImage


@dataclass
class SessionState:
    """Tracks initialization and the images owned by a terminal session."""

    initialized: bool = False
    staged_image: StagedImage | None = None
    last_solved_image: ImageRef | None = None
    last_error: str | None = None

    def is_initialized(self) -> bool:
        """Return true once the session has been started."""
        return self.initialized

    def has_staged_image(self) -> bool:
        """Return true when an uploaded image awaits solving."""
        return self.staged_image is not None

    def has_solved_image(self) -> bool:
        """Return true when a solved image can be downloaded."""
        return self.last_solved_image is not None

    def initialize(self) -> None:
        """Mark the session as started; repeated calls are no-ops."""
        self.initialized = True

    def stage_image(self, image: StagedImage) -> None:
        """Replace the staged image and forget the previous solve result."""
        self.staged_image = image
        self.last_solved_image = None

    def record_solve_success(
        self, image: ImageRef, submitted: StagedImage | None = None
    ) -> None:
        """Store the solved image and release the image that was submitted.

        When ``submitted`` is given, a newer upload staged while the solve was
        in flight is kept.
        """
        self.last_solved_image = image
        if submitted is None or self.staged_image is submitted:
            self.staged_image = None

    def record_solve_failure(self, message: str) -> None:
        """Remember the failure; the staged image stays for a retry."""
        self.last_error = message

    def reset_session(self) -> None:
        self.initialized = False
        self.staged_image = None
        self.last_solved_image = None
        self.last_error = None
