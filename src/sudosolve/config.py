"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from sudosolve.services.commands import TerminalOptions

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    solver_url: str
    admin_token: str
    solver_api_key: str | None = None
    solver_timeout_seconds: float = 60.0
    manual_solve: bool = True
    clear_resets_session: bool = True
    clear_keeps_welcome: bool = True
    progress_increment: int = 10
    progress_cap: int = 90
    progress_interval_seconds: float = 0.5
    progress_reset_delay_seconds: float = 1.0
    session_ttl_seconds: int = 3600
    log_level: str = "INFO"
    max_upload_bytes: int = 10 * 1024 * 1024
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def terminal_options(self) -> TerminalOptions:
        """Return the command-set switches for new terminals."""
        return TerminalOptions(
            manual_solve=self.manual_solve,
            clear_resets_session=self.clear_resets_session,
        )
