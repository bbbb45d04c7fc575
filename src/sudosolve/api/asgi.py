"""ASGI entrypoint for the SudoSolve terminal API."""

from sudosolve.api.app import create_app
from sudosolve.containers import build_container

app = create_app(build_container())
