from __future__ import annotations

from .constants import ExitCode


class ShushError(Exception):
    """Base for failures of shush itself, as opposed to failures of the wrapped command."""

    exit_code: int = ExitCode.FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code


class SpawnError(ShushError):
    exit_code = ExitCode.NOT_EXECUTABLE

    def __init__(self, program: str, reason: str, exit_code: int | None = None):
        super().__init__(f"cannot run {program}: {reason}", exit_code)
        self.program = program


class LogWriteError(ShushError):
    exit_code = ExitCode.LOG_WRITE

    def __init__(self, path, reason: str):
        super().__init__(f"cannot write log {path}: {reason}")
        self.path = path
