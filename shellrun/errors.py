from __future__ import annotations

from .constants import ErrorKind


class CommandError(Exception):
    """Terminal failure of a single command execution."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LaunchFailed(CommandError):
    kind = ErrorKind.LAUNCH_FAILED


class CommandFailed(CommandError):
    kind = ErrorKind.COMMAND_FAILED


class CommandTimeout(CommandError):
    kind = ErrorKind.TIMEOUT


class OutputTooLarge(CommandError):
    kind = ErrorKind.OUTPUT_TOO_LARGE

    def __init__(self, limit_bytes: int):
        super().__init__(f"Command output exceeded limit of {limit_bytes // 1024} KB")
        self.limit_bytes = limit_bytes
