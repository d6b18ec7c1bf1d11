from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from .errors import CommandError

@dataclass(frozen=True)
class CommandSpec:
    command_line: str
    timeout: float
    strict: bool = False


@dataclass
class ExecutionResult:
    output: str = ""
    error: Optional[CommandError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        """Return the output, or raise the recorded error."""
        if self.error is not None:
            raise self.error
        return self.output
