from __future__ import annotations
import subprocess
import threading
from pathlib import Path
from typing import Callable, Optional, Union

from . import log
from .constants import MAX_EXECUTE_OUTPUT_LEN_B, ErrorKind
from .errors import CommandFailed, CommandTimeout, LaunchFailed, OutputTooLarge
from .models import CommandSpec, ExecutionResult
from .proc import OutputSink, StreamCopier, TimeoutTimer, describe_returncode, terminate_group

_TRAILING_WS = " \t\r\n"


class CommandRunner:
    """Runs command lines through `sh -c` with a timeout and output ceiling."""

    def __init__(
        self,
        max_output_bytes: int = MAX_EXECUTE_OUTPUT_LEN_B,
        shell: str = "sh",
        cwd: Optional[Union[str, Path]] = None,
        warn: Callable[..., None] = log.warningf,
    ):
        self.max_output_bytes = max_output_bytes
        self.shell = shell
        self.cwd = cwd
        self.warn = warn

    def _argv(self, command_line: str) -> list[str]:
        # passed verbatim, no quoting
        return [self.shell, "-c", command_line]

    def run(self, spec: CommandSpec) -> ExecutionResult:
        sink = OutputSink(self.max_output_bytes)
        try:
            proc = subprocess.Popen(
                self._argv(spec.command_line),
                cwd=self.cwd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                process_group=0,
            )
        except (OSError, ValueError) as e:
            return ExecutionResult(error=LaunchFailed(f"Cannot execute command: {e}"))

        copier = StreamCopier(proc.stdout, sink)
        copier.start()

        def _kill_group() -> None:
            try:
                terminate_group(proc.pid)
            except OSError as e:
                self.warn("failed to kill [%s]: %s (%s)", spec.command_line, e, ErrorKind.SIGNAL_FAILED.value)

        timer = TimeoutTimer(spec.timeout, _kill_group).start()

        # exit alone is not enough: grandchildren may still hold the pipe
        returncode = proc.wait()
        copier.join()

        if spec.strict:
            detail = None
            if returncode != 0:
                detail = describe_returncode(returncode)
            elif copier.error is not None:
                detail = str(copier.error)
            if detail is not None:
                timer.stop()
                return ExecutionResult(error=CommandFailed(f"Command execution failed: {detail}"))

        if not timer.stop():
            return ExecutionResult(error=CommandTimeout("Timeout while executing a shell script."))

        if sink.overflowed:
            return ExecutionResult(error=OutputTooLarge(self.max_output_bytes))

        return ExecutionResult(output=sink.text().rstrip(_TRAILING_WS))

    def execute(self, command_line: str, timeout: float) -> str:
        return self.run(CommandSpec(command_line, timeout, strict=False)).unwrap()

    def execute_strict(self, command_line: str, timeout: float) -> str:
        return self.run(CommandSpec(command_line, timeout, strict=True)).unwrap()

    def run_background(self, command_line: str) -> None:
        """Start the command and return at once; only launch failure is reported."""
        try:
            proc = subprocess.Popen(self._argv(command_line), cwd=self.cwd)
        except (OSError, ValueError) as e:
            raise LaunchFailed(f"Cannot execute command: {e}") from e

        # reap so the child never lingers as a zombie
        threading.Thread(target=proc.wait, name="shellrun-reaper", daemon=True).start()


_default_runner = CommandRunner()


def execute(command_line: str, timeout: float) -> str:
    """Run in lenient mode: a non-zero exit status is not an error."""
    return _default_runner.execute(command_line, timeout)


def execute_strict(command_line: str, timeout: float) -> str:
    """Run in strict mode: a non-zero exit status raises CommandFailed."""
    return _default_runner.execute_strict(command_line, timeout)


def execute_background(command_line: str) -> None:
    """Run detached; only a failure to launch is reported, as LaunchFailed."""
    _default_runner.run_background(command_line)
