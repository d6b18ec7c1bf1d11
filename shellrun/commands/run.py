from __future__ import annotations
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import get_int, load_runner
from ..constants import DEFAULT_TIMEOUT_SECONDS, EXIT_CODES
from ..errors import CommandError
from ..models import CommandSpec

console = Console()


def run_command(command: str, timeout: Optional[float], strict: bool, nowait: bool, cwd: Optional[str] = None):
    runner = load_runner(cwd=cwd)

    if nowait:
        try:
            runner.run_background(command)
        except CommandError as e:
            console.print(f"[red]{escape(e.message)}[/]")
            raise typer.Exit(EXIT_CODES[e.kind])
        # nowait mode reports only that the command was started
        console.print("1")
        return

    if timeout is None:
        timeout = get_int("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)

    result = runner.run(CommandSpec(command, timeout, strict=strict))
    if not result.ok:
        console.print(f"[red]{escape(result.error.message)}[/]")
        raise typer.Exit(EXIT_CODES[result.error.kind])

    console.print(result.output, markup=False, highlight=False, soft_wrap=True)
