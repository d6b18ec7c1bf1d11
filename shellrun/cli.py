from __future__ import annotations
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import get_value, set_value, get_all, ensure_bootstrapped
from .constants import DEFAULTS

app = typer.Typer(add_completion=False, help="shellrun: bounded shell command execution")
console = Console()


@app.callback()
def _bootstrap() -> None:
    """Ensure config DB is initialized before any command."""
    ensure_bootstrapped()


# ---------------------------
# config group
# ---------------------------
config_app = typer.Typer(help="Manage shellrun configuration")
app.add_typer(config_app, name="config")


@config_app.command("get")
def config_get(key: str = typer.Argument(..., help="max_output_bytes or timeout_seconds")):
    """Print one stored runner setting."""
    value = get_value(key)
    if value is None:
        console.print(f"[yellow]{key}[/] is not set")
        raise typer.Exit(code=1)
    console.print(value)


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="max_output_bytes (capture ceiling) or timeout_seconds (default run timeout)"),
    value: str = typer.Argument(..., help="Positive integer, e.g. 65536"),
):
    """Store a runner setting; both known keys take positive integers."""
    if key in DEFAULTS and not (value.isdigit() and int(value) > 0):
        console.print(f"[red]{key} must be a positive integer[/]")
        raise typer.Exit(code=1)
    set_value(key, value)
    console.print(f"[green]OK[/] {key}={value}")


@config_app.command("show")
def config_show():
    cfg = get_all()
    table = Table(title="shellrun runner settings")
    table.add_column("key")
    table.add_column("value")
    table.add_column("default")
    for k, v in cfg.items():
        table.add_row(k, v, DEFAULTS.get(k, ""))
    console.print(table)


# ---------------------------
# run
# ---------------------------
@app.command("run")
def _run(
    command: str = typer.Argument(..., help="Command line, passed verbatim to sh -c"),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", help="Seconds before the process group is terminated (default: config timeout_seconds)"),
    strict: bool = typer.Option(False, "--strict", "-s", help="Treat a non-zero exit status as an error"),
    nowait: bool = typer.Option(False, "--nowait", help="Start in background and return immediately"),
    cwd: Optional[str] = typer.Option(None, "--cwd", help="Working directory for the shell"),
):
    from .commands.run import run_command
    run_command(command, timeout=timeout, strict=strict, nowait=nowait, cwd=cwd)


if __name__ == "__main__":
    app()
