from __future__ import annotations

from rich.console import Console
from rich.markup import escape

console = Console(stderr=True)


def warningf(fmt: str, *args) -> None:
    """printf-style warning; never raises into the caller."""
    try:
        msg = fmt % args if args else fmt
    except (TypeError, ValueError):
        msg = f"{fmt} {args!r}"
    console.log(f"[yellow]WARNING[/] {escape(msg)}")
