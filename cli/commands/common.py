"""Helpers shared by the locale commands."""

from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

# Messages go to stderr; stdout carries exported documents
console = Console(stderr=True)


def fail(message: str) -> NoReturn:
    """Print an error and exit with a nonzero status."""
    console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(1)


def notice(message: str) -> None:
    console.print(escape(message))


def open_site(ctx: typer.Context):
    """Open the site selected by the global --config option."""
    from locale_tools.site import LocaleSite

    config = (ctx.obj or {}).get("config")
    try:
        return LocaleSite.from_config(config)
    except FileNotFoundError as e:
        fail(str(e))
