"""Update command importing available translation updates."""

from typing import Optional

import typer

from .common import console, fail, notice, open_site


def update_translations(
    ctx: typer.Context,
    langcodes: Optional[str] = typer.Option(
        None,
        "--langcodes",
        help="A comma-separated list of language codes to update. "
        "If omitted, all translations will be updated",
    ),
):
    """Imports the available translation updates."""
    from locale_tools.export import split_csv

    with open_site(ctx) as site:
        result = site.updater().update(split_csv(langcodes))

    if not result.langcodes:
        notice("No translation updates available.")
        return

    if result.rechecked:
        console.print("Translation status was expired and has been checked again.")

    console.print(f"\n[bold]Languages:[/bold] {', '.join(result.langcodes)}")
    console.print(f"  Files imported: {len(result.imported)}")
    console.print(f"  Strings added: {result.report.additions}")
    console.print(f"  Strings updated: {result.report.updates}")
    console.print(f"  Strings skipped: {result.report.skips}")

    if not result.ok:
        fail(f"{result.batch.error} Run the command again to resume.")
