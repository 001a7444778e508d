"""Check command refreshing the status of available translation updates."""

import typer
from rich.table import Table

from .common import console, fail, open_site


def check_translations(ctx: typer.Context):
    """Checks for available translation updates."""
    with open_site(ctx) as site:
        updater = site.updater()

        if not site.settings.projects:
            console.print("[yellow]No projects configured.[/yellow]")

        result = updater.check()
        if not result.ok:
            fail(f"{result.error} Run the command again to resume.")

        table = Table(show_header=True, header_style="bold")
        table.add_column("Project")
        table.add_column("Language")
        table.add_column("Version")
        table.add_column("File")
        table.add_column("Status")

        updates = 0
        for status in updater.status:
            if status.has_update:
                updates += 1
                label = "[green]update available[/green]"
            elif status.filename:
                label = "up to date"
            else:
                label = "[yellow]no translation file[/yellow]"
            table.add_row(
                status.project,
                status.langcode,
                status.version,
                status.filename or "-",
                label,
            )

    console.print(table)
    console.print(f"\n[bold]{updates} translation updates available[/bold]")
