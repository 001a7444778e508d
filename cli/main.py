"""Main CLI entry point for locale-tools."""

from pathlib import Path
from typing import Optional

import typer

from cli.commands import check, export, importer, update
from cli.commands.common import console

# Create main app
app = typer.Typer(
    name="locale-tools",
    help="Check, update and export interface translations",
    add_completion=False,
)

app.command("check")(check.check_translations)
app.command("update")(update.update_translations)
app.command("export")(export.export_translations)
app.command("import")(importer.import_translations)


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Site settings file (default: configs/site.yaml)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also write logs to this file (relative paths go under logs/)",
    ),
):
    """Locale command-line tools."""
    from locale_tools.utils.logging import setup_logging

    setup_logging(level="DEBUG" if verbose else "INFO", log_file=log_file)
    ctx.obj = {"config": config}


@app.command()
def version():
    """Show version information."""
    from locale_tools import __version__

    console.print(f"locale-tools version {__version__}")


if __name__ == "__main__":
    app()
