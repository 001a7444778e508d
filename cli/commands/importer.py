"""Import command loading a PO file into the translation store."""

from pathlib import Path

import typer

from .common import console, fail, open_site


def import_translations(
    ctx: typer.Context,
    po_file: Path = typer.Argument(..., help="PO file to import"),
    langcode: str = typer.Option(..., "--langcode", help="Language of the translations"),
    customized: bool = typer.Option(
        False,
        "--customized",
        help="Mark imported translations as customized",
    ),
    overwrite_customized: bool = typer.Option(
        False,
        "--overwrite-customized",
        help="Replace existing customized translations",
    ),
    keep_not_customized: bool = typer.Option(
        False,
        "--keep-not-customized",
        help="Keep existing not-customized translations",
    ),
):
    """Imports a gettext translation file."""
    from locale_tools.errors import LocaleCommandError

    with open_site(ctx) as site:
        options = site.import_options(customized=customized)
        if overwrite_customized:
            options.overwrite_customized = True
        if keep_not_customized:
            options.overwrite_not_customized = False

        try:
            site.resolver.resolve(langcode)
            report = site.importer().import_file(po_file, langcode, options)
        except LocaleCommandError as e:
            fail(str(e))

    console.print(f"\n[bold]Imported {po_file}[/bold]")
    console.print(f"  Strings: {report.strings}")
    console.print(f"  Added: {report.additions}")
    console.print(f"  Updated: {report.updates}")
    console.print(f"  Skipped: {report.skips}")
