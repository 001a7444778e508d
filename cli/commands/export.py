"""Export command writing stored translations as gettext PO."""

import sys
from pathlib import Path
from typing import Optional

import typer

from .common import console, fail, notice, open_site


def export_translations(
    ctx: typer.Context,
    template: bool = typer.Option(
        False,
        "--template",
        help="Export the template file to translate",
    ),
    langcode: Optional[str] = typer.Option(
        None,
        "--langcode",
        help="The language code of the exported translations",
    ),
    types: Optional[str] = typer.Option(
        None,
        "--types",
        help="String types to include, defaults to all types. "
        "Types: 'not-customized', 'customized', 'not-translated'",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write to a file instead of standard output",
    ),
):
    """Export to a gettext translation file.

    \b
    Examples:
      locale-tools export --langcode=nl > nl.po
      locale-tools export --langcode=nl --types=customized,not-customized > nl.po
      locale-tools export --template > site.pot
      locale-tools export --template --langcode=nl > nl.pot
    """
    from locale_tools.errors import LocaleCommandError
    from locale_tools.export import (
        ExportStatus,
        FileDestination,
        StreamDestination,
        resolve_status_filter,
        split_csv,
        validate_export_options,
    )

    type_list = split_csv(types)

    # Checked before the site and its store are opened
    try:
        validate_export_options(langcode, template, type_list)
    except LocaleCommandError as e:
        fail(str(e))

    destination = FileDestination(output) if output else StreamDestination(sys.stdout)

    with open_site(ctx) as site:
        # Language and types are resolved before the store is opened
        try:
            site.resolver.resolve(langcode)
            resolve_status_filter(type_list)
        except LocaleCommandError as e:
            fail(str(e))

        outcome = site.exporter().export(
            destination,
            langcode=langcode,
            template=template,
            types=type_list,
        )

    if outcome.status == ExportStatus.FAILED:
        fail(str(outcome.error))

    if outcome.status == ExportStatus.NOTHING:
        notice("Nothing to export.")
        return

    if output:
        console.print(
            f"[green]Exported {outcome.items_written} strings to {outcome.destination}[/green]"
        )
