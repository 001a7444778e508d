"""PO export service."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from ..errors import ExportWriteError, LocaleCommandError
from ..models import ExportFilter, Language, PoHeader, StringStatus
from ..store.ports import ConfigStore, LanguageRegistry, SiteIdentity, TranslationStore
from ..utils.logging import get_logger
from .filters import resolve_status_filter, validate_export_options
from .languages import LanguageResolver
from .writer import Destination, PoStreamWriter

logger = get_logger(__name__)


class ExportStatus(str, Enum):
    EXPORTED = "exported"
    NOTHING = "nothing"
    FAILED = "failed"


@dataclass
class ExportOutcome:
    """Result of an export: exported, nothing to export, or failed."""

    status: ExportStatus
    destination: Optional[str] = None
    items_written: int = 0
    error: Optional[LocaleCommandError] = None

    @property
    def ok(self) -> bool:
        return self.status != ExportStatus.FAILED

    @classmethod
    def exported(cls, destination: str, items_written: int) -> "ExportOutcome":
        return cls(ExportStatus.EXPORTED, destination=destination, items_written=items_written)

    @classmethod
    def nothing(cls) -> "ExportOutcome":
        return cls(ExportStatus.NOTHING)

    @classmethod
    def failed(cls, error: LocaleCommandError) -> "ExportOutcome":
        return cls(ExportStatus.FAILED, error=error)


@dataclass
class ExportRequest:
    """Resolved export parameters."""

    language: Optional[Language]
    export_filter: ExportFilter


class PoExporter:
    """Exports stored translations, or a template, as a gettext PO document."""

    def __init__(
        self,
        languages: LanguageRegistry,
        config: ConfigStore,
        store: TranslationStore,
        site: SiteIdentity,
        wrapwidth: int = 78,
    ):
        """Initialize the exporter.

        Args:
            languages: Registry used to resolve language codes
            config: Configuration flags (translate_english)
            store: Store the records are read from
            site: Provides the project name written in the header
            wrapwidth: Line width of the written PO document
        """
        self.resolver = LanguageResolver(languages, config)
        self.store = store
        self.site = site
        self.wrapwidth = wrapwidth

    def prepare(
        self,
        langcode: Optional[str] = None,
        template: bool = False,
        types: Optional[Iterable[str]] = None,
    ) -> ExportRequest:
        """Validate options and resolve the language and status filter.

        No store access happens here.

        Raises:
            LocaleCommandError: For option conflicts, invalid types and
                unknown or untranslatable languages
        """
        types = list(types or [])
        validate_export_options(langcode, template, types)
        language = self.resolver.resolve(langcode)

        if template:
            export_filter = ExportFilter(langcode=None)
        else:
            export_filter = ExportFilter(
                langcode=language.id,
                statuses=resolve_status_filter(types),
            )
        return ExportRequest(language=language, export_filter=export_filter)

    def build_header(self, language: Optional[Language]) -> PoHeader:
        header = PoHeader()
        header.project_name = self.site.get_site_name()
        header.language_name = language.name if language else ""
        header.langcode = language.id if language else ""
        return header

    def export(
        self,
        destination: Destination,
        langcode: Optional[str] = None,
        template: bool = False,
        types: Optional[Iterable[str]] = None,
    ) -> ExportOutcome:
        """Export translations to a destination.

        Args:
            destination: Where the document is written
            langcode: Language to export, or None/empty with template
            template: Export source strings only
            types: String types to include (defaults to all)

        Returns:
            ExportOutcome; failures carry their error instead of raising
        """
        try:
            request = self.prepare(langcode, template, types)
        except LocaleCommandError as e:
            logger.debug(f"Export rejected: {e}")
            return ExportOutcome.failed(e)

        return self.write(destination, request)

    def write(self, destination: Destination, request: ExportRequest) -> ExportOutcome:
        """Read matching records and write them as a PO document."""
        export_filter = request.export_filter
        records = self.store.iter_records(export_filter)
        try:
            first = next(records, None)
            if first is None:
                logger.info("Nothing to export.")
                return ExportOutcome.nothing()

            header = self.build_header(request.language)
            try:
                with destination.open() as stream:
                    writer = PoStreamWriter(
                        stream,
                        header,
                        template=export_filter.is_template,
                        wrapwidth=self.wrapwidth,
                    )
                    writer.write_header()
                    writer.write_item(first)
                    writer.write_items(records)
            except (OSError, UnicodeError) as e:
                logger.error(f"Writing to {destination.name} failed: {e}")
                return ExportOutcome.failed(
                    ExportWriteError(f"Could not write to {destination.name}: {e}")
                )
        finally:
            close = getattr(records, "close", None)
            if close is not None:
                close()

        statuses = ", ".join(s.value for s in StringStatus if export_filter.accepts(s))
        logger.info(
            f"Exported {writer.items_written} strings to {destination.name} "
            f"({'template' if export_filter.is_template else statuses})"
        )
        return ExportOutcome.exported(destination.name, writer.items_written)
