"""Collaborator interfaces the export and update services depend on."""

from typing import Any, Iterator, Optional, Protocol

from ..models import ExportFilter, Language, TranslationRecord


class LanguageRegistry(Protocol):
    """Looks up configured languages by code."""

    def get_language(self, langcode: str) -> Optional[Language]: ...

    def get_languages(self) -> list[Language]: ...


class ConfigStore(Protocol):
    """Global configuration flags."""

    def get(self, key: str, default: Any = None) -> Any: ...


class SiteIdentity(Protocol):
    """Name of the current site, used as the PO project name."""

    def get_site_name(self) -> str: ...


class TranslationStore(Protocol):
    """Read access to stored source strings and translations."""

    def iter_records(self, export_filter: ExportFilter) -> Iterator[TranslationRecord]:
        """Yield matching records in store order without buffering them."""
        ...
