"""Data model shared by the export, import and update paths."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

# Plural forms are stored in a single string, separated by ETX
PLURAL_DELIMITER = "\x03"

SOURCE_LANGCODE = "en"


class StringStatus(str, Enum):
    """Translation state of a source string in one language."""

    NOT_TRANSLATED = "not-translated"
    CUSTOMIZED = "customized"
    NOT_CUSTOMIZED = "not-customized"

    @classmethod
    def all(cls) -> frozenset["StringStatus"]:
        return frozenset(cls)


@dataclass(frozen=True)
class Language:
    """A language configured on the site."""

    id: str
    name: str
    locked: bool = False


@dataclass(frozen=True)
class TranslationRecord:
    """A source string and its translation in one language."""

    source: str
    translation: Optional[str] = None
    langcode: Optional[str] = None
    status: StringStatus = StringStatus.NOT_TRANSLATED
    context: str = ""
    lid: Optional[int] = None

    @property
    def is_plural(self) -> bool:
        """Check if the source string carries plural forms."""
        return PLURAL_DELIMITER in self.source

    @property
    def source_forms(self) -> list[str]:
        return self.source.split(PLURAL_DELIMITER)

    @property
    def translation_forms(self) -> list[str]:
        if not self.translation:
            return []
        return self.translation.split(PLURAL_DELIMITER)


@dataclass(frozen=True)
class ExportFilter:
    """Selects the records to export.

    A ``langcode`` of None means template mode: source strings only.
    """

    langcode: Optional[str] = None
    statuses: frozenset[StringStatus] = field(default_factory=StringStatus.all)

    @property
    def is_template(self) -> bool:
        return self.langcode is None

    def accepts(self, status: StringStatus) -> bool:
        return status in self.statuses


@dataclass
class PoHeader:
    """Metadata written at the top of an exported PO document."""

    project_name: str = ""
    language_name: str = ""
    langcode: str = ""
    charset: str = "utf-8"
    plural_forms: str = "nplurals=2; plural=(n > 1);"
    language_team: str = ""
    po_date: str = field(
        default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M%z")
    )

    @property
    def is_template(self) -> bool:
        return not self.language_name

    def comment(self) -> str:
        """First comment line of the document."""
        if self.is_template:
            return "LANGUAGE translation of PROJECT"
        return f"{self.language_name} translation of {self.project_name or 'PROJECT'}"

    def metadata(self) -> dict[str, str]:
        """Header fields in the order gettext tools expect."""
        data = {
            "Project-Id-Version": self.project_name or "PROJECT VERSION",
            "POT-Creation-Date": self.po_date,
            "PO-Revision-Date": self.po_date,
            "Language-Team": self.language_team or self.language_name or "LANGUAGE",
        }
        if self.langcode:
            data["Language"] = self.langcode
        data.update(
            {
                "MIME-Version": "1.0",
                "Content-Type": f"text/plain; charset={self.charset}",
                "Content-Transfer-Encoding": "8bit",
                "Plural-Forms": self.plural_forms,
            }
        )
        return data
