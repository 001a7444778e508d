"""Import of gettext PO files into the translation store."""

from dataclasses import dataclass
from pathlib import Path

import polib

from ..errors import PoImportError
from ..models import PLURAL_DELIMITER, StringStatus
from ..store.database import SQLiteTranslationStore
from ..utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ImportOptions:
    """How imported strings are stored.

    Attributes:
        customized: Mark imported translations as customized
        overwrite_customized: Replace existing customized translations
        overwrite_not_customized: Replace existing not-customized translations
    """

    customized: bool = False
    overwrite_customized: bool = False
    overwrite_not_customized: bool = True


@dataclass
class ImportReport:
    """Counts of an import."""

    additions: int = 0
    updates: int = 0
    skips: int = 0
    strings: int = 0

    def merge(self, other: "ImportReport") -> None:
        self.additions += other.additions
        self.updates += other.updates
        self.skips += other.skips
        self.strings += other.strings

    def to_dict(self) -> dict:
        return {
            "additions": self.additions,
            "updates": self.updates,
            "skips": self.skips,
            "strings": self.strings,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ImportReport":
        return cls(**data)


class PoImporter:
    """Reads PO files with polib and writes their strings to the store."""

    def __init__(self, store: SQLiteTranslationStore):
        self.store = store

    def import_file(
        self,
        po_path: str | Path,
        langcode: str,
        options: ImportOptions | None = None,
    ) -> ImportReport:
        """Import the translations of a PO file.

        Header, obsolete and fuzzy entries are skipped. Plural entries are
        stored with their forms joined by the plural delimiter.

        Args:
            po_path: PO file to import
            langcode: Language the translations belong to
            options: Overwrite behaviour (defaults to ImportOptions())

        Returns:
            ImportReport with counts of additions, updates and skips

        Raises:
            PoImportError: If the file cannot be read or parsed
        """
        options = options or ImportOptions()
        if not Path(po_path).is_file():
            raise PoImportError(f"File not found: {po_path}")

        try:
            po = polib.pofile(str(po_path))
        except (OSError, ValueError) as e:
            raise PoImportError(f"Could not read {po_path}: {e}") from e

        report = ImportReport()
        with self.store.transaction():
            for entry in po:
                if not entry.msgid or entry.obsolete or "fuzzy" in entry.flags:
                    continue
                self._import_entry(entry, langcode, options, report)

        logger.info(
            f"Imported {po_path} ({langcode}): {report.additions} added, "
            f"{report.updates} updated, {report.skips} skipped"
        )
        return report

    def _import_entry(
        self,
        entry: polib.POEntry,
        langcode: str,
        options: ImportOptions,
        report: ImportReport,
    ) -> None:
        if entry.msgid_plural:
            source = PLURAL_DELIMITER.join([entry.msgid, entry.msgid_plural])
            forms = [entry.msgstr_plural[index] for index in sorted(entry.msgstr_plural)]
            translation = PLURAL_DELIMITER.join(forms) if any(forms) else ""
        else:
            source = entry.msgid
            translation = entry.msgstr

        context = entry.msgctxt or ""
        lid = self.store.save_source(source, context)
        report.strings += 1

        if not translation:
            return

        existing = self.store.find_translation(source, context, langcode)
        if existing is None or existing.status == StringStatus.NOT_TRANSLATED:
            self.store.save_translation(lid, langcode, translation, options.customized)
            report.additions += 1
            return

        if existing.status == StringStatus.CUSTOMIZED:
            overwrite = options.overwrite_customized
        else:
            overwrite = options.overwrite_not_customized

        if not overwrite:
            report.skips += 1
            return

        self.store.save_translation(lid, langcode, translation, options.customized)
        report.updates += 1
