"""Streaming gettext PO writer."""

import os
import tempfile
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import ContextManager, Iterable, Iterator, TextIO

import polib

from ..models import PoHeader, TranslationRecord


class Destination(ABC):
    """Where an exported document is written."""

    name = "<destination>"

    @abstractmethod
    def open(self) -> ContextManager[TextIO]:
        """Context manager yielding a writable text stream."""
        pass


class StreamDestination(Destination):
    """An already open text stream, such as stdout. Left open after writing."""

    def __init__(self, stream: TextIO, name: str = "<stdout>"):
        self.stream = stream
        self.name = name

    @contextmanager
    def open(self) -> Iterator[TextIO]:
        try:
            yield self.stream
        finally:
            self.stream.flush()


class FileDestination(Destination):
    """A file path, replaced only once the whole document has been written."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.name = str(self.path)

    @contextmanager
    def open(self) -> Iterator[TextIO]:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix="po_", suffix=".tmp", dir=self.path.parent)
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as stream:
                yield stream
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        os.replace(tmp_path, self.path)


class PoStreamWriter:
    """Writes a PO header followed by one entry per record.

    Entries are serialized one at a time so the full document is never
    held in memory.
    """

    def __init__(
        self,
        stream: TextIO,
        header: PoHeader,
        template: bool = False,
        wrapwidth: int = 78,
    ):
        """Initialize the writer.

        Args:
            stream: Open text stream to write to
            header: Document header, written first
            template: Write empty translations regardless of the records
            wrapwidth: Line width used by polib when wrapping strings
        """
        self.stream = stream
        self.header = header
        self.template = template
        self.wrapwidth = wrapwidth
        self.items_written = 0

    def write_header(self) -> None:
        po = polib.POFile(wrapwidth=self.wrapwidth, encoding=self.header.charset)
        po.header = self.header.comment() + "\n"
        po.metadata = self.header.metadata()
        self.stream.write(str(po))

    def write_item(self, record: TranslationRecord) -> None:
        entry = self.to_entry(record)
        self.stream.write("\n" + entry.__unicode__(self.wrapwidth))
        self.items_written += 1

    def write_items(self, records: Iterable[TranslationRecord]) -> int:
        """Write every record in iteration order.

        Returns:
            Number of records written by this call
        """
        count = 0
        for record in records:
            self.write_item(record)
            count += 1
        return count

    def to_entry(self, record: TranslationRecord) -> polib.POEntry:
        """Build the PO entry for a record."""
        msgctxt = record.context or None
        translations = [] if self.template else record.translation_forms

        if record.is_plural:
            sources = record.source_forms
            count = max(len(translations), 2)
            msgstr_plural = {
                index: translations[index] if index < len(translations) else ""
                for index in range(count)
            }
            return polib.POEntry(
                msgctxt=msgctxt,
                msgid=sources[0],
                msgid_plural=sources[1],
                msgstr_plural=msgstr_plural,
            )

        return polib.POEntry(
            msgctxt=msgctxt,
            msgid=record.source,
            msgstr=translations[0] if translations else "",
        )
