"""SQLite-backed storage for source strings, translations and file history."""

import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from ..models import ExportFilter, StringStatus, TranslationRecord
from ..utils.logging import get_logger

logger = get_logger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS locales_source (
    lid INTEGER PRIMARY KEY AUTOINCREMENT,
    source TEXT NOT NULL,
    context TEXT NOT NULL DEFAULT '',
    version TEXT NOT NULL DEFAULT 'none',
    UNIQUE (source, context)
);

CREATE TABLE IF NOT EXISTS locales_target (
    lid INTEGER NOT NULL REFERENCES locales_source (lid) ON DELETE CASCADE,
    language TEXT NOT NULL,
    translation TEXT NOT NULL,
    customized INTEGER NOT NULL DEFAULT 0,
    PRIMARY KEY (lid, language)
);

CREATE TABLE IF NOT EXISTS locale_file (
    project TEXT NOT NULL,
    langcode TEXT NOT NULL,
    filename TEXT NOT NULL,
    version TEXT NOT NULL DEFAULT '',
    timestamp REAL NOT NULL DEFAULT 0,
    last_checked REAL NOT NULL DEFAULT 0,
    PRIMARY KEY (project, langcode)
);
"""

# One condition per status, OR-ed together when filtering translations
STATUS_CONDITIONS = {
    StringStatus.CUSTOMIZED: "(t.translation IS NOT NULL AND t.customized = 1)",
    StringStatus.NOT_CUSTOMIZED: "(t.translation IS NOT NULL AND t.customized = 0)",
    StringStatus.NOT_TRANSLATED: "(t.translation IS NULL)",
}


@dataclass
class FileHistory:
    """Last imported translation file for a project and language."""

    project: str
    langcode: str
    filename: str
    version: str = ""
    timestamp: float = 0.0
    last_checked: float = 0.0


def _status_of(translation: Optional[str], customized: Optional[int]) -> StringStatus:
    if translation is None:
        return StringStatus.NOT_TRANSLATED
    if customized:
        return StringStatus.CUSTOMIZED
    return StringStatus.NOT_CUSTOMIZED


class SQLiteTranslationStore:
    """Translation store on a single SQLite connection.

    The connection is not shared between threads; open one store per
    command invocation.
    """

    def __init__(self, db_path: str | Path = ":memory:"):
        """Open (and create if needed) the translation database.

        Args:
            db_path: Database file, or ":memory:" for a throwaway store
        """
        self.db_path = str(db_path)
        self._conn = sqlite3.connect(self.db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys = ON")
        self._conn.executescript(SCHEMA)
        logger.debug(f"Opened translation store: {self.db_path}")

    def __enter__(self) -> "SQLiteTranslationStore":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Commit on success, roll back on error."""
        with self._conn:
            yield

    # Reading

    def iter_records(self, export_filter: ExportFilter) -> Iterator[TranslationRecord]:
        """Yield records matching the filter, ordered by source id.

        In template mode every source string is yielded without its
        translations. The underlying cursor is closed when the generator
        is exhausted or closed.
        """
        if export_filter.is_template:
            query = "SELECT s.lid, s.source, s.context FROM locales_source s ORDER BY s.lid"
            params: tuple = ()
        else:
            query = (
                "SELECT s.lid, s.source, s.context, t.translation, t.customized "
                "FROM locales_source s "
                "LEFT JOIN locales_target t ON t.lid = s.lid AND t.language = ?"
            )
            params = (export_filter.langcode,)
            if export_filter.statuses != StringStatus.all():
                conditions = [
                    STATUS_CONDITIONS[status]
                    for status in StringStatus
                    if status in export_filter.statuses
                ]
                query += " WHERE " + " OR ".join(conditions)
            query += " ORDER BY s.lid"

        cursor = self._conn.execute(query, params)
        try:
            for row in cursor:
                if export_filter.is_template:
                    yield TranslationRecord(
                        source=row["source"],
                        context=row["context"],
                        lid=row["lid"],
                    )
                else:
                    yield TranslationRecord(
                        source=row["source"],
                        translation=row["translation"],
                        langcode=export_filter.langcode,
                        status=_status_of(row["translation"], row["customized"]),
                        context=row["context"],
                        lid=row["lid"],
                    )
        finally:
            cursor.close()

    def find_translation(
        self,
        source: str,
        context: str,
        langcode: str,
    ) -> Optional[TranslationRecord]:
        """Look up a single source string and its translation.

        Returns:
            The record, or None if the source string is unknown
        """
        row = self._conn.execute(
            "SELECT s.lid, s.source, s.context, t.translation, t.customized "
            "FROM locales_source s "
            "LEFT JOIN locales_target t ON t.lid = s.lid AND t.language = ? "
            "WHERE s.source = ? AND s.context = ?",
            (langcode, source, context),
        ).fetchone()
        if row is None:
            return None
        return TranslationRecord(
            source=row["source"],
            translation=row["translation"],
            langcode=langcode,
            status=_status_of(row["translation"], row["customized"]),
            context=row["context"],
            lid=row["lid"],
        )

    def count_sources(self) -> int:
        return self._conn.execute("SELECT COUNT(*) FROM locales_source").fetchone()[0]

    # Writing

    def save_source(self, source: str, context: str = "", version: str = "none") -> int:
        """Insert a source string if missing and return its id."""
        self._conn.execute(
            "INSERT OR IGNORE INTO locales_source (source, context, version) VALUES (?, ?, ?)",
            (source, context, version),
        )
        row = self._conn.execute(
            "SELECT lid FROM locales_source WHERE source = ? AND context = ?",
            (source, context),
        ).fetchone()
        return row["lid"]

    def save_translation(
        self,
        lid: int,
        langcode: str,
        translation: str,
        customized: bool = False,
    ) -> None:
        """Insert or replace the translation of a source string."""
        self._conn.execute(
            "INSERT INTO locales_target (lid, language, translation, customized) "
            "VALUES (?, ?, ?, ?) "
            "ON CONFLICT (lid, language) DO UPDATE SET "
            "translation = excluded.translation, customized = excluded.customized",
            (lid, langcode, translation, int(customized)),
        )

    # File history

    def get_file_history(self, project: str, langcode: str) -> Optional[FileHistory]:
        row = self._conn.execute(
            "SELECT * FROM locale_file WHERE project = ? AND langcode = ?",
            (project, langcode),
        ).fetchone()
        if row is None:
            return None
        return FileHistory(**dict(row))

    def update_file_history(self, history: FileHistory) -> None:
        """Record the file last imported for a project and language."""
        with self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO locale_file "
                "(project, langcode, filename, version, timestamp, last_checked) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (
                    history.project,
                    history.langcode,
                    history.filename,
                    history.version,
                    history.timestamp,
                    history.last_checked,
                ),
            )
