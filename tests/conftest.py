"""Shared fixtures for locale-tools tests."""

from pathlib import Path
from typing import Optional

import polib
import pytest
import yaml

from locale_tools.models import TranslationRecord
from locale_tools.store import (
    LanguageSettings,
    ProjectSettings,
    SiteSettings,
    SQLiteTranslationStore,
)


class RecordingStore:
    """Translation store fake that records queries."""

    def __init__(self, records: Optional[list[TranslationRecord]] = None, fail_after: Optional[int] = None):
        self.records = records or []
        self.fail_after = fail_after
        self.calls = []
        self.closed = False

    def iter_records(self, export_filter):
        self.calls.append(export_filter)
        try:
            for index, record in enumerate(self.records):
                if self.fail_after is not None and index >= self.fail_after:
                    raise OSError("disk full")
                yield record
        finally:
            self.closed = True


@pytest.fixture
def settings(tmp_path: Path) -> SiteSettings:
    return SiteSettings(
        site_name="Test Site",
        base_dir=str(tmp_path),
        languages=[
            LanguageSettings(id="en", name="English"),
            LanguageSettings(id="fr", name="French"),
            LanguageSettings(id="nl", name="Dutch"),
            LanguageSettings(id="und", name="Not specified", locked=True),
        ],
        projects=[ProjectSettings(name="core", version="1.0.0")],
    )


@pytest.fixture
def store():
    store = SQLiteTranslationStore(":memory:")
    yield store
    store.close()


def add_string(
    store: SQLiteTranslationStore,
    source: str,
    translation: Optional[str] = None,
    langcode: str = "fr",
    customized: bool = False,
    context: str = "",
) -> int:
    """Store a source string and optionally its translation."""
    lid = store.save_source(source, context)
    if translation is not None:
        store.save_translation(lid, langcode, translation, customized)
    return lid


def write_po(path: Path, entries: list[dict], language: str = "fr") -> Path:
    """Write a PO file with polib."""
    po = polib.POFile()
    po.metadata = {
        "Language": language,
        "Content-Type": "text/plain; charset=utf-8",
    }
    for entry in entries:
        po.append(polib.POEntry(**entry))
    path.parent.mkdir(parents=True, exist_ok=True)
    po.save(str(path))
    return path


@pytest.fixture
def config_file(tmp_path: Path, settings: SiteSettings) -> Path:
    path = tmp_path / "site.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(settings.model_dump(), f)
    return path
