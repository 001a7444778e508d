"""Tests for translation update checking and import."""

import os

import pytest

from conftest import write_po
from locale_tools.export.languages import LanguageResolver
from locale_tools.updates import (
    BatchRunner,
    LocalTranslationSource,
    StatusCache,
    TranslationUpdater,
    UPDATE_LOCAL,
)


class Clock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def translations_dir(tmp_path):
    path = tmp_path / "translations"
    path.mkdir()
    return path


@pytest.fixture
def updater(settings, store, tmp_path, translations_dir, clock):
    return TranslationUpdater(
        projects=settings.projects,
        resolver=LanguageResolver(settings, settings),
        store=store,
        source=LocalTranslationSource(translations_dir),
        status=StatusCache(tmp_path / "status.json", ttl=3600, clock=clock),
        runner=BatchRunner(tmp_path / "batch.json"),
        clock=clock,
    )


def _add_translation_file(translations_dir, langcode="fr", entries=None, mtime=500_000.0):
    path = write_po(
        translations_dir / f"core-1.0.0.{langcode}.po",
        entries or [{"msgid": "Hello", "msgstr": "Bonjour"}],
        language=langcode,
    )
    os.utime(path, (mtime, mtime))
    return path


class TestCheck:
    def test_marks_new_files_as_updates(self, updater, translations_dir):
        _add_translation_file(translations_dir, "fr")

        result = updater.check()

        assert result.ok
        assert result.results["checked"] == 2
        fr = updater.status.get("core", "fr")
        assert fr.type == UPDATE_LOCAL
        assert fr.filename == "core-1.0.0.fr.po"
        assert not updater.status.get("core", "nl").has_update
        assert updater.status.get("core", "en") is None
        assert not updater.status.is_expired()

    def test_status_persisted(self, updater, translations_dir, tmp_path, clock):
        _add_translation_file(translations_dir, "fr")
        updater.check()

        reloaded = StatusCache(tmp_path / "status.json", ttl=3600, clock=clock)

        assert reloaded.langcodes_with_updates() == ["fr"]
        assert reloaded.last_checked == clock.now

    def test_status_expires(self, updater, clock):
        updater.check()
        clock.now += 3601

        assert updater.status.is_expired()


class TestUpdate:
    def test_imports_available_updates(self, updater, store, translations_dir):
        _add_translation_file(translations_dir, "fr")
        updater.check()

        result = updater.update()

        assert result.ok
        assert result.langcodes == ["fr"]
        assert not result.rechecked
        assert result.imported == ["core:fr"]
        assert result.report.additions == 1
        assert store.find_translation("Hello", "", "fr").translation == "Bonjour"
        assert not updater.status.get("core", "fr").has_update
        assert store.get_file_history("core", "fr").timestamp == 500_000.0

    def test_nothing_after_import(self, updater, translations_dir):
        _add_translation_file(translations_dir, "fr")
        updater.check()
        updater.update()

        updater.check()
        result = updater.update()

        assert result.langcodes == []
        assert result.batch is None

    def test_newer_file_is_imported_again(self, updater, store, translations_dir):
        _add_translation_file(translations_dir, "fr")
        updater.check()
        updater.update()

        _add_translation_file(
            translations_dir,
            "fr",
            entries=[{"msgid": "Hello", "msgstr": "Salut"}],
            mtime=600_000.0,
        )
        updater.check()
        result = updater.update()

        assert result.report.updates == 1
        assert store.find_translation("Hello", "", "fr").translation == "Salut"

    def test_requested_langcodes_are_intersected(self, updater, translations_dir):
        _add_translation_file(translations_dir, "fr")
        _add_translation_file(translations_dir, "nl", [{"msgid": "Hello", "msgstr": "Hallo"}])
        updater.check()

        result = updater.update(["nl", "de"])

        assert result.langcodes == ["nl"]
        assert result.dropped == ["de"]
        assert result.imported == ["core:nl"]
        assert updater.status.get("core", "fr").has_update

    def test_unknown_langcodes_only(self, updater, translations_dir):
        _add_translation_file(translations_dir, "fr")
        updater.check()

        result = updater.update(["de"])

        assert result.langcodes == []
        assert result.dropped == ["de"]
        assert result.ok

    def test_expired_status_is_rechecked(self, updater, store, translations_dir):
        _add_translation_file(translations_dir, "fr")

        result = updater.update()

        assert result.rechecked
        assert result.langcodes == ["fr", "nl"]
        assert result.imported == ["core:fr"]
        assert store.find_translation("Hello", "", "fr").translation == "Bonjour"
        assert not updater.status.is_expired()

    def test_failed_import_can_be_rerun(self, updater, store, translations_dir, tmp_path):
        _add_translation_file(translations_dir, "fr")
        nl_file = _add_translation_file(translations_dir, "nl", [{"msgid": "Hello", "msgstr": "Hallo"}])
        updater.check()
        nl_file.write_bytes(b'msgid "\xff\xfe"\nmsgstr ""\n')
        os.utime(nl_file, (500_000.0, 500_000.0))

        failed = updater.update()

        assert not failed.ok
        assert failed.batch.error.step == "import:core:nl"
        assert store.find_translation("Hello", "", "fr").translation == "Bonjour"

        _add_translation_file(translations_dir, "nl", [{"msgid": "Hello", "msgstr": "Hallo"}])
        resumed = updater.update()

        assert resumed.ok
        assert resumed.langcodes == ["nl"]
        assert resumed.batch.title == failed.batch.title
        assert resumed.imported == ["core:fr", "core:nl"]
        assert resumed.report.additions == 2
        assert store.find_translation("Hello", "", "nl").translation == "Hallo"
        assert not updater.runner.has_checkpoint()

    def test_requested_langcodes_name_the_batch(self, updater, translations_dir):
        _add_translation_file(translations_dir, "nl", [{"msgid": "Hello", "msgstr": "Hallo"}])
        updater.check()

        result = updater.update(["nl", "fr"])

        assert result.langcodes == ["nl"]
        assert result.batch.title == "Updating translations (nl, fr)"
