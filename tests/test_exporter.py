"""Tests for the PO export service."""

import io

import polib
import pytest

from conftest import RecordingStore, add_string
from locale_tools.errors import (
    ExportWriteError,
    InvalidFilterError,
    LanguageNotTranslatableError,
    OptionConflictError,
    UnknownLanguageError,
)
from locale_tools.export import ExportStatus, FileDestination, PoExporter, StreamDestination
from locale_tools.models import StringStatus, TranslationRecord


def _exporter(settings, store) -> PoExporter:
    return PoExporter(languages=settings, config=settings, store=store, site=settings)


class BrokenStream(io.StringIO):
    def write(self, s):
        raise OSError("No space left on device")


class TestExport:
    def test_customized_translation_round_trip(self, settings, store):
        add_string(store, "Hello", "Bonjour", customized=True)
        stream = io.StringIO()

        outcome = _exporter(settings, store).export(
            StreamDestination(stream), langcode="fr", types=["customized"]
        )

        assert outcome.status == ExportStatus.EXPORTED
        assert outcome.items_written == 1
        text = stream.getvalue()
        assert text.startswith("# French translation of Test Site\n")
        assert 'msgid "Hello"\nmsgstr "Bonjour"\n' in text

        po = polib.pofile(text)
        assert po.metadata["Language-Team"] == "French"
        assert [(entry.msgid, entry.msgstr) for entry in po] == [("Hello", "Bonjour")]

    def test_filters_by_status(self, settings, store):
        add_string(store, "Customized", "Personnalisé", customized=True)
        add_string(store, "Default", "Défaut")
        add_string(store, "Missing")
        add_string(store, "Dutch only", "Alleen Nederlands", langcode="nl")

        def export(types):
            stream = io.StringIO()
            _exporter(settings, store).export(StreamDestination(stream), langcode="fr", types=types)
            return [entry.msgid for entry in polib.pofile(stream.getvalue())]

        assert export(["customized"]) == ["Customized"]
        assert export(["not-customized"]) == ["Default"]
        assert export(["not_translated"]) == ["Missing", "Dutch only"]
        assert export(["customized", "not-translated"]) == ["Customized", "Missing", "Dutch only"]
        assert export([]) == ["Customized", "Default", "Missing", "Dutch only"]

    def test_nothing_to_export(self, settings, store):
        add_string(store, "Hello", "Bonjour", customized=True)
        stream = io.StringIO()

        outcome = _exporter(settings, store).export(
            StreamDestination(stream), langcode="fr", types=["not-translated"]
        )

        assert outcome.status == ExportStatus.NOTHING
        assert outcome.ok
        assert outcome.error is None
        assert stream.getvalue() == ""

    def test_nothing_to_export_writes_no_file(self, settings, tmp_path):
        target = tmp_path / "fr.po"
        outcome = _exporter(settings, RecordingStore([])).export(
            FileDestination(target), langcode="fr"
        )

        assert outcome.status == ExportStatus.NOTHING
        assert not target.exists()

    def test_template_without_language(self, settings, store):
        add_string(store, "One", "Un")
        add_string(store, "Two", "Deux", customized=True)
        add_string(store, "Three")
        stream = io.StringIO()

        outcome = _exporter(settings, store).export(StreamDestination(stream), template=True)

        assert outcome.status == ExportStatus.EXPORTED
        text = stream.getvalue()
        assert text.startswith("# LANGUAGE translation of PROJECT\n")
        po = polib.pofile(text)
        assert [(entry.msgid, entry.msgstr) for entry in po] == [
            ("One", ""),
            ("Two", ""),
            ("Three", ""),
        ]

    def test_template_header_language_name_is_empty(self, settings):
        exporter = _exporter(settings, RecordingStore())
        assert exporter.build_header(None).language_name == ""

    def test_template_for_language(self, settings, store):
        add_string(store, "Hello", "Hallo", langcode="nl")
        stream = io.StringIO()

        _exporter(settings, store).export(StreamDestination(stream), langcode="nl", template=True)

        text = stream.getvalue()
        assert text.startswith("# Dutch translation of Test Site\n")
        assert [(entry.msgid, entry.msgstr) for entry in polib.pofile(text)] == [("Hello", "")]

    def test_template_ignores_stored_translations_from_store(self, settings):
        records = [
            TranslationRecord("Hello", "Bonjour", "fr", StringStatus.CUSTOMIZED),
            TranslationRecord("Bye", "Au revoir", "fr", StringStatus.NOT_CUSTOMIZED),
        ]
        store = RecordingStore(records)
        stream = io.StringIO()

        _exporter(settings, store).export(StreamDestination(stream), template=True)

        assert store.calls[0].is_template
        assert all(entry.msgstr == "" for entry in polib.pofile(stream.getvalue()))

    def test_export_to_file(self, settings, store, tmp_path):
        add_string(store, "Hello", "Bonjour")
        target = tmp_path / "fr.po"

        outcome = _exporter(settings, store).export(FileDestination(target), langcode="fr")

        assert outcome.status == ExportStatus.EXPORTED
        assert outcome.destination == str(target)
        assert polib.pofile(str(target))[0].msgstr == "Bonjour"


class TestExportFailures:
    def test_template_with_types_fails_before_store_access(self, settings):
        store = RecordingStore([TranslationRecord("Hello")])

        outcome = _exporter(settings, store).export(
            StreamDestination(io.StringIO()), template=True, types=["customized"]
        )

        assert outcome.status == ExportStatus.FAILED
        assert isinstance(outcome.error, OptionConflictError)
        assert store.calls == []

    def test_missing_langcode_and_template(self, settings):
        store = RecordingStore()
        outcome = _exporter(settings, store).export(StreamDestination(io.StringIO()))

        assert isinstance(outcome.error, OptionConflictError)
        assert store.calls == []

    @pytest.mark.parametrize(
        "langcode, error",
        [
            ("xx", UnknownLanguageError),
            ("und", LanguageNotTranslatableError),
            ("en", LanguageNotTranslatableError),
        ],
    )
    def test_language_errors(self, settings, langcode, error):
        store = RecordingStore()
        outcome = _exporter(settings, store).export(
            StreamDestination(io.StringIO()), langcode=langcode
        )

        assert outcome.status == ExportStatus.FAILED
        assert not outcome.ok
        assert isinstance(outcome.error, error)
        assert store.calls == []

    def test_english_exports_when_enabled(self, settings, store):
        settings.translate_english = True
        add_string(store, "Color", "Colour", langcode="en")
        stream = io.StringIO()

        outcome = _exporter(settings, store).export(StreamDestination(stream), langcode="en")

        assert outcome.status == ExportStatus.EXPORTED

    def test_invalid_types(self, settings):
        store = RecordingStore()
        outcome = _exporter(settings, store).export(
            StreamDestination(io.StringIO()), langcode="fr", types=["customized", "bogus"]
        )

        assert isinstance(outcome.error, InvalidFilterError)
        assert store.calls == []

    def test_write_error(self, settings):
        store = RecordingStore([TranslationRecord("Hello")])

        outcome = _exporter(settings, store).export(
            StreamDestination(BrokenStream()), langcode="fr"
        )

        assert outcome.status == ExportStatus.FAILED
        assert isinstance(outcome.error, ExportWriteError)
        assert store.closed

    def test_error_mid_export_leaves_no_file(self, settings, tmp_path):
        records = [TranslationRecord("One"), TranslationRecord("Two"), TranslationRecord("Three")]
        store = RecordingStore(records, fail_after=2)
        target = tmp_path / "fr.po"

        outcome = _exporter(settings, store).export(FileDestination(target), langcode="fr")

        assert isinstance(outcome.error, ExportWriteError)
        assert list(tmp_path.iterdir()) == []
