"""Checking for and importing translation updates."""

import time
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from ..export.languages import LanguageResolver
from ..store.database import FileHistory, SQLiteTranslationStore
from ..store.settings import ProjectSettings
from ..utils.logging import get_logger
from .batch import Batch, BatchResult, BatchRunner
from .importer import ImportOptions, ImportReport, PoImporter
from .source import LocalTranslationSource
from .status import UPDATE_LOCAL, ProjectStatus, StatusCache

logger = get_logger(__name__)


@dataclass
class UpdateResult:
    """Result of an update run."""

    langcodes: list[str] = field(default_factory=list)
    dropped: list[str] = field(default_factory=list)
    rechecked: bool = False
    imported: list[str] = field(default_factory=list)
    report: ImportReport = field(default_factory=ImportReport)
    batch: Optional[BatchResult] = None

    @property
    def ok(self) -> bool:
        return self.batch is None or self.batch.ok


class TranslationUpdater:
    """Keeps the translation store in sync with available translation files.

    ``check`` refreshes the status cache; ``update`` imports the files the
    status reports as newer than the last import. Both run as checkpointed
    batches with one step per project and language.
    """

    def __init__(
        self,
        projects: list[ProjectSettings],
        resolver: LanguageResolver,
        store: SQLiteTranslationStore,
        source: LocalTranslationSource,
        status: StatusCache,
        runner: BatchRunner,
        options: Optional[ImportOptions] = None,
        clock=time.time,
    ):
        self.projects = projects
        self.resolver = resolver
        self.store = store
        self.source = source
        self.status = status
        self.runner = runner
        self.importer = PoImporter(store)
        self.options = options or ImportOptions()
        self.clock = clock

    def translatable_langcodes(self) -> list[str]:
        return [language.id for language in self.resolver.translatable_languages()]

    # Batches

    def build_check_batch(self, langcodes: Iterable[str]) -> Batch:
        """Batch flushing the status and checking every project and language."""
        langcodes = list(langcodes)
        batch = Batch(title=f"Checking translations ({', '.join(langcodes)})")
        batch.add_step("flush", lambda results: self.status.clear())
        for project in self.projects:
            for langcode in langcodes:
                batch.add_step(
                    f"check:{project.name}:{langcode}",
                    self._check_step(project, langcode),
                )
        batch.add_step("finish", lambda results: self.status.mark_checked())
        return batch

    def build_update_batch(
        self,
        langcodes: Iterable[str],
        recheck: bool,
        scope: Optional[Iterable[str]] = None,
    ) -> Batch:
        """Batch importing available updates, re-checking first if requested.

        The title names ``scope`` (defaults to ``langcodes``); a checkpoint
        only resumes a batch with the same title.
        """
        langcodes = list(langcodes)
        scope = list(scope) if scope is not None else langcodes
        batch = Batch(title=f"Updating translations ({', '.join(scope)})")
        if recheck:
            batch.add_step("flush", lambda results: self.status.clear())
        for project in self.projects:
            for langcode in langcodes:
                if recheck:
                    batch.add_step(
                        f"check:{project.name}:{langcode}",
                        self._check_step(project, langcode),
                    )
                batch.add_step(
                    f"import:{project.name}:{langcode}",
                    self._import_step(project, langcode),
                )
        if recheck:
            batch.add_step("finish", lambda results: self.status.mark_checked())
        return batch

    def _check_step(self, project: ProjectSettings, langcode: str):
        def step(results: dict[str, Any]) -> None:
            self.check_project(project, langcode)
            results["checked"] = results.get("checked", 0) + 1

        return step

    def _import_step(self, project: ProjectSettings, langcode: str):
        def step(results: dict[str, Any]) -> None:
            report = self.import_project(project, langcode)
            if report is None:
                return
            total = ImportReport.from_dict(results.get("report", ImportReport().to_dict()))
            total.merge(report)
            results["report"] = total.to_dict()
            results.setdefault("imported", []).append(f"{project.name}:{langcode}")

        return step

    # Steps

    def check_project(self, project: ProjectSettings, langcode: str) -> ProjectStatus:
        """Compare the available translation file with the last import."""
        source_file = self.source.find(project.name, project.version, langcode)
        history = self.store.get_file_history(project.name, langcode)
        last_imported = history.timestamp if history else 0.0

        status = ProjectStatus(
            project=project.name,
            langcode=langcode,
            version=project.version,
        )
        if source_file is not None:
            status.filename = source_file.filename
            status.timestamp = source_file.timestamp
            status.last_imported = last_imported
            newer = source_file.timestamp > last_imported
            changed_version = history is not None and history.version != project.version
            if newer or changed_version:
                status.type = UPDATE_LOCAL

        self.status.set(status)
        logger.debug(
            f"Checked {project.name} ({langcode}): "
            f"{'update available' if status.has_update else 'up to date'}"
        )
        return status

    def import_project(self, project: ProjectSettings, langcode: str) -> Optional[ImportReport]:
        """Import the available update of a project and language.

        Returns:
            The import report, or None if no update is available
        """
        status = self.status.get(project.name, langcode)
        if status is None or not status.has_update:
            return None

        source_file = self.source.find(project.name, project.version, langcode)
        if source_file is None:
            logger.warning(f"Translation file for {project.name} ({langcode}) is gone")
            status.type = None
            self.status.set(status)
            return None

        report = self.importer.import_file(source_file.path, langcode, self.options)

        self.store.update_file_history(
            FileHistory(
                project=project.name,
                langcode=langcode,
                filename=source_file.filename,
                version=project.version,
                timestamp=source_file.timestamp,
                last_checked=self.clock(),
            )
        )
        status.last_imported = source_file.timestamp
        status.type = None
        self.status.set(status)
        return report

    # Commands

    def check(self) -> BatchResult:
        """Refresh the status of all projects in all translatable languages."""
        return self.runner.run(self.build_check_batch(self.translatable_langcodes()))

    def select_langcodes(
        self,
        candidates: Iterable[str],
        requested: Optional[Iterable[str]] = None,
    ) -> tuple[list[str], list[str]]:
        """Restrict candidate language codes to the requested ones.

        Returns:
            Tuple of (selected langcodes, requested langcodes that were dropped)
        """
        candidates = list(dict.fromkeys(candidates))
        requested = list(dict.fromkeys(requested or []))
        if not requested:
            return candidates, []

        selected = [langcode for langcode in candidates if langcode in requested]
        dropped = [langcode for langcode in requested if langcode not in candidates]
        for langcode in dropped:
            logger.warning(f"No translation updates for language {langcode}, skipping it")
        return selected, dropped

    def update(self, requested: Optional[Iterable[str]] = None) -> UpdateResult:
        """Import available translation updates.

        An expired status is re-checked as part of the update batch.

        Args:
            requested: Language codes to update; all when empty
        """
        requested = list(dict.fromkeys(requested or []))
        scope = requested or self.translatable_langcodes()

        recheck = self.status.is_expired()
        if recheck:
            candidates = self.translatable_langcodes()
        else:
            candidates = self.status.langcodes_with_updates()

        langcodes, dropped = self.select_langcodes(candidates, requested)
        result = UpdateResult(langcodes=langcodes, dropped=dropped, rechecked=recheck)
        if not langcodes:
            logger.info("No translation updates available.")
            return result

        batch_result = self.runner.run(self.build_update_batch(langcodes, recheck, scope))
        result.batch = batch_result
        result.imported = list(batch_result.results.get("imported", []))
        if "report" in batch_result.results:
            result.report = ImportReport.from_dict(batch_result.results["report"])
        return result
