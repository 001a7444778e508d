"""Wiring of a site's collaborators from its settings."""

from functools import cached_property
from pathlib import Path
from typing import Optional

from .export.exporter import PoExporter
from .export.languages import LanguageResolver
from .store.database import SQLiteTranslationStore
from .store.settings import SiteSettings
from .updates.batch import BatchRunner
from .updates.importer import ImportOptions, PoImporter
from .updates.source import LocalTranslationSource
from .updates.status import StatusCache
from .updates.updater import TranslationUpdater
from .utils.logging import get_logger
from .utils.paths import PathManager

logger = get_logger(__name__)


class LocaleSite:
    """A site: settings, translation store and the services built on them."""

    def __init__(self, settings: SiteSettings, paths: Optional[PathManager] = None):
        self.settings = settings
        base_dir = Path(settings.base_dir) if settings.base_dir else None
        self.paths = paths or PathManager(base_dir)

    @classmethod
    def from_config(cls, config_path: Optional[str | Path] = None) -> "LocaleSite":
        """Load a site from a settings file.

        Without a path, the project's configs/site.yaml is used when it
        exists, otherwise defaults.
        """
        paths = PathManager()
        if config_path is None and paths.default_config_file.exists():
            config_path = paths.default_config_file

        settings = SiteSettings.load(config_path)
        logger.debug(f"Loaded site settings for '{settings.site_name}' from {config_path}")
        return cls(settings)

    def __enter__(self) -> "LocaleSite":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        if "store" in self.__dict__:
            self.store.close()

    @cached_property
    def store(self) -> SQLiteTranslationStore:
        return SQLiteTranslationStore(self.paths.ensure_parent(self.settings.database))

    @property
    def resolver(self) -> LanguageResolver:
        return LanguageResolver(self.settings, self.settings)

    def import_options(self, customized: bool = False) -> ImportOptions:
        return ImportOptions(
            customized=customized,
            overwrite_customized=self.settings.overwrite_customized,
            overwrite_not_customized=self.settings.overwrite_not_customized,
        )

    def exporter(self) -> PoExporter:
        return PoExporter(
            languages=self.settings,
            config=self.settings,
            store=self.store,
            site=self.settings,
        )

    def importer(self) -> PoImporter:
        return PoImporter(self.store)

    def status_cache(self) -> StatusCache:
        return StatusCache(
            self.paths.resolve(self.settings.state_file),
            ttl=self.settings.status_ttl,
        )

    def updater(self) -> TranslationUpdater:
        return TranslationUpdater(
            projects=self.settings.projects,
            resolver=self.resolver,
            store=self.store,
            source=LocalTranslationSource(self.paths.resolve(self.settings.translations_dir)),
            status=self.status_cache(),
            runner=BatchRunner(self.paths.resolve(self.settings.checkpoint_file)),
            options=self.import_options(),
        )
