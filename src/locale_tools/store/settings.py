"""Site settings: languages, configuration flags and site identity."""

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

from ..models import Language
from ..utils.config_loader import BaseConfig

# Status of available translations is rechecked after three days
STATUS_TTL = 3 * 24 * 60 * 60


class LanguageSettings(BaseModel):
    """A configured language."""

    id: str
    name: str
    locked: bool = False

    def to_language(self) -> Language:
        return Language(id=self.id, name=self.name, locked=self.locked)


class ProjectSettings(BaseModel):
    """A project whose interface translations are kept up to date."""

    name: str
    version: str


def _default_languages() -> list[LanguageSettings]:
    return [LanguageSettings(id="en", name="English")]


class SiteSettings(BaseConfig):
    """Settings for one site, loaded from YAML.

    Serves as the language registry, the configuration store and the
    site identity for the export and update services.
    """

    site_name: str = "Default"
    base_dir: Optional[str] = None

    database: str = "data/locale.sqlite"
    state_file: str = "data/locale_status.json"
    checkpoint_file: str = "data/locale_batch.json"
    translations_dir: str = "data/translations"

    translate_english: bool = False
    status_ttl: int = STATUS_TTL
    overwrite_customized: bool = False
    overwrite_not_customized: bool = True

    languages: list[LanguageSettings] = Field(default_factory=_default_languages)
    projects: list[ProjectSettings] = Field(default_factory=list)

    @classmethod
    def load(cls, path: Optional[str | Path] = None) -> "SiteSettings":
        """Load settings from a YAML file, or use defaults when no path is given."""
        if path is None:
            return cls()
        return cls.from_yaml(path)

    def get_language(self, langcode: str) -> Optional[Language]:
        for language in self.languages:
            if language.id == langcode:
                return language.to_language()
        return None

    def get_languages(self) -> list[Language]:
        return [language.to_language() for language in self.languages]

    def get(self, key: str, default: Any = None) -> Any:
        return getattr(self, key, default)

    def get_site_name(self) -> str:
        return self.site_name
