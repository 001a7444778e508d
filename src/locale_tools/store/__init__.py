"""Translation storage and site collaborators."""

from .database import SQLiteTranslationStore, FileHistory
from .ports import LanguageRegistry, ConfigStore, SiteIdentity, TranslationStore
from .settings import SiteSettings, LanguageSettings, ProjectSettings, STATUS_TTL

__all__ = [
    "SQLiteTranslationStore",
    "FileHistory",
    "LanguageRegistry",
    "ConfigStore",
    "SiteIdentity",
    "TranslationStore",
    "SiteSettings",
    "LanguageSettings",
    "ProjectSettings",
    "STATUS_TTL",
]
