"""Local directory of translation files available for import."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..utils.logging import get_logger

logger = get_logger(__name__)

FILENAME_PATTERN = "{project}-{version}.{langcode}.po"


@dataclass
class SourceFile:
    """A translation file found for a project, version and language."""

    project: str
    version: str
    langcode: str
    filename: str
    path: Path
    timestamp: float


class LocalTranslationSource:
    """Finds translation files named ``{project}-{version}.{langcode}.po``."""

    def __init__(self, directory: str | Path, pattern: str = FILENAME_PATTERN):
        self.directory = Path(directory)
        self.pattern = pattern

    def build_filename(self, project: str, version: str, langcode: str) -> str:
        return self.pattern.format(project=project, version=version, langcode=langcode)

    def find(self, project: str, version: str, langcode: str) -> Optional[SourceFile]:
        """Look up the translation file for a project and language.

        Returns:
            The file, or None if the directory holds no such file
        """
        filename = self.build_filename(project, version, langcode)
        path = self.directory / filename
        if not path.is_file():
            logger.debug(f"No translation file: {path}")
            return None

        return SourceFile(
            project=project,
            version=version,
            langcode=langcode,
            filename=filename,
            path=path,
            timestamp=path.stat().st_mtime,
        )
