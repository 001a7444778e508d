"""Cached status of available translation updates."""

import json
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Iterator, Optional

from ..utils.logging import get_logger

logger = get_logger(__name__)

# Update type of a file newer than the last import
UPDATE_LOCAL = "local"


@dataclass
class ProjectStatus:
    """Translation availability for one project and language."""

    project: str
    langcode: str
    version: str
    filename: str = ""
    timestamp: float = 0.0
    last_imported: float = 0.0
    type: Optional[str] = None

    @property
    def has_update(self) -> bool:
        return bool(self.type)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "ProjectStatus":
        return cls(**data)


class StatusCache:
    """Translation status per project and language, persisted as JSON.

    The status expires ``ttl`` seconds after the last completed check.
    """

    def __init__(self, path: str | Path, ttl: int, clock=time.time):
        """Initialize the cache.

        Args:
            path: JSON file holding the status and last check time
            ttl: Seconds after which the status is considered expired
            clock: Returns the current time, in seconds
        """
        self.path = Path(path)
        self.ttl = ttl
        self.clock = clock
        self.last_checked: float = 0.0
        self._status: dict[str, dict[str, ProjectStatus]] = {}
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        self.last_checked = data.get("last_checked", 0.0)
        for project, languages in data.get("status", {}).items():
            self._status[project] = {
                langcode: ProjectStatus.from_dict(item) for langcode, item in languages.items()
            }

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "last_checked": self.last_checked,
            "status": {
                project: {langcode: item.to_dict() for langcode, item in languages.items()}
                for project, languages in self._status.items()
            },
        }
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def is_expired(self) -> bool:
        return self.last_checked < self.clock() - self.ttl

    def get(self, project: str, langcode: str) -> Optional[ProjectStatus]:
        return self._status.get(project, {}).get(langcode)

    def set(self, status: ProjectStatus) -> None:
        self._status.setdefault(status.project, {})[status.langcode] = status
        self.save()

    def __iter__(self) -> Iterator[ProjectStatus]:
        for languages in self._status.values():
            yield from languages.values()

    def clear(self) -> None:
        """Forget all status information, including the last check time."""
        logger.debug("Clearing translation status")
        self._status.clear()
        self.last_checked = 0.0
        self.save()

    def mark_checked(self) -> None:
        self.last_checked = self.clock()
        self.save()

    def langcodes_with_updates(self) -> list[str]:
        """Language codes with at least one available update, deduplicated."""
        langcodes: list[str] = []
        for status in self:
            if status.has_update and status.langcode not in langcodes:
                langcodes.append(status.langcode)
        return langcodes
