"""Path management utilities."""

from pathlib import Path
from typing import Optional

from .config_loader import get_project_root


class PathManager:
    """Manages site paths for the translation database, state and sources."""

    def __init__(self, base_dir: Optional[Path] = None):
        """Initialize path manager.

        Args:
            base_dir: Base site directory. If None, uses project root.
        """
        self.base_dir = Path(base_dir) if base_dir else get_project_root()

    @property
    def configs_dir(self) -> Path:
        """Directory for configuration files."""
        return self.base_dir / "configs"

    @property
    def default_config_file(self) -> Path:
        """Site settings file used when none is given."""
        return self.configs_dir / "site.yaml"

    def resolve(self, path: str | Path) -> Path:
        """Resolve a configured path against the base directory."""
        path = Path(path).expanduser()
        if path.is_absolute():
            return path
        return self.base_dir / path

    def ensure_parent(self, path: str | Path) -> Path:
        """Resolve a file path and create its parent directory."""
        resolved = self.resolve(path)
        resolved.parent.mkdir(parents=True, exist_ok=True)
        return resolved
