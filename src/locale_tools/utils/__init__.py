"""Utility modules for locale-tools."""

from .config_loader import load_config, get_project_root, BaseConfig
from .logging import setup_logging, get_logger, console
from .paths import PathManager

__all__ = [
    "load_config",
    "get_project_root",
    "BaseConfig",
    "setup_logging",
    "get_logger",
    "console",
    "PathManager",
]
