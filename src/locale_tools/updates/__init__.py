"""Translation update checking and import."""

from .batch import Batch, BatchRunner, BatchResult, BatchStep
from .importer import PoImporter, ImportOptions, ImportReport
from .source import LocalTranslationSource, SourceFile
from .status import StatusCache, ProjectStatus, UPDATE_LOCAL
from .updater import TranslationUpdater, UpdateResult

__all__ = [
    "Batch",
    "BatchRunner",
    "BatchResult",
    "BatchStep",
    "PoImporter",
    "ImportOptions",
    "ImportReport",
    "LocalTranslationSource",
    "SourceFile",
    "StatusCache",
    "ProjectStatus",
    "UPDATE_LOCAL",
    "TranslationUpdater",
    "UpdateResult",
]
