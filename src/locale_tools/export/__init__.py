"""Gettext PO export."""

from .exporter import PoExporter, ExportOutcome, ExportStatus, ExportRequest
from .filters import resolve_status_filter, validate_export_options, split_csv
from .languages import LanguageResolver
from .writer import PoStreamWriter, Destination, StreamDestination, FileDestination

__all__ = [
    "PoExporter",
    "ExportOutcome",
    "ExportStatus",
    "ExportRequest",
    "resolve_status_filter",
    "validate_export_options",
    "split_csv",
    "LanguageResolver",
    "PoStreamWriter",
    "Destination",
    "StreamDestination",
    "FileDestination",
]
