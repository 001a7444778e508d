"""Locale command-line tools.

This package provides tools for:
- Exporting stored interface translations, or a template, as gettext PO
- Checking a translations directory for updated translation files
- Importing translation updates in checkpointed, resumable batches
"""

__version__ = "1.0.0"
