"""Locale command-line interface."""
