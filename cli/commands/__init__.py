"""Locale commands."""
