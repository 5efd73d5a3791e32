"""Summarise uncommitted changes and drift across repository areas."""

__version__ = "0.1.0"
