"""Themesmith: a desktop editor for VS Code color themes."""

__version__ = "0.3.0"
