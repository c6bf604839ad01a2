"""Serve a directory of Markdown documents as a navigable website."""

__version__ = "0.1.0"
