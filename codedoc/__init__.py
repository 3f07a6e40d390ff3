"""Analyse a codebase archive and generate Word documentation for it, over HTTP or as a library."""

__version__ = "0.1.0"