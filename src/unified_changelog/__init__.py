"""
Top-level package for unified_changelog.

This package builds a single markdown changelog out of the recent
history of several release branches. The CLI entry point lives in
``unified_changelog.cli`` and the programmatic one in
``unified_changelog.pipeline``.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
