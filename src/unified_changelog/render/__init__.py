"""
Rendering of the grouped changelog to markdown and to disk.
"""

from .markdown import render_changelog, write_changelog  # noqa: F401
