"""
Version control system (VCS) integration.

This package contains the :class:`GitClient` used to read branches, tags,
commits and ancestry information out of a Git repository. The client
never writes to the repository history.
"""

from .git_client import GitClient, GitError  # noqa: F401
