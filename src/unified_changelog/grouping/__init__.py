"""
Grouping logic for changelog entries.

This package classifies commits into Conventional Commit categories and
groups versioned commits by date, branch, version and category. See
:mod:`unified_changelog.grouping.change_classifier` and
:mod:`unified_changelog.grouping.aggregator` for details.
"""

from .change_classifier import classify_commit, parse_version  # noqa: F401
from .aggregator import group_commits, version_sort_key  # noqa: F401
from .group_model import BranchGroup, CategoryGroup, DateGroup, VersionGroup  # noqa: F401
