"""
Data models for the grouped changelog.

A changelog is a list of :class:`DateGroup` objects. Each one nests
branch, version and category groups, and the innermost
:class:`CategoryGroup` holds the commits themselves. Every level is
stored in its final display order.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import List

from unified_changelog.history.models import VersionedCommit


@dataclass
class CategoryGroup:
    """Commits sharing a category within one version.

    Attributes
    ----------
    category : str
        The category label, e.g. ``Feat`` or ``Other``.
    commits : List[VersionedCommit]
        Commits in the order they were produced by the version assigner.
    """

    category: str
    commits: List[VersionedCommit] = field(default_factory=list)


@dataclass
class VersionGroup:
    """Categories of commits released under one version."""

    version: str
    categories: List[CategoryGroup] = field(default_factory=list)


@dataclass
class BranchGroup:
    """Versions of one branch on a given day."""

    branch: str
    versions: List[VersionGroup] = field(default_factory=list)


@dataclass
class DateGroup:
    """Everything committed on a single day."""

    date: datetime.date
    branches: List[BranchGroup] = field(default_factory=list)
