"""
Data models for extracted commit history.

:class:`Tag` and :class:`Commit` are produced by the history extractor
and never change afterwards. :class:`VersionedCommit` is a commit that
the version assigner has placed under a release version on a branch.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import List


# Version label used for every commit of a branch that has no tags.
LATEST_VERSION = "latest"


@dataclass(frozen=True)
class Tag:
    """A release tag reachable from a branch.

    Attributes
    ----------
    name : str
        The tag name, e.g. ``v1.2.3-prod``.
    date : datetime.date
        Date of the commit the tag points at.
    commit : str
        Full identifier of the commit the tag points at.
    version : str
        ``major.minor.patch`` parsed from the name, or ``"unknown"``.
    """

    name: str
    date: datetime.date
    commit: str
    version: str


@dataclass(frozen=True)
class Commit:
    """A single commit read from ``git log``."""

    full_id: str
    short_id: str
    date: datetime.date
    message: str
    category: str


@dataclass(frozen=True)
class VersionedCommit:
    """A commit attributed to a branch and a release version."""

    commit: Commit
    branch: str
    version: str
    version_date: datetime.date

    @property
    def short_id(self) -> str:
        return self.commit.short_id

    @property
    def date(self) -> datetime.date:
        return self.commit.date

    @property
    def message(self) -> str:
        return self.commit.message

    @property
    def category(self) -> str:
        return self.commit.category


@dataclass
class BranchHistory:
    """Tags (newest first) and commits (newest first) extracted for one branch."""

    branch: str
    tags: List[Tag] = field(default_factory=list)
    commits: List[Commit] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.tags and not self.commits
