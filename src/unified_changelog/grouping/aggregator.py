"""
Grouping of versioned commits into the nested changelog structure.

Commits are grouped by date, branch, version and category, in that
order. Each level is sorted explicitly:

- dates newest first,
- branches in order of first appearance,
- versions newest first by numeric ``major.minor.patch`` comparison,
- categories alphabetically (case-sensitive),
- commits in arrival order.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from unified_changelog.grouping.group_model import (
    BranchGroup,
    CategoryGroup,
    DateGroup,
    VersionGroup,
)
from unified_changelog.history.models import LATEST_VERSION, VersionedCommit


VersionKey = Tuple[int, Tuple[int, int, int], str]


def version_sort_key(version: str) -> VersionKey:
    """Return a key that sorts versions newest first when sorted ascending.

    ``latest`` sorts before every real version. Versions made of three
    dot-separated integers follow in descending numeric order. Anything
    else (``unknown`` included) sorts last, alphabetically.
    """
    if version == LATEST_VERSION:
        return (0, (0, 0, 0), version)
    parts = version.split(".")
    if len(parts) == 3 and all(part.isdigit() for part in parts):
        major, minor, patch = (int(part) for part in parts)
        return (1, (-major, -minor, -patch), version)
    return (2, (0, 0, 0), version)


def sort_versions(versions: Iterable[str]) -> List[str]:
    return sorted(versions, key=version_sort_key)


def group_commits(commits: Iterable[VersionedCommit]) -> List[DateGroup]:
    """Group ``commits`` into date, branch, version and category levels.

    Parameters
    ----------
    commits : Iterable[VersionedCommit]
        Versioned commits of all branches, concatenated in branch order.

    Returns
    -------
    List[DateGroup]
        The nested groups in display order. Every input commit appears
        exactly once.
    """
    # date -> branch -> version -> category -> commits
    tree: Dict = {}
    for commit in commits:
        by_branch = tree.setdefault(commit.date, {})
        by_version = by_branch.setdefault(commit.branch, {})
        by_category = by_version.setdefault(commit.version, {})
        by_category.setdefault(commit.category, []).append(commit)

    groups: List[DateGroup] = []
    for date in sorted(tree, reverse=True):
        date_group = DateGroup(date=date)
        for branch, by_version in tree[date].items():
            branch_group = BranchGroup(branch=branch)
            for version in sort_versions(by_version):
                by_category = by_version[version]
                branch_group.versions.append(
                    VersionGroup(
                        version=version,
                        categories=[
                            CategoryGroup(category=category, commits=by_category[category])
                            for category in sorted(by_category)
                        ],
                    )
                )
            date_group.branches.append(branch_group)
        groups.append(date_group)
    return groups
