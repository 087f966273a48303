"""
Association of commits with the release that contains them.

Tags and commits both arrive newest first. A single forward-moving
cursor over the tags is advanced whenever a commit is already contained
in the next (older) tag, so every commit ends up under the oldest tag
that still contains it. The cursor is never rewound, which keeps the
number of ancestry queries proportional to commits plus tag transitions.
"""

from __future__ import annotations

import datetime
import logging
from typing import Callable, Dict, List, Tuple

from unified_changelog.history.models import LATEST_VERSION, BranchHistory, VersionedCommit


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


AncestryCheck = Callable[[str, str], bool]


def assign_versions(
    history: BranchHistory,
    is_ancestor: AncestryCheck,
    today: datetime.date,
) -> List[VersionedCommit]:
    """Attach a version and version date to every commit of ``history``.

    Parameters
    ----------
    history : BranchHistory
        Tags and commits of one branch, both ordered newest first.
    is_ancestor : callable
        ``is_ancestor(commit, other)`` returns True when ``commit`` is an
        ancestor of ``other``. Errors raised by it are not caught here.
    today : datetime.date
        Version date used for every commit when the branch has no tags.

    Returns
    -------
    List[VersionedCommit]
        One entry per input commit, in input order.

    Notes
    -----
    Commits made after the newest tag are reported under the newest tag's
    version; they are not singled out as unreleased.
    """
    tags = history.tags
    if tags:
        current_version = tags[0].version
        current_version_date = tags[0].date
    else:
        current_version = LATEST_VERSION
        current_version_date = today

    cache: Dict[Tuple[str, str], bool] = {}

    def contained_in(commit_id: str, tag_commit: str) -> bool:
        key = (commit_id, tag_commit)
        if key not in cache:
            cache[key] = is_ancestor(commit_id, tag_commit)
        return cache[key]

    tag_index = 0
    versioned: List[VersionedCommit] = []
    for commit in history.commits:
        while tag_index < len(tags) - 1:
            if not contained_in(commit.full_id, tags[tag_index + 1].commit):
                break
            tag_index += 1
            current_version = tags[tag_index].version
            current_version_date = tags[tag_index].date
        versioned.append(
            VersionedCommit(
                commit=commit,
                branch=history.branch,
                version=current_version,
                version_date=current_version_date,
            )
        )

    logger.info("Found %d versioned commits in %s", len(versioned), history.branch)
    return versioned
