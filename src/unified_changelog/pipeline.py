"""
End-to-end changelog generation.

Branches are processed one after another: extract tags and commits,
attribute each commit to a release, then merge every branch into one
grouped document. Extraction failures only empty the affected branch;
any other failure propagates to the caller and nothing is written.
"""

from __future__ import annotations

import datetime
import logging
from pathlib import Path
from typing import List, Optional

from unified_changelog.config.loader import ChangelogConfig
from unified_changelog.grouping.aggregator import group_commits
from unified_changelog.history.extractor import HistoryExtractor
from unified_changelog.history.models import VersionedCommit
from unified_changelog.history.version_assigner import assign_versions
from unified_changelog.render.markdown import render_changelog, write_changelog
from unified_changelog.vcs.git_client import GitClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


def collect_commits(
    config: ChangelogConfig,
    client: GitClient,
    today: datetime.date,
) -> List[VersionedCommit]:
    """Return the versioned commits of every configured branch, in branch order."""
    logger.info("Starting to gather versioned commit history from branches...")
    extractor = HistoryExtractor(
        client,
        window_days=config.window_days,
        today=today,
        use_checkout=config.checkout_branches,
    )
    all_commits: List[VersionedCommit] = []
    for branch in config.branches:
        history = extractor.extract(branch)
        all_commits.extend(assign_versions(history, client.is_ancestor, today))
    logger.info("Total commits gathered from all branches: %d", len(all_commits))
    return all_commits


def generate_changelog(
    config: ChangelogConfig,
    client: GitClient,
    today: Optional[datetime.date] = None,
) -> str:
    """Build the unified changelog document for ``config``.

    ``today`` anchors the commit window and dates the ``latest`` version
    of untagged branches; it defaults to the current date.
    """
    if today is None:
        today = datetime.date.today()
    commits = collect_commits(config, client, today)
    if not commits:
        logger.info("No commits found in the specified time range.")
    return render_changelog(group_commits(commits), title=config.title)


def run(
    config: ChangelogConfig,
    client: GitClient,
    today: Optional[datetime.date] = None,
) -> Path:
    """Generate the changelog and write it to the configured output path."""
    text = generate_changelog(config, client, today)
    output_path = config.resolve_output_path(client.repo_root)
    write_changelog(output_path, text)
    return output_path
