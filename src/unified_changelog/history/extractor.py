"""
Extraction of release tags and recent commits for a single branch.

The extractor turns raw ``git`` output into :class:`Tag` and
:class:`Commit` objects. Failures while querying a branch are logged
and reduce that branch to an empty history so that the remaining
branches can still be processed.
"""

from __future__ import annotations

import datetime
import logging
from contextlib import nullcontext
from typing import List, Optional

from unified_changelog.grouping.change_classifier import classify_commit, parse_version
from unified_changelog.history.models import BranchHistory, Commit, Tag
from unified_changelog.vcs.git_client import LOG_FIELD_SEPARATOR, GitClient, GitError


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# git resolves a bare --since date to the current time of day and compares
# committer timestamps, so the query starts early and dates are filtered here.
SINCE_QUERY_MARGIN = datetime.timedelta(days=2)


def parse_log_line(line: str) -> Optional[Commit]:
    """Parse one ``<full>|<short>|<date>|<subject>`` line into a :class:`Commit`.

    Subjects may contain the separator themselves, so every field after
    the date is joined back together. Lines that do not have enough
    fields or carry an invalid date are skipped and ``None`` is returned.
    """
    fields = line.split(LOG_FIELD_SEPARATOR)
    if len(fields) < 4:
        logger.warning("Skipping malformed log line: %r", line)
        return None
    full_id, short_id, date_text, *message_parts = fields
    try:
        date = datetime.date.fromisoformat(date_text.strip())
    except ValueError:
        logger.warning("Skipping log line with invalid date %r: %r", date_text, line)
        return None
    message = LOG_FIELD_SEPARATOR.join(message_parts).strip()
    return Commit(
        full_id=full_id.strip(),
        short_id=short_id.strip(),
        date=date,
        message=message,
        category=classify_commit(message),
    )


class HistoryExtractor:
    """Read tags and windowed commits for one branch at a time.

    Parameters
    ----------
    client : GitClient
        Client used to query the repository.
    window_days : int
        Only commits dated on or after ``today - window_days`` are listed.
    today : datetime.date
        The date the window ends on.
    use_checkout : bool, optional
        If True, check out each branch while querying it and list commits
        from HEAD. Otherwise every query names the branch explicitly and
        the working tree is left alone.
    """

    def __init__(
        self,
        client: GitClient,
        window_days: int,
        today: datetime.date,
        use_checkout: bool = False,
    ) -> None:
        self.client = client
        self.window_days = window_days
        self.today = today
        self.use_checkout = use_checkout

    @property
    def since(self) -> datetime.date:
        return self.today - datetime.timedelta(days=self.window_days)

    def extract(self, branch: str) -> BranchHistory:
        """Return the tags and commits of ``branch``, or an empty history on failure."""
        logger.info("Getting versioned commit history for branch: %s", branch)
        try:
            scope = self.client.checked_out(branch) if self.use_checkout else nullcontext()
            with scope:
                tags = self._extract_tags(branch)
                logger.info("Found %d tags for %s", len(tags), branch)
                commits = self._extract_commits(None if self.use_checkout else branch)
        except (GitError, OSError, ValueError) as exc:
            logger.error("Error processing branch %s: %s", branch, exc)
            return BranchHistory(branch=branch)
        return BranchHistory(branch=branch, tags=tags, commits=commits)

    def _extract_tags(self, branch: str) -> List[Tag]:
        tags: List[Tag] = []
        for name in self.client.list_merged_tags(branch):
            date_text, commit = self.client.get_tag_target(name)
            tags.append(
                Tag(
                    name=name,
                    date=datetime.date.fromisoformat(date_text),
                    commit=commit,
                    version=parse_version(name),
                )
            )
        return tags

    def _extract_commits(self, ref: Optional[str]) -> List[Commit]:
        since = self.since
        query_since = since - SINCE_QUERY_MARGIN
        lines = self.client.list_commits_since(query_since.isoformat(), ref=ref)
        commits = []
        for line in lines:
            commit = parse_log_line(line)
            if commit is not None and commit.date >= since:
                commits.append(commit)
        return commits
