"""
Markdown rendering of the grouped changelog.

The document uses one heading level per grouping level::

    # Unified Changelog
    ## 2024-05-02
    ### PROD
    #### 1.4.0
    **Feat**
    - add login (abc1234)

Blank lines separate every block. When there is nothing to report, a
fixed "no commits found" document is produced instead.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence

from unified_changelog.grouping.group_model import DateGroup


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


DEFAULT_TITLE = "Unified Changelog"
NO_COMMITS_MESSAGE = "No commits found in the specified time range."


def render_empty(title: str = DEFAULT_TITLE) -> str:
    return f"# {title}\n\n{NO_COMMITS_MESSAGE}"


def render_changelog(groups: Sequence[DateGroup], title: str = DEFAULT_TITLE) -> str:
    """Render grouped commits as a markdown document.

    Parameters
    ----------
    groups : Sequence[DateGroup]
        Groups in display order, as returned by
        :func:`unified_changelog.grouping.aggregator.group_commits`.
    title : str, optional
        Text of the level-1 heading.

    Returns
    -------
    str
        The markdown document. Branch names are upper-cased and each
        commit is listed as ``- <message> (<short id>)``.
    """
    if not groups:
        return render_empty(title)

    lines: List[str] = [f"# {title}", ""]
    for date_group in groups:
        lines += [f"## {date_group.date.isoformat()}", ""]
        for branch_group in date_group.branches:
            lines += [f"### {branch_group.branch.upper()}", ""]
            for version_group in branch_group.versions:
                lines += [f"#### {version_group.version}", ""]
                for category_group in version_group.categories:
                    lines += [f"**{category_group.category}**", ""]
                    lines += [
                        f"- {commit.message} ({commit.short_id})"
                        for commit in category_group.commits
                    ]
                    lines.append("")
    return "\n".join(lines) + "\n"


def write_changelog(path: Path, text: str) -> None:
    """Write ``text`` to ``path`` as UTF-8, replacing any previous content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    logger.info("Unified changelog generated at %s", path)
