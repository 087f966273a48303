"""
Heuristics for classifying commits and release tags.

Commit messages are classified by their Conventional Commit prefix
(``type(scope): description``). The classification is best effort:
anything that does not look like a Conventional Commit falls into the
``Other`` category. Tag names are scanned for a ``v<major>.<minor>.<patch>``
version, optionally followed by a ``-suffix`` which is ignored.
"""

from __future__ import annotations

import re


OTHER_CATEGORY = "Other"
# Version label for tags whose name does not contain ``v<major>.<minor>.<patch>``.
UNKNOWN_VERSION = "unknown"

CONVENTIONAL_COMMIT_RE = re.compile(r"^([a-z]+)(\([^)]+\))?:\s+(.+)$")
TAG_VERSION_RE = re.compile(r"v(\d+\.\d+\.\d+)(-\w+)?")


def classify_commit(message: str) -> str:
    """Classify a commit subject line into a changelog category.

    Parameters
    ----------
    message : str
        The first line of the commit message.

    Returns
    -------
    str
        The Conventional Commit type with its first letter capitalised
        (``"feat(auth): add login"`` gives ``"Feat"``), or ``"Other"``.
    """
    match = CONVENTIONAL_COMMIT_RE.match(message)
    if not match:
        return OTHER_CATEGORY
    commit_type = match.group(1)
    return commit_type[0].upper() + commit_type[1:]


def parse_version(tag_name: str) -> str:
    """Extract ``major.minor.patch`` from a tag name, or ``"unknown"``."""
    match = TAG_VERSION_RE.search(tag_name)
    return match.group(1) if match else UNKNOWN_VERSION
