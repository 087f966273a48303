"""
Commit history extraction and release attribution.

See :mod:`unified_changelog.history.extractor` for reading tags and
commits of a branch and :mod:`unified_changelog.history.version_assigner`
for placing each commit under the release that contains it.
"""

from .models import BranchHistory, Commit, Tag, VersionedCommit  # noqa: F401
from .extractor import HistoryExtractor  # noqa: F401
from .version_assigner import assign_versions  # noqa: F401
