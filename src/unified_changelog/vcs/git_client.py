"""
Git client implementation for unified_changelog.

This module wraps the read-only Git queries needed to build a changelog:
resolving branches, listing release tags, listing commits within a time
window, and testing commit ancestry. All subprocess calls go through
:meth:`GitClient._run` so that unit tests can mock them easily.

Every query accepts the branch it is scoped to as an explicit argument.
Callers that need the old checkout-based behaviour can wrap their queries
in :meth:`GitClient.checked_out`, which serializes the checkout and always
attempts to restore the previously active branch.
"""

from __future__ import annotations

import logging
import subprocess
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Tuple


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings when the root logger
# is not configured. Messages propagate to the root once the CLI sets it up.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# Field delimiter used in the ``git log`` format string.
LOG_FIELD_SEPARATOR = "|"
LOG_FORMAT = LOG_FIELD_SEPARATOR.join(["%H", "%h", "%ad", "%s"])


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class GitClient:
    """Client for querying a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root
        # Only one checkout-query-restore sequence may run at a time.
        self._checkout_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def is_repo(path: Path) -> bool:
        """Return True if the given path is the root of a Git repository."""
        return (path / ".git").exists()

    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                # reached filesystem root
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If the command exits with a non-zero status when ``check`` is
            True, if the ``git`` executable cannot be started, or if its
            output cannot be decoded.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except UnicodeDecodeError as e:
            logger.error("Unicode decode error in Git output: %s", e)
            raise GitError(f"Failed to decode Git output: {e}") from e
        except OSError as e:
            logger.error("Unable to execute git: %s", e)
            raise GitError(f"Unable to execute git: {e}") from e

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # Branch operations
    # ------------------------------------------------------------------
    def get_current_branch(self) -> str:
        """Get the name of the current branch.

        Returns
        -------
        str
            The name of the current branch (``HEAD`` when detached).

        Raises
        ------
        GitError
            If unable to determine the current branch.
        """
        result = self._run(["rev-parse", "--abbrev-ref", "HEAD"], check=True)
        return result.stdout.strip()

    def get_head_commit(self) -> str:
        """Return the full identifier of the checked out commit."""
        result = self._run(["rev-parse", "HEAD"], check=True)
        return result.stdout.strip()

    def checkout(self, branch_name: str) -> None:
        """Switch the working tree to ``branch_name``."""
        # "--" keeps a same-named file or directory from being read as a path
        self._run(["checkout", branch_name, "--"], check=True)

    @contextmanager
    def checked_out(self, branch_name: str) -> Iterator[None]:
        """Temporarily check out ``branch_name``.

        The previously active branch is restored when the block exits,
        whether it exits normally or with an exception. On a detached HEAD
        the previous commit is restored instead. A failed restore is
        logged and never raised, which can leave the working tree on
        ``branch_name``.
        """
        with self._checkout_lock:
            original = self.get_current_branch()
            if original == "HEAD":
                original = self.get_head_commit()
            self.checkout(branch_name)
            try:
                yield
            finally:
                try:
                    self.checkout(original)
                except GitError as exc:
                    logger.error("Failed to return to original branch %s: %s", original, exc)

    # ------------------------------------------------------------------
    # History queries
    # ------------------------------------------------------------------
    def list_merged_tags(self, branch_name: str) -> List[str]:
        """List tags merged into ``branch_name``, newest creation date first."""
        result = self._run(
            ["tag", "--merged", branch_name, "--sort=-creatordate"], check=True
        )
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def get_tag_target(self, tag_name: str) -> Tuple[str, str]:
        """Resolve the commit a tag points at.

        Returns
        -------
        Tuple[str, str]
            ``(date, commit)`` where ``date`` is the ``YYYY-MM-DD`` author
            date of the target commit and ``commit`` its full identifier.
        """
        date_result = self._run(
            ["log", "-1", "--format=%ad", "--date=short", tag_name, "--"], check=True
        )
        commit_result = self._run(["rev-list", "-n", "1", tag_name, "--"], check=True)
        return date_result.stdout.strip(), commit_result.stdout.strip()

    def list_commits_since(self, since: str, ref: Optional[str] = None) -> List[str]:
        """List commits reachable from ``ref`` dated on or after ``since``.

        Parameters
        ----------
        since : str
            A ``YYYY-MM-DD`` date passed to ``git log --since``.
        ref : str, optional
            Branch or revision to list. Defaults to the checked out HEAD.

        Returns
        -------
        List[str]
            Raw log lines, newest first, in the form
            ``<full id>|<short id>|<date>|<subject>``.
        """
        args = ["log"]
        if ref:
            args.append(ref)
        args += [f"--since={since}", f"--format={LOG_FORMAT}", "--date=short", "--"]
        result = self._run(args, check=True)
        return [line for line in result.stdout.splitlines() if line.strip()]

    def is_ancestor(self, commit: str, descendant: str) -> bool:
        """Return True if ``commit`` is an ancestor of ``descendant``.

        ``git merge-base --is-ancestor`` exits with 0 when it is and with 1
        when it is not. Any other status is treated as an error.
        """
        result = self._run(["merge-base", "--is-ancestor", commit, descendant], check=False)
        if result.returncode == 0:
            return True
        if result.returncode == 1:
            return False
        logger.error(
            "Ancestry check failed for %s..%s: %s", commit, descendant, result.stderr.strip()
        )
        raise GitError(result.stderr.strip() or f"merge-base exited with {result.returncode}")
