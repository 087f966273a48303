import datetime
import os
import shutil
import subprocess
from pathlib import Path

import pytest


def _git(repo: Path, *args: str, date: datetime.date = None, time: str = "12:00:00") -> str:
    env = dict(os.environ)
    env.update(
        {
            "GIT_AUTHOR_NAME": "Test",
            "GIT_AUTHOR_EMAIL": "test@example.com",
            "GIT_COMMITTER_NAME": "Test",
            "GIT_COMMITTER_EMAIL": "test@example.com",
            "GIT_CONFIG_NOSYSTEM": "1",
            "HOME": str(repo),
        }
    )
    if date is not None:
        stamp = f"{date.isoformat()}T{time}+00:00"
        env["GIT_AUTHOR_DATE"] = stamp
        env["GIT_COMMITTER_DATE"] = stamp
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        env=env,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        check=True,
    )
    return result.stdout.strip()


class GitRepoBuilder:
    """Build a throwaway repository with dated commits and tags."""

    def __init__(self, root: Path) -> None:
        self.root = root
        _git(root, "init", "-q")
        _git(root, "checkout", "-q", "-b", "prod")

    def commit(
        self, message: str, date: datetime.date, time: str = "12:00:00", path: str = "history.txt"
    ) -> str:
        marker = self.root / path
        marker.parent.mkdir(parents=True, exist_ok=True)
        with marker.open("a", encoding="utf-8") as handle:
            handle.write(message + "\n")
        _git(self.root, "add", "--", path)
        _git(self.root, "commit", "-q", "-m", message, date=date, time=time)
        return _git(self.root, "rev-parse", "HEAD")

    def tag(self, name: str, date: datetime.date) -> None:
        # Lightweight tags take their creation date from the tagged commit.
        _git(self.root, "tag", name, date=date)

    def branch(self, name: str) -> None:
        _git(self.root, "checkout", "-q", "-b", name)

    def switch(self, name: str) -> None:
        _git(self.root, "checkout", "-q", name, "--")

    def current_branch(self) -> str:
        return _git(self.root, "rev-parse", "--abbrev-ref", "HEAD")


@pytest.fixture
def git_repo(tmp_path):
    """A fresh Git repository on branch ``prod``; skipped when git is missing."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    repo = tmp_path / "repo"
    repo.mkdir()
    return GitRepoBuilder(repo)
