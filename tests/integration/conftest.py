import os
import shutil
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import pytest

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.integration)
            item.add_marker(requires_git)


def run_git(
    path: Path, *args: str, env: Mapping[str, str] | None = None
) -> str:
    """Run git in a repository and return its stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=str(path),
        capture_output=True,
        check=True,
        text=True,
        env={**os.environ, **(env or {})},
    )
    return result.stdout


def init_git_repo(path: Path) -> None:
    """Initialize a minimal git repository in the given path."""
    _ = run_git(path, "init", "--initial-branch=main")
    _ = run_git(path, "config", "user.email", "test@example.com")
    _ = run_git(path, "config", "user.name", "Test User")
    _ = run_git(path, "config", "commit.gpgsign", "false")


@dataclass(frozen=True, slots=True)
class GitRepo:
    """A throwaway repository with helpers for making commits."""

    root: Path

    def write(self, relative: str, content: str) -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        _ = path.write_text(content)
        return path

    def commit(
        self,
        message: str,
        *,
        author: str = "Test User",
        email: str = "test@example.com",
        date: str = "2020-01-01T12:00:00+0000",
    ) -> str:
        """Stage everything, commit and return the new commit hash."""
        _ = run_git(self.root, "add", "-A")
        _ = run_git(
            self.root,
            "commit",
            "-q",
            "-m",
            message,
            env={
                "GIT_AUTHOR_NAME": author,
                "GIT_AUTHOR_EMAIL": email,
                "GIT_AUTHOR_DATE": date,
                "GIT_COMMITTER_NAME": author,
                "GIT_COMMITTER_EMAIL": email,
                "GIT_COMMITTER_DATE": date,
            },
        )
        return run_git(self.root, "rev-parse", "HEAD").strip()


@dataclass(frozen=True, slots=True)
class SampleHistory:
    """Repository with ``app.py`` written by two commits.

    Lines 1, 2 and 4 come from ``first``; line 3 from ``second``.
    """

    repo: GitRepo
    first: str
    second: str

    @property
    def app(self) -> Path:
        return self.repo.root / "app.py"


@pytest.fixture
def git_repo(tmp_path: Path) -> GitRepo:
    root = tmp_path / "repo"
    root.mkdir()
    init_git_repo(root)
    return GitRepo(root=root.resolve())


@pytest.fixture
def sample_history(git_repo: GitRepo) -> SampleHistory:
    _ = git_repo.write("app.py", "one\ntwo\nthree\nfour\n")
    first = git_repo.commit(
        "Add app", author="Ada Lovelace", email="ada@example.com"
    )
    _ = git_repo.write("app.py", "one\ntwo\nTHREE\nfour\n")
    second = git_repo.commit(
        "Shout line three",
        author="Grace Hopper",
        email="grace@example.com",
        date="2021-06-01T08:30:00-0500",
    )
    return SampleHistory(repo=git_repo, first=first, second=second)
