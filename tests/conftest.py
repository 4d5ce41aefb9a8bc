"""Shared test fixtures for gitblame tests."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

FIRST_HASH = "1f2e3d4c5b6a79881f2e3d4c5b6a79881f2e3d4c"
SECOND_HASH = "a9b8c7d6e5f40312a9b8c7d6e5f40312a9b8c7d6"
ZERO = "0" * 40


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@dataclass(slots=True)
class PorcelainGroup:
    """One group of ``git blame --porcelain`` output."""

    commit_hash: str
    original: int
    final: int
    count: int = 1
    metadata: Sequence[str] = field(default_factory=tuple)


def commit_metadata(
    *,
    author: str = "Ada Lovelace",
    mail: str = "ada@example.com",
    time: int = 1_700_000_000,
    tz: str = "+0100",
    summary: str = "Initial commit",
    filename: str = "src/app.py",
) -> list[str]:
    """Return the metadata lines git prints on a commit's first group."""
    return [
        f"author {author}",
        f"author-mail <{mail}>",
        f"author-time {time}",
        f"author-tz {tz}",
        f"committer {author}",
        f"committer-mail <{mail}>",
        f"committer-time {time}",
        f"committer-tz {tz}",
        f"summary {summary}",
        f"filename {filename}",
    ]


def render_porcelain(groups: Sequence[PorcelainGroup]) -> str:
    """Render groups as porcelain text with one source line per blamed line."""
    out: list[str] = []
    for group in groups:
        out.append(
            f"{group.commit_hash} {group.original} {group.final} {group.count}"
        )
        out.extend(group.metadata)
        for offset in range(group.count):
            out.append(f"\tline {group.final + offset}")
    return "\n".join(out) + "\n"


@pytest.fixture
def sample_porcelain() -> str:
    """Porcelain output for a five-line file touched by two commits.

    Lines 1-2 and 5 come from FIRST_HASH, line 3 from SECOND_HASH and
    line 4 is an uncommitted edit.
    """
    return render_porcelain(
        [
            PorcelainGroup(FIRST_HASH, 1, 1, 2, commit_metadata()),
            PorcelainGroup(
                SECOND_HASH,
                7,
                3,
                1,
                [
                    *commit_metadata(
                        author="Grace Hopper",
                        mail="grace@example.com",
                        time=1_710_000_000,
                        tz="-0500",
                        summary="Fix off-by-one",
                    ),
                    f"previous {FIRST_HASH} src/app.py",
                ],
            ),
            PorcelainGroup(
                ZERO,
                4,
                4,
                1,
                [
                    "author Not Committed Yet",
                    "author-mail <not.committed.yet>",
                    "summary Version of src/app.py from src/app.py",
                    "filename src/app.py",
                ],
            ),
            PorcelainGroup(FIRST_HASH, 3, 5, 1, ["filename src/app.py"]),
        ]
    )


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point the user config at an empty directory and clear GITBLAME_* vars."""
    import os

    for key in list(os.environ):
        if key.startswith("GITBLAME_"):
            monkeypatch.delenv(key)

    user_config = tmp_path_factory.mktemp("user-config") / "config.toml"
    monkeypatch.setattr(
        "gitblame.config._discovery.get_user_config_path", lambda: user_config
    )
    return user_config
