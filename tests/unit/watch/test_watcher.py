from collections.abc import AsyncIterator, Callable, Iterable
from pathlib import Path

import pytest
from watchfiles import Change

from gitblame.blame import Blamer, RepositoryHandle
from gitblame.utils import IgnoreConfig
from gitblame.watch import format_change, watch_repository

Batch = Iterable[tuple[Change, str]]
ChangeStream = AsyncIterator[set[tuple[Change, str]]]


class TestFormatChange:
    @pytest.mark.parametrize(
        ("change", "expected"),
        [
            (Change.added, "added: src/app.py"),
            (Change.modified, "modified: src/app.py"),
            (Change.deleted, "deleted: src/app.py"),
        ],
    )
    def test_formats(self, change: Change, expected: str) -> None:
        assert format_change(change, "src/app.py") == expected


class CannedInvoker:
    def __init__(self, output: str) -> None:
        self.output = output
        self.calls: list[str] = []

    async def invoke(self, repo_root: Path, relative_path: str) -> str:
        self.calls.append(relative_path)
        return self.output


def fake_awatch(batches: list[Batch]) -> Callable[..., ChangeStream]:
    async def _awatch(
        *_paths: Path,
        watch_filter: Callable[[Change, str], bool] | None = None,
        **_kwargs: object,
    ) -> ChangeStream:
        for batch in batches:
            yield {
                (change, path)
                for change, path in batch
                if watch_filter is None or watch_filter(change, path)
            }

    return _awatch


@pytest.mark.anyio
class TestWatchRepository:
    async def test_invalidates_changed_files(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        sample_porcelain: str,
    ) -> None:
        root = tmp_path.resolve()
        repository = RepositoryHandle(root=root, metadata_dir=root / ".git")
        invoker = CannedInvoker(sample_porcelain)
        seen: list[tuple[str, Change]] = []
        monkeypatch.setattr(
            "gitblame.watch._watcher.awatch",
            fake_awatch(
                [
                    [(Change.modified, str(root / "src" / "app.py"))],
                    [(Change.deleted, str(root / "other.py"))],
                ]
            ),
        )

        async with Blamer(repository, invoker=invoker) as blamer:
            _ = await blamer.line_info("src/app.py", 1)
            assert "src/app.py" in blamer.cache

            await watch_repository(
                blamer, on_invalidate=lambda path, change: seen.append((path, change))
            )

            assert "src/app.py" not in blamer.cache

        assert seen == [
            ("src/app.py", Change.modified),
            ("other.py", Change.deleted),
        ]

    async def test_ignored_paths_are_skipped(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        root = tmp_path.resolve()
        _ = (root / ".gitignore").write_text("build/\n")
        repository = RepositoryHandle(root=root, metadata_dir=root / ".git")
        seen: list[str] = []
        monkeypatch.setattr(
            "gitblame.watch._watcher.awatch",
            fake_awatch(
                [
                    [
                        (Change.modified, str(root / ".git" / "index")),
                        (Change.added, str(root / "build" / "out.js")),
                        (Change.modified, str(root / "scratch.tmp")),
                        (Change.modified, str(root / "kept.py")),
                        (Change.modified, str(tmp_path.parent / "outside.py")),
                    ]
                ]
            ),
        )

        async with Blamer(repository, invoker=CannedInvoker("")) as blamer:
            await watch_repository(
                blamer,
                ignore=IgnoreConfig(extra_patterns=("*.tmp",)),
                on_invalidate=lambda path, _change: seen.append(path),
            )

        assert seen == ["kept.py"]
