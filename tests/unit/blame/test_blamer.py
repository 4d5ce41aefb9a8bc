from pathlib import Path

import pytest
import structlog
from structlog.testing import capture_logs

from gitblame.blame import BlameInvoker, Blamer, RepositoryHandle
from gitblame.exceptions import (
    BlamerClosedError,
    FileNotTrackedError,
    MalformedOutputError,
    NoCommitsError,
)
from tests.conftest import FIRST_HASH, SECOND_HASH, ZERO

pytestmark = pytest.mark.anyio


class FakeInvoker:
    """Returns canned porcelain output and records every call."""

    def __init__(self, outputs: dict[str, str | Exception]) -> None:
        self.outputs = outputs
        self.calls: list[tuple[Path, str]] = []

    async def invoke(self, repo_root: Path, relative_path: str) -> str:
        self.calls.append((repo_root, relative_path))
        result = self.outputs[relative_path]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def repository(tmp_path: Path) -> RepositoryHandle:
    root = tmp_path.resolve()
    return RepositoryHandle(root=root, metadata_dir=root / ".git")


def make_blamer(
    repository: RepositoryHandle, outputs: dict[str, str | Exception]
) -> tuple[Blamer, FakeInvoker]:
    invoker = FakeInvoker(outputs)
    return Blamer(repository, invoker=invoker), invoker


class TestFakeInvoker:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(FakeInvoker({}), BlameInvoker)


class TestLineInfo:
    async def test_returns_commit_for_line(
        self, repository: RepositoryHandle, sample_porcelain: str
    ) -> None:
        blamer, _ = make_blamer(repository, {"src/app.py": sample_porcelain})

        async with blamer:
            info = await blamer.line_info("src/app.py", 3)

        assert info is not None
        assert info.hash == SECOND_HASH
        assert info.line_number == 3
        assert info.commit.author_name == "Grace Hopper"

    async def test_accepts_absolute_paths(
        self, repository: RepositoryHandle, sample_porcelain: str
    ) -> None:
        blamer, invoker = make_blamer(repository, {"src/app.py": sample_porcelain})

        async with blamer:
            info = await blamer.line_info(repository.root / "src" / "app.py", 1)

        assert info is not None
        assert info.hash == FIRST_HASH
        assert invoker.calls == [(repository.root, "src/app.py")]

    async def test_line_without_attribution_returns_none(
        self, repository: RepositoryHandle, sample_porcelain: str
    ) -> None:
        blamer, _ = make_blamer(repository, {"src/app.py": sample_porcelain})

        async with blamer:
            assert await blamer.line_info("src/app.py", 99) is None

    async def test_uncommitted_line(
        self, repository: RepositoryHandle, sample_porcelain: str
    ) -> None:
        blamer, _ = make_blamer(repository, {"src/app.py": sample_porcelain})

        async with blamer:
            info = await blamer.line_info("src/app.py", 4)

        assert info is not None
        assert info.hash == ZERO
        assert info.commit.is_uncommitted

    async def test_repeated_queries_run_blame_once(
        self, repository: RepositoryHandle, sample_porcelain: str
    ) -> None:
        blamer, invoker = make_blamer(repository, {"src/app.py": sample_porcelain})

        async with blamer:
            for line in (1, 2, 3):
                _ = await blamer.line_info("src/app.py", line)
            _ = await blamer.lines_for_commit("src/app.py", FIRST_HASH)

        assert len(invoker.calls) == 1

    async def test_path_outside_repository(
        self, repository: RepositoryHandle, tmp_path: Path
    ) -> None:
        blamer, invoker = make_blamer(repository, {})

        async with blamer:
            with pytest.raises(FileNotTrackedError):
                _ = await blamer.line_info(tmp_path.parent / "other.py", 1)

        assert invoker.calls == []


class TestLinesForCommit:
    async def test_lists_lines_in_order(
        self, repository: RepositoryHandle, sample_porcelain: str
    ) -> None:
        blamer, _ = make_blamer(repository, {"src/app.py": sample_porcelain})

        async with blamer:
            assert await blamer.lines_for_commit("src/app.py", FIRST_HASH) == [1, 2, 5]

    async def test_hash_is_case_insensitive(
        self, repository: RepositoryHandle, sample_porcelain: str
    ) -> None:
        blamer, _ = make_blamer(repository, {"src/app.py": sample_porcelain})

        async with blamer:
            lines = await blamer.lines_for_commit("src/app.py", SECOND_HASH.upper())

        assert lines == [3]

    async def test_unknown_hash_gives_empty_list(
        self, repository: RepositoryHandle, sample_porcelain: str
    ) -> None:
        blamer, _ = make_blamer(repository, {"src/app.py": sample_porcelain})

        async with blamer:
            assert await blamer.lines_for_commit("src/app.py", "e" * 40) == []


class TestFailures:
    async def test_command_error_propagates_and_is_retried(
        self, repository: RepositoryHandle, sample_porcelain: str
    ) -> None:
        blamer, invoker = make_blamer(
            repository, {"src/app.py": NoCommitsError("no commits")}
        )

        async with blamer:
            with pytest.raises(NoCommitsError):
                _ = await blamer.line_info("src/app.py", 1)

            invoker.outputs["src/app.py"] = sample_porcelain
            info = await blamer.line_info("src/app.py", 1)

        assert info is not None
        assert len(invoker.calls) == 2

    async def test_parse_failure_leaves_no_entry(
        self, repository: RepositoryHandle
    ) -> None:
        blamer, _ = make_blamer(repository, {"src/app.py": "garbage\n"})

        async with blamer:
            with capture_logs() as logs, pytest.raises(MalformedOutputError):
                _ = await blamer.line_info("src/app.py", 1)

            assert "src/app.py" not in blamer.cache

        assert any(entry["event"] == "blame_parse_failed" for entry in logs)

    async def test_query_after_close(self, repository: RepositoryHandle) -> None:
        blamer, _ = make_blamer(repository, {})

        async with blamer:
            pass

        with pytest.raises(BlamerClosedError):
            _ = await blamer.line_info("src/app.py", 1)


class TestInvalidate:
    async def test_next_query_runs_blame_again(
        self, repository: RepositoryHandle, sample_porcelain: str
    ) -> None:
        blamer, invoker = make_blamer(repository, {"src/app.py": sample_porcelain})

        async with blamer:
            _ = await blamer.line_info("src/app.py", 1)
            assert blamer.invalidate(repository.root / "src" / "app.py") is True
            _ = await blamer.line_info("src/app.py", 1)

        assert len(invoker.calls) == 2

    async def test_unknown_path_is_a_no_op(self, repository: RepositoryHandle) -> None:
        blamer, _ = make_blamer(repository, {})

        async with blamer:
            assert blamer.invalidate("never/queried.py") is False

    async def test_outside_path_is_ignored(
        self, repository: RepositoryHandle, tmp_path: Path
    ) -> None:
        blamer, _ = make_blamer(repository, {})

        async with blamer:
            with capture_logs() as logs:
                assert blamer.invalidate(tmp_path.parent / "elsewhere.py") is False

        assert [entry["event"] for entry in logs] == ["blame_invalidate_ignored"]


class TestConstruction:
    def test_uses_given_logger(self, repository: RepositoryHandle) -> None:
        logger = structlog.get_logger("test")
        blamer = Blamer(repository, invoker=FakeInvoker({}), logger=logger)

        assert blamer.root == repository.root
