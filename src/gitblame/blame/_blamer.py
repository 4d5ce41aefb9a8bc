"""Query facade over the blame cache.

This module provides the Blamer class, the single owner of blame data for
one repository. It answers line queries, lists the lines belonging to a
commit and accepts invalidations from file watchers.
"""

from pathlib import Path
from types import TracebackType
from typing import TYPE_CHECKING, Any, Self, final

import structlog

from gitblame.exceptions import (
    BlameCommandError,
    FileNotTrackedError,
    MalformedOutputError,
)

from ._cache import BlameCache
from ._invoker import GitBlameInvoker
from ._locator import locate_repository
from ._models import BlameRecord, LineInfo, RepositoryHandle
from ._parser import parse_blame

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from ._protocol import BlameInvoker


@final
class Blamer:
    """Blame queries for one repository.

    Create one Blamer per repository root and keep it for the session. It
    must be entered before querying::

        async with Blamer(locate_repository(path)) as blamer:
            info = await blamer.line_info("src/app.py", 12)

    Leaving the context cancels in-flight blame commands and kills their
    processes.

    Attributes:
        repository: The repository this blamer is bound to.
    """

    __slots__ = ("_cache", "_invoker", "_logger", "repository")

    def __init__(
        self,
        repository: RepositoryHandle,
        *,
        invoker: "BlameInvoker | None" = None,
        logger: "FilteringBoundLogger | None" = None,
    ) -> None:
        """Initialize the blamer.

        Args:
            repository: The repository to blame files in.
            invoker: Source of raw blame output. Runs git if None.
            logger: Structured logger. Uses the "gitblame" logger if None.
        """
        self.repository = repository
        self._invoker: "BlameInvoker" = invoker or GitBlameInvoker()
        self._logger: "FilteringBoundLogger" = logger or structlog.get_logger(
            "gitblame"
        )
        self._cache = BlameCache(self._load)

    @classmethod
    def for_path(cls, path: Path | str, **kwargs: Any) -> Self:  # noqa: ANN401
        """Create a blamer for the repository enclosing a path.

        Raises:
            NotARepositoryError: If no repository encloses the path.
        """
        return cls(locate_repository(path), **kwargs)

    @property
    def root(self) -> Path:
        """Return the repository working tree root."""
        return self.repository.root

    @property
    def cache(self) -> BlameCache:
        """Return the underlying cache."""
        return self._cache

    async def __aenter__(self) -> Self:
        _ = await self._cache.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Dispose of the blamer, killing any running blame command."""
        await self._cache.aclose()
        self._logger.debug("blamer_closed", root=str(self.repository.root))

    async def _load(self, relative_path: str) -> BlameRecord:
        log = self._logger.bind(file=relative_path)
        log.debug("blame_fill_started")

        try:
            raw = await self._invoker.invoke(self.repository.root, relative_path)
        except BlameCommandError as e:
            log.info("blame_fill_failed", error=type(e).__name__, message=str(e))
            raise

        try:
            record = parse_blame(raw)
        except MalformedOutputError as e:
            log.error(
                "blame_parse_failed",
                message=str(e),
                line_number=e.line_number,
                line=e.line,
            )
            raise

        log.debug(
            "blame_fill_finished",
            lines=len(record.lines),
            commits=len(record.commits),
        )
        return record

    async def get_record(self, file_path: Path | str) -> BlameRecord:
        """Return the full blame record for a file.

        Args:
            file_path: Absolute path, or path relative to the repository root.

        Raises:
            FileNotTrackedError: If the path is outside the repository or
                not tracked by it.
            BlameCommandError: If the blame command fails.
            MalformedOutputError: If the blame output cannot be parsed.
            BlamerClosedError: If the blamer is not open.
        """
        return await self._cache.get(self.repository.relative_path(file_path))

    async def line_info(
        self, file_path: Path | str, line_number: int
    ) -> LineInfo | None:
        """Return the commit that last touched a line.

        Args:
            file_path: Absolute path, or path relative to the repository root.
            line_number: 1-based line number.

        Returns:
            The attribution and commit metadata, or None if the line has no
            blame entry.
        """
        record = await self.get_record(file_path)
        attribution = record.lines.get(line_number)
        if attribution is None:
            return None
        return LineInfo(attribution=attribution, commit=record.commits[attribution.hash])

    async def lines_for_commit(
        self, file_path: Path | str, commit_hash: str
    ) -> list[int]:
        """Return the ascending line numbers attributed to a commit.

        Args:
            file_path: Absolute path, or path relative to the repository root.
            commit_hash: Full commit hash.

        Returns:
            Matching line numbers, empty if none match.
        """
        record = await self.get_record(file_path)
        return record.lines_for(commit_hash.lower())

    def invalidate(self, file_path: Path | str) -> bool:
        """Forget cached blame data for a file.

        Paths outside the repository are ignored so that watchers can forward
        every event they see.

        Args:
            file_path: Absolute path, or path relative to the repository root.

        Returns:
            True if cached or in-flight data was dropped.
        """
        try:
            relative_path = self.repository.relative_path(file_path)
        except FileNotTrackedError:
            self._logger.debug("blame_invalidate_ignored", file=str(file_path))
            return False

        dropped = self._cache.invalidate(relative_path)
        if dropped:
            self._logger.debug("blame_invalidated", file=relative_path)
        return dropped
