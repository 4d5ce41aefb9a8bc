"""Per-file blame cache with single-flight fills.

This module provides BlameCache, which stores the latest BlameRecord for
each file and guarantees that at most one fill per file runs at a time.
Fills run in a task group owned by the cache so that closing the cache
cancels them, killing any child processes they started.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from types import TracebackType
from typing import Self, final

import anyio
import anyio.abc

from gitblame.exceptions import BlamerClosedError

from ._models import BlameRecord

Loader = Callable[[str], Awaitable[BlameRecord]]


@dataclass(slots=True, eq=False)
class _Fill:
    """An in-flight fill shared by every caller waiting on it."""

    done: anyio.Event
    record: BlameRecord | None = None
    error: Exception | None = None
    traceback: TracebackType | None = None


@dataclass(slots=True, eq=False)
class _CacheEntry:
    file_path: str
    record: BlameRecord | None = None
    fill: _Fill | None = None


@final
class BlameCache:
    """Caches one BlameRecord per repository-relative file path.

    Use as an async context manager; ``get`` is only available while the
    cache is open.

    Guarantees:
        - Concurrent ``get`` calls for an uncached path share one fill and
          receive the same record or the same exception.
        - A failed fill leaves no entry behind, so the next ``get`` retries.
        - ``invalidate`` always drops the entry. A fill that was in flight
          still answers its own waiters but never repopulates the cache.
    """

    __slots__ = ("_closed", "_entries", "_loader", "_task_group")

    def __init__(self, loader: Loader) -> None:
        """Initialize the cache.

        Args:
            loader: Coroutine function producing the record for a path.
        """
        self._loader = loader
        self._entries: dict[str, _CacheEntry] = {}
        self._task_group: anyio.abc.TaskGroup | None = None
        self._closed = False

    async def __aenter__(self) -> Self:
        if self._closed:
            msg = "Blame cache has been closed"
            raise BlamerClosedError(msg)
        if self._task_group is None:
            task_group = anyio.create_task_group()
            _ = await task_group.__aenter__()
            self._task_group = task_group
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.aclose()

    def __contains__(self, file_path: object) -> bool:
        entry = self._entries.get(file_path) if isinstance(file_path, str) else None
        return entry is not None and entry.record is not None

    @property
    def closed(self) -> bool:
        """Whether the cache has been closed."""
        return self._closed

    def cached_paths(self) -> list[str]:
        """Return the paths that currently hold a record, sorted."""
        return sorted(
            path for path, entry in self._entries.items() if entry.record is not None
        )

    def is_pending(self, file_path: str) -> bool:
        """Whether a fill is in flight for a path."""
        entry = self._entries.get(file_path)
        return entry is not None and entry.fill is not None

    async def get(self, file_path: str) -> BlameRecord:
        """Return the record for a path, filling the cache on a miss.

        Args:
            file_path: Repository-relative POSIX path.

        Returns:
            The cached or freshly loaded record.

        Raises:
            BlamerClosedError: If the cache is closed, or closes while waiting.
            Exception: Whatever the loader raised for this fill.
        """
        if self._closed or self._task_group is None:
            msg = "Blame cache is not open"
            raise BlamerClosedError(msg)

        entry = self._entries.get(file_path)
        if entry is None:
            entry = _CacheEntry(file_path=file_path)
            self._entries[file_path] = entry

        if entry.record is not None:
            return entry.record

        fill = entry.fill
        if fill is None:
            fill = _Fill(done=anyio.Event())
            entry.fill = fill
            self._task_group.start_soon(self._run_fill, entry, fill)

        await fill.done.wait()

        if fill.error is not None:
            # Waiters share one exception instance; reset its traceback so
            # frames from earlier waiters do not accumulate on it
            raise fill.error.with_traceback(fill.traceback)
        if fill.record is None:
            msg = f"Fill for '{file_path}' finished without a result"
            raise BlamerClosedError(msg)
        return fill.record

    def invalidate(self, file_path: str) -> bool:
        """Drop any record and in-flight marker for a path.

        Args:
            file_path: Repository-relative POSIX path.

        Returns:
            True if an entry was dropped, False if none existed.
        """
        return self._entries.pop(file_path, None) is not None

    async def aclose(self) -> None:
        """Cancel in-flight fills and drop every entry.

        Callers still waiting on a cancelled fill receive BlamerClosedError.
        Closing twice is a no-op.
        """
        if self._closed:
            return
        self._closed = True

        task_group = self._task_group
        self._task_group = None
        if task_group is not None:
            task_group.cancel_scope.cancel()
            _ = await task_group.__aexit__(None, None, None)

        self._entries.clear()

    async def _run_fill(self, entry: _CacheEntry, fill: _Fill) -> None:
        try:
            record = await self._loader(entry.file_path)
        except Exception as e:  # noqa: BLE001 - delivered to every waiter
            fill.error = e
            fill.traceback = e.__traceback__
            if self._entries.get(entry.file_path) is entry:
                del self._entries[entry.file_path]
        else:
            fill.record = record
            if self._entries.get(entry.file_path) is entry:
                entry.record = record
        finally:
            if entry.fill is fill:
                entry.fill = None
            if fill.record is None and fill.error is None:
                msg = f"Blame cache closed while blaming '{entry.file_path}'"
                fill.error = BlamerClosedError(msg)
            fill.done.set()
