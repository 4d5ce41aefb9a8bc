"""File watcher that keeps a Blamer's cache fresh.

This module forwards file change notifications for a repository's working
tree to Blamer.invalidate, so the next query for a changed file runs blame
again. Paths matching gitignore-style patterns are skipped.
"""

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

import anyio
import structlog
from watchfiles import Change, awatch

from gitblame.utils import IgnoreConfig, create_pathspec, matches_any

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from gitblame.blame import Blamer

InvalidateCallback = Callable[[str, Change], None]

_CHANGE_NAMES = {
    Change.added: "added",
    Change.modified: "modified",
    Change.deleted: "deleted",
}


def format_change(change: Change, path: str) -> str:
    """Format a file change event as a string.

    Args:
        change: The type of change (added, modified, deleted).
        path: The path to the changed file.

    Returns:
        A formatted string describing the change.
    """
    return f"{_CHANGE_NAMES.get(change, 'unknown')}: {path}"


async def watch_repository(
    blamer: "Blamer",
    *,
    ignore: IgnoreConfig | None = None,
    stop_event: anyio.Event | None = None,
    on_invalidate: InvalidateCallback | None = None,
    logger: "FilteringBoundLogger | None" = None,
) -> None:
    """Invalidate blame data whenever a file in the repository changes.

    Added, modified and deleted files are all invalidated; editors that save
    by renaming a temporary file over the original report an addition.
    Runs until stop_event is set or the calling task is cancelled.

    Args:
        blamer: The blamer whose cache is invalidated.
        ignore: Which ignore patterns to apply. Uses defaults if None.
        stop_event: Event that ends the watch when set.
        on_invalidate: Called with the repository-relative path and change
            type after each invalidation.
        logger: Structured logger. Uses the "gitblame" logger if None.
    """
    log = logger or structlog.get_logger("gitblame")
    root = blamer.root
    pathspec = create_pathspec(repo_root=root, config=ignore)

    def should_watch(_change: Change, changed_path: str) -> bool:
        try:
            relative = Path(changed_path).relative_to(root)
        except ValueError:
            return False
        return not matches_any(pathspec, relative)

    async for changes in awatch(
        root,
        watch_filter=should_watch,
        stop_event=stop_event,
        recursive=True,
    ):
        for change, changed_path in sorted(changes, key=lambda item: item[1]):
            dropped = blamer.invalidate(changed_path)
            relative = Path(changed_path).relative_to(root).as_posix()
            log.debug(
                "watch_change",
                change=_CHANGE_NAMES.get(change, "unknown"),
                file=relative,
                dropped=dropped,
            )
            if on_invalidate is not None:
                on_invalidate(relative, change)
