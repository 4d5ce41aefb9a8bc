# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing
"""The watch command."""

from pathlib import Path
from typing import Annotated

import anyio
from cyclopts import Parameter
from watchfiles import Change

from gitblame.exceptions import GitBlameError
from gitblame.utils import IgnoreConfig
from gitblame.watch import format_change, watch_repository

from ._shared import (
    exit_code_for,
    exit_with_error,
    get_console,
    open_session,
    resolve_target,
)


async def _watch(target: Path) -> None:
    session = open_session(target, command="watch")
    watch_config = session.config.watch
    console = get_console()

    def report(relative_path: str, change: Change) -> None:
        console.print(format_change(change, relative_path), markup=False)

    async with session.blamer as blamer:
        console.print(f"Watching {blamer.root}", markup=False, soft_wrap=True)
        await watch_repository(
            blamer,
            ignore=IgnoreConfig(
                use_gitignore=watch_config.use_gitignore,
                extra_patterns=watch_config.ignore,
            ),
            on_invalidate=report,
            logger=session.logger,
        )


def watch(
    path: Annotated[
        Path, Parameter(help="Any path inside the repository to watch")
    ] = Path(),
) -> None:
    """Watch a repository and report each file whose blame data is dropped.

    Runs until interrupted.
    """
    try:
        anyio.run(_watch, resolve_target(path))
    except KeyboardInterrupt:
        return
    except GitBlameError as e:
        exit_with_error(str(e), exit_code_for(e))
