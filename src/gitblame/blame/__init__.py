"""Blame data engine.

This package attributes each line of a file to the commit that last touched
it by running ``git blame --porcelain`` and caching the parsed result.

Key Components:
    - locate_repository: Find the repository enclosing a path
    - GitBlameInvoker: Run the blame command as a child process
    - parse_blame: Parse porcelain output into a BlameRecord
    - BlameCache: Per-file cache with single-flight fills
    - Blamer: Query facade bound to one repository

Example:
    >>> from gitblame.blame import Blamer
    >>> async with Blamer.for_path("src/app.py") as blamer:
    ...     info = await blamer.line_info("src/app.py", 12)
    ...     related = await blamer.lines_for_commit("src/app.py", info.hash)
"""

from ._blamer import Blamer
from ._cache import BlameCache
from ._invoker import GitBlameInvoker
from ._locator import locate_repository
from ._models import (
    SHORT_HASH_LENGTH,
    ZERO_HASH,
    BlameRecord,
    CommitInfo,
    LineAttribution,
    LineInfo,
    RepositoryHandle,
)
from ._parser import is_zero_hash, parse_blame
from ._protocol import BlameInvoker

__all__ = [
    "SHORT_HASH_LENGTH",
    "ZERO_HASH",
    "BlameCache",
    "BlameInvoker",
    "BlameRecord",
    "Blamer",
    "CommitInfo",
    "GitBlameInvoker",
    "LineAttribution",
    "LineInfo",
    "RepositoryHandle",
    "is_zero_hash",
    "locate_repository",
    "parse_blame",
]
