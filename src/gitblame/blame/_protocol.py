"""Protocol definitions for the blame engine.

This module defines the interface between the cache and whatever produces
raw blame output, so tests and alternative backends can replace the git
subprocess.
"""

from pathlib import Path  # noqa: TC003 - Used in runtime type annotations
from typing import Protocol, runtime_checkable


@runtime_checkable
class BlameInvoker(Protocol):
    """Protocol for producing raw porcelain blame output."""

    async def invoke(self, repo_root: Path, relative_path: str) -> str:
        """Run blame for one file.

        Args:
            repo_root: Working tree root of the repository.
            relative_path: POSIX path of the file relative to repo_root.

        Returns:
            The raw porcelain output.

        Raises:
            BlameCommandError: If blame cannot be produced.
        """
        ...
