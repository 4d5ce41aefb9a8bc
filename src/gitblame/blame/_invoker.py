"""Subprocess wrapper for ``git blame``.

This module provides GitBlameInvoker, which runs the blame command for a
single file and maps the ways it can fail onto the gitblame exception
hierarchy.
"""

import contextlib
import os
import subprocess
from pathlib import Path  # noqa: TC003 - Used in runtime type annotations
from typing import final

import anyio
import anyio.abc

from gitblame.exceptions import (
    EmptyOutputError,
    FileNotTrackedError,
    NoCommitsError,
    NonZeroExitError,
    ToolNotFoundError,
)

_NOT_TRACKED_MARKERS = ("no such path", "is outside repository")
_NO_COMMITS_MARKERS = (
    "no such ref",
    "bad revision",
    "does not have any commits",
    "ambiguous argument 'head'",
)

_GIT_ENV = {
    "GIT_TERMINAL_PROMPT": "0",
    "GIT_PAGER": "cat",
    "LC_ALL": "C",
}


async def _drain(stream: anyio.abc.ByteReceiveStream, chunks: list[bytes]) -> None:
    async for chunk in stream:
        chunks.append(chunk)


@final
class GitBlameInvoker:
    """Runs ``git blame --porcelain`` as a child process.

    Attributes:
        executable: Name or path of the git executable.
        extra_args: Additional arguments inserted before the ``--`` separator.
    """

    __slots__ = ("executable", "extra_args")

    def __init__(
        self,
        executable: str = "git",
        extra_args: tuple[str, ...] = (),
    ) -> None:
        self.executable = executable
        self.extra_args = extra_args

    def build_command(self, relative_path: str) -> list[str]:
        """Build the argument vector for blaming one file."""
        return [
            self.executable,
            "blame",
            "--porcelain",
            *self.extra_args,
            "--",
            relative_path,
        ]

    async def invoke(self, repo_root: Path, relative_path: str) -> str:
        """Run blame for one file and return its porcelain output.

        Stdout and stderr are captured separately and drained concurrently.
        If the calling task is cancelled the child process is killed instead
        of being left to finish on its own.

        Args:
            repo_root: Working tree root; used as the working directory.
            relative_path: POSIX path of the file relative to repo_root.

        Returns:
            The decoded porcelain output.

        Raises:
            ToolNotFoundError: If the git executable cannot be started.
            FileNotTrackedError: If git does not know the path.
            NoCommitsError: If the repository has no commits yet.
            NonZeroExitError: If git fails for any other reason.
            EmptyOutputError: If git succeeds without printing anything.
        """
        command = self.build_command(relative_path)

        try:
            process = await anyio.open_process(
                command,
                cwd=repo_root,
                env={**os.environ, **_GIT_ENV},
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except (FileNotFoundError, PermissionError) as e:
            msg = f"Cannot run '{self.executable}': {e}"
            raise ToolNotFoundError(
                msg,
                executable=self.executable,
                repo_root=repo_root,
                file_path=relative_path,
            ) from e

        stdout_chunks: list[bytes] = []
        stderr_chunks: list[bytes] = []

        try:
            async with anyio.create_task_group() as tg:
                if process.stdout is not None:
                    tg.start_soon(_drain, process.stdout, stdout_chunks)
                if process.stderr is not None:
                    tg.start_soon(_drain, process.stderr, stderr_chunks)

            returncode = await process.wait()
        except BaseException:
            if process.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    process.kill()
            raise
        finally:
            with anyio.CancelScope(shield=True):
                await process.aclose()

        stdout = b"".join(stdout_chunks).decode("utf-8", errors="replace")
        stderr = b"".join(stderr_chunks).decode("utf-8", errors="replace").strip()

        if returncode != 0:
            raise self._classify_failure(repo_root, relative_path, returncode, stderr)

        if not stdout.strip():
            msg = f"git blame printed nothing for '{relative_path}'"
            raise EmptyOutputError(
                msg,
                returncode=returncode,
                stderr=stderr,
                repo_root=repo_root,
                file_path=relative_path,
            )

        return stdout

    def _classify_failure(
        self,
        repo_root: Path,
        relative_path: str,
        returncode: int,
        stderr: str,
    ) -> NonZeroExitError | FileNotTrackedError | NoCommitsError:
        lowered = stderr.lower()

        if any(marker in lowered for marker in _NOT_TRACKED_MARKERS):
            msg = f"'{relative_path}' is not tracked: {stderr}"
            return FileNotTrackedError(
                msg, repo_root=repo_root, file_path=relative_path
            )

        if any(marker in lowered for marker in _NO_COMMITS_MARKERS):
            msg = f"Repository '{repo_root}' has no commits: {stderr}"
            return NoCommitsError(msg, repo_root=repo_root, file_path=relative_path)

        msg = f"git blame exited with code {returncode}: {stderr}"
        return NonZeroExitError(
            msg,
            returncode=returncode,
            stderr=stderr,
            repo_root=repo_root,
            file_path=relative_path,
        )
