"""Repository discovery.

This module finds the Git repository enclosing an arbitrary path and
returns it as a RepositoryHandle.
"""

from pathlib import Path

from dulwich.errors import NotGitRepository
from dulwich.repo import Repo

from gitblame.exceptions import NotARepositoryError

from ._models import RepositoryHandle


def decode_path(value: bytes | str) -> str:
    """Decode a dulwich path to str if needed.

    Args:
        value: A bytes or str path.

    Returns:
        The path as a string.
    """
    if isinstance(value, bytes):
        return value.decode()
    return value


def locate_repository(start: Path | str) -> RepositoryHandle:
    """Locate the repository that contains a path.

    The start path is resolved to its real location before searching, so a
    symlinked working directory is reported by its target path. Parent
    directories are searched up to the filesystem root.

    Args:
        start: A directory, or a file (possibly deleted) whose parent
            directory is searched.

    Returns:
        The handle for the enclosing repository.

    Raises:
        NotARepositoryError: If no repository encloses the path.
    """
    start_dir = Path(start).resolve()
    if not start_dir.is_dir():
        start_dir = start_dir.parent

    try:
        repo = Repo.discover(str(start_dir))
    except NotGitRepository as e:
        msg = f"No Git repository found at or above '{start_dir}'"
        raise NotARepositoryError(msg, path=start_dir) from e

    try:
        root = Path(decode_path(repo.path)).resolve()
        metadata_dir = Path(decode_path(repo.controldir())).resolve()
    finally:
        repo.close()

    # Bare repositories have no working tree to blame
    if root == metadata_dir:
        msg = f"'{root}' is a bare repository"
        raise NotARepositoryError(msg, path=start_dir)

    return RepositoryHandle(root=root, metadata_dir=metadata_dir)
