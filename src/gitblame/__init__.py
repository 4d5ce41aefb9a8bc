"""Line-level blame data for Git repositories.

gitblame runs ``git blame --porcelain`` for files in a repository, parses the
result and caches it per file, so that front ends can ask which commit last
changed a line and which other lines that commit touched.
"""

from gitblame.blame import (
    Blamer,
    BlameRecord,
    CommitInfo,
    GitBlameInvoker,
    LineAttribution,
    LineInfo,
    RepositoryHandle,
    locate_repository,
    parse_blame,
)
from gitblame.exceptions import (
    BlameCommandError,
    BlamerClosedError,
    GitBlameError,
    MalformedOutputError,
    NotARepositoryError,
)

__version__ = "0.1.0"

__all__ = [
    "BlameCommandError",
    "BlameRecord",
    "Blamer",
    "BlamerClosedError",
    "CommitInfo",
    "GitBlameError",
    "GitBlameInvoker",
    "LineAttribution",
    "LineInfo",
    "MalformedOutputError",
    "NotARepositoryError",
    "RepositoryHandle",
    "__version__",
    "locate_repository",
    "parse_blame",
]
