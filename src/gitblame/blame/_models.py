"""Data models for blame records.

This module defines the immutable value types produced by the blame engine:
- RepositoryHandle: A resolved repository root and metadata directory
- CommitInfo: Metadata for a single commit as reported by git blame
- LineAttribution: The commit that last touched one line
- BlameRecord: A whole-file blame snapshot
- LineInfo: The answer to a line query
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from gitblame.exceptions import FileNotTrackedError

if TYPE_CHECKING:
    from pendulum import DateTime

ZERO_HASH = "0" * 40
"""Hash git reports for lines that are not committed yet."""

SHORT_HASH_LENGTH = 7


@dataclass(frozen=True, slots=True)
class RepositoryHandle:
    """A located Git repository.

    Attributes:
        root: Absolute, symlink-resolved path to the working tree root.
        metadata_dir: Absolute path to the repository metadata directory
            (usually ``root / ".git"``).
    """

    root: Path
    metadata_dir: Path

    def relative_path(self, path: Path | str) -> str:
        """Map a path to a POSIX path relative to the repository root.

        Relative paths are interpreted against the repository root, not the
        current working directory. Symlinked directories along the path are
        resolved, but a symlink in the final component is kept so that git
        blames the link itself.

        Args:
            path: Absolute path, or path relative to the repository root.

        Returns:
            The repository-relative path using forward slashes.

        Raises:
            FileNotTrackedError: If the path lies outside the repository.
        """
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self.root / candidate

        # Only the directory is resolved: a tracked symlink is blamed as itself
        if candidate.name in ("", ".."):
            resolved = candidate.resolve()
        else:
            resolved = candidate.parent.resolve() / candidate.name
        try:
            relative = resolved.relative_to(self.root)
        except ValueError as e:
            msg = f"'{path}' is outside repository '{self.root}'"
            raise FileNotTrackedError(
                msg, repo_root=self.root, file_path=str(path)
            ) from e

        if relative == Path():
            msg = f"'{path}' is the repository root, not a file"
            raise FileNotTrackedError(msg, repo_root=self.root, file_path=str(path))

        return PurePosixPath(*relative.parts).as_posix()


@dataclass(frozen=True, slots=True)
class CommitInfo:
    """Metadata for one commit as reported by ``git blame --porcelain``.

    Timestamps are Unix epoch seconds; mail addresses are stored without the
    surrounding angle brackets.
    """

    hash: str
    author_name: str = ""
    author_mail: str = ""
    author_time: int | None = None
    author_tz: str = ""
    committer_name: str = ""
    committer_mail: str = ""
    committer_time: int | None = None
    committer_tz: str = ""
    summary: str = ""
    filename: str = ""
    previous_hash: str | None = None
    previous_filename: str | None = None
    boundary: bool = False

    @classmethod
    def uncommitted(cls, commit_hash: str = ZERO_HASH) -> "CommitInfo":
        """Return the sentinel recorded for working-tree changes."""
        return cls(hash=commit_hash)

    @property
    def is_uncommitted(self) -> bool:
        """Whether this is the working-tree sentinel."""
        return self.hash.strip("0") == ""

    @property
    def short_hash(self) -> str:
        """Return the abbreviated commit hash."""
        return self.hash[:SHORT_HASH_LENGTH]

    @property
    def author_datetime(self) -> "DateTime | None":
        """Return the author time as a timezone-aware pendulum DateTime."""
        return _to_datetime(self.author_time, self.author_tz)

    @property
    def committer_datetime(self) -> "DateTime | None":
        """Return the committer time as a timezone-aware pendulum DateTime."""
        return _to_datetime(self.committer_time, self.committer_tz)


def _to_datetime(timestamp: int | None, tz: str) -> "DateTime | None":
    import pendulum  # noqa: PLC0415

    if timestamp is None:
        return None

    moment = pendulum.from_timestamp(timestamp)
    offset = _parse_tz_offset(tz)
    if offset is None:
        return moment
    return moment.in_timezone(pendulum.FixedTimezone(offset))


def _parse_tz_offset(tz: str) -> int | None:
    """Convert a git ``+HHMM`` offset to seconds east of UTC."""
    if len(tz) != 5 or tz[0] not in "+-" or not tz[1:].isdigit():
        return None
    seconds = int(tz[1:3]) * 3600 + int(tz[3:5]) * 60
    return -seconds if tz[0] == "-" else seconds


@dataclass(frozen=True, slots=True)
class LineAttribution:
    """Attribution of one line of the current file.

    Attributes:
        line_number: 1-based line number in the current file.
        hash: Hash of the commit that last modified the line. Always a key of
            the owning BlameRecord's commits mapping.
        original_line: 1-based line number in the file as of that commit.
    """

    line_number: int
    hash: str
    original_line: int


@dataclass(frozen=True, slots=True)
class BlameRecord:
    """A whole-file blame snapshot.

    Records are replaced wholesale when a file is blamed again and are never
    mutated after parsing.
    """

    lines: Mapping[int, LineAttribution] = field(default_factory=dict)
    commits: Mapping[str, CommitInfo] = field(default_factory=dict)

    def commit_for(self, line_number: int) -> CommitInfo | None:
        """Return the commit that last touched a line, if any."""
        attribution = self.lines.get(line_number)
        if attribution is None:
            return None
        return self.commits[attribution.hash]

    def lines_for(self, commit_hash: str) -> list[int]:
        """Return the ascending line numbers attributed to a commit."""
        return sorted(
            number
            for number, attribution in self.lines.items()
            if attribution.hash == commit_hash
        )


@dataclass(frozen=True, slots=True)
class LineInfo:
    """A line's attribution together with its commit metadata."""

    attribution: LineAttribution
    commit: CommitInfo

    @property
    def line_number(self) -> int:
        """Return the queried line number."""
        return self.attribution.line_number

    @property
    def hash(self) -> str:
        """Return the attributed commit hash."""
        return self.attribution.hash
