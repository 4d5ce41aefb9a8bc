"""gitblame exceptions."""

from pathlib import Path


class GitBlameError(Exception):
    """Base exception for gitblame errors."""


class NotARepositoryError(GitBlameError):
    """Raised when no Git repository encloses a path."""

    def __init__(self, message: str, *, path: Path) -> None:
        """Initialize with error message and the path that was searched."""
        super().__init__(message)
        self.path: Path = path


# =============================================================================
# Blame Command Exceptions
# =============================================================================


class BlameCommandError(GitBlameError):
    """Base exception for failures running the blame command."""

    def __init__(
        self,
        message: str,
        *,
        repo_root: Path | None = None,
        file_path: str | None = None,
    ) -> None:
        """Initialize with error message and command context."""
        super().__init__(message)
        self.repo_root: Path | None = repo_root
        self.file_path: str | None = file_path


class ToolNotFoundError(BlameCommandError):
    """The git executable could not be started."""

    def __init__(
        self,
        message: str,
        *,
        executable: str,
        repo_root: Path | None = None,
        file_path: str | None = None,
    ) -> None:
        """Initialize with error message and the missing executable."""
        super().__init__(message, repo_root=repo_root, file_path=file_path)
        self.executable: str = executable


class FileNotTrackedError(BlameCommandError):
    """The file is not tracked by the repository or lies outside it."""


class NoCommitsError(BlameCommandError):
    """The repository has no commits to blame against."""


class NonZeroExitError(BlameCommandError):
    """The blame command failed for a reason without a dedicated type."""

    def __init__(
        self,
        message: str,
        *,
        returncode: int,
        stderr: str = "",
        repo_root: Path | None = None,
        file_path: str | None = None,
    ) -> None:
        """Initialize with error message, exit code and captured stderr."""
        super().__init__(message, repo_root=repo_root, file_path=file_path)
        self.returncode: int = returncode
        self.stderr: str = stderr


class EmptyOutputError(NonZeroExitError):
    """The blame command exited cleanly but printed nothing."""


# =============================================================================
# Engine Exceptions
# =============================================================================


class MalformedOutputError(GitBlameError):
    """Raised when blame output violates the porcelain format."""

    def __init__(
        self,
        message: str,
        *,
        line_number: int | None = None,
        line: str | None = None,
    ) -> None:
        """Initialize with error message and the offending output line."""
        super().__init__(message)
        self.line_number: int | None = line_number
        self.line: str | None = line


class BlamerClosedError(GitBlameError):
    """Raised when a blamer or its cache is used after disposal."""


class InvalidCommitUrlError(GitBlameError):
    """Raised when a commit URL template does not produce a web URL."""

    def __init__(self, message: str, *, url: str) -> None:
        """Initialize with error message and the rejected URL."""
        super().__init__(message)
        self.url: str = url


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(GitBlameError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column
