"""Shared CLI utilities for commands.

This module provides common utilities used across CLI command implementations:
- Standardized exit codes
- JSON and TOML output formatters
- Console utilities for output and error handling
- Opening a configured Blamer for a path
"""

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Never

import orjson
import tomli_w
from rich.markup import escape

from gitblame.blame import Blamer, GitBlameInvoker, locate_repository
from gitblame.exceptions import (
    BlameCommandError,
    ConfigError,
    FileNotTrackedError,
    GitBlameError,
    InvalidCommitUrlError,
    MalformedOutputError,
    NoCommitsError,
    NotARepositoryError,
)

from ._context import CLIContext

if TYPE_CHECKING:
    from rich.console import Console
    from structlog.typing import FilteringBoundLogger

    from gitblame.config import Config

__all__ = [
    "BlameSession",
    "ExitCode",
    "exit_code_for",
    "exit_with_error",
    "format_json",
    "format_toml",
    "get_console",
    "get_error_console",
    "open_session",
    "resolve_target",
]


class ExitCode(IntEnum):
    """Standard exit codes for CLI commands.

    Attributes:
        SUCCESS: Command completed successfully.
        CONFIG_ERROR: Configuration could not be loaded or is invalid.
        NOT_FOUND: Path is not in a repository or not tracked.
        TOOL_ERROR: The git executable is missing or failed.
        OUTPUT_ERROR: The blame output could not be understood.
        INTERNAL_ERROR: Unexpected error.
    """

    SUCCESS = 0
    CONFIG_ERROR = 1
    NOT_FOUND = 2
    TOOL_ERROR = 3
    OUTPUT_ERROR = 4
    INTERNAL_ERROR = 5


def exit_code_for(error: GitBlameError) -> ExitCode:
    """Map an engine error to the exit code reported for it."""
    match error:
        case NotARepositoryError() | FileNotTrackedError() | NoCommitsError():
            return ExitCode.NOT_FOUND
        case BlameCommandError():
            return ExitCode.TOOL_ERROR
        case MalformedOutputError():
            return ExitCode.OUTPUT_ERROR
        case ConfigError() | InvalidCommitUrlError():
            return ExitCode.CONFIG_ERROR
        case _:
            return ExitCode.INTERNAL_ERROR


def format_json(data: dict[str, Any], *, indent: bool = True) -> str:
    """Format data as JSON.

    Args:
        data: Dictionary to format as JSON.
        indent: Whether to pretty-print with indentation.

    Returns:
        JSON-formatted string representation.
    """
    options = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(data, option=options).decode("utf-8")


def format_toml(data: dict[str, Any]) -> str:
    """Format data as TOML."""
    return tomli_w.dumps(data)


def get_console() -> "Console":
    """Get a Rich console for standard output honouring --no-color."""
    from rich.console import Console  # noqa: PLC0415

    return Console(no_color=CLIContext.get_current().no_color, highlight=False)


def get_error_console() -> "Console":
    """Get a Rich console configured for error output to stderr.

    Returns:
        Console instance writing to stderr.
    """
    from rich.console import Console  # noqa: PLC0415

    return Console(stderr=True, no_color=CLIContext.get_current().no_color)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: "Console | None" = None,
) -> Never:
    """Print an error message and exit with the specified code.

    Args:
        message: The error message to display.
        code: The exit code to use (defaults to INTERNAL_ERROR).
        console: Optional Rich console for output. If not provided,
            a new stderr console will be created.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    if console is None:
        console = get_error_console()

    console.print(
        f"[red]Error:[/red] {escape(message)}", highlight=False, soft_wrap=True
    )
    raise SystemExit(code)


@dataclass(frozen=True, slots=True)
class BlameSession:
    """A blamer together with the configuration it was built from.

    Attributes:
        blamer: Blamer bound to the repository enclosing the target path.
        config: Effective configuration for that repository.
        logger: Structured logger shared with the blamer.
    """

    blamer: Blamer
    config: "Config"
    logger: "FilteringBoundLogger"


def open_session(path: Path, *, command: str) -> BlameSession:
    """Locate the repository enclosing a path and build a configured Blamer.

    The returned blamer still has to be entered before querying.

    Args:
        path: File or directory inside the repository.
        command: Name of the running command, bound to every log entry.

    Raises:
        NotARepositoryError: If no repository encloses the path.
    """
    ctx = CLIContext.get_current()
    repository = locate_repository(path)
    config, _ = ctx.load_config(repository.root)
    logger = ctx.create_logger(config, command=command)
    invoker = GitBlameInvoker(
        config.git.executable,
        extra_args=config.git.blame_args,
    )
    return BlameSession(
        blamer=Blamer(repository, invoker=invoker, logger=logger),
        config=config,
        logger=logger,
    )


def resolve_target(path: Path) -> Path:
    """Resolve a path given on the command line against the working directory."""
    candidate = Path.cwd() / path.expanduser()
    if candidate.name in ("", ".."):
        return candidate.resolve()
    return candidate.parent.resolve() / candidate.name
