"""gitblame CLI commands."""
# pyright: reportUnusedCallResult=false

from typing import TYPE_CHECKING

from ._blame import related, show, status
from ._config import config
from ._context import CLIContext
from ._shared import (
    BlameSession,
    ExitCode,
    exit_code_for,
    exit_with_error,
    get_console,
    get_error_console,
    open_session,
)
from ._watch import watch

if TYPE_CHECKING:
    from cyclopts import App

__all__ = [
    "BlameSession",
    "CLIContext",
    "ExitCode",
    "config",
    "exit_code_for",
    "exit_with_error",
    "get_console",
    "get_error_console",
    "open_session",
    "register_commands",
    "related",
    "show",
    "status",
    "watch",
]


def register_commands(app: "App") -> None:
    """Register all commands with the given app.

    Args:
        app: The cyclopts App to register commands with.
    """
    app.command(show)
    app.command(status)
    app.command(related)
    app.command(watch)
    app.command(config)
