"""The command-line interface for gitblame."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from gitblame.config import LogLevel

from ._commands import register_commands
from ._commands._context import CLIContext

_HELP = "Show which commit last changed each line of a file."


def _launch(
    app: App,
    tokens: tuple[str, ...],
    *,
    config: Path | None,
    log_level: LogLevel | None,
    no_color: bool,
) -> None:
    ctx = CLIContext(
        config_path=config.expanduser().resolve() if config is not None else None,
        log_level=log_level.value if log_level is not None else None,
        no_color=no_color,
    )
    CLIContext.set_current(ctx)

    try:
        app(tokens)
    finally:
        CLIContext.reset()


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Build the gitblame application.

    Args:
        console: Console for help and version output.
        error_console: Console for parse errors.
        exit_on_error: Exit the process on parse errors instead of raising.

    Returns:
        A fresh App with all commands registered.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="gitblame",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        log_level: Annotated[
            LogLevel | None,
            Parameter(name="--log-level", help="Override logging.level"),
        ] = None,
        no_color: Annotated[
            bool, Parameter(name="--no-color", help="Disable colored output")
        ] = False,
    ) -> None:
        """Launch gitblame with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            config: Explicit path to config file.
            log_level: Log level overriding the configured one.
            no_color: Disable colored output.
        """
        _launch(app, tokens, config=config, log_level=log_level, no_color=no_color)

    register_commands(app)
    return app


app = create_app()


def main() -> None:
    """Run the gitblame command-line interface."""
    app.meta()
