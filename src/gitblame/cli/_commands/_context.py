# ruff: noqa: TC003  # Path needed at runtime for dataclass field
"""CLI context for global state management.

The CLIContext is set once at CLI startup from the global options and made
available to all commands via contextvars. Configuration depends on the
repository a command targets, so it is loaded per command through
CLIContext.load_config rather than at startup.
"""

import contextvars
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from gitblame.config import Config, safe_load_config
from gitblame.utils import create_logger

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

# Thread-safe context variable for CLIContext
_current_cli_context: contextvars.ContextVar["CLIContext | None"] = (
    contextvars.ContextVar("cli_context", default=None)
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global CLI options shared by all commands.

    Attributes:
        config_path: Explicit config file given with --config.
        log_level: Log level given with --log-level, overriding config.
        no_color: Disable colored output.
    """

    config_path: Path | None = None
    log_level: str | None = None
    no_color: bool = False

    @classmethod
    def get_current(cls) -> "CLIContext":
        """Get the current CLIContext, or a default one if none is set."""
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx
        return cls()

    @classmethod
    def set_current(cls, ctx: "CLIContext") -> None:
        """Set the current active CLIContext."""
        _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Reset to default context.

        This is primarily useful for testing to ensure a clean state between tests.
        """
        _current_cli_context.set(None)

    @property
    def cli_overrides(self) -> dict[str, object] | None:
        """Configuration values set by global options, or None if there are none."""
        if self.log_level is None:
            return None
        return {"logging": {"level": self.log_level}}

    def load_config(self, repo_root: Path | None) -> tuple[Config, str | None]:
        """Load configuration for a repository.

        Args:
            repo_root: Repository whose ``.gitblame.toml`` is read, if known.

        Returns:
            Tuple of (Config, error_message), see safe_load_config.
        """
        return safe_load_config(
            repo_root=repo_root,
            config_path=self.config_path,
            cli_overrides=self.cli_overrides,
        )

    def create_logger(self, config: Config, **context: object) -> "FilteringBoundLogger":
        """Create a logger from the logging section of a configuration."""
        return create_logger(
            level=config.logging.level.value,
            log_format=config.logging.format.value,  # type: ignore[arg-type]
            log_file=config.logging.file,
            **context,
        )
