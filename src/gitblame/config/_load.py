"""Configuration loading with error handling for the CLI."""

import os
import sys
from pathlib import Path  # noqa: TC003 - Used in runtime type annotations

from gitblame.exceptions import ConfigError

from ._models import Config


def safe_load_config(
    *,
    repo_root: Path | None = None,
    config_path: Path | None = None,
    cli_overrides: dict[str, object] | None = None,
) -> tuple[Config, str | None]:
    """Load configuration, falling back to defaults on errors.

    Errors are handled based on the GITBLAME_STRICT_CONFIG environment
    variable:
    - If unset or "0": warn to stderr and return the default config
    - If "1": fail fast with sys.exit(1)

    A missing explicit config file always exits, since the user asked for it.

    Args:
        repo_root: Repository root whose project config is read.
        config_path: Explicit path to config file (--config flag).
        cli_overrides: CLI argument overrides.

    Returns:
        Tuple of (Config, error_message). On success, error_message is None.
    """
    strict_mode = os.environ.get("GITBLAME_STRICT_CONFIG", "0") == "1"

    if config_path is not None and not config_path.is_file():
        print(f"Error: Config file not found: {config_path}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    try:
        config = Config.load(
            repo_root=repo_root,
            config_path=config_path,
            cli_overrides=cli_overrides,
        )
    except (ConfigError, OSError) as e:
        error_msg = str(e)
        if strict_mode:
            print(f"Error: {error_msg}", file=sys.stderr)  # noqa: T201
            sys.exit(1)
        print(f"Warning: Failed to load config: {error_msg}", file=sys.stderr)  # noqa: T201
        return Config.from_dict({}), error_msg
    else:
        return config, None
