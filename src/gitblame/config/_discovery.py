"""Config path discovery utilities.

This module determines where configuration files live and lists the sources
that contribute to a merged configuration.
"""

from pathlib import Path
from typing import Any

import platformdirs

from ._defaults import DEFAULT_CONFIG
from ._models._common import ConfigSource, ConfigSourceName

PROJECT_CONFIG_FILENAME = ".gitblame.toml"


def get_user_config_path() -> Path:
    r"""Get platform-specific user config file path.

    - Linux: ``~/.config/gitblame/config.toml``
    - macOS: ``~/Library/Application Support/gitblame/config.toml``
    - Windows: ``%APPDATA%\gitblame\config.toml``

    The path is returned regardless of whether the file exists.
    """
    return platformdirs.user_config_path("gitblame") / "config.toml"


def get_project_config_path(repo_root: Path) -> Path:
    """Get the per-repository config file path."""
    return repo_root / PROJECT_CONFIG_FILENAME


def _file_exists(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def discover_sources(
    repo_root: Path | None = None,
    *,
    config_path: Path | None = None,
    include_env: bool = True,
    cli_overrides: dict[str, Any] | None = None,
) -> list[ConfigSource]:
    """Discover all configuration sources.

    Sources are returned in precedence order (highest first). File-based
    sources are checked for existence but not read. The project source is
    omitted when no repository root is known.

    Args:
        repo_root: Repository working tree root, if known.
        config_path: Explicit config file given on the command line.
        include_env: Include environment variables as a source.
        cli_overrides: Values given as command-line options.

    Returns:
        List of ConfigSource objects in precedence order (highest first).
    """
    sources: list[ConfigSource] = []

    if cli_overrides is not None:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.CLI,
                path=None,
                exists=bool(cli_overrides),
                values=cli_overrides,
            )
        )

    if include_env:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.ENV,
                path=None,
                exists=True,  # Actual values parsed during loading phase
                values={},
            )
        )

    if config_path is not None:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.EXPLICIT,
                path=config_path,
                exists=_file_exists(config_path),
                values={},
            )
        )

    if repo_root is not None:
        project_path = get_project_config_path(repo_root)
        sources.append(
            ConfigSource(
                name=ConfigSourceName.PROJECT,
                path=project_path,
                exists=_file_exists(project_path),
                values={},
            )
        )

    user_path = get_user_config_path()
    sources.append(
        ConfigSource(
            name=ConfigSourceName.USER,
            path=user_path,
            exists=_file_exists(user_path),
            values={},
        )
    )

    sources.append(
        ConfigSource(
            name=ConfigSourceName.DEFAULT,
            path=None,
            exists=True,
            values=DEFAULT_CONFIG,
        )
    )

    return sources
