"""Configuration container with typed access.

This module provides the main Config class that serves as the primary
interface for accessing gitblame configuration values.
"""

from pathlib import Path  # noqa: TC003 - Used in runtime type annotations
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from gitblame.config._defaults import DEFAULT_CONFIG
from gitblame.config._loader import deep_merge, parse_env_vars, read_toml_file
from gitblame.exceptions import ConfigError

from ._common import ConfigSource, ConfigSourceName
from ._logging import LoggingConfig
from ._sections import DisplayConfig, GitConfig, WatchConfig


class Config(BaseModel):
    """Configuration container with typed access.

    Instances are immutable. Use the factory methods rather than the
    constructor so that defaults are merged in and sources are tracked.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    git: GitConfig = Field(default_factory=GitConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    watch: WatchConfig = Field(default_factory=WatchConfig)

    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())

    @classmethod
    def _build(
        cls,
        data: dict[str, Any],
        *,
        sources: tuple[ConfigSource, ...] = (),
        origin: str | None = None,
    ) -> Self:
        try:
            config = cls.model_validate(data)
        except ValidationError as e:
            where = f" in {origin}" if origin else ""
            msg = f"Invalid configuration{where}: {e}"
            raise ConfigError(msg) from e
        config._sources = sources
        return config

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create configuration from a dictionary merged over the defaults.

        Raises:
            ConfigError: If validation fails.
        """
        return cls._build(deep_merge(DEFAULT_CONFIG, data))

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Load configuration from a single file merged over the defaults.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigError: If validation fails.
        """
        data = read_toml_file(path)
        source = ConfigSource(
            name=ConfigSourceName.EXPLICIT,
            path=path,
            exists=True,
            values=data,
        )
        return cls._build(
            deep_merge(DEFAULT_CONFIG, data),
            sources=(source,),
            origin=str(path),
        )

    @classmethod
    def load(
        cls,
        *,
        repo_root: Path | None = None,
        config_path: Path | None = None,
        include_env: bool = True,
        cli_overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Load merged configuration from all sources.

        Sources are merged in precedence order
        (defaults -> user -> project -> explicit -> env -> cli).

        Args:
            repo_root: Repository root whose ``.gitblame.toml`` is read.
            config_path: Explicit config file; must exist.
            include_env: Include ``GITBLAME_*`` environment variables.
            cli_overrides: Values given as command-line options.

        Returns:
            Merged configuration object.

        Raises:
            FileNotFoundError: If config_path does not exist.
            ConfigLoadError: If a config file cannot be parsed.
            ConfigError: If the merged config fails validation.
        """
        from gitblame.config._discovery import discover_sources  # noqa: PLC0415

        if config_path is not None and not config_path.is_file():
            msg = f"Config file not found: {config_path}"
            raise FileNotFoundError(msg)

        sources = discover_sources(
            repo_root,
            config_path=config_path,
            include_env=include_env,
            cli_overrides=cli_overrides,
        )

        # Sources are discovered highest-to-lowest, so reverse for merging
        merged: dict[str, Any] = {}
        loaded_sources: list[ConfigSource] = []
        for source in reversed(sources):
            values: dict[str, Any] = {}
            if source.name == ConfigSourceName.ENV:
                values = parse_env_vars()
            elif source.path is not None:
                if source.exists:
                    values = read_toml_file(source.path)
            else:
                values = source.values

            loaded_sources.append(
                ConfigSource(
                    name=source.name,
                    path=source.path,
                    exists=source.exists,
                    values=values,
                )
            )
            merged = deep_merge(merged, values)

        # Keep highest precedence first, matching discover_sources()
        return cls._build(merged, sources=tuple(reversed(loaded_sources)))

    @property
    def sources(self) -> list[ConfigSource]:
        """Return the sources that contributed to this configuration."""
        return list(self._sources)
