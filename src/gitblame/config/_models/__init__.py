"""Configuration models."""

from ._common import ConfigSource, ConfigSourceName, LogFormat, LogLevel
from ._config import Config
from ._logging import LoggingConfig
from ._sections import DisplayConfig, GitConfig, WatchConfig

__all__ = [
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "DisplayConfig",
    "GitConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "WatchConfig",
]
