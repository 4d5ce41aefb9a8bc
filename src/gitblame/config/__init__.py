"""Configuration for gitblame.

Configuration is merged from built-in defaults, the user config file, the
repository's ``.gitblame.toml``, an explicit ``--config`` file,
``GITBLAME_*`` environment variables and command-line options, in that
order of increasing precedence.
"""

from ._defaults import DEFAULT_CONFIG
from ._discovery import (
    PROJECT_CONFIG_FILENAME,
    discover_sources,
    get_project_config_path,
    get_user_config_path,
)
from ._load import safe_load_config
from ._loader import (
    deep_merge,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
    set_nested_key,
)
from ._models import (
    Config,
    ConfigSource,
    ConfigSourceName,
    DisplayConfig,
    GitConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    WatchConfig,
)

__all__ = [
    "DEFAULT_CONFIG",
    "PROJECT_CONFIG_FILENAME",
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "DisplayConfig",
    "GitConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "WatchConfig",
    "deep_merge",
    "discover_sources",
    "get_project_config_path",
    "get_user_config_path",
    "parse_env_vars",
    "parse_string_value",
    "read_toml_file",
    "safe_load_config",
    "set_nested_key",
]
