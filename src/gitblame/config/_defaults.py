"""Default configuration values.

This module defines the built-in default configuration values that are used
when no other configuration sources provide values.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": {
        "level": "warning",
        "format": "text",
        "file": "",
    },
    "git": {
        "executable": "git",
        "blame_args": [],
    },
    "display": {
        "info_message_format": "${commit.summary}",
        "status_bar_message_format": "Blame ${author.name} ( ${time.ago} )",
        "commit_url": "",
    },
    "watch": {
        "use_gitignore": True,
        "ignore": [],
    },
}
