"""Shared utilities for gitblame."""

from ._ignore import (
    DEFAULT_IGNORE_PATTERNS,
    IgnoreConfig,
    collect_patterns,
    create_pathspec,
    load_gitignore_patterns,
    matches_any,
)
from ._logging import LogFormatType, create_logger

__all__ = [
    "DEFAULT_IGNORE_PATTERNS",
    "IgnoreConfig",
    "LogFormatType",
    "collect_patterns",
    "create_logger",
    "create_pathspec",
    "load_gitignore_patterns",
    "matches_any",
]
