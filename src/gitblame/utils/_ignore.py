"""Gitignore-style pattern matching using pathspec.

This module provides utilities for loading and matching gitignore patterns
that decide which file change events a watcher forwards.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path, PurePath

from pathspec import PathSpec

DEFAULT_IGNORE_PATTERNS: frozenset[str] = frozenset(
    {
        ".git/",
        "*.pyc",
        "__pycache__/",
        "node_modules/",
        ".venv/",
        "*.swp",
        "*~",
    }
)
"""Default patterns to ignore when watching files.

These patterns are applied regardless of gitignore configuration so that
version control metadata and editor scratch files never trigger
invalidation.
"""


@dataclass(frozen=True, slots=True)
class IgnoreConfig:
    """Configuration for ignore pattern loading.

    Attributes:
        include_defaults: Whether to include DEFAULT_IGNORE_PATTERNS.
        use_gitignore: Whether to load patterns from the repository .gitignore.
        extra_patterns: Additional patterns to include.
    """

    include_defaults: bool = True
    use_gitignore: bool = True
    extra_patterns: tuple[str, ...] = field(default_factory=tuple)


def load_gitignore_patterns(path: Path) -> list[str]:
    """Load patterns from a gitignore file.

    Comments (lines starting with #) and empty lines are filtered out.

    Args:
        path: Path to the gitignore file.

    Returns:
        List of patterns from the file. Returns empty list if file doesn't exist.
    """
    if not path.is_file():
        return []

    patterns: list[str] = []
    content = path.read_text(encoding="utf-8")

    for line in content.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        patterns.append(stripped)

    return patterns


def collect_patterns(
    *,
    repo_root: Path | None = None,
    config: IgnoreConfig | None = None,
) -> list[str]:
    """Collect ignore patterns from all configured sources.

    Gathers patterns from:
    1. Default patterns (if include_defaults is True)
    2. Repository .gitignore (if use_gitignore is True and repo_root is given)
    3. Extra patterns from config

    Args:
        repo_root: Working tree root of the repository.
        config: Configuration for pattern sources. Uses defaults if None.

    Returns:
        List of all collected patterns, deduplicated while preserving order.
    """
    if config is None:
        config = IgnoreConfig()

    patterns: list[str] = []
    seen: set[str] = set()

    def add_patterns(new_patterns: Iterable[str]) -> None:
        for pattern in new_patterns:
            if pattern not in seen:
                seen.add(pattern)
                patterns.append(pattern)

    if config.include_defaults:
        add_patterns(sorted(DEFAULT_IGNORE_PATTERNS))

    if config.use_gitignore and repo_root is not None:
        add_patterns(load_gitignore_patterns(repo_root / ".gitignore"))

    if config.extra_patterns:
        add_patterns(config.extra_patterns)

    return patterns


def create_pathspec(
    *,
    repo_root: Path | None = None,
    config: IgnoreConfig | None = None,
) -> PathSpec:
    """Create a PathSpec from collected ignore patterns.

    Args:
        repo_root: Working tree root of the repository.
        config: Configuration for pattern sources. Uses defaults if None.

    Returns:
        A PathSpec instance configured with gitignore-style pattern matching.
    """
    patterns = collect_patterns(repo_root=repo_root, config=config)
    return PathSpec.from_lines("gitwildmatch", patterns)


def matches_any(pathspec: PathSpec, path: PurePath | str) -> bool:
    """Whether a path matches any pattern in a PathSpec.

    Args:
        pathspec: Compiled patterns.
        path: Path to test, preferably relative to the pattern root.

    Returns:
        True if the path is ignored.
    """
    return pathspec.match_file(PurePath(path).as_posix())
