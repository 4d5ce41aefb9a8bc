"""Display helpers for blame results.

These helpers turn engine results into text for a user interface: token
substitution in message templates, commit web links and coalescing of
related lines into ranges.
"""

from ._links import build_commit_url
from ._ranges import format_ranges, lines_to_ranges
from ._tokens import (
    UNCOMMITTED_AUTHOR,
    UNCOMMITTED_SUMMARY,
    TokenValue,
    commit_tokens,
    format_commit,
    format_line_info,
    parse_tokens,
)

__all__ = [
    "UNCOMMITTED_AUTHOR",
    "UNCOMMITTED_SUMMARY",
    "TokenValue",
    "build_commit_url",
    "commit_tokens",
    "format_commit",
    "format_line_info",
    "format_ranges",
    "lines_to_ranges",
    "parse_tokens",
]
