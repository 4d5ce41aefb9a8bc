"""Token substitution for blame messages.

Message templates contain ``${name}`` or ``${name,argument}`` placeholders.
Tokens are either plain strings or callables that receive the optional
argument, for example ``${commit.hash_short,10}`` or
``${time.custom,YYYY-MM-DD HH:mm}``.
"""

import re
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

from gitblame.blame import SHORT_HASH_LENGTH, CommitInfo, LineInfo

if TYPE_CHECKING:
    from pendulum import DateTime

TokenValue = str | Callable[[str | None], str]

UNCOMMITTED_AUTHOR = "Not Committed Yet"
UNCOMMITTED_SUMMARY = "Uncommitted changes"
DEFAULT_DATE_FORMAT = "YYYY-MM-DD"

_TOKEN_PATTERN = re.compile(r"\$\{([a-z][a-z0-9._-]*)(?:[,|\s]+([^}]*))?\}", re.I)


def parse_tokens(template: str, tokens: Mapping[str, TokenValue]) -> str:
    """Substitute token placeholders in a template.

    Unknown tokens are left in place so mistakes stay visible.

    Args:
        template: Template containing ``${token}`` placeholders.
        tokens: Token values by name.

    Returns:
        The rendered string.
    """

    def replace(match: re.Match[str]) -> str:
        name = match.group(1).lower()
        if name not in tokens:
            return match.group(0)

        value = tokens[name]
        if callable(value):
            argument = match.group(2)
            return value(argument.strip() if argument else None)
        return value

    return _TOKEN_PATTERN.sub(replace, template)


def _short_hash(commit_hash: str) -> TokenValue:
    def render(length: str | None) -> str:
        if length is not None and length.isdigit():
            return commit_hash[: int(length)]
        return commit_hash[:SHORT_HASH_LENGTH]

    return render


def _date(moment: "DateTime | None", default_format: str) -> TokenValue:
    def render(fmt: str | None) -> str:
        if moment is None:
            return ""
        return moment.format(fmt or default_format)

    return render


def _timestamp(value: int | None) -> str:
    return "" if value is None else str(value)


def commit_tokens(commit: CommitInfo) -> dict[str, TokenValue]:
    """Build the token table for a commit.

    Args:
        commit: Commit metadata from a blame record.

    Returns:
        Token values keyed by token name.
    """
    authored = commit.author_datetime
    committed = commit.committer_datetime

    author_name = commit.author_name
    summary = commit.summary
    if commit.is_uncommitted:
        author_name = author_name or UNCOMMITTED_AUTHOR
        summary = summary or UNCOMMITTED_SUMMARY

    return {
        "commit.hash": commit.hash,
        "commit.hash_short": _short_hash(commit.hash),
        "commit.summary": summary,
        "commit.filename": commit.filename,
        "author.name": author_name,
        "author.email": commit.author_mail,
        "author.timestamp": _timestamp(commit.author_time),
        "author.tz": commit.author_tz,
        "author.date": _date(authored, DEFAULT_DATE_FORMAT),
        "committer.name": commit.committer_name,
        "committer.email": commit.committer_mail,
        "committer.timestamp": _timestamp(commit.committer_time),
        "committer.tz": commit.committer_tz,
        "committer.date": _date(committed, DEFAULT_DATE_FORMAT),
        "time.ago": authored.diff_for_humans() if authored is not None else "",
        "time.iso": authored.to_iso8601_string() if authored is not None else "",
        "time.custom": _date(authored, "YYYY-MM-DD HH:mm:ss"),
    }


def format_commit(template: str, commit: CommitInfo) -> str:
    """Render a template for a commit."""
    return parse_tokens(template, commit_tokens(commit))


def format_line_info(template: str, info: LineInfo) -> str:
    """Render a template for the answer to a line query."""
    return format_commit(template, info.commit)
