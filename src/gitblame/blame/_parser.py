"""Parser for ``git blame --porcelain`` output.

Porcelain output is a sequence of groups. Each group starts with a header
line::

    <hash> <original line> <final line> [<lines in group>]

The first time a commit appears its header is followed by metadata lines
(``author``, ``author-mail``, ``summary`` ...). Every source line is emitted
after a TAB. Later groups for the same commit carry no metadata, so metadata
is taken from the first occurrence only.
"""

import re
from typing import Any

from gitblame.exceptions import MalformedOutputError

from ._models import BlameRecord, CommitInfo, LineAttribution

_HASH_PATTERN = re.compile(r"[0-9a-fA-F]{40}(?:[0-9a-fA-F]{24})?")

_TEXT_FIELDS = {
    "author": "author_name",
    "author-tz": "author_tz",
    "committer": "committer_name",
    "committer-tz": "committer_tz",
    "summary": "summary",
    "filename": "filename",
}
_MAIL_FIELDS = {
    "author-mail": "author_mail",
    "committer-mail": "committer_mail",
}
_TIME_FIELDS = {
    "author-time": "author_time",
    "committer-time": "committer_time",
}


def is_zero_hash(commit_hash: str) -> bool:
    """Whether a hash is the all-zero working-tree hash."""
    return commit_hash.strip("0") == ""


def _parse_header(
    commit_hash: str, rest: str, index: int, line: str
) -> tuple[int, int, int]:
    """Parse the numeric part of a group header.

    Returns:
        Tuple of (original line, final line, line count).
    """
    fields = rest.split()
    if len(fields) not in (2, 3) or not all(
        field.isascii() and field.isdigit() for field in fields
    ):
        msg = f"Invalid header for {commit_hash} on output line {index}"
        raise MalformedOutputError(msg, line_number=index, line=line)

    numbers = [int(field) for field in fields]
    if any(number < 1 for number in numbers):
        msg = f"Line numbers must be positive on output line {index}"
        raise MalformedOutputError(msg, line_number=index, line=line)

    original, final = numbers[0], numbers[1]
    count = numbers[2] if len(numbers) == 3 else 1
    return original, final, count


def _apply_metadata(fields: dict[str, Any], keyword: str, value: str) -> None:
    # Unknown keywords are skipped so newer git versions keep parsing
    if keyword in _TEXT_FIELDS:
        fields[_TEXT_FIELDS[keyword]] = value
    elif keyword in _MAIL_FIELDS:
        fields[_MAIL_FIELDS[keyword]] = value.removeprefix("<").removesuffix(">")
    elif keyword in _TIME_FIELDS:
        try:
            fields[_TIME_FIELDS[keyword]] = int(value)
        except ValueError:
            pass
    elif keyword == "previous":
        previous_hash, _, previous_filename = value.partition(" ")
        fields["previous_hash"] = previous_hash
        fields["previous_filename"] = previous_filename or None
    elif keyword == "boundary":
        fields["boundary"] = True


def parse_blame(raw: str) -> BlameRecord:
    """Parse porcelain blame output into a BlameRecord.

    Args:
        raw: Output of ``git blame --porcelain``.

    Returns:
        The parsed record. Every hash referenced from ``lines`` is a key of
        ``commits``.

    Raises:
        MalformedOutputError: If a group header is invalid or metadata
            appears before the first header.
    """
    lines: dict[int, LineAttribution] = {}
    metadata: dict[str, dict[str, Any]] = {}

    current: str | None = None
    collecting = False

    for index, line in enumerate(raw.splitlines(), start=1):
        if not line or line.startswith("\t"):
            continue

        keyword, _, value = line.partition(" ")

        if _HASH_PATTERN.fullmatch(keyword):
            commit_hash = keyword.lower()
            original, final, count = _parse_header(commit_hash, value, index, line)

            collecting = commit_hash not in metadata and not is_zero_hash(commit_hash)
            metadata.setdefault(commit_hash, {})
            current = commit_hash

            for offset in range(count):
                number = final + offset
                lines[number] = LineAttribution(
                    line_number=number,
                    hash=commit_hash,
                    original_line=original + offset,
                )
            continue

        if current is None:
            msg = f"Metadata before the first header on output line {index}"
            raise MalformedOutputError(msg, line_number=index, line=line)

        if collecting:
            _apply_metadata(metadata[current], keyword, value)

    commits = {
        commit_hash: (
            CommitInfo.uncommitted(commit_hash)
            if is_zero_hash(commit_hash)
            else CommitInfo(hash=commit_hash, **fields)
        )
        for commit_hash, fields in metadata.items()
    }
    return BlameRecord(lines=lines, commits=commits)
