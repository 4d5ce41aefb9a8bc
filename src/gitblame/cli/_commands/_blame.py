# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing
"""Line query commands: show, status and related."""

from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

import anyio
from cyclopts import Parameter, validators
from rich.markup import escape

from gitblame.display import (
    build_commit_url,
    format_line_info,
    format_ranges,
    lines_to_ranges,
)
from gitblame.exceptions import GitBlameError, InvalidCommitUrlError

from ._shared import (
    exit_code_for,
    exit_with_error,
    format_json,
    get_console,
    open_session,
    resolve_target,
)

if TYPE_CHECKING:
    from rich.console import Console

    from gitblame.blame import LineInfo

LineNumber = Annotated[
    int,
    Parameter(help="1-based line number", validator=validators.Number(gte=1)),
]
JsonFlag = Annotated[
    bool, Parameter(name="--json", negative="", help="Print JSON instead of text")
]


def _print_no_info(console: "Console", path: Path, line: int) -> None:
    message = f"No blame information for {path.name}:{line}"
    console.print(f"[dim]{escape(message)}[/dim]", soft_wrap=True)


def _line_info_data(
    info: "LineInfo", *, url: str | None, related: list[int]
) -> dict[str, Any]:
    commit = info.commit
    return {
        "line": info.line_number,
        "original_line": info.attribution.original_line,
        "hash": info.hash,
        "uncommitted": commit.is_uncommitted,
        "author": {
            "name": commit.author_name,
            "email": commit.author_mail,
            "time": commit.author_time,
            "tz": commit.author_tz,
        },
        "summary": commit.summary,
        "filename": commit.filename,
        "url": url,
        "related": [list(span) for span in lines_to_ranges(related)],
    }


async def _show(
    target: Path, line: int, template: str | None, as_json: bool
) -> None:
    session = open_session(target, command="show")
    display = session.config.display
    console = get_console()

    async with session.blamer as blamer:
        info = await blamer.line_info(target, line)
        if info is None:
            if as_json:
                console.print("null", markup=False)
            else:
                _print_no_info(console, target, line)
            return

        url = None
        url_error: InvalidCommitUrlError | None = None
        if not info.commit.is_uncommitted:
            try:
                url = build_commit_url(display.commit_url, info.hash)
            except InvalidCommitUrlError as e:
                url_error = e
        related = await blamer.lines_for_commit(target, info.hash)

    if as_json:
        data = _line_info_data(info, url=url, related=related)
        console.print(format_json(data), markup=False, soft_wrap=True)
    else:
        console.print(
            format_line_info(template or display.info_message_format, info),
            markup=False,
            soft_wrap=True,
        )
        if url is not None:
            console.print(url, markup=False, soft_wrap=True)
        console.print(
            f"Lines: {format_ranges(lines_to_ranges(related))}",
            markup=False,
        )

    # A bad link template is reported after the blame output it belongs to
    if url_error is not None:
        raise url_error


async def _status(target: Path, line: int) -> None:
    session = open_session(target, command="status")
    console = get_console()

    async with session.blamer as blamer:
        info = await blamer.line_info(target, line)

    if info is None:
        _print_no_info(console, target, line)
        return
    console.print(
        format_line_info(session.config.display.status_bar_message_format, info),
        markup=False,
        soft_wrap=True,
    )


async def _related(target: Path, commit_hash: str, as_json: bool) -> None:
    session = open_session(target, command="related")
    console = get_console()

    async with session.blamer as blamer:
        lines = await blamer.lines_for_commit(target, commit_hash)

    if as_json:
        data = {"hash": commit_hash.lower(), "lines": lines}
        console.print(format_json(data, indent=False), markup=False, soft_wrap=True)
    elif not lines:
        message = f"No lines in {target.name} are attributed to {commit_hash}"
        console.print(f"[dim]{escape(message)}[/dim]", soft_wrap=True)
    else:
        console.print(format_ranges(lines_to_ranges(lines)), markup=False)


def _run(fn: Callable[..., Awaitable[None]], *args: object) -> None:
    try:
        anyio.run(fn, *args)
    except GitBlameError as e:
        exit_with_error(str(e), exit_code_for(e))


def show(
    file: Annotated[Path, Parameter(help="File to blame")],
    line: LineNumber,
    *,
    format_: Annotated[
        str | None,
        Parameter(
            name=["--format", "-f"],
            help="Message template, defaults to display.info_message_format",
        ),
    ] = None,
    as_json: JsonFlag = False,
) -> None:
    """Show the commit that last changed a line.

    Prints the formatted commit message, a link to the commit when
    display.commit_url is set, and the other lines of the file that the
    same commit last changed.
    """
    _run(_show, resolve_target(file), line, format_, as_json)


def status(
    file: Annotated[Path, Parameter(help="File to blame")],
    line: LineNumber,
) -> None:
    """Print the one-line status message for a line."""
    _run(_status, resolve_target(file), line)


def related(
    file: Annotated[Path, Parameter(help="File to blame")],
    commit_hash: Annotated[
        str, Parameter(help="Full commit hash (40 or 64 hex digits)")
    ],
    *,
    as_json: JsonFlag = False,
) -> None:
    """List the line ranges of a file last changed by a commit."""
    _run(_related, resolve_target(file), commit_hash, as_json)
