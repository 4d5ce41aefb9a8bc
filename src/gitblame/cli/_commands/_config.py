# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing
"""The config command."""

from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from gitblame.blame import locate_repository
from gitblame.exceptions import NotARepositoryError

from ._context import CLIContext
from ._shared import format_toml, get_console, resolve_target


def config(
    path: Annotated[
        Path, Parameter(help="Any path inside the repository")
    ] = Path(),
    *,
    sources: Annotated[
        bool, Parameter(help="List the configuration sources instead")
    ] = False,
) -> None:
    """Print the effective configuration as TOML.

    Outside a repository only the user, environment and command-line
    sources apply.
    """
    ctx = CLIContext.get_current()
    console = get_console()

    try:
        repo_root: Path | None = locate_repository(resolve_target(path)).root
    except NotARepositoryError:
        repo_root = None

    loaded, _ = ctx.load_config(repo_root)

    if not sources:
        console.print(
            format_toml(loaded.model_dump(mode="json")),
            markup=False,
            end="",
            soft_wrap=True,
        )
        return

    for source in loaded.sources:
        location = str(source.path) if source.path is not None else "-"
        state = "found" if source.exists else "missing"
        console.print(f"{source.name.value:<8} {state:<8} {location}", markup=False)

