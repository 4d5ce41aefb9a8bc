"""Engine, display and watcher configuration models."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class GitConfig(BaseModel):
    """How the blame command is run.

    Attributes:
        executable: Name or path of the git executable.
        blame_args: Extra arguments passed to ``git blame`` (for example
            ``["-w"]`` to ignore whitespace changes).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    executable: str = Field(default="git", min_length=1)
    blame_args: tuple[str, ...] = ()


class DisplayConfig(BaseModel):
    """Message templates used by the command-line front end.

    Templates use ``${token}`` placeholders, see gitblame.display.

    Attributes:
        info_message_format: Template for the detailed line message.
        status_bar_message_format: Template for the one-line status message.
        commit_url: Template for a web link to a commit, ``${hash}`` is
            replaced by the full commit hash. Empty disables links.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    info_message_format: str = "${commit.summary}"
    status_bar_message_format: str = "Blame ${author.name} ( ${time.ago} )"
    commit_url: str = ""


class WatchConfig(BaseModel):
    """File watching settings.

    Attributes:
        use_gitignore: Whether to skip paths matched by the repository .gitignore.
        ignore: Extra gitignore-style patterns to skip.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    use_gitignore: bool = True
    ignore: tuple[str, ...] = ()
