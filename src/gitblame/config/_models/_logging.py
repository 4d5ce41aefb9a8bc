"""Logging configuration model.

This module provides the LoggingConfig Pydantic model for logging settings.
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, field_validator

from ._common import LogFormat, LogLevel


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Unknown level or format values fall back to the defaults instead of
    failing validation.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.WARNING
    format: LogFormat = LogFormat.TEXT
    file: str = ""

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, value: object) -> LogLevel:
        try:
            return LogLevel(str(value).lower())
        except ValueError:
            return LogLevel.WARNING

    @field_validator("format", mode="before")
    @classmethod
    def _parse_format(cls, value: object) -> LogFormat:
        try:
            return LogFormat(str(value).lower())
        except ValueError:
            return LogFormat.TEXT
