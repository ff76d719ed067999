"""Exceptions raised while reading, transforming and shipping log records."""

from __future__ import annotations


class Jctl2grayError(Exception):
    """Base class for every error raised by the package."""

    prefix: str = ""
    default_reason: str = ""

    def __init__(self, reason: str | None = None) -> None:
        self.reason = self.default_reason if reason is None else reason
        super().__init__(self.reason)

    def __str__(self) -> str:
        if self.prefix:
            return f"{self.prefix} {self.reason}"
        return self.reason


class JournalIOError(Jctl2grayError):
    """An input/output operation failed."""

    prefix = "[IO]"


class JsonParsingError(Jctl2grayError):
    """A log record could not be decoded or encoded as JSON."""

    prefix = "[JSON parsing]"


class InternalError(Jctl2grayError):
    """An unexpected condition inside the program."""

    prefix = "[Internal]"


class InsufficientLogLevel(Jctl2grayError):
    """A record was filtered out because its level is below the threshold."""

    default_reason = "insufficient log level"


class NoMessage(Jctl2grayError):
    """A record carries no MESSAGE field."""

    default_reason = "no message found"