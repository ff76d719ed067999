"""General application configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .compression import MessageCompression
from .level import LevelMsg, LevelSystem


class LogSource(Enum):
    """Where log records are read from."""

    STDIN = "stdin"
    JOURNALCTL = "journal"


@dataclass
class Config:
    """Settings that drive reading, filtering and sending records."""

    log_source: LogSource
    journal_dir: str = ""
    sender_port: int = 5000
    graylog_addr: str = "127.0.0.1:9000"
    graylog_addr_ttl: int = 60
    compression: MessageCompression = MessageCompression.NONE
    log_level_system: LevelSystem = LevelSystem.INFORMATIONAL
    log_level_message: LevelMsg | None = None
    optional: list[tuple[str, str]] = field(default_factory=list)


def parse_log_source(name: str) -> LogSource | None:
    """Map a source name to a LogSource, or None if it is unknown."""
    try:
        return LogSource(name)
    except ValueError:
        return None