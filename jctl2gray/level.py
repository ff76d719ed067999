"""Severity levels: syslog levels and in-message levels."""

from __future__ import annotations

from enum import IntEnum


class LevelSystem(IntEnum):
    """GELF error level, equivalent to syslog severity (RFC 5424)."""

    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFORMATIONAL = 6
    DEBUG = 7

    @classmethod
    def from_num(cls, level: int) -> "LevelSystem":
        """Map a syslog severity number to a level; unknown numbers mean debug."""
        try:
            return cls(level)
        except ValueError:
            return cls.DEBUG

    @classmethod
    def from_name(cls, name: str) -> "LevelSystem":
        """Map a level name to a level; unknown names mean debug."""
        return _SYSTEM_BY_NAME.get(name, cls.DEBUG)

    def __str__(self) -> str:
        return _SYSTEM_NAMES[self]


_SYSTEM_NAMES = {
    LevelSystem.EMERGENCY: "emergency",
    LevelSystem.ALERT: "alert",
    LevelSystem.CRITICAL: "critical",
    LevelSystem.ERROR: "error",
    LevelSystem.WARNING: "warning",
    LevelSystem.NOTICE: "notice",
    LevelSystem.INFORMATIONAL: "info",
    LevelSystem.DEBUG: "debug",
}
_SYSTEM_BY_NAME = {name: level for level, name in _SYSTEM_NAMES.items()}


class LevelMsg(IntEnum):
    """Level found inside a message text, as in ``level=error``."""

    FATAL = 0
    PANIC = 1
    ERROR = 2
    WARNING = 3
    INFO = 4
    DEBUG = 5

    @classmethod
    def from_name(cls, name: str) -> "LevelMsg":
        """Map a level name to a level; unknown names mean debug."""
        return _MSG_BY_NAME.get(name, cls.DEBUG)

    def __str__(self) -> str:
        return self.name.lower()


_MSG_BY_NAME = {level.name.lower(): level for level in LevelMsg}