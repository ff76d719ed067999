"""The GELF message before it is put on the wire."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .level import LevelSystem

_RESERVED_METADATA_KEYS = frozenset({"id"})


@dataclass
class Message:
    """A GELF message.

    ``level`` defaults to alert, as the GELF specification requires. When
    ``timestamp`` is left unset, the current time is used at serialization.
    """

    host: str
    short_message: str
    full_message: str | None = None
    timestamp: float | None = None
    level: LevelSystem = LevelSystem.ALERT
    metadata: dict[str, Any] = field(default_factory=dict)

    def set_metadata(self, key: str, value: Any) -> bool:
        """Attach an additional field; return False if the key is reserved."""
        if key in _RESERVED_METADATA_KEYS:
            return False
        self.metadata[key] = value
        return True