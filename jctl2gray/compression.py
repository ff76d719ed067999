"""Compression algorithms allowed for GELF messages."""

from __future__ import annotations

import gzip
import zlib
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .wire_message import WireMessage


class MessageCompression(Enum):
    """Every compression algorithm GELF supports."""

    NONE = "none"
    GZIP = "gzip"
    ZLIB = "zlib"

    @classmethod
    def from_name(cls, name: str) -> "MessageCompression":
        """Map an algorithm name to a member; unknown names mean no compression."""
        if name == "gzip":
            return cls.GZIP
        if name == "zlib":
            return cls.ZLIB
        return cls.NONE

    @classmethod
    def default(cls) -> "MessageCompression":
        """The default algorithm."""
        return cls.GZIP

    def compress(self, message: "WireMessage") -> bytes:
        """Serialize the message to GELF/JSON and compress it."""
        data = message.to_gelf().encode("utf-8")
        if self is MessageCompression.GZIP:
            return gzip.compress(data)
        if self is MessageCompression.ZLIB:
            return zlib.compress(data)
        return data

    def __str__(self) -> str:
        return self.value