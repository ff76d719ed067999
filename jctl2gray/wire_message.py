"""The fully assembled GELF message, ready to serialize and send."""

from __future__ import annotations

import json
import time
from typing import Any, Iterable

from .chunked_message import ChunkedMessage, ChunkSize
from .compression import MessageCompression
from .errors import InternalError, JsonParsingError
from .message import Message

GELF_VERSION = "1.1"
_TRIMMED = '" '


def current_time_unix() -> float:
    """Current UNIX time in seconds."""
    return time.time()


class WireMessage:
    """A message together with the optional fields attached to every record."""

    def __init__(self, message: Message, optional: Iterable[tuple[str, str]]) -> None:
        self.message = message
        self.optional = list(optional)

    def to_dict(self) -> dict[str, Any]:
        """The GELF fields in wire order."""
        msg = self.message
        fields: dict[str, Any] = {
            "version": GELF_VERSION,
            "host": msg.host.strip(_TRIMMED),
            "short_message": msg.short_message.strip(_TRIMMED),
            "level": int(msg.level),
        }
        if msg.full_message is not None:
            fields["full_message"] = msg.full_message
        fields["timestamp"] = (
            msg.timestamp if msg.timestamp is not None else current_time_unix()
        )
        for name, value in self.optional:
            fields[name] = value
        for key, value in msg.metadata.items():
            fields["_" + key] = value
        return fields

    def to_gelf(self) -> str:
        """The message as a GELF/JSON string."""
        try:
            return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise JsonParsingError(str(exc)) from exc

    def to_compressed_gelf(self, compression: MessageCompression) -> bytes:
        """The GELF/JSON string compressed with the given algorithm."""
        return compression.compress(self)

    def to_chunked_message(
        self, chunk_size: ChunkSize, compression: MessageCompression
    ) -> ChunkedMessage:
        """Serialize, compress and split the message into chunks."""
        data = self.to_compressed_gelf(compression)
        try:
            return ChunkedMessage(chunk_size, data)
        except ValueError as exc:
            raise InternalError(
                f"failed to split message on {chunk_size.size}-bytes chunks"
            ) from exc