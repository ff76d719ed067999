"""Splitting serialized GELF messages into UDP-sized chunks."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Iterator

CHUNK_OVERHEAD = 12
"""Overhead per chunk: magic(2) + id(8) + position(1) + total(1)."""

CHUNK_SIZE_LAN = 8154
CHUNK_SIZE_WAN = 1420
MAX_CHUNKS = 128
MAGIC_BYTES = b"\x1e\x0f"


@dataclass(frozen=True)
class ChunkSize:
    """Size of a single message chunk in bytes."""

    size: int

    def __post_init__(self) -> None:
        if not 0 <= self.size <= 0xFFFF:
            raise ValueError(f"chunk size out of range: {self.size}")

    @classmethod
    def lan(cls) -> "ChunkSize":
        """Chunk size suited to local networks."""
        return cls(CHUNK_SIZE_LAN)

    @classmethod
    def wan(cls) -> "ChunkSize":
        """Chunk size suited to wide-area networks."""
        return cls(CHUNK_SIZE_WAN)


@dataclass(frozen=True)
class ChunkedMessageId:
    """Eight-byte identifier shared by all chunks of one message."""

    bytes: bytes

    def __post_init__(self) -> None:
        if len(self.bytes) != 8:
            raise ValueError("a chunked message id is exactly 8 bytes")

    @classmethod
    def random(cls) -> "ChunkedMessageId":
        """A new random identifier."""
        return cls(os.urandom(8))

    @classmethod
    def from_int(cls, value: int) -> "ChunkedMessageId":
        """Identifier from a 64-bit unsigned integer, big-endian."""
        return cls(value.to_bytes(8, "big"))

    def to_int(self) -> int:
        """The identifier as a 64-bit unsigned integer."""
        return int.from_bytes(self.bytes, "big")


@dataclass
class ChunkedMessage:
    """A serialized message split into GELF chunks.

    Raises ValueError when the chunk size is zero or the message would need
    more than 128 chunks.
    """

    chunk_size: ChunkSize
    payload: bytes
    message_id: ChunkedMessageId = field(default_factory=ChunkedMessageId.random)
    num_chunks: int = field(init=False)

    def __init__(
        self,
        chunk_size: ChunkSize,
        payload: bytes,
        message_id: ChunkedMessageId | None = None,
    ) -> None:
        size = chunk_size.size
        if size < 1:
            raise ValueError("chunk size must be greater than 0")
        num_chunks = -(-len(payload) // size)
        if num_chunks > MAX_CHUNKS:
            raise ValueError(
                f"message needs {num_chunks} chunks, at most {MAX_CHUNKS} allowed"
            )
        self.chunk_size = chunk_size
        self.payload = bytes(payload)
        self.message_id = message_id if message_id is not None else ChunkedMessageId.random()
        self.num_chunks = num_chunks

    def __len__(self) -> int:
        """Total byte length of all chunks, headers included."""
        if self.num_chunks > 1:
            return len(self.payload) + self.num_chunks * CHUNK_OVERHEAD
        return len(self.payload)

    def __iter__(self) -> Iterator[bytes]:
        size = self.chunk_size.size
        chunked = self.num_chunks > 1
        for number in range(self.num_chunks):
            body = self.payload[number * size:(number + 1) * size]
            if chunked:
                header = (
                    MAGIC_BYTES
                    + self.message_id.bytes
                    + bytes((number, self.num_chunks))
                )
                yield header + body
            else:
                yield body