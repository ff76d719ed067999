import json
import time

import pytest

from jctl2gray.chunked_message import ChunkSize
from jctl2gray.compression import MessageCompression
from jctl2gray.errors import InternalError
from jctl2gray.level import LevelSystem
from jctl2gray.message import Message
from jctl2gray.wire_message import GELF_VERSION, WireMessage, current_time_unix


def test_mandatory_fields_in_order():
    wire = WireMessage(Message("host", "text", timestamp=2.0), [])
    data = wire.to_dict()
    assert list(data) == ["version", "host", "short_message", "level", "timestamp"]
    assert data["version"] == "1.1"
    assert data["version"] == GELF_VERSION


def test_host_and_message_trimmed_of_quotes():
    wire = WireMessage(Message('"myhost"', '" some text "', timestamp=2.0), [])
    data = wire.to_dict()
    assert data["host"] == "myhost"
    assert data["short_message"] == "some text"


def test_level_serialized_as_number():
    msg = Message("h", "t", timestamp=1.0, level=LevelSystem.WARNING)
    assert WireMessage(msg, []).to_dict()["level"] == int(LevelSystem.WARNING)


def test_full_message_included_when_set():
    msg = Message("h", "t", full_message="long text", timestamp=1.0)
    assert WireMessage(msg, []).to_dict()["full_message"] == "long text"


def test_timestamp_defaults_to_now():
    before = current_time_unix()
    stamp = WireMessage(Message("h", "t"), []).to_dict()["timestamp"]
    after = time.time()
    assert before <= stamp <= after


def test_optional_and_metadata_fields():
    msg = Message("h", "t", timestamp=1.0)
    msg.set_metadata("UNIT", "cron.service")
    data = WireMessage(msg, [("team", "t1"), ("service", "backend")]).to_dict()
    assert data["team"] == "t1"
    assert data["service"] == "backend"
    assert data["_UNIT"] == "cron.service"
    assert list(data)[-1] == "_UNIT"


def test_to_gelf_round_trip():
    msg = Message("h", "hello", timestamp=1.25)
    msg.set_metadata("PID", "10")
    wire = WireMessage(msg, [("team", "t1")])
    assert json.loads(wire.to_gelf()) == wire.to_dict()


def test_to_gelf_is_compact():
    wire = WireMessage(Message("h", "t", timestamp=1.0), [])
    assert " " not in wire.to_gelf()


def test_chunked_message_reassembles():
    wire = WireMessage(Message("h", "t" * 500, timestamp=1.0), [])
    chunked = wire.to_chunked_message(ChunkSize.wan(), MessageCompression.NONE)
    assert b"".join(chunked) == wire.to_compressed_gelf(MessageCompression.NONE)


def test_chunked_message_too_large():
    wire = WireMessage(Message("h", "t" * 500, timestamp=1.0), [])
    with pytest.raises(InternalError) as info:
        wire.to_chunked_message(ChunkSize(1), MessageCompression.NONE)
    assert "failed to split message on 1-bytes chunks" in str(info.value)