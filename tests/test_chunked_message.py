import pytest

from jctl2gray.chunked_message import (
    CHUNK_OVERHEAD,
    CHUNK_SIZE_WAN,
    MAGIC_BYTES,
    ChunkedMessage,
    ChunkedMessageId,
    ChunkSize,
)


def get_data(length):
    return bytes(i % 256 for i in range(length))


def check_chunks(chunk_size, msg_size, expected_chunk_count):
    data = get_data(msg_size)
    msg = ChunkedMessage(ChunkSize(chunk_size), data)
    counter = 0
    for chunk in msg:
        assert len(chunk) <= chunk_size + 12
        assert chunk[0] == MAGIC_BYTES[0]
        assert chunk[1] == MAGIC_BYTES[1]
        assert chunk[10] == counter
        assert chunk[11] == expected_chunk_count
        first_index = counter * chunk_size
        last_index = min((counter + 1) * chunk_size, msg_size) - 1
        assert chunk[12] == data[first_index]
        assert chunk[-1] == data[last_index]
        counter += 1
    assert counter == expected_chunk_count


RAW_BYTE_IDS = [
    b"\xff\xff\xff\xff\xff\xff\xff\xff",
    b"\x00\x00\x00\x00\x00\x00\x00\x00",
    b"\xaa\xaa\xaa\xaa\xaa\xaa\xaa\xaa",
    b"\x55\x55\x55\x55\x55\x55\x55\x55",
    b"\x00\x01\x02\x03\x04\x05\x06\x07",
    b"\x07\x06\x05\x04\x03\x02\x01\x00",
    b"\x00\x10\x20\x30\x40\x50\x60\x70",
    b"\x70\x60\x50\x40\x30\x20\x10\x00",
]

RAW_INT_IDS = [
    0xFFFFFFFFFFFFFFFF,
    0x0000000000000000,
    0xAAAAAAAAAAAAAAAA,
    0x5555555555555555,
    0x0001020304050607,
    0x0706050403020100,
    0x0010203040506070,
    0x7060504030201000,
]


@pytest.mark.parametrize("raw_id", RAW_BYTE_IDS)
def test_chunked_message_id_from_and_to_bytes(raw_id):
    assert ChunkedMessageId(raw_id).bytes == raw_id


@pytest.mark.parametrize("raw_id", RAW_INT_IDS)
def test_chunked_message_id_from_and_to_int(raw_id):
    assert ChunkedMessageId.from_int(raw_id).to_int() == raw_id


def test_chunked_message_id_is_big_endian():
    assert ChunkedMessageId.from_int(0x0001020304050607).bytes == RAW_BYTE_IDS[4]


def test_chunked_message_id_rejects_wrong_length():
    with pytest.raises(ValueError):
        ChunkedMessageId(b"\x00\x01")


def test_fail_too_many_chunks():
    with pytest.raises(ValueError):
        ChunkedMessage(ChunkSize(1), get_data(129))


def test_chunk_message_len():
    msg_1_chunk = ChunkedMessage(ChunkSize(1), get_data(1))
    msg_2_chunks = ChunkedMessage(ChunkSize(1), get_data(2))
    msg_128_chunks = ChunkedMessage(ChunkSize(1), get_data(128))

    assert len(msg_1_chunk) == 1
    assert len(msg_2_chunks) == 2 + 2 * CHUNK_OVERHEAD
    assert len(msg_128_chunks) == 128 + 128 * CHUNK_OVERHEAD


def test_chunk_message_id_random():
    msg1 = ChunkedMessage(ChunkSize(1), get_data(1))
    msg2 = ChunkedMessage(ChunkSize(1), get_data(1))
    msg3 = ChunkedMessage(ChunkSize(1), get_data(1))

    assert msg1.message_id.to_int() != msg2.message_id.to_int()
    assert msg3.message_id.to_int() != msg2.message_id.to_int()
    assert msg1.message_id.to_int() != msg3.message_id.to_int()


@pytest.mark.parametrize(
    "length, expected",
    [(1, 1), (2, 1), (3, 1), (4, 2), (5, 2), (6, 2), (7, 3)],
)
def test_chunk_message_correct_math(length, expected):
    assert ChunkedMessage(ChunkSize(3), get_data(length)).num_chunks == expected


def test_chunk_message_chunking():
    check_chunks(10, 100, 10)
    check_chunks(33, 100, 4)

    msg = ChunkedMessage(ChunkSize(100), get_data(100))
    chunks = list(msg)
    assert len(chunks) == 1
    chunk = chunks[0]
    assert len(chunk) == 100
    assert chunk[0] == 0
    assert chunk[99] == 99


def test_chunk_large_message_chunking():
    msg_size = 100000
    check_chunks(CHUNK_SIZE_WAN, msg_size, msg_size // CHUNK_SIZE_WAN + 1)


def test_illegal_chunk_size():
    with pytest.raises(ValueError):
        ChunkedMessage(ChunkSize(0), get_data(1))


def test_chunk_header_carries_message_id():
    message_id = ChunkedMessageId.from_int(0x0706050403020100)
    msg = ChunkedMessage(ChunkSize(2), get_data(5), message_id)
    chunks = list(msg)
    assert len(chunks) == 3
    assert all(chunk[2:10] == RAW_BYTE_IDS[5] for chunk in chunks)
    assert b"".join(chunk[12:] for chunk in chunks) == get_data(5)
    assert sum(len(chunk) for chunk in chunks) == len(msg)


def test_empty_payload_has_no_chunks():
    msg = ChunkedMessage(ChunkSize.wan(), b"")
    assert len(msg) == 0
    assert list(msg) == []


def test_default_chunk_sizes():
    assert ChunkSize.wan().size == 1420
    assert ChunkSize.lan().size == 8154


def test_chunk_size_out_of_range():
    with pytest.raises(ValueError):
        ChunkSize(0x10000)