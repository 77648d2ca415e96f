import io
import struct

import pytest

from macforks.crc import crc_macb
from macforks.macbinary import (
    BLOCK_SIZE,
    MacBinaryError,
    decode_macbinary,
    encode_macbinary,
    read_macbinary,
    write_macbinary,
)
from macforks.macfile import FINDER_INITED, FINDER_INVISIBLE, MacFile


def _sample(**overrides):
    fields = dict(
        name=b"Read Me",
        type=b"TEXT",
        creator=b"ttxt",
        flags=FINDER_INVISIBLE,
        data=b"hello\rworld",
        rsrc=bytes(range(200)),
        created=1_000_000_000,
        modified=1_100_000_000,
    )
    fields.update(overrides)
    return MacFile(**fields)


def _resign(header: bytearray) -> bytes:
    struct.pack_into(">H", header, 124, crc_macb(header[:124]))
    return bytes(header)


def test_round_trip():
    original = _sample()
    assert decode_macbinary(encode_macbinary(original)) == original


def test_stream_round_trip():
    original = _sample(rsrc=b"")
    buffer = io.BytesIO()
    write_macbinary(original, buffer)
    buffer.seek(0)
    assert read_macbinary(buffer) == original


def test_output_is_block_aligned():
    encoded = encode_macbinary(_sample())
    assert len(encoded) % BLOCK_SIZE == 0
    assert len(encoded) >= BLOCK_SIZE + len(b"hello\rworld") + 200


def test_header_layout():
    macfile = _sample()
    header = encode_macbinary(macfile)[:BLOCK_SIZE]
    assert header[0] == 0
    assert header[1] == len(macfile.name)
    assert header[2:2 + len(macfile.name)] == macfile.name
    assert header[65:73] == b"TEXTttxt"
    assert header[122] == 129
    assert header[123] == 129
    assert struct.unpack_from(">II", header, 83) == (len(macfile.data), len(macfile.rsrc))
    assert crc_macb(header[:124]) == struct.unpack_from(">H", header, 124)[0]


def test_epoch_date_uses_mac_epoch():
    header = encode_macbinary(_sample(created=0))[:BLOCK_SIZE]
    assert header[91:95] == b"\x7c\x25\xb0\x80"


def test_forks_follow_header():
    macfile = _sample()
    encoded = encode_macbinary(macfile)
    body = encoded[BLOCK_SIZE:]
    assert body.startswith(macfile.data)
    rsrc_start = len(macfile.data) + (-len(macfile.data) % BLOCK_SIZE)
    assert body[rsrc_start:rsrc_start + len(macfile.rsrc)] == macfile.rsrc
    assert set(body[len(macfile.data):rsrc_start]) <= {0}


def test_inited_flag_is_dropped_on_read():
    decoded = decode_macbinary(encode_macbinary(_sample(flags=FINDER_INITED | FINDER_INVISIBLE)))
    assert decoded.flags == FINDER_INVISIBLE


def test_trailing_data_ignored():
    original = _sample()
    assert decode_macbinary(encode_macbinary(original) + b"extra") == original


def test_short_header():
    with pytest.raises(MacBinaryError, match="header"):
        decode_macbinary(b"\x00" * 100)


def test_nonzero_first_byte():
    header = bytearray(encode_macbinary(_sample()))
    header[0] = 1
    with pytest.raises(MacBinaryError, match="invalid MacBinary file header"):
        decode_macbinary(bytes(header))


def test_bad_crc():
    encoded = bytearray(encode_macbinary(_sample()))
    encoded[124] ^= 0xFF
    with pytest.raises(MacBinaryError, match="corrupt"):
        decode_macbinary(bytes(encoded))


def test_unsupported_version():
    encoded = bytearray(encode_macbinary(_sample()))
    encoded[123] = 130
    header = _resign(encoded[:BLOCK_SIZE])
    with pytest.raises(MacBinaryError, match="version"):
        decode_macbinary(header + bytes(encoded[BLOCK_SIZE:]))


def test_empty_name_rejected():
    encoded = encode_macbinary(_sample(name=b""))
    with pytest.raises(MacBinaryError, match="bad file name"):
        decode_macbinary(encoded)


def test_bad_fork_length():
    encoded = bytearray(encode_macbinary(_sample()))
    struct.pack_into(">I", encoded, 83, 0x80000000)
    header = _resign(encoded[:BLOCK_SIZE])
    with pytest.raises(MacBinaryError, match="bad file length"):
        decode_macbinary(header + bytes(encoded[BLOCK_SIZE:]))


def test_truncated_fork():
    encoded = encode_macbinary(_sample())
    with pytest.raises(MacBinaryError, match="incomplete"):
        decode_macbinary(encoded[:-10])