import io
import random

import pytest

from macforks.binhex import BinHexDecoder, BinHexEncoder, BinHexError, HQX_HEADER


def _encode(*forks):
    out = io.BytesIO()
    encoder = BinHexEncoder(out)
    for fork in forks:
        encoder.insert(fork)
        encoder.insert_crc()
    encoder.close()
    return out.getvalue()


def _decode(blob, *sizes):
    decoder = BinHexDecoder(io.BytesIO(blob))
    result = []
    for size in sizes:
        result.append(decoder.read(size))
        decoder.read_crc()
    decoder.close()
    return result


SAMPLES = [
    b"",
    b"x",
    b"hello",
    b"abc",
    bytes(range(256)),
    b"\x90",
    b"\x90" * 2,
    b"\x90" * 3,
    b"\x90" * 300,
    b"a" * 3,
    b"a" * 4,
    b"a" * 1000,
    b"\x00\x90\x90\x00\x90",
    random.Random(1).randbytes(5000),
]


def test_output_starts_with_header_and_colon():
    blob = _encode(b"data")
    assert blob.startswith(b"(This file must be converted with BinHex 4.0)\n:")


def test_output_ends_with_colon_line():
    blob = _encode(b"data")
    assert blob.endswith(b":\n")


@pytest.mark.parametrize("data", SAMPLES)
def test_round_trip(data):
    assert _decode(_encode(data), len(data)) == [data]


def test_round_trip_several_blocks():
    forks = [b"header", b"\x90" * 7 + b"zz", b"", b"tail" * 50]
    assert _decode(_encode(*forks), *map(len, forks)) == forks


def test_line_length_limited():
    blob = _encode(random.Random(2).randbytes(3000))
    body = blob[len(HQX_HEADER):]
    lines = body.split(b"\n")
    assert all(len(line) <= 65 for line in lines)
    assert len(lines) > 10


def test_runs_are_compressed():
    assert len(_encode(b"a" * 1000)) < 100


def test_chunked_insert_matches_single_insert():
    data = b"aaaa\x90\x90\x90\x90bbbbbbbb" * 40
    out = io.BytesIO()
    encoder = BinHexEncoder(out)
    for start in range(0, len(data), 7):
        encoder.insert(data[start:start + 7])
    encoder.insert_crc()
    encoder.close()
    assert out.getvalue() == _encode(data)


def test_context_manager_closes():
    out = io.BytesIO()
    with BinHexEncoder(out) as encoder:
        encoder.insert(b"payload")
        encoder.insert_crc()
    assert _decode(out.getvalue(), 7) == [b"payload"]


def test_insert_after_close_raises():
    encoder = BinHexEncoder(io.BytesIO())
    encoder.close()
    with pytest.raises(ValueError):
        encoder.insert(b"more")


def test_decoder_skips_leading_text_and_crlf():
    data = b"some file contents" * 10
    blob = b"junk line\r\nmore junk\n" + _encode(data).replace(b"\n", b"\r\n")
    assert _decode(blob, len(data)) == [data]


def test_missing_header():
    with pytest.raises(BinHexError, match="header not found"):
        BinHexDecoder(io.BytesIO(b"nothing to see here\n"))


def test_illegal_character():
    decoder = BinHexDecoder(io.BytesIO(HQX_HEADER + b":.!!!\n"))
    with pytest.raises(BinHexError, match="illegal character"):
        decoder.read(1)


def test_truncated_input():
    data = random.Random(3).randbytes(500)
    blob = _encode(data)
    decoder = BinHexDecoder(io.BytesIO(blob[: len(blob) // 2]))
    with pytest.raises(BinHexError, match="unexpected end"):
        decoder.read(len(data))


def test_crc_mismatch():
    out = io.BytesIO()
    encoder = BinHexEncoder(out)
    encoder.insert(b"abc")
    encoder.insert(b"\x00\x00")
    encoder.close()
    decoder = BinHexDecoder(io.BytesIO(out.getvalue()))
    assert decoder.read(3) == b"abc"
    with pytest.raises(BinHexError, match="CRC"):
        decoder.read_crc()


@pytest.mark.parametrize("data", [b"a", b"ab", b"abc"])
def test_corrupt_end(data):
    blob = _encode(data)
    blob = blob[:-2] + b"x\n"
    decoder = BinHexDecoder(io.BytesIO(blob))
    assert decoder.read(len(data)) == data
    decoder.read_crc()
    with pytest.raises(BinHexError, match="corrupt end"):
        decoder.close()