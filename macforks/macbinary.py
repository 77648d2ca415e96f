"""MacBinary II encoding of a Macintosh file with both forks.

A MacBinary II file is a 128-byte header followed by the data fork and then
the resource fork. Each fork is padded with zeros to a multiple of 128 bytes.
"""

from __future__ import annotations

import io
import struct
from typing import BinaryIO

from .crc import crc_macb
from .macfile import FINDER_INITED, FINDER_ON_DESK, FINDER_RESERVED, MacFile

__all__ = [
    "MacBinaryError",
    "encode_macbinary",
    "decode_macbinary",
    "write_macbinary",
    "read_macbinary",
    "BLOCK_SIZE",
    "MAC_EPOCH_OFFSET",
]

BLOCK_SIZE = 128
MAC_EPOCH_OFFSET = 2082844800  # seconds from 1904-01-01 to 1970-01-01

_VERSION = 129
_MAX_FORK_LEN = 0x7FFFFFFF
_DROPPED_FLAGS = FINDER_ON_DESK | FINDER_INITED | FINDER_RESERVED


class MacBinaryError(ValueError):
    """Raised when MacBinary data is malformed, truncated or unsupported."""


def _to_mac_time(timestamp: int) -> int:
    return (int(timestamp) + MAC_EPOCH_OFFSET) & 0xFFFFFFFF


def _from_mac_time(mac_time: int) -> int:
    return mac_time - MAC_EPOCH_OFFSET


def _padding(size: int) -> bytes:
    return bytes(-size % BLOCK_SIZE)


def _header(macfile: MacFile) -> bytes:
    buf = bytearray(BLOCK_SIZE)
    name = macfile.name
    buf[1] = len(name)
    buf[2:2 + len(name)] = name
    buf[65:69] = macfile.type
    buf[69:73] = macfile.creator
    buf[73] = macfile.flags >> 8
    struct.pack_into(">II", buf, 83, len(macfile.data), len(macfile.rsrc))
    struct.pack_into(
        ">II", buf, 91, _to_mac_time(macfile.created), _to_mac_time(macfile.modified)
    )
    buf[101] = macfile.flags & 0xFF
    buf[122] = buf[123] = _VERSION
    struct.pack_into(">H", buf, 124, crc_macb(buf[:124]))
    return bytes(buf)


def write_macbinary(macfile: MacFile, stream: BinaryIO) -> None:
    """Write ``macfile`` to a binary stream in MacBinary II form."""
    stream.write(_header(macfile))
    for fork in (macfile.data, macfile.rsrc):
        stream.write(fork)
        stream.write(_padding(len(fork)))


def encode_macbinary(macfile: MacFile) -> bytes:
    """Return ``macfile`` encoded as MacBinary II bytes."""
    buffer = io.BytesIO()
    write_macbinary(macfile, buffer)
    return buffer.getvalue()


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    parts = bytearray()
    while len(parts) < size:
        chunk = stream.read(size - len(parts))
        if not chunk:
            break
        parts += chunk
    return bytes(parts)


def _read_fork(stream: BinaryIO, size: int) -> bytes:
    want = size + (-size % BLOCK_SIZE)
    chunk = _read_exact(stream, want)
    if len(chunk) != want:
        raise MacBinaryError("read incomplete chunk")
    return chunk[:size]


def read_macbinary(stream: BinaryIO) -> MacFile:
    """Read one MacBinary II file from a binary stream."""
    header = _read_exact(stream, BLOCK_SIZE)
    if len(header) < BLOCK_SIZE:
        raise MacBinaryError("error reading MacBinary file header")
    if header[0] != 0 or header[74] != 0:
        raise MacBinaryError("invalid MacBinary file header")
    (stored_crc,) = struct.unpack_from(">H", header, 124)
    if crc_macb(header[:124]) != stored_crc:
        raise MacBinaryError("unknown, unsupported, or corrupt MacBinary file")
    if header[123] > _VERSION:
        raise MacBinaryError("unsupported MacBinary file version")
    name_len = header[1]
    if not 1 <= name_len <= 63 or header[2 + name_len] != 0:
        raise MacBinaryError("invalid MacBinary file header (bad file name)")

    dsize, rsize = struct.unpack_from(">II", header, 83)
    if dsize > _MAX_FORK_LEN or rsize > _MAX_FORK_LEN:
        raise MacBinaryError("invalid MacBinary file header (bad file length)")
    created, modified = struct.unpack_from(">II", header, 91)
    flags = ((header[73] << 8) | header[101]) & ~_DROPPED_FLAGS & 0xFFFF

    data = _read_fork(stream, dsize)
    rsrc = _read_fork(stream, rsize)

    try:
        return MacFile(
            name=header[2:2 + name_len],
            type=header[65:69],
            creator=header[69:73],
            flags=flags,
            data=data,
            rsrc=rsrc,
            created=_from_mac_time(created),
            modified=_from_mac_time(modified),
        )
    except ValueError as exc:
        raise MacBinaryError(str(exc)) from exc


def decode_macbinary(data: bytes) -> MacFile:
    """Decode MacBinary II bytes into a :class:`MacFile`."""
    return read_macbinary(io.BytesIO(data))