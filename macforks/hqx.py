"""BinHex 4.0 encoding of a Macintosh file with both forks."""

from __future__ import annotations

import struct
from typing import BinaryIO

from .binhex import BinHexDecoder, BinHexEncoder, BinHexError
from .macfile import FINDER_INITED, FINDER_INVISIBLE, FINDER_ON_DESK, MAX_NAME_LEN, MacFile

__all__ = ["write_binhex", "read_binhex"]

_MAX_FORK_LEN = 0x7FFFFFFF
_DROPPED_FLAGS = FINDER_ON_DESK | FINDER_INITED | FINDER_INVISIBLE


def write_binhex(macfile: MacFile, stream: BinaryIO) -> None:
    """Write ``macfile`` to a binary stream in BinHex 4.0 form."""
    encoder = BinHexEncoder(stream)
    encoder.insert(bytes([len(macfile.name)]))
    encoder.insert(macfile.name + b"\x00")
    encoder.insert(macfile.type)
    encoder.insert(macfile.creator)
    encoder.insert(struct.pack(">H", macfile.flags))
    encoder.insert(struct.pack(">I", len(macfile.data)))
    encoder.insert(struct.pack(">I", len(macfile.rsrc)))
    encoder.insert_crc()
    for fork in (macfile.data, macfile.rsrc):
        encoder.insert(fork)
        encoder.insert_crc()
    encoder.close()


def read_binhex(stream: BinaryIO) -> MacFile:
    """Read one BinHex 4.0 file from a binary stream."""
    decoder = BinHexDecoder(stream)

    name_len = decoder.read(1)[0]
    if not 1 <= name_len <= MAX_NAME_LEN:
        raise BinHexError("invalid BinHex file header (bad file name)")
    name = decoder.read(name_len + 1)
    if name[name_len] != 0:
        raise BinHexError("invalid BinHex file header (bad file name)")

    file_type = decoder.read(4)
    creator = decoder.read(4)
    (flags,) = struct.unpack(">H", decoder.read(2))
    (dsize,) = struct.unpack(">I", decoder.read(4))
    (rsize,) = struct.unpack(">I", decoder.read(4))
    if dsize > _MAX_FORK_LEN or rsize > _MAX_FORK_LEN:
        raise BinHexError("invalid BinHex file header (bad file length)")
    decoder.read_crc()

    data = decoder.read(dsize)
    decoder.read_crc()
    rsrc = decoder.read(rsize)
    decoder.read_crc()
    decoder.close()

    return MacFile(
        name=name[:name_len],
        type=file_type,
        creator=creator,
        flags=flags & ~_DROPPED_FLAGS & 0xFFFF,
        data=data,
        rsrc=rsrc,
    )