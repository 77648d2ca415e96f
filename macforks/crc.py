"""CRC-16 checksums used by the BinHex 4.0 and MacBinary II formats.

Both use the CCITT polynomial 0x1021 with a zero initial value.
BinHex feeds each byte into the low end of the register, so a finished
checksum needs two zero bytes pushed through it. MacBinary mixes each byte
into the high end of the register, which is the usual XMODEM form.
"""

from __future__ import annotations

from collections.abc import Iterable

__all__ = ["crc_binh", "crc_macb"]

_POLY = 0x1021
_MASK = 0xFFFF


def _make_table() -> tuple[int, ...]:
    table = []
    for index in range(256):
        value = index << 8
        for _ in range(8):
            value = ((value << 1) ^ _POLY) if value & 0x8000 else (value << 1)
        table.append(value & _MASK)
    return tuple(table)


_TABLE = _make_table()


def crc_binh(data: Iterable[int], crc: int = 0) -> int:
    """Continue a BinHex-style CRC over ``data``, starting from ``crc``."""
    crc &= _MASK
    for byte in data:
        crc = (((crc << 8) | byte) ^ _TABLE[crc >> 8]) & _MASK
    return crc


def crc_macb(data: Iterable[int], crc: int = 0) -> int:
    """Continue a MacBinary II-style CRC over ``data``, starting from ``crc``."""
    crc &= _MASK
    for byte in data:
        crc ^= byte << 8
        crc = ((crc << 8) ^ _TABLE[crc >> 8]) & _MASK
    return crc