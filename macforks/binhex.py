"""Streaming BinHex 4.0 encoder and decoder.

The encoder applies BinHex run-length encoding and the 8-to-6 bit mapping,
and writes 64-character lines framed by colons. The decoder finds the
BinHex header in a byte stream and undoes both steps. Each fork or header
block carries a two-byte CRC, which ``insert_crc`` and ``read_crc`` handle.
Neither class closes the stream it was given.
"""

from __future__ import annotations

from typing import BinaryIO

from .crc import crc_binh

__all__ = ["BinHexError", "BinHexEncoder", "BinHexDecoder", "HQX_HEADER"]

HQX_HEADER = b"(This file must be converted with BinHex 4.0)\n"

_HEADER_MATCH = 40
_MAX_LINE_LEN = 64
_RUN_MARK = 0x90
_ZERO_WORD = b"\x00\x00"

_ENMAP = (
    b"!\"#$%&'()*+,-012345689@ABCDEFGHI"
    b"JKLMNPQRSTUVXYZ[`abcdefhijklmpqr"
)


def _make_demap() -> tuple[int, ...]:
    # 0 marks an illegal character, -1 whitespace, n > 0 the value n - 1.
    table = [0] * 256
    for value, char in enumerate(_ENMAP):
        table[char] = value + 1
    for char in b"\t\n\r ":
        table[char] = -1
    return tuple(table)


_DEMAP = _make_demap()


def _is_return(char: int) -> bool:
    return _DEMAP[char] == -1


class BinHexError(ValueError):
    """Raised when BinHex data is missing, malformed or fails its checksum."""


class BinHexEncoder:
    """Write data to a binary stream in BinHex 4.0 form."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._line = bytearray(b":")
        self._stage = 0
        self._bits = 0
        self._lastch = 0
        self._runlen = 0
        self._crc = 0
        self._closed = False
        stream.write(HQX_HEADER)

    def __enter__(self) -> BinHexEncoder:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None and not self._closed:
            self.close()

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("BinHex encoder is closed")

    def _flush_line(self) -> None:
        self._line.append(0x0A)
        self._stream.write(bytes(self._line))
        self._line.clear()

    def _put(self, value: int) -> None:
        if len(self._line) == _MAX_LINE_LEN:
            self._flush_line()
        self._line.append(_ENMAP[value])

    def _add_chars(self, data: bytes) -> None:
        for byte in data:
            if self._stage == 0:
                self._put(byte >> 2)
                self._bits = byte & 0x03
                self._stage = 1
            elif self._stage == 1:
                self._put((self._bits << 4) | (byte >> 4))
                self._bits = byte & 0x0F
                self._stage = 2
            else:
                self._put((self._bits << 2) | (byte >> 6))
                self._put(byte & 0x3F)
                self._bits = 0
                self._stage = 0

    def _rle_flush(self) -> None:
        last, run = self._lastch, self._runlen
        if (last != _RUN_MARK and run < 4) or (last == _RUN_MARK and run < 3):
            literal = bytes([_RUN_MARK, 0]) if last == _RUN_MARK else bytes([last])
            self._add_chars(literal * run)
        elif last == _RUN_MARK:
            self._add_chars(bytes([_RUN_MARK, 0, _RUN_MARK, run]))
        else:
            self._add_chars(bytes([last, _RUN_MARK, run]))
        self._runlen = 0

    def insert(self, data: bytes) -> None:
        """Encode ``data``, adding it to the running checksum."""
        self._check_open()
        data = bytes(data)
        self._crc = crc_binh(data, self._crc)
        for byte in data:
            if self._runlen:
                if self._runlen == 0xFF or self._lastch != byte:
                    self._rle_flush()
                if self._lastch == byte:
                    self._runlen += 1
                    continue
            self._lastch = byte
            self._runlen = 1

    def insert_crc(self) -> None:
        """Encode the checksum of everything inserted since the last one."""
        self._check_open()
        crc = crc_binh(_ZERO_WORD, self._crc)
        self.insert(crc.to_bytes(2, "big"))
        self._crc = 0

    def close(self) -> None:
        """Flush pending data and write the closing colon."""
        self._check_open()
        if self._runlen:
            self._rle_flush()
        if self._stage:
            self._add_chars(b"\x00")
        self._line.append(ord(":"))
        self._flush_line()
        self._closed = True
        flush = getattr(self._stream, "flush", None)
        if flush is not None:
            flush()


class BinHexDecoder:
    """Read data from a binary stream holding BinHex 4.0 text.

    The stream is positioned just after the opening colon on construction.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._stage = 0
        self._bits = 0
        self._lastch = 0
        self._runlen = 0
        self._crc = 0
        self._find_start()

    def _getc(self) -> int | None:
        chunk = self._stream.read(1)
        return chunk[0] if chunk else None

    def _find_start(self) -> None:
        matched: int | None = 0
        while matched is None or matched < _HEADER_MATCH:
            char = self._getc()
            if char is None:
                raise BinHexError("hqx file header not found")
            if char in (0x0A, 0x0D):
                matched = 0
                continue
            if matched is not None:
                matched = matched + 1 if char == HQX_HEADER[matched] else None

        char = self._getc()
        while char not in (0x0A, 0x0D):
            if char is None:
                raise BinHexError("corrupt hqx file")
            char = self._getc()

        char = self._getc()
        while char is not None and _is_return(char):
            char = self._getc()
        if char is None or char != ord(":"):
            raise BinHexError("corrupt hqx file")

    def _hqx_char(self) -> int:
        char = self._getc()
        while char is not None and _is_return(char):
            char = self._getc()
        if char is None:
            raise BinHexError("unexpected end of file")
        value = _DEMAP[char]
        if value == 0:
            raise BinHexError("illegal character in hqx file")
        return value - 1

    def _next_byte(self) -> int:
        value = self._hqx_char()
        if self._stage == 0:
            second = self._hqx_char()
            byte = (value << 2) | (second >> 4)
            self._bits = second & 0x0F
            self._stage = 1
        elif self._stage == 1:
            byte = (self._bits << 4) | (value >> 2)
            self._bits = value & 0x03
            self._stage = 2
        else:
            byte = (self._bits << 6) | value
            self._bits = 0
            self._stage = 0
        return byte & 0xFF

    def read(self, size: int) -> bytes:
        """Decode exactly ``size`` bytes, adding them to the running checksum."""
        if size < 0:
            raise ValueError("size must not be negative")
        out = bytearray()
        while len(out) < size:
            if self._runlen:
                out.append(self._lastch)
                self._runlen -= 1
                continue
            byte = self._next_byte()
            if byte == _RUN_MARK:
                count = self._next_byte()
                if count > 0:
                    self._runlen = count - 1
                    continue
            out.append(byte)
            self._lastch = byte
        self._crc = crc_binh(out, self._crc)
        return bytes(out)

    def read_crc(self) -> None:
        """Read a checksum and verify it against the data read since the last one."""
        expected = crc_binh(_ZERO_WORD, self._crc)
        stored = int.from_bytes(self.read(2), "big")
        if stored != expected:
            raise BinHexError("CRC checksum error")
        self._crc = 0

    def close(self) -> None:
        """Check that the BinHex data ends with its closing colon."""
        char = self._getc()
        while char is not None and _is_return(char):
            char = self._getc()
        if char == ord("!"):
            char = self._getc()
            while char is not None and _is_return(char):
                char = self._getc()
        if char != ord(":"):
            raise BinHexError("corrupt end of hqx file")