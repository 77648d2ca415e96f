"""Conversions between MacOS Standard Roman, Unicode and Latin-1 text."""

from __future__ import annotations

__all__ = ["to_unicode", "to_latin1", "to_macroman"]

# Unicode code points for MacOS Standard Roman bytes 0x80-0xff;
# bytes below 0x80 are ASCII.
_MACROMAN_HIGH = (
    0x00C4, 0x00C5, 0x00C7, 0x00C9, 0x00D1, 0x00D6, 0x00DC, 0x00E1,
    0x00E0, 0x00E2, 0x00E4, 0x00E3, 0x00E5, 0x00E7, 0x00E9, 0x00E8,
    0x00EA, 0x00EB, 0x00ED, 0x00EC, 0x00EE, 0x00EF, 0x00F1, 0x00F3,
    0x00F2, 0x00F4, 0x00F6, 0x00F5, 0x00FA, 0x00F9, 0x00FB, 0x00FC,
    0x2020, 0x00B0, 0x00A2, 0x00A3, 0x00A7, 0x2022, 0x00B6, 0x00DF,
    0x00AE, 0x00A9, 0x2122, 0x00B4, 0x00A8, 0x2260, 0x00C6, 0x00D8,
    0x221E, 0x00B1, 0x2264, 0x2265, 0x00A5, 0x00B5, 0x2202, 0x2211,
    0x220F, 0x03C0, 0x222B, 0x00AA, 0x00BA, 0x2126, 0x00E6, 0x00F8,
    0x00BF, 0x00A1, 0x00AC, 0x221A, 0x0192, 0x2248, 0x2206, 0x00AB,
    0x00BB, 0x2026, 0x00A0, 0x00C0, 0x00C3, 0x00D5, 0x0152, 0x0153,
    0x2013, 0x2014, 0x201C, 0x201D, 0x2018, 0x2019, 0x00F7, 0x25CA,
    0x00FF, 0x0178, 0x2044, 0x00A4, 0x2039, 0x203A, 0xFB01, 0xFB02,
    0x2021, 0x00B7, 0x201A, 0x201E, 0x2030, 0x00C2, 0x00CA, 0x00C1,
    0x00CB, 0x00C8, 0x00CD, 0x00CE, 0x00CF, 0x00CC, 0x00D3, 0x00D4,
    0xF8FF, 0x00D2, 0x00DA, 0x00DB, 0x00D9, 0x0131, 0x02C6, 0x02DC,
    0x00AF, 0x02D8, 0x02D9, 0x02DA, 0x00B8, 0x02DD, 0x02DB, 0x02C7,
)

_MACROMAN = tuple(range(0x80)) + _MACROMAN_HIGH

# Latin-1 stand-ins for Mac Roman characters outside Latin-1.
_MACROMAN_SUBST = {
    0xA0: b"+", 0xA5: b"*", 0xAA: b"[tm]", 0xAD: b"!=",
    0xB0: b"[inf]", 0xB2: b"<=", 0xB3: b">=", 0xB6: b"[partial]",
    0xB7: b"[Sum]", 0xB8: b"[Prod]", 0xB9: b"[pi]", 0xBA: b"[Integral]",
    0xBD: b"[ohm]",
    0xC3: b"[Sqrt]", 0xC4: b"[f]", 0xC5: b"~=", 0xC6: b"[delta]",
    0xC9: b"...", 0xCE: b"OE", 0xCF: b"oe",
    0xD0: b"-", 0xD1: b"--", 0xD2: b"``", 0xD3: b"''", 0xD4: b"`",
    0xD5: b"'", 0xD7: b"#", 0xD9: b"Y", 0xDA: b"/", 0xDC: b"<",
    0xDD: b">", 0xDE: b"fi", 0xDF: b"fl",
    0xE0: b"++", 0xE2: b",", 0xE3: b",,", 0xE4: b"o/oo",
    0xF0: b"[Apple]", 0xF5: b"i", 0xF6: b"^", 0xF7: b"~",
    0xF9: b"-", 0xFA: b"\xb7", 0xFB: b"\xb0", 0xFD: b'"', 0xFE: b"-",
    0xFF: b"^",
}

# Mac Roman stand-ins for Latin-1 characters outside Mac Roman.
# The C1 control range 0x80-0x9f is dropped.
_LATIN1_SUBST = {
    **{code: b"" for code in range(0x80, 0xA0)},
    0xA6: b"|", 0xAD: b"-",
    0xB2: b"[^2]", 0xB3: b"[^3]", 0xB9: b"[^1]",
    0xBC: b"[1/4]", 0xBD: b"[1/2]", 0xBE: b"[3/4]",
    0xD0: b"D", 0xD7: b"x", 0xDD: b"Y", 0xDE: b"P",
    0xF0: b"d", 0xFD: b"y", 0xFE: b"p",
}

_UNICODE_CHARS = tuple(chr(code) for code in _MACROMAN)

_TO_LATIN1 = tuple(
    bytes([code]) if code < 0x100 else _MACROMAN_SUBST[byte]
    for byte, code in enumerate(_MACROMAN)
)

_LATIN1_TO_MAC = {code: byte for byte, code in enumerate(_MACROMAN) if code < 0x100}

_TO_MACROMAN = tuple(
    bytes([_LATIN1_TO_MAC[byte]]) if byte in _LATIN1_TO_MAC else _LATIN1_SUBST[byte]
    for byte in range(256)
)


def to_unicode(data: bytes) -> str:
    """Decode MacOS Standard Roman bytes to a Unicode string."""
    return "".join(_UNICODE_CHARS[byte] for byte in data)


def to_latin1(data: bytes) -> bytes:
    """Convert MacOS Standard Roman bytes to Latin-1, substituting where needed."""
    return b"".join(_TO_LATIN1[byte] for byte in data)


def to_macroman(data: bytes) -> bytes:
    """Convert Latin-1 bytes to MacOS Standard Roman, substituting where needed."""
    return b"".join(_TO_MACROMAN[byte] for byte in data)