"""A Macintosh file with both forks, and file name conversions."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass, field

__all__ = [
    "MacFile",
    "mac_name_hint",
    "host_name_hint",
    "MAX_NAME_LEN",
    "FINDER_ON_DESK",
    "FINDER_INITED",
    "FINDER_RESERVED",
    "FINDER_INVISIBLE",
]

MAX_NAME_LEN = 31

FINDER_ON_DESK = 0x0001
FINDER_INITED = 0x0100
FINDER_RESERVED = 0x0200
FINDER_INVISIBLE = 0x4000

_TO_MAC_NAME = bytes.maketrans(b":_", b"- ")
_TO_HOST_NAME = bytes.maketrans(b"/ ", b"-_")


def _as_bytes(value: bytes | str) -> bytes:
    if isinstance(value, str):
        return value.encode("mac_roman")
    return bytes(value)


def _now() -> int:
    return int(time.time())


@dataclass
class MacFile:
    """An HFS file: name, type and creator codes, Finder flags, two forks, dates.

    Names and codes are MacOS Standard Roman bytes; strings are encoded on
    construction. Dates are POSIX timestamps.
    """

    name: bytes
    type: bytes = b"????"
    creator: bytes = b"UNIX"
    flags: int = 0
    data: bytes = b""
    rsrc: bytes = b""
    created: int = field(default_factory=_now)
    modified: int = field(default_factory=_now)

    def __post_init__(self) -> None:
        self.name = _as_bytes(self.name)
        self.type = _as_bytes(self.type)
        self.creator = _as_bytes(self.creator)
        self.data = bytes(self.data)
        self.rsrc = bytes(self.rsrc)
        if len(self.name) > MAX_NAME_LEN:
            raise ValueError(f"file name longer than {MAX_NAME_LEN} characters")
        if len(self.type) != 4:
            raise ValueError("file type must be 4 characters")
        if len(self.creator) != 4:
            raise ValueError("file creator must be 4 characters")
        if not 0 <= self.flags <= 0xFFFF:
            raise ValueError("Finder flags must fit in 16 bits")


def mac_name_hint(path: str | bytes | os.PathLike, ext: str | bytes | None = None) -> bytes:
    """Derive an HFS file name from a host path.

    The directory part and anything from the first occurrence of ``ext`` on
    are dropped, the name is cut to 31 bytes, and ``:`` and ``_`` become
    ``-`` and space. The path ``-`` (standard input) gives an empty name.
    """
    raw = os.fsencode(path)
    if raw == b"-":
        return b""
    base = raw.rpartition(b"/")[2]
    if ext is not None:
        cut = base.find(os.fsencode(ext))
        if cut != -1:
            base = base[:cut]
    return base[:MAX_NAME_LEN].translate(_TO_MAC_NAME)


def host_name_hint(name: bytes | str, ext: str | None = None) -> str:
    """Derive a host file name from an HFS file name.

    ``/`` and space become ``-`` and ``_``, and ``ext`` is appended if given.
    """
    converted = _as_bytes(name).translate(_TO_HOST_NAME)
    if ext:
        converted += os.fsencode(ext)
    return os.fsdecode(converted)