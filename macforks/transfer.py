"""Copy files between the host file system and Macintosh file form.

Copying in reads a host file and builds a :class:`MacFile` from it. Copying
out writes a :class:`MacFile` to a host file. Both take a transfer mode:
MacBinary II, BinHex 4.0, text (line endings and character set converted),
raw (data fork only) or automatic selection.
"""

from __future__ import annotations

import enum
import io
import os
import sys
from typing import BinaryIO

from .binhex import BinHexError
from .charset import to_latin1, to_macroman
from .hqx import read_binhex, write_binhex
from .macbinary import MacBinaryError, decode_macbinary, write_macbinary
from .macfile import MacFile, host_name_hint, mac_name_hint

__all__ = [
    "TransferError",
    "Mode",
    "unix_to_mac_text",
    "mac_to_unix_text",
    "automode_unix",
    "automode_hfs",
    "copy_in",
    "copy_out",
]

TEXT_TYPE = b"TEXT"
TEXT_CREATOR = b"UNIX"
RAW_TYPE = b"????"
RAW_CREATOR = b"UNIX"


class TransferError(Exception):
    """Raised when a file cannot be copied in or out."""


class Mode(enum.Enum):
    """Transfer modes, named by their command-line option letters."""

    MACBINARY = "m"
    BINHEX = "b"
    TEXT = "t"
    RAW = "r"
    AUTO = "a"


_UNIX_EXTENSIONS = (
    (".bin", Mode.MACBINARY),
    (".hqx", Mode.BINHEX),
    (".txt", Mode.TEXT),
    (".c", Mode.TEXT),
    (".h", Mode.TEXT),
    (".html", Mode.TEXT),
    (".htm", Mode.TEXT),
    (".rtf", Mode.TEXT),
)

_HOST_EXTENSIONS = {
    Mode.MACBINARY: ".bin",
    Mode.BINHEX: ".hqx",
}


def unix_to_mac_text(data: bytes) -> bytes:
    """Convert host text (LF, Latin-1) to Macintosh text (CR, Mac Roman)."""
    return to_macroman(bytes(data).replace(b"\n", b"\r"))


def mac_to_unix_text(data: bytes) -> bytes:
    """Convert Macintosh text (CR, Mac Roman) to host text (LF, Latin-1)."""
    return to_latin1(bytes(data).replace(b"\r", b"\n"))


def automode_unix(path: str | os.PathLike) -> Mode:
    """Choose a copy-in mode from a host path's extension."""
    lowered = os.fspath(path).lower()
    for ext, mode in _UNIX_EXTENSIONS:
        if lowered.endswith(ext):
            return mode
    return Mode.RAW


def automode_hfs(macfile: MacFile) -> Mode:
    """Choose a copy-out mode from a Macintosh file's type and forks."""
    if macfile.type in (b"TEXT", b"ttro"):
        return Mode.TEXT
    if not macfile.rsrc:
        return Mode.RAW
    return Mode.MACBINARY


def _resolve(mode: Mode | str) -> Mode:
    try:
        return Mode(mode)
    except ValueError as exc:
        raise TransferError(f"unknown transfer mode: {mode!r}") from exc


def _read_source(source: str) -> bytes:
    if source == "-":
        return sys.stdin.buffer.read()
    if os.path.isdir(source):
        raise TransferError(f"{source}: is a directory")
    try:
        with open(source, "rb") as handle:
            return handle.read()
    except OSError as exc:
        raise TransferError(f"{source}: error opening source file") from exc


def copy_in(source: str | os.PathLike, mode: Mode | str = Mode.AUTO) -> MacFile:
    """Read a host file (``-`` for standard input) into a :class:`MacFile`."""
    source = os.fspath(source)
    mode = _resolve(mode)
    if mode is Mode.AUTO:
        mode = automode_unix(source)
    content = _read_source(source)

    try:
        if mode is Mode.MACBINARY:
            return decode_macbinary(content)
        if mode is Mode.BINHEX:
            return read_binhex(io.BytesIO(content))
        if mode is Mode.TEXT:
            return MacFile(
                name=mac_name_hint(source, ".txt"),
                type=TEXT_TYPE,
                creator=TEXT_CREATOR,
                data=unix_to_mac_text(content),
            )
        return MacFile(
            name=mac_name_hint(source),
            type=RAW_TYPE,
            creator=RAW_CREATOR,
            data=content,
        )
    except (MacBinaryError, BinHexError, ValueError) as exc:
        raise TransferError(f"{source}: {exc}") from exc


def _write_body(macfile: MacFile, stream: BinaryIO, mode: Mode) -> None:
    if mode is Mode.MACBINARY:
        write_macbinary(macfile, stream)
    elif mode is Mode.BINHEX:
        write_binhex(macfile, stream)
    elif mode is Mode.TEXT:
        stream.write(mac_to_unix_text(macfile.data))
    else:
        stream.write(macfile.data)


def copy_out(
    macfile: MacFile, destination: str | os.PathLike, mode: Mode | str = Mode.AUTO
) -> str | None:
    """Write ``macfile`` to a host file, directory or ``-`` (standard output).

    When ``destination`` is a directory, the file name is derived from the
    Macintosh name. Returns the path written, or None for standard output.
    """
    destination = os.fspath(destination)
    mode = _resolve(mode)
    if mode is Mode.AUTO:
        mode = automode_hfs(macfile)

    if mode is Mode.TEXT:
        ext = None if b"." in macfile.name else ".txt"
    else:
        ext = _HOST_EXTENSIONS.get(mode)

    if destination == "-":
        stream = sys.stdout.buffer
        _write_body(macfile, stream, mode)
        stream.flush()
        return None

    path = destination
    if os.path.isdir(destination):
        path = os.path.join(destination, host_name_hint(macfile.name, ext))

    try:
        with open(path, "wb") as handle:
            _write_body(macfile, handle, mode)
    except OSError as exc:
        raise TransferError(f"{path}: error opening destination file") from exc
    return path