# macforks

A library for moving classic Macintosh files, the ones that carry a data
fork, a resource fork and Finder information, in and out of the formats used
to ship them around on other systems.

## Formats

- **MacBinary II** (`.bin`): a 128-byte header followed by both forks, each
  padded with zeros to a 128-byte boundary. The header holds the file name,
  type, creator, Finder flags and creation and modification dates, and is
  protected by a CRC.
- **BinHex 4.0** (`.hqx`): a 7-bit text encoding with run-length
  compression, 64-character lines, and CRCs on the header and on each fork.
- **Text**: conversion between host text (Latin-1, LF line ends) and
  Macintosh text (Mac OS Roman, CR line ends). Characters with no
  counterpart are replaced by close spellings such as `[tm]` or `<=`; the
  Latin-1 control range 0x80–0x9f is dropped.
- **Raw**: the data fork alone, with no translation.

## Modules

| Module | Contents |
| --- | --- |
| `macforks.crc` | `crc_binh(data, crc=0)` and `crc_macb(data, crc=0)`, the BinHex and MacBinary II CRC-16 variants |
| `macforks.charset` | `to_unicode`, `to_latin1`, `to_macroman` for Mac OS Roman text |
| `macforks.binhex` | `BinHexEncoder`, `BinHexDecoder`, `BinHexError` and `HQX_HEADER`, the low-level BinHex 4.0 stream |
| `macforks.macfile` | `MacFile`, plus `mac_name_hint` and `host_name_hint` for file naming, and the Finder flag constants |
| `macforks.macbinary` | `encode_macbinary`, `decode_macbinary`, `write_macbinary`, `read_macbinary`, `MacBinaryError` |
| `macforks.hqx` | `write_binhex` and `read_binhex` for whole `.hqx` files |
| `macforks.transfer` | `Mode`, `copy_in`, `copy_out`, `automode_unix`, `automode_hfs`, `unix_to_mac_text`, `mac_to_unix_text`, `TransferError` |

## MacFile

`MacFile` is a dataclass with `name`, `type`, `creator`, `flags`, `data`,
`rsrc`, `created` and `modified`. Name, type and creator are Mac OS Roman
bytes; strings given for them are encoded as Mac Roman. The name may be at
most 31 bytes, type and creator exactly 4, and flags must fit in 16 bits,
otherwise `ValueError` is raised. Dates are POSIX timestamps and default to
the current time. Type and creator default to `????` and `UNIX`.

## Examples

Checksums:

```python
from macforks.crc import crc_binh, crc_macb

header_crc = crc_macb(header_bytes[:124])
running = crc_binh(chunk, running)
```

Text conversion:

```python
from macforks.charset import to_latin1, to_macroman, to_unicode

mac_bytes = to_macroman("café".encode("latin-1"))
unix_bytes = to_latin1(mac_bytes)
text = to_unicode(mac_bytes)
```

Reading and writing archives:

```python
from macforks.hqx import read_binhex
from macforks.macbinary import write_macbinary

with open("Document.hqx", "rb") as src:
    macfile = read_binhex(src)

with open("Document.bin", "wb") as dst:
    write_macbinary(macfile, dst)
```

BinHex does not carry dates, so a file read with `read_binhex` gets the
current time for both.

Low-level BinHex streams:

```python
import io
from macforks.binhex import BinHexDecoder, BinHexEncoder

buffer = io.BytesIO()
with BinHexEncoder(buffer) as encoder:
    encoder.insert(b"hello")
    encoder.insert_crc()

buffer.seek(0)
decoder = BinHexDecoder(buffer)
assert decoder.read(5) == b"hello"
decoder.read_crc()
decoder.close()
```

Copying files the way the transfer modes choose:

```python
from macforks.transfer import Mode, copy_in, copy_out

macfile = copy_in("notes.txt")           # mode chosen from the extension
written = copy_out(macfile, "outdir", Mode.MACBINARY)
```

`copy_in(source, mode)` reads a host file (`-` for standard input) and
returns a `MacFile`. In text and raw modes the Macintosh name comes from
the host file name: the directory part is dropped, `:` becomes `-`, `_`
becomes a space, and text mode cuts the name at `.txt`.

`copy_out(macfile, destination, mode)` writes to a file, into a directory,
or to standard output for `-`, and returns the path written (or `None` for
standard output). Into a directory the host name comes from the Macintosh
name, with `/` turned into `-`, spaces into `_`, and `.bin`, `.hqx` or
(for text without a dot in the name) `.txt` appended.

With `Mode.AUTO`, `automode_unix` picks MacBinary for `.bin`, BinHex for
`.hqx`, text for `.txt`, `.c`, `.h`, `.html`, `.htm` and `.rtf` (case
ignored), and raw for anything else. `automode_hfs` picks text for files of
type `TEXT` or `ttro`, raw for files with an empty resource fork, and
MacBinary otherwise. Modes may also be given by their letters `m`, `b`,
`t`, `r` and `a`.

## Errors

- `BinHexError` (a `ValueError`): missing header, illegal character,
  unexpected end of data, bad name or length, or a CRC mismatch.
- `MacBinaryError` (a `ValueError`): bad header, name, length or version,
  a header CRC mismatch, or truncated forks.
- `TransferError`: an unknown mode, a source that is a directory or cannot
  be opened, a destination that cannot be opened, or malformed input met
  by `copy_in`.

## What it does not do

This package works on files and byte streams only. It does not read or
write HFS volumes or disk images, mount file systems, or provide a
command-line tool; `copy_in` produces a `MacFile` in memory and `copy_out`
takes one, and placing it on a Macintosh volume is left to the caller.

## Requirements

Python 3.10 or later. No third-party dependencies; tests use pytest.