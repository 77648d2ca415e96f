import os
import time

import pytest

from macforks.macfile import MAX_NAME_LEN, MacFile, host_name_hint, mac_name_hint


def test_mac_name_hint_strips_directory_and_extension():
    assert mac_name_hint("/tmp/some/My_File.bin", ".bin") == b"My File"


def test_mac_name_hint_replaces_colons():
    result = mac_name_hint("dir/a:b:c")
    assert b":" not in result
    assert len(result) == len("a:b:c")


def test_mac_name_hint_truncates():
    result = mac_name_hint("x" * 40)
    assert len(result) == MAX_NAME_LEN


def test_mac_name_hint_stdin_is_empty():
    assert mac_name_hint("-", ".txt") == b""


def test_mac_name_hint_cuts_at_first_extension():
    assert mac_name_hint("archive.bin.old", ".bin") == b"archive"


def test_mac_name_hint_extension_absent():
    assert mac_name_hint("notes", ".txt") == b"notes"


def test_mac_name_hint_accepts_bytes():
    assert mac_name_hint(b"/x/report.hqx", ".hqx") == b"report"


def test_host_name_hint_replaces_and_appends():
    assert host_name_hint(b"My/File name", ".hqx") == "My-File_name.hqx"


def test_host_name_hint_without_extension_has_no_slash_or_space():
    result = host_name_hint(b"a b/c")
    assert "/" not in result and " " not in result
    assert len(result) == len("a b/c")


@pytest.mark.parametrize("name", [b"ReadMe", b"Read Me", b"System Folder", b"caf\x8e"])
def test_name_hints_round_trip(name):
    assert mac_name_hint(host_name_hint(name)) == name


def test_host_name_hint_keeps_raw_bytes():
    assert os.fsencode(host_name_hint(b"caf\x8e")) == b"caf\x8e"


def test_macfile_defaults():
    mac = MacFile(b"file")
    assert mac.type == b"????"
    assert mac.creator == b"UNIX"
    assert mac.data == b"" and mac.rsrc == b""
    assert abs(mac.created - time.time()) < 5


def test_macfile_encodes_strings():
    mac = MacFile("Read Me", type="TEXT", creator="ttxt")
    assert (mac.name, mac.type, mac.creator) == (b"Read Me", b"TEXT", b"ttxt")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": b"n", "type": b"TXT"},
        {"name": b"n", "creator": b"LONGER"},
        {"name": b"n" * (MAX_NAME_LEN + 1)},
        {"name": b"n", "flags": 0x10000},
        {"name": b"n", "flags": -1},
    ],
)
def test_macfile_rejects_invalid(kwargs):
    with pytest.raises(ValueError):
        MacFile(**kwargs)