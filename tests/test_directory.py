"""
Test the sfnt header and table directory.
"""

import struct

import pytest

from sfntinfo import settings
from sfntinfo.directory import TableDirectory
from sfntinfo.exceptions import (
    InvalidContainer,
    OutOfBounds,
    TableNotFound,
    UnsupportedFont,
)

from .data import OPENTYPE, TEST_FONT, build_sfnt


@pytest.mark.parametrize("length", range(12))
def test_short_buffers(length: int) -> None:
    """Verify that anything shorter than a header is rejected."""
    with pytest.raises((InvalidContainer, OutOfBounds)):
        TableDirectory(TEST_FONT[:length])


def test_bad_signature() -> None:
    """Verify that unknown signatures are InvalidContainer."""
    with pytest.raises(InvalidContainer):
        TableDirectory(b"\x00\x00\x00\x00" + TEST_FONT[4:])
    with pytest.raises(InvalidContainer) as e:
        TableDirectory(b"%PDF-1.7\n\n\n\n\n\n")
    assert "font" in str(e.value)


@pytest.mark.parametrize("signature", [b"wOFF", b"wOF2", b"ttcf"])
def test_other_containers(signature: bytes) -> None:
    """Verify that other font containers are recognized as such."""
    with pytest.raises(UnsupportedFont) as e:
        TableDirectory(signature + TEST_FONT[4:])
    assert isinstance(e.value, InvalidContainer)
    assert "not supported" in str(e.value)


def test_directory() -> None:
    """Verify reading the directory."""
    directory = TableDirectory(TEST_FONT)
    assert directory.flavor == "TrueType"
    assert directory.tags == ["cmap", "maxp", "name"]
    assert "name" in directory
    assert "NAME" not in directory
    assert len(directory) == 3
    entry = directory["maxp"]
    assert entry.tag == "maxp"
    assert entry.length == 6
    table = directory.table("maxp")
    assert len(table) == 6
    assert table.uint16(4) == 99


def test_opentype() -> None:
    """Verify that CFF OpenType is accepted."""
    directory = TableDirectory(build_sfnt({"CFF ": b"\0" * 4}, version=OPENTYPE))
    assert directory.flavor == "OpenType"
    assert directory.tags == ["CFF "]


def test_missing_table() -> None:
    directory = TableDirectory(TEST_FONT)
    with pytest.raises(TableNotFound) as e:
        directory.table("glyf")
    assert e.value.tag == "glyf"
    assert "'glyf' not found" in str(e.value)
    with pytest.raises(KeyError):
        directory["glyf"]


def test_truncated_directory() -> None:
    """Verify that a directory promising more tables than the buffer
    contains fails cleanly."""
    data = struct.pack(">4sHHHH", b"\x00\x01\x00\x00", 5, 0, 0, 0) + b"cmap"
    with pytest.raises(OutOfBounds):
        TableDirectory(data)


def test_empty_directory() -> None:
    directory = TableDirectory(build_sfnt({}))
    assert directory.tags == []


def make_bogus_font() -> bytes:
    """A font whose second table goes off the end of the file."""
    data = bytearray(build_sfnt({"maxp": b"\0" * 6, "name": b"\0" * 6}))
    # Length of the second entry
    struct.pack_into(">L", data, 12 + 16 + 12, 1000)
    return bytes(data)


def test_table_out_of_bounds() -> None:
    """Verify that tables are checked against the buffer when used."""
    directory = TableDirectory(make_bogus_font())
    assert directory.table("maxp").uint16(4) == 0
    with pytest.raises(OutOfBounds):
        directory.table("name")


def test_strict_out_of_bounds(monkeypatch) -> None:
    """Verify that in strict mode all tables are checked up front."""
    monkeypatch.setattr(settings, "STRICT", True)
    with pytest.raises(OutOfBounds):
        TableDirectory(make_bogus_font())


def make_duplicate_font() -> bytes:
    data = bytearray(build_sfnt({"maxp": b"\0\0\0\0\0\1", "name": b"\0" * 6}))
    struct.pack_into(">4s", data, 12 + 16, b"maxp")
    return bytes(data)


def test_duplicate_tables() -> None:
    """Verify that the last of several identical tags wins."""
    directory = TableDirectory(make_duplicate_font())
    assert directory.tags == ["maxp"]
    assert directory.table("maxp").uint16(4) == 0


def test_strict_duplicate_tables(monkeypatch) -> None:
    monkeypatch.setattr(settings, "STRICT", True)
    with pytest.raises(InvalidContainer):
        TableDirectory(make_duplicate_font())
